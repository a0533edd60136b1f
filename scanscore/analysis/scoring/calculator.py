"""Scan score calculator: orchestrator and result assembly.

Aggregates the evidence once, runs the rule table, synthesizes
issues, and assembles the immutable :class:`ScoreResult`.  A pure
function of (evidence, root domain): no I/O, no shared state.
"""

from __future__ import annotations

from collections.abc import Iterable

from scanscore.analysis.scoring import aggregate, issues, rules
from scanscore.models import evidence
from scanscore.models.scoring import CategoryBreakdown, ScoreMeta, ScoreResult
from scanscore.utils import logger, risk

log = logger.create_logger("Score")

NO_RISK_SUMMARY = "No major privacy risks detected"


# ── Public API ──────────────────────────────────────────────


def calculate_scan_score(
    records: Iterable[evidence.EvidenceRecord],
    root_domain: str | None,
) -> ScoreResult:
    """Score one scan from its complete evidence set.

    The caller guarantees the crawl has finished; evidence arriving
    later is not seen.

    Args:
        records: All evidence records for the scan, in any order.
            Repeated observations of the same violation are
            collapsed; malformed details are coerced to defaults.
        root_domain: The scan's registrable domain, used to exclude
            the site's own infrastructure from third-party
            penalties.  ``None`` treats every domain as third-party.

    Returns:
        The complete :class:`ScoreResult`.
    """
    records = list(records)
    log.info("Calculating scan score", {"evidence": len(records), "rootDomain": root_domain})

    agg = aggregate.aggregate(records, root_domain)
    outcomes = rules.evaluate(agg)
    score, explanations = rules.fold(outcomes)

    for outcome in outcomes:
        if outcome.penalty or outcome.bonus:
            log.debug(
                f"Rule [{outcome.category}]",
                {"penalty": outcome.penalty, "bonus": outcome.bonus, "entries": len(outcome.explanations)},
            )

    result = ScoreResult(
        score=score,
        label=risk.label_for_score(score),
        explanations=explanations,
        issues=issues.build_issues(agg),
        summary=_generate_summary(agg),
        meta=_build_meta(agg),
        breakdown=tuple(CategoryBreakdown(category=o.category, penalty=o.penalty, bonus=o.bonus) for o in outcomes),
    )

    log.success(
        "Scan score calculated",
        {
            "score": result.score,
            "label": result.label,
            "penalties": sum(o.penalty for o in outcomes),
            "bonuses": sum(o.bonus for o in outcomes),
            "issues": len(result.issues),
        },
    )
    return result


# ── Assembly helpers ────────────────────────────────────────


def _generate_summary(agg: aggregate.EvidenceAggregate) -> str:
    """Join one short phrase per triggered category."""
    parts: list[str] = []

    trackers = len(agg.trackers)
    if trackers:
        parts.append(f"{trackers} tracker{'s' if trackers > 1 else ''} flagged")

    headers = len(agg.missing_headers)
    if headers:
        parts.append(f"{headers} security header{'s' if headers > 1 else ''} missing")

    if agg.insecure:
        parts.append("Mixed content detected")

    if agg.tls_grade in ("C", "D", "F"):
        parts.append(f"Weak TLS configuration (grade {agg.tls_grade})")

    if not agg.policy_found:
        parts.append("No privacy policy detected")

    if agg.fingerprint_detected:
        parts.append("Fingerprinting heuristics present")

    return "; ".join(parts) if parts else NO_RISK_SUMMARY


def _build_meta(agg: aggregate.EvidenceAggregate) -> ScoreMeta:
    return ScoreMeta(
        tracker_domains=agg.tracker_domains,
        third_party_domains=agg.third_party_domains,
        missing_headers=agg.header_names,
        cookie_issues=len(agg.cookies),
        policy_found=agg.policy_found,
        tls_grade=agg.tls_grade,
        fingerprint_detected=agg.fingerprint_detected,
        fingerprint_signals=agg.fingerprint_signals,
        mixed_content=bool(agg.insecure),
    )
