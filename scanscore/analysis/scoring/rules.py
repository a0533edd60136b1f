"""Penalty and bonus rule table.

Each rule is a pure function of the evidence aggregate returning a
:class:`RuleOutcome`.  The outcomes are folded once by
:func:`fold`; no rule sees another rule's result.

Explanations record only the units that actually moved the score:
once a category reaches its cap, further records are not explained.
The explanation points therefore always sum to the unclamped delta.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from scanscore.analysis.scoring.aggregate import EvidenceAggregate, Observation
from scanscore.models.scoring import Explanation, RuleOutcome

BASELINE_SCORE = 100

TRACKER_UNIT, TRACKER_CAP = 5, 40
FINGERPRINTING_TRACKER_PENALTY = 5
THIRD_PARTY_UNIT, THIRD_PARTY_CAP = 2, 20
INSECURE_UNIT, INSECURE_CAP = 10, 20
HEADER_UNIT = 3
COOKIE_UNIT, COOKIE_CAP = 2, 10
MISSING_POLICY_PENALTY = 5
FINGERPRINTING_PENALTY = 5

TLS_PENALTIES = {"C": 3, "D": 7, "F": 12}
TLS_BONUSES = {"A+": 5, "A": 3}
NO_TRACKERS_BONUS = 5
POLICY_BONUS = 3

MISSING_POLICY_ID = "missing-policy"
NO_TRACKERS_ID = "bonus-no-trackers"


def _capped(
    category: str,
    observations: Sequence[Observation],
    unit: int,
    cap: int | None,
    reason: str,
) -> RuleOutcome:
    """Charge *unit* per observation, stopping at *cap*."""
    limit = len(observations) if cap is None else min(len(observations), cap // unit)
    charged = observations[:limit]
    return RuleOutcome(
        category=category,
        penalty=unit * len(charged),
        explanations=tuple(Explanation(evidence_id=o.record.id, points=-unit, reason=reason) for o in charged),
    )


def tracker_rule(agg: EvidenceAggregate) -> RuleOutcome:
    """−5 per unique tracker domain (max −40), −5 once for fingerprinting trackers, +5 when none."""
    base = _capped("trackers", agg.trackers, TRACKER_UNIT, TRACKER_CAP, "Tracker domain")
    explanations = list(base.explanations)
    penalty = base.penalty
    bonus = 0

    if agg.fingerprinting_tracker is not None:
        penalty += FINGERPRINTING_TRACKER_PENALTY
        explanations.append(
            Explanation(
                evidence_id=agg.fingerprinting_tracker.id,
                points=-FINGERPRINTING_TRACKER_PENALTY,
                reason="Tracker uses fingerprinting",
            )
        )
    # Requires at least one evidence record.
    if not agg.trackers and agg.observed:
        bonus = NO_TRACKERS_BONUS
        explanations.append(Explanation(evidence_id=NO_TRACKERS_ID, points=bonus, reason="No tracking domains detected"))

    return RuleOutcome(category="trackers", penalty=penalty, bonus=bonus, explanations=tuple(explanations))


def third_party_rule(agg: EvidenceAggregate) -> RuleOutcome:
    """−2 per unique non-first-party domain, max −20."""
    return _capped("thirdParty", agg.third_parties, THIRD_PARTY_UNIT, THIRD_PARTY_CAP, "Third-party request")


def insecure_rule(agg: EvidenceAggregate) -> RuleOutcome:
    """−10 per distinct plain-HTTP resource, max −20."""
    return _capped("insecure", agg.insecure, INSECURE_UNIT, INSECURE_CAP, "Insecure/mixed content")


def header_rule(agg: EvidenceAggregate) -> RuleOutcome:
    """−3 per distinct missing header, uncapped."""
    return _capped("headers", agg.missing_headers, HEADER_UNIT, None, "Missing security header")


def cookie_rule(agg: EvidenceAggregate) -> RuleOutcome:
    """−2 per cookie missing flags, max −10."""
    cookies = [Observation(record=r, value=r.id) for r in agg.cookies]
    return _capped("cookies", cookies, COOKIE_UNIT, COOKIE_CAP, "Cookie missing flags")


def policy_rule(agg: EvidenceAggregate) -> RuleOutcome:
    """−5 when no policy was found, otherwise +3."""
    if not agg.policy_found:
        return RuleOutcome(
            category="policy",
            penalty=MISSING_POLICY_PENALTY,
            explanations=(
                Explanation(evidence_id=MISSING_POLICY_ID, points=-MISSING_POLICY_PENALTY, reason="No privacy policy found"),
            ),
        )
    return RuleOutcome(
        category="policy",
        bonus=POLICY_BONUS,
        explanations=(Explanation(evidence_id=agg.policies[0].id, points=POLICY_BONUS, reason="Privacy policy found"),),
    )


def tls_rule(agg: EvidenceAggregate) -> RuleOutcome:
    """Grade-based penalty (C/D/F) or bonus (A/A+) from the single TLS record."""
    grade, record = agg.tls_grade, agg.tls_record
    if grade is None or record is None:
        return RuleOutcome(category="tls")

    if grade in TLS_PENALTIES:
        penalty = TLS_PENALTIES[grade]
        return RuleOutcome(
            category="tls",
            penalty=penalty,
            explanations=(Explanation(evidence_id=record.id, points=-penalty, reason=f"TLS grade {grade}"),),
        )
    if grade in TLS_BONUSES:
        bonus = TLS_BONUSES[grade]
        reason = "TLS Grade A+ (excellent)" if grade == "A+" else "TLS Grade A (strong)"
        return RuleOutcome(
            category="tls",
            bonus=bonus,
            explanations=(Explanation(evidence_id=record.id, points=bonus, reason=reason),),
        )
    return RuleOutcome(category="tls")


def fingerprinting_rule(agg: EvidenceAggregate) -> RuleOutcome:
    """Flat −5 once three or more distinct signals fired."""
    if not agg.fingerprint_detected or agg.fingerprint_record is None:
        return RuleOutcome(category="fingerprinting")
    return RuleOutcome(
        category="fingerprinting",
        penalty=FINGERPRINTING_PENALTY,
        explanations=(
            Explanation(
                evidence_id=agg.fingerprint_record.id,
                points=-FINGERPRINTING_PENALTY,
                reason=f"Fingerprinting heuristics ({agg.fingerprint_signals} signals)",
            ),
        ),
    )


RULES: tuple[Callable[[EvidenceAggregate], RuleOutcome], ...] = (
    tracker_rule,
    third_party_rule,
    insecure_rule,
    header_rule,
    cookie_rule,
    policy_rule,
    tls_rule,
    fingerprinting_rule,
)

# Bonus explanations are listed after all penalties, in this order.
_BONUS_ORDER = ("tls", "trackers", "policy")


def evaluate(agg: EvidenceAggregate) -> tuple[RuleOutcome, ...]:
    """Run every rule against *agg*."""
    return tuple(rule(agg) for rule in RULES)


def fold(outcomes: Sequence[RuleOutcome]) -> tuple[int, tuple[Explanation, ...]]:
    """Combine rule outcomes into the final score and explanation list.

    ``score = clamp(100 − Σpenalty + Σbonus, 0, 100)``; bonuses are
    added before clamping, so a clean site can reach 100.

    Returns:
        The clamped score and the explanations, penalties first.
    """
    raw = BASELINE_SCORE + sum(o.delta for o in outcomes)
    score = max(0, min(100, raw))

    penalties = [e for o in outcomes for e in o.explanations if e.points < 0]
    by_category = {o.category: o for o in outcomes}
    bonuses = [
        e
        for category in _BONUS_ORDER
        if category in by_category
        for e in by_category[category].explanations
        if e.points > 0
    ]
    return score, tuple(penalties + bonuses)
