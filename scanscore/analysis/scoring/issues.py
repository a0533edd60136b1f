"""Human-facing issues with remediation guidance.

Issues are built from the same evidence aggregate as the score but
serve a different reader: each one names a problem category, why
it matters, and how to fix it.  One issue per triggered category,
sorted by severity (most severe first) and then ``sort_weight``.
"""

from __future__ import annotations

from scanscore.analysis.scoring.aggregate import EvidenceAggregate
from scanscore.models.scoring import SEVERITY_RANK, Issue, IssueReference

# Third-party domains tolerated before an issue is raised.
THIRD_PARTY_ISSUE_THRESHOLD = 5

_PREVIEW_LIMIT = 5

_WEAK_TLS_GRADES = ("C", "D", "F")


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def _preview(values: tuple[str, ...]) -> str:
    """Join the first few values, with an ellipsis when some are hidden."""
    shown = ", ".join(values[:_PREVIEW_LIMIT])
    return f"{shown}…" if len(values) > _PREVIEW_LIMIT else shown


# ── Per-category builders ───────────────────────────────────────
# Each returns None when its category is not triggered.


def _trackers(agg: EvidenceAggregate) -> Issue | None:
    domains = agg.tracker_domains
    if not domains:
        return None
    return Issue(
        key="tracking.trackers",
        severity="high",
        category="tracking",
        title=f"{_plural(len(domains), 'tracker')} observed",
        summary=f"Trackers detected: {_preview(domains)}",
        how_to_fix=(
            "Review marketing and analytics tags. Remove unnecessary trackers or load them only after "
            "explicit consent via a consent management platform."
        ),
        why_it_matters=(
            "Trackers monitor user behaviour and may violate privacy laws if deployed without consent or disclosures."
        ),
        references=(
            IssueReference(
                label="Mozilla: Managing tracking scripts",
                url="https://developer.mozilla.org/en-US/docs/Web/Privacy/Tracking_Protection",
            ),
        ),
        sort_weight=10,
    )


def _fingerprinting(agg: EvidenceAggregate) -> Issue | None:
    if not agg.fingerprint_detected:
        return None
    return Issue(
        key="tracking.fingerprinting",
        severity="high",
        category="tracking",
        title="Browser fingerprinting behaviour observed",
        summary=f"{agg.fingerprint_signals} fingerprinting signals detected",
        how_to_fix=(
            "Remove or gate fingerprinting scripts. Consider alternatives that rely on consent or anonymized analytics."
        ),
        why_it_matters=(
            "Fingerprinting scripts combine browser traits to create persistent identifiers that are difficult "
            "for users to clear."
        ),
        references=(IssueReference(label="EFF: What is fingerprinting?", url="https://coveryourtracks.eff.org/learn"),),
        sort_weight=15,
    )


def _mixed_content(agg: EvidenceAggregate) -> Issue | None:
    if not agg.insecure:
        return None
    urls = tuple(o.value for o in agg.insecure)
    return Issue(
        key="security.mixed-content",
        severity="high",
        category="security",
        title="Mixed-content detected over HTTPS",
        summary=f"Insecure resources: {_preview(urls)}",
        how_to_fix="Serve all assets over HTTPS. Update hard-coded http:// URLs to https:// or relative paths.",
        why_it_matters="Loading HTTP assets on HTTPS pages lets attackers tamper with scripts or leak data.",
        references=(
            IssueReference(
                label="MDN: Mixed Content",
                url="https://developer.mozilla.org/en-US/docs/Web/Security/Mixed_content",
            ),
        ),
        sort_weight=18,
    )


def _headers(agg: EvidenceAggregate) -> Issue | None:
    names = agg.header_names
    if not names:
        return None
    return Issue(
        key="security.headers",
        severity="medium",
        category="security",
        title="Missing security headers",
        summary=f"Add: {', '.join(names)}",
        how_to_fix=(
            "Set the recommended HTTP response headers (CSP, HSTS, Referrer-Policy, Permissions-Policy, "
            "X-Content-Type-Options) at the proxy or application layer."
        ),
        why_it_matters=(
            "Security headers harden the site against clickjacking, XSS, and data leakage. Without them browsers "
            "cannot enforce modern protections."
        ),
        references=(
            IssueReference(label="MDN: HTTP security headers", url="https://developer.mozilla.org/en-US/docs/Web/Security"),
        ),
        sort_weight=20,
    )


def _tls(agg: EvidenceAggregate) -> Issue | None:
    grade = agg.tls_grade
    if grade not in _WEAK_TLS_GRADES:
        return None
    return Issue(
        key="security.tls",
        severity="high" if grade == "F" else "medium",
        category="security",
        title=f"TLS configuration graded {grade}",
        how_to_fix=(
            "Update the TLS configuration to disable weak protocols/ciphers and enable HSTS. Use modern suites "
            "recommended by Mozilla or SSL Labs."
        ),
        why_it_matters="Weak TLS grades indicate outdated encryption that attackers can exploit to intercept traffic.",
        references=(
            IssueReference(label="Mozilla TLS Guidelines", url="https://wiki.mozilla.org/Security/Server_Side_TLS"),
        ),
        sort_weight=25,
    )


def _third_parties(agg: EvidenceAggregate) -> Issue | None:
    domains = agg.third_party_domains
    if len(domains) <= THIRD_PARTY_ISSUE_THRESHOLD:
        return None
    return Issue(
        key="tracking.third-party",
        severity="medium",
        category="tracking",
        title=f"{len(domains)} third-party domains contacted",
        summary=f"Notable domains: {_preview(domains)}",
        how_to_fix=(
            "Audit external requests and remove unused libraries. Where possible, self-host critical assets or "
            "route via privacy-preserving CDNs."
        ),
        why_it_matters=(
            "Each third-party call shares visitor metadata (IP, user agent) with outside companies, which can be "
            "used for profiling."
        ),
        references=(
            IssueReference(
                label="OWASP: Third-Party Requests",
                url="https://owasp.org/www-community/Web_Application_Security_Risk",
            ),
        ),
        sort_weight=30,
    )


def _cookies(agg: EvidenceAggregate) -> Issue | None:
    count = len(agg.cookies)
    if not count:
        return None
    return Issue(
        key="security.cookies",
        severity="medium",
        category="security",
        title="Cookies missing Secure/SameSite flags",
        summary=f"{_plural(count, 'cookie')} missing recommended attributes",
        how_to_fix=(
            "Mark cookies with Secure and SameSite=strict or lax, and HttpOnly where appropriate, to prevent "
            "interception or CSRF."
        ),
        why_it_matters=(
            "Without Secure/SameSite, cookies can leak over HTTP or be sent in cross-site requests, enabling "
            "session hijacking."
        ),
        references=(
            IssueReference(
                label="MDN: Set-Cookie",
                url="https://developer.mozilla.org/en-US/docs/Web/HTTP/Headers/Set-Cookie",
            ),
        ),
        sort_weight=35,
    )


def _policy(agg: EvidenceAggregate) -> Issue | None:
    # Triggered by absence.
    if agg.policy_found:
        return None
    return Issue(
        key="compliance.policy",
        severity="low",
        category="compliance",
        title="Privacy policy link not found",
        how_to_fix="Publish a clear privacy policy and link it in the footer or primary navigation.",
        why_it_matters="Most privacy laws require transparent disclosure of data collection practices.",
        references=(
            IssueReference(
                label="FTC: Privacy and security guidance",
                url="https://www.ftc.gov/business-guidance/small-businesses/privacy-security",
            ),
        ),
        sort_weight=60,
    )


_BUILDERS = (_trackers, _third_parties, _headers, _cookies, _tls, _fingerprinting, _mixed_content, _policy)


def issue_sort_key(issue: Issue) -> tuple[int, int]:
    """Most severe first, then lowest ``sort_weight``."""
    return -SEVERITY_RANK[issue.severity], issue.sort_weight


def build_issues(agg: EvidenceAggregate) -> tuple[Issue, ...]:
    """Build the sorted issue list for *agg*."""
    issues = [issue for build in _BUILDERS if (issue := build(agg)) is not None]
    return tuple(sorted(issues, key=issue_sort_key))
