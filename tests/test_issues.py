"""Tests for scanscore.analysis.scoring.issues: issue synthesis and ordering."""

from __future__ import annotations

import pytest

from scanscore.analysis.scoring import aggregate
from scanscore.analysis.scoring.issues import build_issues, issue_sort_key
from scanscore.models.evidence import EvidenceRecord
from scanscore.models.scoring import Issue

ROOT = "example.com"


def _ev(kind: str, ev_id: str, details: object = None) -> EvidenceRecord:
    return EvidenceRecord(id=ev_id, kind=kind, details=details)


def _issues(records: list[EvidenceRecord]) -> tuple[Issue, ...]:
    return build_issues(aggregate.aggregate(records, ROOT))


def _everything(tls_grade: str) -> list[EvidenceRecord]:
    records = [_ev("tracker", f"t{i}", {"domain": f"tracker{i}.com"}) for i in range(7)]
    records += [_ev("thirdparty", f"tp{i}", {"domain": f"cdn{i}.net"}) for i in range(6)]
    records += [_ev("fingerprint", f"fp{i}", {}) for i in range(3)]
    records += [_ev("insecure", "i1", {"url": "http://example.com/app.js"})]
    records += [_ev("header", "h1", {"name": "content-security-policy"})]
    records += [_ev("cookie", "c1", {"name": "sid"})]
    records += [_ev("tls", "tls", {"grade": tls_grade})]
    return records


# ── Ordering ────────────────────────────────────────────────────


class TestIssueOrdering:
    """Issues sort by severity, then sort weight."""

    def test_full_order_medium_tls(self) -> None:
        keys = [i.key for i in _issues(_everything("D"))]
        assert keys == [
            "tracking.trackers",
            "tracking.fingerprinting",
            "security.mixed-content",
            "security.headers",
            "security.tls",
            "tracking.third-party",
            "security.cookies",
            "compliance.policy",
        ]

    def test_failing_tls_promoted_to_high(self) -> None:
        keys = [i.key for i in _issues(_everything("F"))]
        assert keys[:5] == [
            "tracking.trackers",
            "tracking.fingerprinting",
            "security.mixed-content",
            "security.tls",
            "security.headers",
        ]

    def test_sort_key(self) -> None:
        issue = Issue(key="k", severity="high", category="tracking", title="t", sort_weight=15)
        assert issue_sort_key(issue) == (-4, 15)


# ── Triggers ────────────────────────────────────────────────────


class TestIssueTriggers:
    """Each category raises at most one issue, only when triggered."""

    def test_no_issues_for_clean_evidence(self) -> None:
        records = [_ev("policy", "p", {}), _ev("tls", "tls", {"grade": "A"})]
        assert _issues(records) == ()

    def test_one_issue_per_category(self) -> None:
        keys = [i.key for i in _issues(_everything("C"))]
        assert len(keys) == len(set(keys))

    def test_third_parties_need_more_than_five(self) -> None:
        records = [_ev("policy", "p", {})]
        records += [_ev("thirdparty", f"tp{i}", {"domain": f"cdn{i}.net"}) for i in range(5)]
        assert _issues(records) == ()

    def test_first_party_domains_do_not_count_towards_threshold(self) -> None:
        records = [_ev("policy", "p", {})]
        records += [_ev("thirdparty", f"tp{i}", {"domain": f"cdn{i}.example.com"}) for i in range(10)]
        assert _issues(records) == ()

    @pytest.mark.parametrize("grade", ["A+", "A", "B"])
    def test_good_tls_no_issue(self, grade: str) -> None:
        records = [_ev("policy", "p", {}), _ev("tls", "tls", {"grade": grade})]
        assert _issues(records) == ()

    def test_missing_policy_is_low(self) -> None:
        (issue,) = _issues([])
        assert issue.key == "compliance.policy"
        assert issue.severity == "low"
        assert issue.title == "Privacy policy link not found"


# ── Content ─────────────────────────────────────────────────────


class TestIssueContent:
    """Titles and summaries reflect the observed evidence."""

    def test_tracker_preview_truncated(self) -> None:
        issue = next(i for i in _issues(_everything("A")) if i.key == "tracking.trackers")
        assert issue.title == "7 trackers observed"
        assert issue.summary == "Trackers detected: tracker0.com, tracker1.com, tracker2.com, tracker3.com, tracker4.com…"

    def test_single_tracker_title(self) -> None:
        issue = _issues([_ev("tracker", "t", {"domain": "ads.com"})])[0]
        assert issue.title == "1 tracker observed"
        assert issue.summary == "Trackers detected: ads.com"

    def test_header_summary_lists_all(self) -> None:
        records = [_ev("header", f"h{i}", {"name": n}) for i, n in enumerate(["csp", "hsts"])]
        issue = next(i for i in _issues(records) if i.key == "security.headers")
        assert issue.summary == "Add: csp, hsts"

    def test_tls_title_names_grade(self) -> None:
        issue = next(i for i in _issues(_everything("C")) if i.key == "security.tls")
        assert issue.title == "TLS configuration graded C"
        assert issue.severity == "medium"

    def test_fingerprinting_summary_counts_signals(self) -> None:
        issue = next(i for i in _issues(_everything("A")) if i.key == "tracking.fingerprinting")
        assert issue.summary == "3 fingerprinting signals detected"

    def test_every_issue_has_guidance(self) -> None:
        for issue in _issues(_everything("F")):
            assert issue.how_to_fix
            assert issue.why_it_matters
            assert issue.references
