"""Tests for scanscore.analysis.report: top fixes and data-sharing level."""

from __future__ import annotations

import pytest

from scanscore.analysis.report import data_sharing_level, select_top_fixes
from scanscore.models.scoring import Issue, ScoreMeta


def _issue(key: str, severity: str, sort_weight: int = 0) -> Issue:
    return Issue(key=key, severity=severity, category="security", title=key, sort_weight=sort_weight)  # type: ignore[arg-type]


class TestSelectTopFixes:
    """Tests for select_top_fixes()."""

    def test_first_three_medium_or_worse(self) -> None:
        issues = [
            _issue("a", "critical"),
            _issue("b", "high"),
            _issue("c", "medium"),
            _issue("d", "medium"),
        ]
        assert [i.key for i in select_top_fixes(issues)] == ["a", "b", "c"]

    def test_low_and_info_excluded(self) -> None:
        issues = [_issue("a", "low"), _issue("b", "info"), _issue("c", "medium")]
        assert [i.key for i in select_top_fixes(issues)] == ["c"]

    def test_unsorted_input_sorted_by_severity(self) -> None:
        issues = [_issue("m", "medium", 20), _issue("h", "high", 10)]
        assert [i.key for i in select_top_fixes(issues)] == ["h", "m"]

    def test_stored_weight_order_resorted(self) -> None:
        issues = [
            _issue("trackers", "high", 10),
            _issue("headers", "medium", 20),
            _issue("tls", "high", 25),
            _issue("cookies", "medium", 35),
            _issue("policy", "low", 60),
        ]
        assert [i.key for i in select_top_fixes(issues)] == ["trackers", "tls", "headers"]

    def test_custom_limit(self) -> None:
        issues = [_issue(str(n), "high") for n in range(5)]
        assert len(select_top_fixes(issues, limit=1)) == 1

    def test_empty(self) -> None:
        assert select_top_fixes([]) == []


class TestDataSharingLevel:
    """Tests for data_sharing_level()."""

    @pytest.mark.parametrize(
        ("trackers", "third_parties", "cookies", "level"),
        [
            (0, 0, 0, "None"),
            (0, 0, 1, "Low"),
            (1, 1, 0, "Low"),
            (2, 0, 0, "Medium"),
            (0, 8, 0, "Medium"),
            (4, 0, 1, "High"),
            (0, 5, 4, "High"),
        ],
    )
    def test_levels(self, trackers: int, third_parties: int, cookies: int, level: str) -> None:
        meta = ScoreMeta(
            tracker_domains=tuple(f"t{i}.com" for i in range(trackers)),
            third_party_domains=tuple(f"c{i}.net" for i in range(third_parties)),
            cookie_issues=cookies,
        )
        assert data_sharing_level(meta) == level
