"""Report-facing views derived from a finished score.

These read a :class:`ScoreResult` and never recompute anything
from evidence, so a report renderer can use a cached result.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from scanscore.analysis.scoring.issues import issue_sort_key
from scanscore.models.scoring import SEVERITY_RANK, Issue, ScoreMeta

DataSharingLevel = Literal["None", "Low", "Medium", "High"]

TOP_FIX_MIN_SEVERITY = "medium"


def select_top_fixes(issues: Iterable[Issue], limit: int = 3) -> list[Issue]:
    """Pick the most pressing issues to headline a report.

    Only issues of medium severity or worse qualify.  They are
    re-sorted by severity and sort weight, so issues read back from
    storage in any order give the same headline.
    """
    threshold = SEVERITY_RANK[TOP_FIX_MIN_SEVERITY]
    eligible = [i for i in issues if SEVERITY_RANK[i.severity] >= threshold]
    return sorted(eligible, key=issue_sort_key)[:limit]


def data_sharing_level(meta: ScoreMeta) -> DataSharingLevel:
    """Rate how widely visitor data is shared with outside parties.

    Trackers weigh double; third-party domains and flagged cookies
    count once each.
    """
    index = len(meta.tracker_domains) * 2 + len(meta.third_party_domains) + meta.cookie_issues
    if index > 8:
        return "High"
    if index > 3:
        return "Medium"
    if index > 0:
        return "Low"
    return "None"
