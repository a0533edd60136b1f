"""Pydantic models for scoring results, issues, and audit explanations."""

from __future__ import annotations

from typing import Literal

import pydantic

from scanscore.models.evidence import TLSGrade
from scanscore.utils.risk import ScoreLabel
from scanscore.utils.serialization import snake_to_camel

IssueSeverity = Literal["critical", "high", "medium", "low", "info"]

SEVERITY_RANK: dict[str, int] = {
    "critical": 5,
    "high": 4,
    "medium": 3,
    "low": 2,
    "info": 1,
}


class _Frozen(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True, frozen=True
    )


class Explanation(_Frozen):
    """One applied penalty or bonus, for audit display.

    ``points`` is negative for deductions.
    """

    evidence_id: str
    points: int
    reason: str


class RuleOutcome(_Frozen):
    """What a single scoring rule contributed."""

    category: str
    penalty: int = 0
    bonus: int = 0
    explanations: tuple[Explanation, ...] = ()

    @property
    def delta(self) -> int:
        return self.bonus - self.penalty


class CategoryBreakdown(_Frozen):
    """Per-category totals exposed on the result."""

    category: str
    penalty: int
    bonus: int


class IssueReference(_Frozen):
    """External reading for an issue."""

    label: str | None = None
    url: str


class Issue(_Frozen):
    """A human-facing problem with remediation guidance."""

    key: str
    severity: IssueSeverity
    category: str
    title: str
    summary: str | None = None
    how_to_fix: str | None = None
    why_it_matters: str | None = None
    references: tuple[IssueReference, ...] = ()
    sort_weight: int = 0


class ScoreMeta(_Frozen):
    """Raw facts behind the score, for reuse without recomputation."""

    tracker_domains: tuple[str, ...] = ()
    third_party_domains: tuple[str, ...] = ()
    missing_headers: tuple[str, ...] = ()
    cookie_issues: int = 0
    policy_found: bool = False
    tls_grade: TLSGrade | None = None
    fingerprint_detected: bool = False
    fingerprint_signals: int = 0
    mixed_content: bool = False


class ScoreResult(_Frozen):
    """The complete, immutable outcome of scoring one scan."""

    score: int = pydantic.Field(ge=0, le=100)
    label: ScoreLabel
    explanations: tuple[Explanation, ...] = ()
    issues: tuple[Issue, ...] = ()
    summary: str = ""
    meta: ScoreMeta = pydantic.Field(default_factory=ScoreMeta)
    breakdown: tuple[CategoryBreakdown, ...] = ()
