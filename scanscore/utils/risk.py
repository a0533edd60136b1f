"""Score-to-label mapping shared by the calculator and reports."""

from __future__ import annotations

from typing import Literal

ScoreLabel = Literal["Safe", "Caution", "High Risk"]


def label_for_score(score: int) -> ScoreLabel:
    """Map a 0-100 score to its qualitative band."""
    if score >= 80:
        return "Safe"
    if score >= 50:
        return "Caution"
    return "High Risk"
