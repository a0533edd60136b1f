"""Evidence-to-score rules engine for website privacy scans."""

from __future__ import annotations

from scanscore.analysis.scoring import calculate_scan_score

__all__ = ["calculate_scan_score"]
