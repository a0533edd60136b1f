"""Scan scoring package.

Decomposes evidence-to-score evaluation into focused modules:
aggregation (dedupe + first-party classification), the penalty
and bonus rule table, issue synthesis, and result assembly.  The
public API is :func:`calculate_scan_score`.
"""

from __future__ import annotations

from scanscore.analysis.scoring.calculator import calculate_scan_score

__all__ = ["calculate_scan_score"]
