"""Data models: evidence input, scan context, and scoring output.

Prefer importing from the specific submodule
(e.g. ``scanscore.models.evidence``).
"""

from scanscore.models.evidence import EvidenceRecord as EvidenceRecord
from scanscore.models.scan import ScanContext as ScanContext
from scanscore.models.scoring import Issue as Issue
from scanscore.models.scoring import ScoreResult as ScoreResult
