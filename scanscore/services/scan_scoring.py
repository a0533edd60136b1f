"""Score a stored scan through a repository boundary.

The repository is whatever persistence layer holds scans and their
evidence; this module only needs the small protocol below.  A
missing scan is a caller precondition failure and is raised as
:class:`ScanNotFoundError`, never swallowed.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from scanscore.analysis.scoring import calculate_scan_score
from scanscore.models import evidence, scan, scoring
from scanscore.utils import errors, logger, url

log = logger.create_logger("ScanScoring")


class ScanRepository(Protocol):
    """Read/write access to scans and their evidence."""

    def get_scan(self, scan_id: str) -> scan.ScanContext | None:
        """Return the scan, or ``None`` if it does not exist."""
        ...

    def list_evidence(self, scan_id: str) -> Iterable[evidence.EvidenceRecord]:
        """Return every evidence record collected for the scan."""
        ...

    def save_result(self, scan_id: str, result: scoring.ScoreResult) -> None:
        """Persist score, label, issues, summary and meta on the scan."""
        ...


def score_scan(repository: ScanRepository, scan_id: str) -> scoring.ScoreResult:
    """Compute the score for a stored scan.

    Raises:
        ScanNotFoundError: When the repository has no such scan.
    """
    context = repository.get_scan(scan_id)
    if context is None:
        log.error("Scan not found", {"scanId": scan_id})
        raise errors.ScanNotFoundError(scan_id)

    root_domain = url.get_root_domain(context.domain_source)
    records = list(repository.list_evidence(scan_id))

    log.start_timer(f"score-{scan_id}")
    result = calculate_scan_score(records, root_domain)
    log.end_timer(f"score-{scan_id}", "Scan scored")
    return result


def rescore_scan(repository: ScanRepository, scan_id: str) -> scoring.ScoreResult:
    """Compute the score for a stored scan and write it back.

    Safe to repeat: the result is recomputed in full each time.
    """
    logger.start_log_file(scan_id)
    try:
        result = score_scan(repository, scan_id)
        repository.save_result(scan_id, result)
        log.info("Score saved", {"scanId": scan_id, "score": result.score, "label": result.label})
        return result
    finally:
        logger.end_log_file()
