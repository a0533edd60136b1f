"""Shared fixtures for the test suite."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from scanscore.models import evidence, scan, scoring
from scanscore.utils import logger

# ── Evidence Factories ──────────────────────────────────────────


@pytest.fixture()
def tracker_record() -> evidence.EvidenceRecord:
    """A Google Analytics tracker observation."""
    return evidence.EvidenceRecord(
        id="ev-tracker",
        scan_id="scan-1",
        kind="tracker",
        details={"domain": "google-analytics.com", "fingerprinting": False},
        created_at="2026-01-01T00:00:00Z",
    )


@pytest.fixture()
def policy_record() -> evidence.EvidenceRecord:
    """A found privacy policy link."""
    return evidence.EvidenceRecord(
        id="ev-policy",
        scan_id="scan-1",
        kind="policy",
        details={"url": "https://example.com/privacy"},
        created_at="2026-01-01T00:00:00Z",
    )


@pytest.fixture()
def tls_record() -> evidence.EvidenceRecord:
    """An A-graded TLS assessment."""
    return evidence.EvidenceRecord(
        id="ev-tls",
        scan_id="scan-1",
        kind="tls",
        details={"grade": "A"},
        created_at="2026-01-01T00:00:00Z",
    )


# ── Repository ──────────────────────────────────────────────────


class InMemoryScanRepository:
    """Dict-backed stand-in for the scan store."""

    def __init__(self) -> None:
        self.scans: dict[str, scan.ScanContext] = {}
        self.evidence: dict[str, list[evidence.EvidenceRecord]] = {}
        self.saved: dict[str, scoring.ScoreResult] = {}

    def add_scan(
        self,
        context: scan.ScanContext,
        records: Iterable[evidence.EvidenceRecord] = (),
    ) -> None:
        self.scans[context.id] = context
        self.evidence[context.id] = list(records)

    def get_scan(self, scan_id: str) -> scan.ScanContext | None:
        return self.scans.get(scan_id)

    def list_evidence(self, scan_id: str) -> list[evidence.EvidenceRecord]:
        return list(self.evidence.get(scan_id, []))

    def save_result(self, scan_id: str, result: scoring.ScoreResult) -> None:
        self.saved[scan_id] = result


@pytest.fixture()
def repository() -> InMemoryScanRepository:
    """An empty in-memory scan repository."""
    return InMemoryScanRepository()


# ── Logging ─────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch: pytest.MonkeyPatch) -> Iterable[None]:
    """Keep file logging off and start each test with an empty buffer."""
    monkeypatch.delenv("WRITE_TO_FILE", raising=False)
    logger.clear_log_buffer()
    yield
    logger.clear_log_buffer()
