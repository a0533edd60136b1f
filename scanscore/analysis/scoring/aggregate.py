"""Reduce raw evidence to the facts the rules and issues work from.

Runs once per scoring call: canonical ordering, fingerprint signal
count, deduplication, first-party classification, and per-kind
grouping.  Both the score rules and the issue synthesizer read the
resulting :class:`EvidenceAggregate`, so they can never disagree
about what was observed.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from dataclasses import dataclass

from scanscore.analysis import dedupe, first_party
from scanscore.models import evidence
from scanscore.utils import logger

log = logger.create_logger("Score-Aggregate")

_EPOCH = datetime.datetime.min.replace(tzinfo=datetime.UTC)

# Distinct fingerprint signals needed before fingerprinting is reported.
FINGERPRINT_SIGNAL_THRESHOLD = 3


@dataclass(frozen=True)
class Observation:
    """A deduplicated record paired with the value it was counted under."""

    record: evidence.EvidenceRecord
    value: str


@dataclass(frozen=True)
class EvidenceAggregate:
    """Deduplicated, classified evidence for one scan."""

    trackers: tuple[Observation, ...]
    fingerprinting_tracker: evidence.EvidenceRecord | None
    third_parties: tuple[Observation, ...]
    insecure: tuple[Observation, ...]
    missing_headers: tuple[Observation, ...]
    cookies: tuple[evidence.EvidenceRecord, ...]
    policies: tuple[evidence.EvidenceRecord, ...]
    tls_record: evidence.EvidenceRecord | None
    tls_grade: evidence.TLSGrade | None
    fingerprint_record: evidence.EvidenceRecord | None
    fingerprint_signals: int
    observed: int

    @property
    def tracker_domains(self) -> tuple[str, ...]:
        return tuple(o.value for o in self.trackers)

    @property
    def third_party_domains(self) -> tuple[str, ...]:
        return tuple(o.value for o in self.third_parties)

    @property
    def header_names(self) -> tuple[str, ...]:
        return tuple(o.value for o in self.missing_headers)

    @property
    def policy_found(self) -> bool:
        return bool(self.policies)

    @property
    def fingerprint_detected(self) -> bool:
        return self.fingerprint_signals >= FINGERPRINT_SIGNAL_THRESHOLD


def _sort_key(record: evidence.EvidenceRecord) -> tuple[datetime.datetime, str]:
    created = record.created_at
    if created is None:
        created = _EPOCH
    elif created.tzinfo is None:
        created = created.replace(tzinfo=datetime.UTC)
    return created, record.id


def canonical_order(records: Iterable[evidence.EvidenceRecord]) -> list[evidence.EvidenceRecord]:
    """Sort records by observation time, then id.

    "First occurrence" then means "earliest observation", which
    makes every downstream result independent of the order the
    store returned the rows in.  Naive timestamps are read as UTC.
    """
    return sorted(records, key=_sort_key)


def _first_per_value(
    records: Iterable[evidence.EvidenceRecord],
    values: Iterable[str],
) -> tuple[Observation, ...]:
    """Pair records with values, keeping the first record per non-empty value."""
    seen: dict[str, Observation] = {}
    for record, value in zip(records, values, strict=True):
        if value and value not in seen:
            seen[value] = Observation(record=record, value=value)
    return tuple(seen.values())


def aggregate(
    records: Iterable[evidence.EvidenceRecord],
    root_domain: str | None,
) -> EvidenceAggregate:
    """Build the evidence aggregate for one scan.

    Args:
        records: Every evidence record for the scan, in any order.
        root_domain: The scan's registrable domain, or ``None``
            when it could not be derived (all third parties are
            then penalised).

    Returns:
        The immutable aggregate.
    """
    ordered = canonical_order(records)

    # Must be counted before dedupe collapses fingerprint records.
    fingerprint_signals = dedupe.count_fingerprint_signals(ordered)
    unique = dedupe.dedupe(ordered)

    by_kind: dict[str, list[evidence.EvidenceRecord]] = {}
    for record in unique:
        by_kind.setdefault(record.kind, []).append(record)

    tracker_records = by_kind.get("tracker", [])
    tracker_details = [evidence.coerce_details(r) for r in tracker_records]
    trackers = _first_per_value(tracker_records, (d.domain for d in tracker_details))
    fingerprinting_tracker = next(
        (r for r, d in zip(tracker_records, tracker_details, strict=True) if d.domain and d.fingerprinting),
        None,
    )

    third_party_records = by_kind.get("thirdparty", [])
    third_party_candidates = _first_per_value(
        third_party_records,
        (evidence.coerce_details(r).domain for r in third_party_records),
    )
    third_parties = tuple(o for o in third_party_candidates if not first_party.is_first_party(o.value, root_domain))

    insecure_records = [r for r in unique if r.kind in ("insecure", "mixed-content")]
    insecure_details = [evidence.coerce_details(r) for r in insecure_records]
    insecure = _first_per_value(
        insecure_records,
        (d.url if d.is_plain_http else "" for d in insecure_details),
    )

    header_records = by_kind.get("header", [])
    missing_headers = _first_per_value(
        header_records,
        (evidence.coerce_details(r).name for r in header_records),
    )

    tls_records = by_kind.get("tls", [])
    tls_record = tls_records[0] if tls_records else None
    tls_grade = evidence.coerce_details(tls_record).grade if tls_record else None

    fingerprint_records = by_kind.get("fingerprint", [])

    result = EvidenceAggregate(
        trackers=trackers,
        fingerprinting_tracker=fingerprinting_tracker,
        third_parties=third_parties,
        insecure=insecure,
        missing_headers=missing_headers,
        cookies=tuple(by_kind.get("cookie", [])),
        policies=tuple(by_kind.get("policy", [])),
        tls_record=tls_record,
        tls_grade=tls_grade,
        fingerprint_record=fingerprint_records[0] if fingerprint_records else None,
        fingerprint_signals=fingerprint_signals,
        observed=len(ordered),
    )

    log.debug(
        "Evidence aggregated",
        {
            "records": len(ordered),
            "unique": len(unique),
            "trackerDomains": len(result.trackers),
            "thirdPartyDomains": len(result.third_parties),
            "firstPartyExcluded": len(third_party_candidates) - len(result.third_parties),
            "insecure": len(result.insecure),
            "missingHeaders": len(result.missing_headers),
            "cookies": len(result.cookies),
            "policyFound": result.policy_found,
            "tlsGrade": result.tls_grade,
            "fingerprintSignals": fingerprint_signals,
            "unknownKinds": sum(1 for r in unique if r.kind not in evidence.EVIDENCE_KINDS),
        },
    )
    return result
