"""Collapse repeated evidence that describes the same violation.

A crawl visits several pages of a site, so the same missing header
or tracker call is usually recorded once per page.  Each record is
mapped to a deduplication key naming *the violation* rather than
*the observation*; only the first record per key is kept.
"""

from __future__ import annotations

from collections.abc import Iterable

from scanscore.models import evidence

# Kinds whose presence is a single fact per scan.
_SINGLETON_KEYS = {
    "fingerprint": "fingerprint",
    "policy": "policy:found",
    "tls": "tls:grade",
}

# Kinds keyed by one identifying details field.
_FIELD_KEYS = {
    "header": "name",
    "thirdparty": "domain",
    "tracker": "domain",
    "insecure": "url",
    "cookie": "name",
}


def evidence_key(record: evidence.EvidenceRecord) -> str:
    """Derive the deduplication key for *record*.

    Unknown kinds get a per-record key so they are over-counted
    rather than silently merged.
    """
    kind = record.kind
    if kind in _SINGLETON_KEYS:
        return _SINGLETON_KEYS[kind]

    field = _FIELD_KEYS.get(kind)
    if field is None:
        return f"{kind}:{record.id}"
    details = evidence.coerce_details(record)
    return f"{kind}:{getattr(details, field)}"


def dedupe(records: Iterable[evidence.EvidenceRecord]) -> list[evidence.EvidenceRecord]:
    """Keep the first record for each deduplication key, in input order."""
    unique: dict[str, evidence.EvidenceRecord] = {}
    for record in records:
        unique.setdefault(evidence_key(record), record)
    return list(unique.values())


def count_fingerprint_signals(records: Iterable[evidence.EvidenceRecord]) -> int:
    """Count distinct fingerprinting signals before deduplication.

    All fingerprint records share one dedup key, but the detection
    threshold depends on how many separate signals fired.  A record
    naming its ``signal`` counts once per distinct name; a record
    without one counts on its own.
    """
    signals: set[str] = set()
    for record in records:
        if record.kind != "fingerprint":
            continue
        signal = getattr(evidence.coerce_details(record), "signal", "")
        signals.add(f"signal:{signal}" if signal else f"record:{record.id}")
    return len(signals)
