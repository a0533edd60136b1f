"""Pydantic models for crawl evidence and its per-kind details.

An evidence record's ``details`` payload is an opaque JSON value
whose shape depends on ``kind``.  Each kind has a typed details
model here; :func:`coerce_details` turns any payload, however
malformed, into an instance of the matching model.  Fields that
fail validation fall back to their defaults so one corrupt row
can never abort scoring for a whole scan.
"""

from __future__ import annotations

import datetime
from typing import Any, Literal, get_args

import pydantic

from scanscore.utils import logger
from scanscore.utils.serialization import snake_to_camel

log = logger.create_logger("Evidence")

EvidenceKind = Literal[
    "tracker",
    "thirdparty",
    "cookie",
    "header",
    "insecure",
    "policy",
    "tls",
    "fingerprint",
    "mixed-content",
]

EVIDENCE_KINDS: frozenset[str] = frozenset(get_args(EvidenceKind))

TLSGrade = Literal["A+", "A", "B", "C", "D", "F"]

_TLS_GRADES: frozenset[str] = frozenset(get_args(TLSGrade))


class EvidenceRecord(pydantic.BaseModel):
    """One observed fact about a scanned site.

    ``kind`` is kept as a plain string so records of kinds this
    engine does not know still validate and reach the dedup
    fallback instead of being rejected.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True, frozen=True
    )

    id: str
    scan_id: str = ""
    kind: str
    details: Any = None
    created_at: datetime.datetime | None = None
    severity: int | None = None
    title: str | None = None


# ── Per-kind details ────────────────────────────────────────────


class _Details(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True, extra="ignore")


class TrackerDetails(_Details):
    """A request matched a known tracker list entry."""

    domain: str = ""
    fingerprinting: bool = False


class ThirdPartyDetails(_Details):
    """A request went to a host outside the scanned page's origin."""

    domain: str = ""


class CookieDetails(_Details):
    """A cookie was set without recommended flags."""

    name: str = ""


class HeaderDetails(_Details):
    """A recommended security header was missing."""

    name: str = ""


class InsecureDetails(_Details):
    """A resource was loaded over plain HTTP (``insecure`` and ``mixed-content``)."""

    url: str = ""

    @property
    def is_plain_http(self) -> bool:
        return bool(self.url) and self.url.startswith("http://")


class PolicyDetails(_Details):
    """A privacy policy link was found."""

    url: str = ""


class TLSDetails(_Details):
    """The TLS configuration grade for the scanned host.

    A missing or unrecognised grade reads as ``"A"``.
    """

    grade: TLSGrade = "A"

    @pydantic.field_validator("grade", mode="before")
    @classmethod
    def _normalize_grade(cls, value: object) -> str:
        if isinstance(value, str) and value.strip().upper() in _TLS_GRADES:
            return value.strip().upper()
        return "A"


class FingerprintDetails(_Details):
    """A fingerprinting heuristic fired (canvas, audio, plugin probing)."""

    signal: str = ""


class UnknownDetails(_Details):
    """Details of a kind this engine does not interpret."""


EvidenceDetails = (
    TrackerDetails
    | ThirdPartyDetails
    | CookieDetails
    | HeaderDetails
    | InsecureDetails
    | PolicyDetails
    | TLSDetails
    | FingerprintDetails
    | UnknownDetails
)

_DETAILS_BY_KIND: dict[str, type[_Details]] = {
    "tracker": TrackerDetails,
    "thirdparty": ThirdPartyDetails,
    "cookie": CookieDetails,
    "header": HeaderDetails,
    "insecure": InsecureDetails,
    "mixed-content": InsecureDetails,
    "policy": PolicyDetails,
    "tls": TLSDetails,
    "fingerprint": FingerprintDetails,
}


def details_model_for(kind: str) -> type[_Details]:
    """Return the details model class used for *kind*."""
    return _DETAILS_BY_KIND.get(kind, UnknownDetails)


def coerce_details(record: EvidenceRecord) -> EvidenceDetails:
    """Coerce a record's raw ``details`` into its typed model.

    Non-object payloads yield an all-default instance.  When some
    fields fail validation, those keys are dropped and the rest
    are validated again, so valid fields survive next to corrupt
    ones.  Never raises.
    """
    model = details_model_for(record.kind)
    raw = record.details
    if not isinstance(raw, dict):
        if raw is not None:
            log.debug("Non-object evidence details coerced to defaults", {"evidenceId": record.id, "kind": record.kind})
        return model()

    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as exc:
        bad_keys = {err["loc"][0] for err in exc.errors() if err["loc"]}
        log.debug(
            "Malformed evidence details fields dropped",
            {"evidenceId": record.id, "kind": record.kind, "fields": sorted(str(k) for k in bad_keys)},
        )

    cleaned = {k: v for k, v in raw.items() if k not in bad_keys}
    try:
        return model.model_validate(cleaned)
    except pydantic.ValidationError:
        return model()
