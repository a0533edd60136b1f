"""Pydantic model for the scan record read at the scoring boundary."""

from __future__ import annotations

import pydantic

from scanscore.utils.serialization import snake_to_camel


class ScanContext(pydantic.BaseModel):
    """The parts of a scan record the scorer needs."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True, frozen=True
    )

    id: str
    input: str
    normalized_input: str | None = None

    @property
    def domain_source(self) -> str:
        """The input used to derive the root domain."""
        return self.normalized_input or self.input
