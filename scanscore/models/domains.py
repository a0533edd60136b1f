"""Pydantic models for domain ownership reference data."""

from __future__ import annotations

import pydantic

from scanscore.utils.serialization import snake_to_camel


class FirstPartyGroup(pydantic.BaseModel):
    """Infrastructure domains operated by the owner of ``root``."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True, frozen=True
    )

    root: str
    first_party: tuple[str, ...]
