"""Shared serialization helpers for camelCase output.

Provides the ``snake_to_camel`` alias generator used by every
Pydantic model config, plus the canonical JSON dump used when a
result leaves the process (CLI output, persistence payloads).
"""

from __future__ import annotations

import pydantic


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as
            ``"how_to_fix"``.

    Returns:
        The camelCase equivalent, e.g. ``"howToFix"``.
    """
    parts = name.split("_")
    return parts[0] + "".join(w.capitalize() for w in parts[1:])


def to_json(model: pydantic.BaseModel, *, indent: int | None = None) -> str:
    """Dump *model* as camelCase JSON.

    Field order follows the model definition, so two equal
    models always produce byte-identical output.
    """
    return model.model_dump_json(by_alias=True, indent=indent)
