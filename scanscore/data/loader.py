"""
Data loader for domain reference tables.

The JSON data files live alongside this module and are parsed once,
on first use, into Pydantic models.
"""

from __future__ import annotations

import functools
import json
import pathlib
from typing import Any

from scanscore.models import domains

# Resolve path to the data directory (same directory as this module)
_DATA_DIR = pathlib.Path(__file__).resolve().parent


def _load_json(relative_path: str) -> Any:
    """Load and parse a JSON file relative to the data directory.

    Raises:
        FileNotFoundError: If the JSON file does not exist.
        json.JSONDecodeError: If the file contains invalid JSON.
    """
    full_path = _DATA_DIR / relative_path
    if not full_path.exists():
        raise FileNotFoundError(f"Data file not found: {relative_path}")
    with open(full_path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise json.JSONDecodeError(
                f"Invalid JSON in {relative_path}: {exc.msg}",
                exc.doc,
                exc.pos,
            ) from exc


@functools.lru_cache(maxsize=1)
def get_first_party_groups() -> dict[str, domains.FirstPartyGroup]:
    """Known first-party CDN domains, keyed by root domain (lazy loaded and cached)."""
    raw: list[dict[str, Any]] = _load_json("first-party-domains.json")
    groups = [domains.FirstPartyGroup.model_validate(entry) for entry in raw]
    return {group.root: group for group in groups}
