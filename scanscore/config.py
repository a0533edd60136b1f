"""
Runtime configuration for the scoring engine.

Centralises the environment variable names and defaults that
control how registrable domains are derived.  The rule table
itself is fixed and deliberately not configurable.

Uses ``pydantic_settings.BaseSettings`` for automatic environment
variable binding, type coercion, and validation.
"""

from __future__ import annotations

import json
from typing import Annotated

import pydantic
import pydantic_settings

from scanscore.utils import logger

log = logger.create_logger("Config")


class DomainParsingConfig(pydantic_settings.BaseSettings):
    """Public-suffix handling for root-domain derivation.

    Attributes:
        suffix_list_urls: Public Suffix List URLs to fetch, given as
            a JSON array or comma-separated text.  Empty
            means the snapshot bundled with ``tldextract`` is used
            and no network access ever happens.
        cache_dir: Directory for a fetched list.  ``None`` disables
            the on-disk cache.
        include_private_domains: Treat PSL private suffixes
            (``github.io``, ``blogspot.com``) as public suffixes.
    """

    model_config = pydantic_settings.SettingsConfigDict(populate_by_name=True)

    suffix_list_urls: Annotated[list[str], pydantic_settings.NoDecode] = pydantic.Field(
        default_factory=list, validation_alias="SCANSCORE_PSL_URLS"
    )
    cache_dir: str | None = pydantic.Field(
        default=None, validation_alias="SCANSCORE_PSL_CACHE_DIR"
    )
    include_private_domains: bool = pydantic.Field(
        default=False, validation_alias="SCANSCORE_PSL_PRIVATE_DOMAINS"
    )

    @pydantic.field_validator("suffix_list_urls", mode="before")
    @classmethod
    def _split_urls(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.startswith("["):
            return json.loads(text)
        return [part.strip() for part in text.split(",") if part.strip()]

    @property
    def offline(self) -> bool:
        """True when no suffix list will be fetched over the network."""
        return not self.suffix_list_urls


def load_domain_config() -> DomainParsingConfig:
    """Read the domain-parsing configuration from the environment."""
    config = DomainParsingConfig()
    log.debug(
        "Domain parsing configuration",
        {
            "offline": config.offline,
            "privateDomains": config.include_private_domains,
        },
    )
    return config
