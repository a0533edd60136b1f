"""
URL and domain utility functions for scan scoring.
"""

from __future__ import annotations

import functools
from urllib import parse

import tldextract

from scanscore import config
from scanscore.utils import logger

log = logger.create_logger("Url")


@functools.lru_cache(maxsize=1)
def _extractor() -> tldextract.TLDExtract:
    """Build the shared public-suffix extractor once."""
    settings = config.load_domain_config()
    return tldextract.TLDExtract(
        cache_dir=settings.cache_dir,
        suffix_list_urls=tuple(settings.suffix_list_urls),
        fallback_to_snapshot=True,
        include_psl_private_domains=settings.include_private_domains,
    )


def reset_extractor() -> None:
    """Drop the cached extractor so configuration is re-read."""
    _extractor.cache_clear()


def extract_domain(url: str) -> str:
    """Extract the hostname from a URL string."""
    try:
        parsed = parse.urlparse(url)
        return parsed.hostname or "unknown"
    except ValueError:
        return "unknown"


def normalize_host(value: str) -> str:
    """Lower-case *value* and strip surrounding whitespace and dots."""
    return value.strip().strip(".").lower()


def get_registrable_domain(hostname: str) -> str | None:
    """Return the public-suffix-aware registrable domain of *hostname*.

    ``www.github.com`` → ``github.com``,
    ``shop.example.co.uk`` → ``example.co.uk``.

    Returns:
        The registrable domain, or ``None`` for hosts with no
        recognised public suffix (IP addresses, ``localhost``,
        empty strings).
    """
    host = normalize_host(hostname)
    if not host:
        return None
    result = _extractor()(host)
    return result.top_domain_under_public_suffix or None


def get_root_domain(scan_input: str) -> str | None:
    """Derive the registrable root domain from a scan's input.

    Accepts full URLs or bare hostnames; a missing scheme is
    treated as ``https://``.

    Args:
        scan_input: The scan's normalized input, falling back to
            the raw input upstream.

    Returns:
        The root domain, or ``None`` when it cannot be parsed.
    """
    value = scan_input.strip()
    if not value:
        return None
    if "://" not in value:
        value = f"https://{value}"

    hostname = extract_domain(value)
    if hostname == "unknown":
        log.warn("Could not parse scan input hostname", {"input": scan_input})
        return None

    root = get_registrable_domain(hostname)
    if root is None:
        log.warn("No registrable domain for scan input", {"hostname": hostname})
    return root
