"""Decide whether an observed domain belongs to the scanned site.

Sites serve assets from their own subdomains (``assets.example.com``)
and sometimes from separate CDN domains they operate
(``githubassets.com`` for ``github.com``).  Neither should be
penalised as a third party.  Tracker evidence never goes through
this check; trackers are third-party by definition.
"""

from __future__ import annotations

from scanscore.data import loader
from scanscore.utils import url


def _matches(domain: str, suffix: str) -> bool:
    return domain == suffix or domain.endswith(f".{suffix}")


def is_first_party(domain: str, root_domain: str | None) -> bool:
    """Return True when *domain* is operated by the owner of *root_domain*.

    Args:
        domain: The observed request host, e.g.
            ``"github.githubassets.com"``.
        root_domain: The scan's registrable domain, e.g.
            ``"github.com"``, or ``None`` when it could not be
            derived.

    Returns:
        False whenever either side cannot be parsed, so a parse
        failure always errs towards penalising.
    """
    observed = url.normalize_host(domain or "")
    root = url.normalize_host(root_domain or "")
    if not observed or not root:
        return False

    root_registrable = url.get_registrable_domain(root)
    if root_registrable is None:
        return False
    if observed == root or url.get_registrable_domain(observed) == root_registrable:
        return True

    group = loader.get_first_party_groups().get(root_registrable)
    if group is None:
        return False
    return any(_matches(observed, fp) for fp in group.first_party)
