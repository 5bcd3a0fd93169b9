"""Header weight catalogs.

A catalog is two ordered ``name -> weight`` tables: security headers, whose
presence is rewarded, and leaking headers, whose presence is penalized.
Catalogs are immutable once built; load one at start-up and share it.
"""

import json
import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Tuple

from headergrade.exceptions import CatalogError
from headergrade.normalizer import score_range

logger = logging.getLogger(__name__)

DEFAULT_SECURITY_HEADERS = {
    "strict-transport-security": 10,
    "content-security-policy": 10,
    "x-content-type-options": 5,
    "x-frame-options": 5,
    "x-xss-protection": 5,
    "referrer-policy": 3,
    "permissions-policy": 3,
    "cross-origin-embedder-policy": 2,
    "cross-origin-opener-policy": 2,
    "cross-origin-resource-policy": 2,
    "clear-site-data": 1,
    "origin-agent-cluster": 1,
    "x-permitted-cross-domain-policies": 1,
    "x-dns-prefetch-control": 1,
}

DEFAULT_LEAKING_HEADERS = {
    "server": -3,
    "x-powered-by": -5,
    "x-aspnet-version": -5,
    "x-aspnetmvc-version": -5,
    "x-runtime": -3,
    "x-generator": -3,
}


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    weight: float


@dataclass(frozen=True)
class HeaderCatalog:
    security: Tuple[CatalogEntry, ...]
    leaking: Tuple[CatalogEntry, ...]

    def __post_init__(self):
        seen = set()
        for entry in (*self.security, *self.leaking):
            if entry.name in seen:
                raise CatalogError(f"header '{entry.name}' is listed more than once")
            seen.add(entry.name)

    @classmethod
    def from_tables(cls, security, leaking):
        """Build a catalog from two ``{name: weight}`` mappings."""
        return cls(
            security=tuple(_entries(security, "security")),
            leaking=tuple(_entries(leaking, "leaking")),
        )

    def names(self):
        return {entry.name for entry in (*self.security, *self.leaking)}

    def weights(self):
        """Split every configured weight by sign: (positive, negative)."""
        all_weights = [entry.weight for entry in (*self.security, *self.leaking)]
        return ([w for w in all_weights if w > 0], [w for w in all_weights if w < 0])


def _entries(table, label):
    if not isinstance(table, dict):
        raise CatalogError(f"{label} table must be an object of header -> weight")
    for name, weight in table.items():
        if not isinstance(name, str) or not name.strip():
            raise CatalogError(f"{label} table has an empty header name")
        if isinstance(weight, bool) or not isinstance(weight, Real):
            raise CatalogError(f"{label} weight for '{name}' is not a number: {weight!r}")
        if not math.isfinite(weight):
            raise CatalogError(f"{label} weight for '{name}' must be finite: {weight!r}")
        yield CatalogEntry(name.strip().lower(), weight)


DEFAULT_CATALOG = HeaderCatalog.from_tables(DEFAULT_SECURITY_HEADERS, DEFAULT_LEAKING_HEADERS)


def load_catalog(config_file=None):
    """Load a catalog from a JSON file, or return the built-in default.

    The file holds ``{"security": {...}, "leaking": {...}}``; a table left out
    of the file keeps its default.  Any problem with the file is logged and
    the default catalog is used instead.
    """
    if not config_file:
        return DEFAULT_CATALOG

    try:
        with open(config_file, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise CatalogError("top level must be an object with 'security' and 'leaking' tables")
        catalog = HeaderCatalog.from_tables(
            data.get("security", DEFAULT_SECURITY_HEADERS),
            data.get("leaking", DEFAULT_LEAKING_HEADERS),
        )
        score_range(0, *catalog.weights())
    except (OSError, ValueError, CatalogError) as e:
        logger.warning(f"Error loading catalog from {config_file}: {e}")
        logger.warning("Using default header catalog instead.")
        return DEFAULT_CATALOG

    logger.debug(f"Loaded {len(catalog.security)} security and "
                 f"{len(catalog.leaking)} leaking headers from {config_file}")
    return catalog
