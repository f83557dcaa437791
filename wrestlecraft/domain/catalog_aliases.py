"""Legacy category names accepted in older preset files.

Consulted once, at load time, before the catalog is validated. Each alias
belongs to exactly one canonical category.
"""
import logging
from typing import Dict, List, Tuple

log = logging.getLogger("wrestlecraft.catalog")

LEGACY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "archetypes": ("classes", "archetype"),
    "attire": ("outfits", "costumes"),
    "masks": ("mask",),
    "accessories": ("items", "extras"),
    "heights": ("height", "sizes"),
    "bodyTypes": ("body_types", "builds"),
    "skinColors": ("skin_colors", "skinTones"),
}


def resolve_aliases(raw: dict) -> Tuple[dict, List[Tuple[str, str]]]:
    """
    Return a copy of `raw` keyed by canonical category names, plus the
    (alias, canonical) pairs that were adopted.

    A canonical key that is already present always wins. Otherwise the first
    alias present, in table order, is adopted. Alias keys never survive into
    the returned mapping.
    """
    resolved = dict(raw)
    adopted: List[Tuple[str, str]] = []
    for canonical, aliases in LEGACY_ALIASES.items():
        if canonical not in resolved:
            for alias in aliases:
                if alias in raw:
                    resolved[canonical] = raw[alias]
                    adopted.append((alias, canonical))
                    log.info("Catalog alias adopted: %r -> %r", alias, canonical)
                    break
        for alias in aliases:
            resolved.pop(alias, None)
    return resolved, adopted
