"""Stat derivation: archetype base stats plus additive part bonuses."""
from typing import Dict, List

from wrestlecraft.domain.catalog import (
    Catalog, CatalogItem, ARCHETYPES, ATTIRE, MASKS, ACCESSORIES, HEIGHTS, BODY_TYPES,
)
from wrestlecraft.domain.selection import Selection


class CompositeRules:
    """Fixed linear formulas computed after all bonuses are applied."""

    STAR_POWER = "starPower"
    OFFENSE = "offense"
    DURABILITY = "durability"

    ATTIRE_DAMAGE_FIELD = "damage"
    MASK_ARMOR_FIELD = "armor"

    @staticmethod
    def star_power(stats: Dict[str, float]) -> float:
        return 2 * stats.get("charisma", 0) + stats.get("technique", 0)

    @staticmethod
    def offense(stats: Dict[str, float], attire_damage: float) -> float:
        return stats.get("strength", 0) + 2 * attire_damage

    @staticmethod
    def durability(stats: Dict[str, float], mask_armor: float) -> float:
        return stats.get("stamina", 0) + 2 * mask_armor + stats.get("vitality", 0)


def _bonus_sources(catalog: Catalog, selection: Selection) -> List[CatalogItem | None]:
    # Fixed traversal order: attire, mask, accessories (selection order), height, body type.
    sources = [
        catalog.find(ATTIRE, selection.attire_id),
        catalog.find(MASKS, selection.mask_id),
    ]
    sources.extend(catalog.find(ACCESSORIES, a) for a in selection.accessory_ids)
    sources.append(catalog.find(HEIGHTS, selection.height_id))
    sources.append(catalog.find(BODY_TYPES, selection.body_type_id))
    return sources


def derive_stats(catalog: Catalog, selection) -> Dict[str, float]:
    """
    Pure function of (catalog, selection). Unresolved ids contribute
    nothing, so the result is defined even for an unvalidated selection.
    """
    selection = Selection.from_payload(selection)

    archetype = catalog.find(ARCHETYPES, selection.archetype_id)
    stats: Dict[str, float] = archetype.base_stats if archetype else {}

    for item in _bonus_sources(catalog, selection):
        if item is None:
            continue
        for stat, bonus in item.stat_bonuses.items():
            stats[stat] = stats.get(stat, 0) + bonus

    attire = catalog.find(ATTIRE, selection.attire_id)
    mask = catalog.find(MASKS, selection.mask_id)
    attire_damage = attire.scalar(CompositeRules.ATTIRE_DAMAGE_FIELD) if attire else 0
    mask_armor = mask.scalar(CompositeRules.MASK_ARMOR_FIELD) if mask else 0

    # Composites read the block as it stood before any composite was added.
    base = dict(stats)
    stats[CompositeRules.STAR_POWER] = CompositeRules.star_power(base)
    stats[CompositeRules.OFFENSE] = CompositeRules.offense(base, attire_damage)
    stats[CompositeRules.DURABILITY] = CompositeRules.durability(base, mask_armor)
    return stats
