"""Catalog entities -- the fixed set of parts a wrestler is built from."""
from typing import Dict, List

from wrestlecraft.domain.errors import CatalogUnavailable

ARCHETYPES = "archetypes"
ATTIRE = "attire"
MASKS = "masks"
ACCESSORIES = "accessories"
HEIGHTS = "heights"
BODY_TYPES = "bodyTypes"
SKIN_COLORS = "skinColors"

REQUIRED_CATEGORIES = (ARCHETYPES, ATTIRE, MASKS, ACCESSORIES, HEIGHTS, BODY_TYPES)
OPTIONAL_CATEGORIES = (SKIN_COLORS,)


def is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_id(value) -> str | None:
    """Return the string form of an id, or None if the value cannot be an id.

    Legacy presets use numeric ids; they compare equal to their string form.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return None


def _stat_mapping(raw, label: str) -> Dict[str, float]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{label} must be an object")
    return {str(k): v for k, v in raw.items() if is_number(v)}


class CatalogItem:
    """One selectable part. Immutable after creation."""

    def __init__(
        self,
        item_id: str,
        name: str,
        base_stats: Dict[str, float] | None = None,
        stat_bonuses: Dict[str, float] | None = None,
        raw: dict | None = None,
    ):
        if not item_id:
            raise ValueError("Catalog item id cannot be empty")
        self._id = item_id
        self._name = name
        self._base_stats = dict(base_stats or {})
        self._stat_bonuses = dict(stat_bonuses or {})
        self._raw = dict(raw) if raw is not None else {"id": item_id, "name": name}

    @classmethod
    def from_dict(cls, data) -> "CatalogItem":
        if not isinstance(data, dict):
            raise ValueError("catalog item must be an object")
        item_id = normalize_id(data.get("id"))
        if not item_id:
            raise ValueError(f"catalog item has no usable id: {data.get('id')!r}")
        return cls(
            item_id=item_id,
            name=str(data.get("name", item_id)),
            base_stats=_stat_mapping(data.get("baseStats"), f"{item_id}.baseStats"),
            stat_bonuses=_stat_mapping(data.get("statBonuses"), f"{item_id}.statBonuses"),
            raw=data,
        )

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def base_stats(self) -> Dict[str, float]:
        return dict(self._base_stats)

    @property
    def stat_bonuses(self) -> Dict[str, float]:
        return dict(self._stat_bonuses)

    def scalar(self, key: str) -> float:
        """Numeric field used by composite metrics; 0 when absent."""
        value = self._raw.get(key)
        return value if is_number(value) else 0

    def to_dict(self) -> dict:
        return dict(self._raw)


class Catalog:
    """
    Named categories of parts, keyed by canonical category name.
    Only canonical categories exist here; alias resolution happens before.
    """

    def __init__(self, categories: Dict[str, List[CatalogItem]], version=None):
        self._categories: Dict[str, List[CatalogItem]] = {}
        self._index: Dict[str, Dict[str, CatalogItem]] = {}
        for name in REQUIRED_CATEGORIES + OPTIONAL_CATEGORIES:
            items = list(categories.get(name) or [])
            index: Dict[str, CatalogItem] = {}
            for item in items:
                if item.id in index:
                    raise ValueError(f"duplicate id {item.id!r} in {name}")
                index[item.id] = item
            self._categories[name] = items
            self._index[name] = index
        self._version = version

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        """Build a catalog from canonical raw data.

        Raises CatalogUnavailable naming every missing required category,
        or describing the first structural problem found.
        """
        if not isinstance(data, dict):
            raise CatalogUnavailable("catalog must be a JSON object")

        missing = [k for k in REQUIRED_CATEGORIES if k not in data]
        if missing:
            raise CatalogUnavailable(
                "Presets file must include " + ", ".join(REQUIRED_CATEGORIES)
                + ". Missing: " + ", ".join(missing),
                missing=missing,
            )

        categories: Dict[str, List[CatalogItem]] = {}
        try:
            for name in REQUIRED_CATEGORIES:
                raw_items = data[name]
                if not isinstance(raw_items, list):
                    raise ValueError(f"{name} must be an array")
                categories[name] = [CatalogItem.from_dict(i) for i in raw_items]

            raw_skin = data.get(SKIN_COLORS)
            if isinstance(raw_skin, list):
                categories[SKIN_COLORS] = [CatalogItem.from_dict(i) for i in raw_skin]
            else:
                categories[SKIN_COLORS] = []

            return cls(categories, version=data.get("version"))
        except ValueError as exc:
            raise CatalogUnavailable(f"Malformed catalog: {exc}") from exc

    @property
    def version(self):
        return self._version

    @property
    def has_skin_colors(self) -> bool:
        return bool(self._categories[SKIN_COLORS])

    def items(self, category: str) -> List[CatalogItem]:
        return list(self._categories.get(category, []))

    def find(self, category: str, item_id) -> CatalogItem | None:
        key = normalize_id(item_id)
        if key is None:
            return None
        return self._index.get(category, {}).get(key)

    def counts(self) -> Dict[str, int]:
        return {name: len(items) for name, items in self._categories.items()}

    def to_dict(self) -> dict:
        data = {
            name: [item.to_dict() for item in items]
            for name, items in self._categories.items()
        }
        if self._version is not None:
            data["version"] = self._version
        return data
