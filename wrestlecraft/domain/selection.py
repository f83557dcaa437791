"""Selection value object -- the part ids a character is built from."""
from typing import List

from wrestlecraft.domain.catalog import (
    ARCHETYPES, ATTIRE, MASKS, HEIGHTS, BODY_TYPES, normalize_id,
)

# Single-id fields that are always required, in derivation order.
SINGLE_ID_FIELDS = (
    ("archetypeId", ARCHETYPES),
    ("attireId", ATTIRE),
    ("maskId", MASKS),
    ("heightId", HEIGHTS),
    ("bodyTypeId", BODY_TYPES),
)
ACCESSORY_FIELD = "accessoryIds"
SKIN_COLOR_FIELD = "skinColorId"


class Selection:
    """Chosen part ids. Immutable after creation."""

    def __init__(
        self,
        archetype_id: str,
        attire_id: str,
        mask_id: str,
        height_id: str,
        body_type_id: str,
        accessory_ids: List[str] | None = None,
        skin_color_id: str | None = None,
    ):
        self._archetype_id = archetype_id
        self._attire_id = attire_id
        self._mask_id = mask_id
        self._height_id = height_id
        self._body_type_id = body_type_id
        self._accessory_ids = list(accessory_ids or [])
        self._skin_color_id = skin_color_id or None

    @classmethod
    def from_payload(cls, payload) -> "Selection":
        """Build from a parsed JSON object. Ids are coerced to strings.

        Does not check the catalog; run validate_selection first.
        """
        if isinstance(payload, Selection):
            return payload
        if not isinstance(payload, dict):
            raise ValueError("selection must be an object")
        accessories = payload.get(ACCESSORY_FIELD) or []
        if not isinstance(accessories, list):
            raise ValueError(f"{ACCESSORY_FIELD} must be an array")
        return cls(
            archetype_id=normalize_id(payload.get("archetypeId")),
            attire_id=normalize_id(payload.get("attireId")),
            mask_id=normalize_id(payload.get("maskId")),
            height_id=normalize_id(payload.get("heightId")),
            body_type_id=normalize_id(payload.get("bodyTypeId")),
            accessory_ids=[normalize_id(a) for a in accessories],
            skin_color_id=normalize_id(payload.get(SKIN_COLOR_FIELD)),
        )

    @property
    def archetype_id(self) -> str:
        return self._archetype_id

    @property
    def attire_id(self) -> str:
        return self._attire_id

    @property
    def mask_id(self) -> str:
        return self._mask_id

    @property
    def height_id(self) -> str:
        return self._height_id

    @property
    def body_type_id(self) -> str:
        return self._body_type_id

    @property
    def accessory_ids(self) -> List[str]:
        return list(self._accessory_ids)

    @property
    def skin_color_id(self) -> str | None:
        return self._skin_color_id

    def to_dict(self) -> dict:
        data = {
            "archetypeId": self._archetype_id,
            "attireId": self._attire_id,
            "maskId": self._mask_id,
            "accessoryIds": list(self._accessory_ids),
            "heightId": self._height_id,
            "bodyTypeId": self._body_type_id,
        }
        if self._skin_color_id is not None:
            data[SKIN_COLOR_FIELD] = self._skin_color_id
        return data

    def __eq__(self, other) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Selection({self.to_dict()!r})"
