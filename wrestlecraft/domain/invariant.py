"""Selection validation against a catalog.

Validation is exhaustive: every problem is collected and returned, nothing
is raised for malformed fields.
"""
from typing import List

from wrestlecraft.domain.catalog import Catalog, ACCESSORIES, SKIN_COLORS, normalize_id
from wrestlecraft.domain.selection import (
    Selection, SINGLE_ID_FIELDS, ACCESSORY_FIELD, SKIN_COLOR_FIELD,
)


class ValidationError:
    """One problem with a selection. Immutable."""

    def __init__(self, field: str, value, message: str, index: int | None = None):
        self._field = field
        self._value = value
        self._message = message
        self._index = index

    @property
    def field(self) -> str:
        return self._field

    @property
    def value(self):
        return self._value

    @property
    def message(self) -> str:
        return self._message

    @property
    def index(self) -> int | None:
        return self._index

    def to_dict(self) -> dict:
        data = {"field": self._field, "value": self._value, "message": self._message}
        if self._index is not None:
            data["index"] = self._index
        return data

    def __repr__(self) -> str:
        return f"ValidationError({self._field!r}, {self._message!r})"


def _is_blank(value) -> bool:
    return value is None or value == ""


def _check_id(catalog: Catalog, field: str, category: str, value,
              index: int | None = None) -> ValidationError | None:
    label = field if index is None else f"{field}[{index}]"
    key = normalize_id(value)
    if key is None:
        return ValidationError(
            field, value, f"{label} must be a string id, got {type(value).__name__}", index,
        )
    if catalog.find(category, key) is None:
        return ValidationError(field, value, f"{label}: unknown {category} id {key!r}", index)
    return None


def validate_selection(catalog: Catalog, selection) -> List[ValidationError]:
    """Return every violation in `selection`; an empty list means valid."""
    if isinstance(selection, Selection):
        selection = selection.to_dict()
    if not isinstance(selection, dict):
        return [ValidationError("selection", None, "selection must be an object")]

    errors: List[ValidationError] = []

    for field, category in SINGLE_ID_FIELDS:
        value = selection.get(field)
        if _is_blank(value):
            errors.append(ValidationError(field, value, f"{field} is required"))
            continue
        error = _check_id(catalog, field, category, value)
        if error:
            errors.append(error)

    accessories = selection.get(ACCESSORY_FIELD)
    if accessories is not None:
        if not isinstance(accessories, list):
            errors.append(ValidationError(
                ACCESSORY_FIELD, accessories, f"{ACCESSORY_FIELD} must be an array",
            ))
        else:
            for i, value in enumerate(accessories):
                error = _check_id(catalog, ACCESSORY_FIELD, ACCESSORIES, value, index=i)
                if error:
                    errors.append(error)

    skin = selection.get(SKIN_COLOR_FIELD)
    if _is_blank(skin):
        if catalog.has_skin_colors:
            errors.append(ValidationError(SKIN_COLOR_FIELD, skin, f"{SKIN_COLOR_FIELD} is required"))
    else:
        error = _check_id(catalog, SKIN_COLOR_FIELD, SKIN_COLORS, skin)
        if error:
            errors.append(error)

    return errors
