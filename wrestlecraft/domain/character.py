"""
Character entity -- a named wrestler built from catalog parts.

Derived stats are stored alongside the selection they came from and are
only recomputed when the selection changes.
"""
from datetime import datetime, timezone
from typing import Dict

from wrestlecraft.domain.selection import Selection


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Character:
    """Persisted wrestler record. `id` and `created_at` never change."""

    def __init__(
        self,
        character_id: str,
        name: str,
        selection: Selection,
        derived_stats: Dict[str, float] | None = None,
        notes: str = "",
        created_at: str | None = None,
        updated_at: str | None = None,
    ):
        if not character_id:
            raise ValueError("Character id cannot be empty")
        self._id = character_id
        self._name = self._clean_name(name)
        self._selection = selection
        self._derived_stats = dict(derived_stats or {})
        self._notes = self._clean_notes(notes)
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @staticmethod
    def _clean_name(name) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Character name cannot be empty")
        return name.strip()

    @staticmethod
    def _clean_notes(notes) -> str:
        if notes is None:
            return ""
        if not isinstance(notes, str):
            raise ValueError("Character notes must be a string")
        return notes

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def derived_stats(self) -> Dict[str, float]:
        return dict(self._derived_stats)

    @property
    def notes(self) -> str:
        return self._notes

    @property
    def created_at(self) -> str:
        return self._created_at

    @property
    def updated_at(self) -> str:
        return self._updated_at

    def apply_update(
        self,
        name: str | None = None,
        selection: Selection | None = None,
        derived_stats: Dict[str, float] | None = None,
        notes: str | None = None,
    ) -> None:
        """Apply only the supplied fields. A new selection requires its stats."""
        if selection is not None and derived_stats is None:
            raise ValueError("A new selection must come with its derived stats")
        if name is not None:
            self._name = self._clean_name(name)
        if selection is not None:
            self._selection = selection
            self._derived_stats = dict(derived_stats)
        if notes is not None:
            self._notes = self._clean_notes(notes)
        self._updated_at = utc_now()

    def with_id(self, character_id: str) -> "Character":
        """Copy of this character under a different id."""
        data = self.to_dict()
        data["id"] = character_id
        return Character.from_dict(data)

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "selection": self._selection.to_dict(),
            "derivedStats": dict(self._derived_stats),
            "notes": self._notes,
            "createdAt": self._created_at,
            "updatedAt": self._updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Character":
        """Rebuild from storage. Accepts records written before stats existed."""
        created_at = data.get("createdAt") or data.get("created_at")
        return cls(
            character_id=str(data["id"]),
            name=data["name"],
            selection=Selection.from_payload(data.get("selection") or {}),
            derived_stats=data.get("derivedStats") or {},
            notes=data.get("notes") or "",
            created_at=created_at,
            updated_at=data.get("updatedAt") or created_at,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Character):
            return NotImplemented
        return self.to_dict() == other.to_dict()
