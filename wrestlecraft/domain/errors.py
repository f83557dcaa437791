"""Error taxonomy surfaced by the build engine."""
from typing import List


class WrestlecraftError(Exception):
    """Base class for every error raised by the engine."""


class CatalogUnavailable(WrestlecraftError):
    """Catalog file missing, unparseable, or missing required categories."""

    def __init__(self, reason: str, missing: List[str] | None = None):
        self.reason = reason
        self.missing = list(missing or [])
        super().__init__(reason)


class InvalidSelection(WrestlecraftError):
    """Selection references parts that do not exist in the catalog."""

    def __init__(self, violations: list):
        self.violations = list(violations)
        fields = ", ".join(v.field for v in self.violations) or "selection"
        super().__init__(f"Invalid selection ({len(self.violations)} problem(s): {fields})")

    def to_dict(self) -> dict:
        return {
            "error": "Invalid selection",
            "violations": [v.to_dict() for v in self.violations],
        }


class NotFound(WrestlecraftError):
    """No character with the requested id."""

    def __init__(self, character_id: str):
        self.character_id = character_id
        super().__init__(f"Character {character_id} not found")


class PersistenceFailure(WrestlecraftError):
    """Reading or writing the character file failed."""

    def __init__(self, message: str = "Failed to persist characters"):
        super().__init__(message)
