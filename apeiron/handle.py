"""Handles that identify a living entity and its spawn generation."""

from __future__ import annotations

import uuid
from dataclasses import dataclass


def new_uuid() -> str:
    """A new random UUID in its canonical string form."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class EntityHandle:
    """Identifies an entity; the generation grows on every respawn."""

    id: str = ""
    generation: int = 0

    def is_valid(self) -> bool:
        return self.id != "" and self.generation > 0

    def is_empty(self) -> bool:
        return self.id == "" and self.generation == 0

    def __str__(self) -> str:
        return f"Handle[ID={self.id} Gen={self.generation}]"