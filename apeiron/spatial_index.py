"""A linear spatial index of targetable entities."""

from __future__ import annotations

from typing import Iterator

from apeiron.model import Targetable
from apeiron.position import Position


class SimpleSpatialIndex:
    """Holds entities in a list and answers radius queries by scanning them."""

    def __init__(self) -> None:
        self._entities: list[Targetable] = []

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Targetable]:
        return iter(self._entities)

    def insert(self, entity: Targetable) -> None:
        self._entities.append(entity)

    def remove(self, entity: Targetable) -> None:
        """Drop every entity with the same handle."""
        self._entities = [e for e in self._entities if e.handle != entity.handle]

    def update(self, entity: Targetable) -> None:
        """Nothing to do: queries read the entities' positions directly."""

    def query(self, center: Position, radius: float) -> list[Targetable]:
        """Living entities whose last position lies within radius on the plane."""
        r2 = radius * radius
        result = []
        for e in self._entities:
            if not e.is_alive():
                continue
            last = e.last_position
            dx = center.x - last.x
            dz = center.z - last.z
            if dx * dx + dz * dz <= r2:
                result.append(e)
        return result