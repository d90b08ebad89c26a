from __future__ import annotations
from typing import Optional

from src.core.errors import ResourceConflict


class TrackSection:
    """Single-slot track resource. Holds the *name* of its occupant, never the train itself."""

    def __init__(self, section_id: int) -> None:
        self.section_id = section_id
        self._occupant: Optional[str] = None

    def is_occupied(self) -> bool:
        return self._occupant is not None

    def current_occupant(self) -> Optional[str]:
        return self._occupant

    def occupy(self, train_name: str) -> None:
        if self._occupant is None:
            self._occupant = train_name
            return
        if self._occupant == train_name:
            return
        raise ResourceConflict(f"Track {self.section_id} is currently occupied by {self._occupant}.")

    def release(self) -> Optional[str]:
        # returns the name that left so the caller can advance that train
        name, self._occupant = self._occupant, None
        return name

    def __repr__(self) -> str:
        return f"TrackSection({self.section_id}, occupant={self._occupant!r})"
