from __future__ import annotations
from typing import Mapping, Optional, Set, Tuple

from src.core.errors import DuplicateNameError, NoPathError, NotInServiceError

NOT_IN_SERVICE = -1


class Train:
    """A train's journey: an immutable path plus a cursor into it.

    ``active_names`` is the registry owned by the network that admitted the
    train. The name is added on construction and removed when the train
    advances past its last section, after which it may be reused.
    """

    def __init__(
        self,
        name: str,
        entry: int,
        destination: int,
        routes: Mapping[Tuple[int, int], Tuple[int, ...]],
        active_names: Set[str],
    ) -> None:
        path = routes.get((entry, destination))
        if path is None:
            raise NoPathError(f"No path exists between {entry} and {destination}")
        if name in active_names:
            raise DuplicateNameError(f"Train {name} is in service.")
        self.name = name
        self.entry = entry
        self.destination = destination
        self.path: Tuple[int, ...] = tuple(path)
        self.cursor = 0
        self._active_names = active_names
        active_names.add(name)

    @property
    def in_service(self) -> bool:
        return self.cursor < len(self.path)

    def current_section(self) -> int:
        if self.in_service:
            return self.path[self.cursor]
        return NOT_IN_SERVICE

    def next_section(self) -> Optional[int]:
        # None means the next move takes the train out of the corridor
        if self.cursor + 1 < len(self.path):
            return self.path[self.cursor + 1]
        return None

    def route_key(self) -> Tuple[int, Optional[int]]:
        return self.current_section(), self.next_section()

    def advance(self) -> None:
        if not self.in_service:
            raise NotInServiceError(f"Trying to move train {self.name}, which is not in service.")
        self.cursor += 1
        if self.cursor == len(self.path):
            self._active_names.discard(self.name)

    def withdraw(self) -> None:
        """Take the train out of service wherever it is."""
        self.cursor = len(self.path)
        self._active_names.discard(self.name)

    def __repr__(self) -> str:
        return f"Train({self.name!r}, path={list(self.path)}, cursor={self.cursor})"
