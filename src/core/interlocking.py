from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from src.core.errors import (
    ConstraintViolation,
    ResourceConflict,
    UnknownSectionError,
    UnknownTrainError,
)
from src.core.models import CorridorConfig
from src.core.section import TrackSection
from src.core.train import NOT_IN_SERVICE, Train

logger = logging.getLogger(__name__)


class Interlocking:
    """Admission and movement authority for one corridor.

    Owns every section, every train ever issued (latest per name) and the set
    of names currently in service. Sections and trains only know each other by
    id/name; all lookups go through this object.

    Not thread-safe: callers serialize access.
    """

    def __init__(self, config: CorridorConfig) -> None:
        self.config = config
        self.sections: Dict[int, TrackSection] = {sid: TrackSection(sid) for sid in sorted(config.section_ids)}
        self.trains: Dict[str, Train] = {}
        self.active: Set[str] = set()

    # Admission

    def add_train(self, name: str, entry: int, destination: int) -> None:
        """Admit ``name`` on ``entry`` bound for ``destination``.

        Raises ConstraintViolation when an opposing train would make the pair
        deadlock-prone, NoPathError / DuplicateNameError from train
        construction, and ResourceConflict when the entry section is held.
        Nothing changes when any of these is raised.
        """
        for sid, target in self.config.opposing(entry, destination):
            occupant = self._occupant_train(sid)
            if occupant is not None and occupant.destination == target:
                logger.warning("Rejected %s (%s->%s): %s heading for %s is on %s",
                               name, entry, destination, occupant.name, target, sid)
                raise ConstraintViolation(
                    f"Constraint not met: trying to add a train heading for {destination} from {entry}, "
                    f"but a train heading for {target} is on {sid}"
                )

        train = Train(name, entry, destination, self.config.routes, self.active)
        try:
            self.sections[entry].occupy(name)
        except ResourceConflict:
            self.active.discard(name)
            logger.warning("Rejected %s: entry section %s is occupied", name, entry)
            raise
        self.trains[name] = train
        logger.info("Admitted %s on %s bound for %s via %s", name, entry, destination, list(train.path))

    def remove_train(self, name: str) -> None:
        """Withdraw an active train from the corridor, freeing its section and name."""
        train = self._active_train(name)
        self.sections[train.current_section()].release()
        train.withdraw()
        logger.info("Withdrew %s", name)

    # Movement

    def move_trains(self, names: Iterable[str]) -> int:
        """Run one tick over ``names`` and return how many trains moved.

        Every name is validated before anything moves. Trains on contested
        routes are decided and moved before ordinary ones; each decision sees
        the occupancy left by the decisions before it.
        """
        batch: List[Train] = []
        seen: Set[str] = set()
        for name in names:
            train = self._active_train(name)
            if name not in seen:
                seen.add(name)
                batch.append(train)

        contested = [t for t in batch if self.config.is_contested(*t.route_key())]
        ordinary = [t for t in batch if not self.config.is_contested(*t.route_key())]

        moved = 0
        for train in contested + ordinary:
            if self._move(train):
                moved += 1
        logger.debug("Tick over %d trains: %d moved", len(batch), moved)
        return moved

    def is_movable(self, train: Train) -> bool:
        nxt = train.next_section()
        if nxt is None:
            return True
        if self.sections[nxt].is_occupied():
            logger.debug("%s holds on %s: %s is occupied", train.name, train.current_section(), nxt)
            return False
        if self._must_yield(train):
            return False
        return True

    def _must_yield(self, train: Train) -> bool:
        # any watched section holding a train about to take the watched hop wins
        for sid, hop in self.config.watched(*train.route_key()):
            occupant = self._occupant_train(sid)
            if occupant is not None and occupant.next_section() == hop:
                logger.debug("%s yields to %s (%s->%s)", train.name, occupant.name, sid, hop)
                return True
        return False

    def _move(self, train: Train) -> bool:
        if not self.is_movable(train):
            return False
        current, nxt = train.route_key()
        self._release(current)
        if nxt is not None:
            self.sections[nxt].occupy(train.name)
        else:
            logger.info("%s left the corridor from %s", train.name, current)
        return True

    def _release(self, sid: int) -> None:
        name = self.sections[sid].current_occupant()
        if name is None:
            return
        self.trains[name].advance()
        self.sections[sid].release()

    # Queries

    def get_section(self, section_id: int) -> Optional[str]:
        section = self.sections.get(section_id)
        if section is None:
            raise UnknownSectionError(f"Track section {section_id} does not exist")
        return section.current_occupant()

    def get_train(self, name: str) -> int:
        train = self.trains.get(name)
        if train is None:
            raise UnknownTrainError(f"Train {name} does not exist")
        if not train.in_service:
            return NOT_IN_SERVICE
        return train.current_section()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "sections": {sid: s.current_occupant() for sid, s in self.sections.items()},
            "trains": {
                name: {
                    "section": t.current_section(),
                    "next": t.next_section() if t.in_service else None,
                    "destination": t.destination,
                    "path": list(t.path),
                    "in_service": t.in_service,
                }
                for name, t in self.trains.items()
            },
        }

    def _active_train(self, name: str) -> Train:
        if name not in self.active:
            raise UnknownTrainError(f"Train {name} is not in service.")
        return self.trains[name]

    def _occupant_train(self, sid: int) -> Optional[Train]:
        name = self.sections[sid].current_occupant()
        return self.trains[name] if name is not None else None
