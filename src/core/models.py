from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from src.core.errors import CorridorConfigError

SectionId = int
# (entry, destination) for routes and conflicts, (current, next) for priorities
RouteKey = Tuple[SectionId, SectionId]
# Opposing (section, destination) for conflicts, watched (section, next hop) for priorities
WatchPair = Tuple[SectionId, SectionId]


@dataclass(frozen=True)
class CorridorConfig:
    """Static description of a corridor: sections and the three lookup tables.

    Built once, then shared read-only by every network created from it.
    """
    section_ids: FrozenSet[SectionId]
    routes: Mapping[RouteKey, Tuple[SectionId, ...]]
    conflicts: Mapping[RouteKey, FrozenSet[WatchPair]] = field(default_factory=lambda: MappingProxyType({}))
    priorities: Mapping[RouteKey, FrozenSet[WatchPair]] = field(default_factory=lambda: MappingProxyType({}))
    # Rows of section ids (None = blank cell) used only when rendering the board
    layout: Optional[Tuple[Tuple[Optional[SectionId], ...], ...]] = None

    def path_for(self, entry: SectionId, destination: SectionId) -> Optional[Tuple[SectionId, ...]]:
        return self.routes.get((entry, destination))

    def opposing(self, entry: SectionId, destination: SectionId) -> FrozenSet[WatchPair]:
        return self.conflicts.get((entry, destination), frozenset())

    def watched(self, current: SectionId, nxt: Optional[SectionId]) -> FrozenSet[WatchPair]:
        if nxt is None:
            return frozenset()
        return self.priorities.get((current, nxt), frozenset())

    def is_contested(self, current: SectionId, nxt: Optional[SectionId]) -> bool:
        return bool(self.watched(current, nxt))

    @classmethod
    def build(
        cls,
        section_ids: Iterable[SectionId],
        routes: Mapping[RouteKey, Iterable[SectionId]],
        conflicts: Mapping[RouteKey, Iterable[WatchPair]] | None = None,
        priorities: Mapping[RouteKey, Iterable[WatchPair]] | None = None,
        layout: Iterable[Iterable[Optional[SectionId]]] | None = None,
    ) -> "CorridorConfig":
        sections = frozenset(int(s) for s in section_ids)
        if not sections:
            raise CorridorConfigError("corridor has no sections")

        route_table: Dict[RouteKey, Tuple[SectionId, ...]] = {}
        for (entry, destination), path in routes.items():
            p = tuple(int(s) for s in path)
            if not p:
                raise CorridorConfigError(f"route {entry}->{destination} has an empty path")
            if p[0] != entry or p[-1] != destination:
                raise CorridorConfigError(f"route {entry}->{destination} path {list(p)} must start at entry and end at destination")
            unknown = [s for s in p if s not in sections]
            if unknown:
                raise CorridorConfigError(f"route {entry}->{destination} references unknown sections {unknown}")
            route_table[(int(entry), int(destination))] = p

        conflict_table = _pair_table("conflict", conflicts or {}, sections)
        priority_table = _pair_table("priority", priorities or {}, sections)

        grid = None
        if layout is not None:
            grid = tuple(tuple(None if c is None else int(c) for c in row) for row in layout)
            unknown = [c for row in grid for c in row if c is not None and c not in sections]
            if unknown:
                raise CorridorConfigError(f"layout references unknown sections {unknown}")

        return cls(
            section_ids=sections,
            routes=MappingProxyType(route_table),
            conflicts=MappingProxyType(conflict_table),
            priorities=MappingProxyType(priority_table),
            layout=grid,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CorridorConfig":
        """Parse the JSON corridor format (see ``src/data/corridor.json``)."""
        if not isinstance(data, dict):
            raise CorridorConfigError("corridor payload must be an object")
        try:
            routes = {(int(r["entry"]), int(r["destination"])): r["path"] for r in data.get("routes", [])}
            conflicts = {
                (int(c["entry"]), int(c["destination"])): [tuple(p) for p in c.get("opposing", [])]
                for c in data.get("conflicts", [])
            }
            priorities = {
                (int(p["current"]), int(p["next"])): [tuple(w) for w in p.get("watch", [])]
                for p in data.get("priorities", [])
            }
            return cls.build(
                section_ids=data.get("sections", []),
                routes=routes,
                conflicts=conflicts,
                priorities=priorities,
                layout=data.get("layout"),
            )
        except CorridorConfigError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise CorridorConfigError(f"malformed corridor payload: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "sections": sorted(self.section_ids),
            "routes": [{"entry": e, "destination": d, "path": list(p)} for (e, d), p in sorted(self.routes.items())],
            "conflicts": [
                {"entry": e, "destination": d, "opposing": sorted(list(p) for p in pairs)}
                for (e, d), pairs in sorted(self.conflicts.items())
            ],
            "priorities": [
                {"current": c, "next": n, "watch": sorted(list(w) for w in pairs)}
                for (c, n), pairs in sorted(self.priorities.items())
            ],
        }
        if self.layout is not None:
            out["layout"] = [list(row) for row in self.layout]
        return out


def _pair_table(kind: str, table: Mapping[RouteKey, Iterable[WatchPair]], sections: FrozenSet[SectionId]) -> Dict[RouteKey, FrozenSet[WatchPair]]:
    out: Dict[RouteKey, FrozenSet[WatchPair]] = {}
    for (a, b), pairs in table.items():
        entries: List[WatchPair] = []
        for pair in pairs:
            sid, target = (int(x) for x in pair)
            if sid not in sections:
                raise CorridorConfigError(f"{kind} entry {a}->{b} watches unknown section {sid}")
            entries.append((sid, target))
        out[(int(a), int(b))] = frozenset(entries)
    return out
