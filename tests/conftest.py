import pytest

from src.config import load_corridor
from src.core.interlocking import Interlocking


@pytest.fixture
def corridor():
    return load_corridor()


@pytest.fixture
def network(corridor):
    return Interlocking(corridor)


@pytest.fixture
def check_invariants():
    def _check(network: Interlocking) -> None:
        # at most one train per section
        for sid in network.sections:
            on_it = [t for t in network.trains.values() if t.in_service and t.current_section() == sid]
            assert len(on_it) <= 1, f"Section {sid} holds {on_it}"
        # every active train sits where its cursor says
        for name in network.active:
            t = network.trains[name]
            assert 0 <= t.cursor < len(t.path)
            assert network.sections[t.path[t.cursor]].current_occupant() == name
    return _check
