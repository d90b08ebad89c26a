import pytest

from src.core.errors import UnknownSectionError, UnknownTrainError
from src.core.interlocking import Interlocking
from src.core.models import CorridorConfig


def test_exit_frees_name_for_reuse(network, check_invariants):
    network.add_train("t18", 1, 8)
    assert network.move_trains(["t18"]) == 1
    assert network.get_train("t18") == 5
    assert network.move_trains(["t18"]) == 1
    assert network.get_train("t18") == 8
    assert network.get_section(8) == "t18"

    # third move leaves the corridor
    assert network.move_trains(["t18"]) == 1
    assert network.get_train("t18") == -1
    assert network.get_section(8) is None
    assert "t18" not in network.active
    check_invariants(network)

    network.add_train("t18", 1, 8)
    assert network.get_train("t18") == 1


def test_moving_exited_train_is_unknown(network):
    network.add_train("t34", 3, 4)
    network.move_trains(["t34"])
    network.move_trains(["t34"])
    with pytest.raises(UnknownTrainError):
        network.move_trains(["t34"])


def test_all_free_trains_move(network, check_invariants):
    network.add_train("t18", 1, 8)
    network.add_train("t102", 10, 2)
    network.add_train("t311", 3, 11)
    assert network.move_trains(["t18", "t102", "t311"]) == 3
    assert network.get_train("t18") == 5
    assert network.get_train("t102") == 6
    assert network.get_train("t311") == 7
    check_invariants(network)


def test_blocked_train_stays_put(network, check_invariants):
    network.add_train("a", 1, 8)
    network.move_trains(["a"])
    network.add_train("b", 1, 9)
    network.add_train("c", 10, 2)
    # b is evaluated before a vacates 5
    assert network.move_trains(["b", "a", "c"]) == 2
    assert network.get_train("b") == 1
    assert network.get_train("a") == 8
    assert network.get_train("c") == 6
    check_invariants(network)


def test_earlier_moves_visible_later_in_same_tick(network, check_invariants):
    network.add_train("a", 1, 8)
    network.move_trains(["a"])
    network.add_train("b", 1, 9)
    # a vacates 5 first, so b can follow it within the same tick
    assert network.move_trains(["a", "b"]) == 2
    assert network.get_train("a") == 8
    assert network.get_train("b") == 5
    check_invariants(network)


def test_junction_priority_makes_train_yield(network):
    network.add_train("a", 1, 8)
    network.add_train("b", 3, 4)
    network.add_train("c", 10, 2)
    # b watches section 1 for a train about to take 1->5
    assert network.move_trains(["b"]) == 0
    assert network.get_train("b") == 3

    # c has no competing claim and goes; b yields again
    assert network.move_trains(["b", "c"]) == 1
    assert network.get_train("b") == 3
    assert network.get_train("c") == 6


def test_contested_trains_decided_first(network):
    network.add_train("a", 1, 8)
    network.add_train("b", 3, 4)
    # a comes first in the batch, but b's contested route is decided first and
    # still sees a on section 1
    assert network.move_trains(["a", "b"]) == 1
    assert network.get_train("a") == 5
    assert network.get_train("b") == 3
    # claim gone: b proceeds on the next tick
    assert network.move_trains(["b"]) == 1
    assert network.get_train("b") == 4


def test_yield_only_when_watched_train_heads_for_watched_hop(network):
    # 9->6 gives way to a train on 10 about to take 10->6
    network.add_train("q", 9, 2)
    network.add_train("r", 10, 2)
    assert network.move_trains(["q", "r"]) == 1
    assert network.get_train("q") == 9
    assert network.get_train("r") == 6
    # 6 is now occupied, so q holds for a different reason
    assert network.move_trains(["q"]) == 0
    network.move_trains(["r"])
    assert network.move_trains(["q"]) == 1
    assert network.get_train("q") == 6


def test_validation_precedes_any_movement(network):
    network.add_train("t18", 1, 8)
    with pytest.raises(UnknownTrainError):
        network.move_trains(["t18", "ghost"])
    assert network.get_train("t18") == 1


def test_repeated_name_moves_once(network):
    network.add_train("t18", 1, 8)
    assert network.move_trains(["t18", "t18"]) == 1
    assert network.get_train("t18") == 5


def test_empty_batch_moves_nothing(network):
    assert network.move_trains([]) == 0


def test_unknown_identifiers(network):
    with pytest.raises(UnknownSectionError):
        network.get_section(12)
    with pytest.raises(UnknownSectionError):
        network.get_section(0)
    with pytest.raises(UnknownTrainError):
        network.get_train("never")
    with pytest.raises(UnknownTrainError):
        network.move_trains(["never"])


def test_remove_train_frees_section_and_name(network):
    network.add_train("t18", 1, 8)
    network.move_trains(["t18"])
    network.remove_train("t18")
    assert network.get_section(5) is None
    assert network.get_train("t18") == -1
    with pytest.raises(UnknownTrainError):
        network.remove_train("t18")
    network.add_train("t18", 1, 9)
    assert network.get_train("t18") == 1


def test_small_network_shuttle(check_invariants):
    # two trains chasing each other round a three-section line
    config = CorridorConfig.build(
        section_ids=[1, 2, 3],
        routes={(1, 3): [1, 2, 3]},
    )
    n = Interlocking(config)
    n.add_train("lead", 1, 3)
    n.move_trains(["lead"])
    n.add_train("follow", 1, 3)
    for _ in range(5):
        n.move_trains([name for name in ("follow", "lead") if name in n.active])
        check_invariants(n)
    assert n.get_train("lead") == -1
    assert n.get_train("follow") == -1
    assert all(n.get_section(s) is None for s in (1, 2, 3))
