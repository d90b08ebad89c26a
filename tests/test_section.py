import pytest

from src.core.errors import ResourceConflict
from src.core.section import TrackSection


def test_occupy_and_release():
    s1 = TrackSection(1)
    assert not s1.is_occupied()
    assert s1.current_occupant() is None

    s1.occupy("t1")
    assert s1.is_occupied()
    assert s1.current_occupant() == "t1"

    assert s1.release() == "t1"
    assert not s1.is_occupied()
    assert s1.current_occupant() is None


def test_occupy_same_train_twice_is_noop():
    s1 = TrackSection(1)
    s1.occupy("t1")
    s1.occupy("t1")
    assert s1.current_occupant() == "t1"


def test_occupy_by_other_train_conflicts():
    s1 = TrackSection(1)
    s1.occupy("a1")
    with pytest.raises(ResourceConflict):
        s1.occupy("a2")
    # original occupant untouched
    assert s1.current_occupant() == "a1"


def test_release_empty_section_is_noop():
    s5 = TrackSection(5)
    assert s5.release() is None
    assert not s5.is_occupied()
