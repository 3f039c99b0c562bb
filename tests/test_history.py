"""Tests for snapshot history."""

import pytest

from sketchboard.elements import Tool
from sketchboard.geometry import create_element
from sketchboard.history import History
from sketchboard.store import IdAllocator, append, find, remove, replace


def _snap(*ids):
    return tuple(create_element(i, 0, 0, 10, 10, Tool.LINE) for i in ids)


def test_undo_redo_and_branch_discard():
    a, b, c = _snap(1), _snap(1, 2), _snap(1, 3)
    history = History()
    history.push(a)
    history.push(b)

    assert history.undo() is True
    assert history.current == a
    assert history.redo() is True
    assert history.current == b

    history.undo()
    history.push(c)
    assert history.current == c
    assert history.redo() is False
    assert history.current == c
    assert len(history) == 3


def test_overwrite_push_never_grows_history():
    history = History()
    history.push(_snap(1))
    before = len(history)
    for i in range(10):
        history.push(_snap(1, i + 2), overwrite=True)
    assert len(history) == before
    assert history.current == _snap(1, 11)


def test_overwrite_keeps_redo_entries():
    history = History()
    history.push(_snap(1))
    history.push(_snap(1, 2))
    history.undo()
    history.push(_snap(5), overwrite=True)
    assert history.can_redo()
    history.redo()
    assert history.current == _snap(1, 2)


def test_undo_at_start_and_redo_at_end_are_noops():
    history = History()
    assert history.undo() is False
    assert history.redo() is False
    assert history.current == ()
    assert history.index == 0


def test_can_undo_can_redo():
    history = History()
    assert not history.can_undo()
    history.push(_snap(1))
    assert history.can_undo()
    assert not history.can_redo()
    history.undo()
    assert history.can_redo()


def test_limit_drops_oldest_entries():
    history = History(limit=3)
    for i in range(5):
        history.push(_snap(i))
    assert len(history) == 3
    assert history.current == _snap(4)
    assert history.undo() and history.undo()
    assert history.current == _snap(2)
    assert history.undo() is False


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        History(limit=0)


def test_store_helpers_preserve_identity():
    first = create_element(0, 0, 0, 1, 1, Tool.LINE)
    second = create_element(1, 5, 5, 6, 6, Tool.LINE)
    snapshot = append(append((), first), second)
    moved = create_element(1, 7, 7, 8, 8, Tool.LINE)

    updated = replace(snapshot, moved)
    assert updated[0] is first
    assert find(updated, 1) == moved
    assert remove(updated, 0) == (moved,)
    assert find(updated, 42) is None
    with pytest.raises(KeyError):
        replace(snapshot, create_element(9, 0, 0, 1, 1, Tool.LINE))


def test_id_allocator_never_goes_backwards():
    ids = IdAllocator()
    assert ids.allocate() == 0
    assert ids.allocate() == 1
    ids.observe(_snap(7))
    assert ids.allocate() == 8
    ids.observe(_snap(0))
    assert ids.allocate() == 9
