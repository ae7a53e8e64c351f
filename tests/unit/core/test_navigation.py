"""Unit tests for core/navigation.py"""

import pytest

from lantern.core.navigation import (
    Jump,
    Next,
    Previous,
    Quit,
    Resize,
    Session,
    ToggleHelp,
    ToggleNotes,
    apply,
    render_request,
)


@pytest.fixture(name="session")
def session_fixture():
    return Session(total=3, started_at=100.0)


def _run(state, *events):
    for event in events:
        state = apply(state, event)
    return state


def test_next_and_previous(session):
    assert apply(session, Next()).current_index == 1
    assert _run(session, Next(), Next(), Previous()).current_index == 1


def test_moves_clamp_at_ends(session):
    assert apply(session, Previous()).current_index == 0
    assert _run(session, Next(), Next(), Next(), Next()).current_index == 2


def test_jump(session):
    assert apply(session, Jump(2)).current_index == 2
    assert apply(session, Jump(0)).current_index == 0


@pytest.mark.parametrize("index", [-1, 3, 99])
def test_out_of_range_jump_is_ignored(session, index):
    moved = apply(session, Next())
    assert apply(moved, Jump(index)) == moved


def test_toggles(session):
    state = apply(session, ToggleNotes())
    assert state.notes_visible
    assert not apply(state, ToggleNotes()).notes_visible
    assert apply(session, ToggleHelp()).help_visible


def test_resize_bumps_layout_epoch(session):
    state = apply(session, Resize(120, 40))
    assert (state.width, state.height) == (120, 40)
    assert state.layout_epoch == session.layout_epoch + 1
    assert state.current_index == session.current_index


def test_quit_is_terminal(session):
    state = apply(session, Quit())
    assert state.quit
    assert _run(state, Next(), ToggleNotes(), Jump(2)) == state


def test_apply_never_mutates(session):
    apply(session, Next())
    assert session.current_index == 0


def test_index_stays_in_range_under_any_sequence():
    state = Session(total=2)
    for event in [Next(), Next(), Jump(5), Previous(), Previous(), Jump(-3), Resize(10, 5), Next()]:
        state = apply(state, event)
        assert 0 <= state.current_index < state.total


def test_single_slide_deck():
    state = _run(Session(total=1), Next(), Previous(), Jump(1))
    assert state.current_index == 0


@pytest.mark.parametrize("kwargs", [{"total": 0}, {"total": 2, "current_index": 2}])
def test_invalid_session(kwargs):
    with pytest.raises(ValueError):
        Session(**kwargs)


def test_elapsed(session):
    assert session.elapsed(now=165.5) == 65.5


def test_render_request_changes_with_state(session):
    before = render_request(session)
    assert before == render_request(session)
    assert render_request(apply(session, Next())) != before
    assert render_request(apply(session, Resize(80, 24))).layout_epoch == 1
