from __future__ import annotations

from typing import List

import pytest

from modal_engine.machine import (
    ESCAPE,
    ActionName,
    GotoState,
    GotoStateWithAction,
    ModalStateMachine,
    ModeChange,
    ModeState,
    TransitionConflictError,
    TransitionTable,
    build_default_table,
)


def make_machine(state: ModeState = ModeState.INSERT) -> ModalStateMachine:
    machine = ModalStateMachine()
    machine.set_state(state)
    return machine


def test_machine_starts_in_insert() -> None:
    machine = ModalStateMachine()

    assert machine.state is ModeState.INSERT
    assert machine.is_insert_mode()
    assert not machine.is_normal_mode()
    assert machine.available_keys() == (ESCAPE,)


def test_escape_and_i_toggle_modes() -> None:
    machine = ModalStateMachine()

    to_normal = machine.process_input(ESCAPE)
    to_insert = machine.process_input("i")

    assert to_normal.state_changed is True
    assert to_normal.action is None
    assert to_insert.state_changed is True
    assert machine.state is ModeState.INSERT
    assert machine.previous_state is ModeState.NORMAL


def test_insert_mode_ignores_ordinary_keys() -> None:
    machine = ModalStateMachine()

    for key in ("h", "w", "d", "x", "arrowleft"):
        result = machine.process_input(key)
        assert result.state_changed is False
        assert result.action is None
    assert machine.state is ModeState.INSERT


@pytest.mark.parametrize(
    ("key", "action"),
    [
        ("h", ActionName.MOVE_LEFT),
        ("j", ActionName.MOVE_DOWN),
        ("k", ActionName.MOVE_UP),
        ("l", ActionName.MOVE_RIGHT),
        ("w", ActionName.MOVE_WORD_FORWARD),
        ("b", ActionName.MOVE_WORD_BACKWARD),
        ("arrowup", ActionName.MOVE_UP),
    ],
)
def test_normal_mode_motions_emit_actions(key: str, action: ActionName) -> None:
    machine = make_machine(ModeState.NORMAL)
    element = object()

    result = machine.process_input(key, element)

    assert result.state_changed is False
    assert result.action is action
    assert result.action_data is not None
    assert result.action_data.element is element
    assert result.action_data.key == key
    assert machine.state is ModeState.NORMAL


def test_normal_mode_unknown_key_is_a_noop() -> None:
    machine = make_machine(ModeState.NORMAL)

    result = machine.process_input("x")

    assert result.state_changed is False
    assert result.action is None
    assert result.action_data is None
    assert machine.state is ModeState.NORMAL


def test_delete_word_sequence() -> None:
    machine = make_machine(ModeState.NORMAL)

    pending = machine.process_input("d")
    assert machine.state is ModeState.PENDING_DELETE
    assert machine.is_pending_command()
    assert machine.is_normal_mode()
    assert pending.state_changed is True

    result = machine.process_input("w")

    assert result.state_changed is True
    assert result.action is ActionName.DELETE_WORD_SPAN
    assert machine.state is ModeState.NORMAL


def test_change_word_sequence_enters_insert() -> None:
    machine = make_machine(ModeState.NORMAL)

    machine.process_input("c")
    result = machine.process_input("w")

    assert result.action is ActionName.CHANGE_WORD_SPAN
    assert result.state_changed is True
    assert machine.state is ModeState.INSERT


@pytest.mark.parametrize("key", ["x", "d", "c", "i", "h", "b", ESCAPE, "arrowleft"])
@pytest.mark.parametrize("operator", ["d", "c"])
def test_any_other_key_cancels_pending_command(operator: str, key: str) -> None:
    machine = make_machine(ModeState.NORMAL)
    machine.process_input(operator)

    result = machine.process_input(key)

    assert result.action is None
    assert result.state_changed is True
    assert machine.state is ModeState.NORMAL


def test_display_names() -> None:
    assert ModeState.INSERT.display_name == "INSERT"
    assert ModeState.NORMAL.display_name == "NORMAL"
    assert ModeState.PENDING_DELETE.display_name == "DELETE"
    assert ModeState.PENDING_CHANGE.display_name == "CHANGE"
    assert ModeState.PENDING_CHANGE.mode_name == "normal"


def test_listeners_receive_mode_changes() -> None:
    machine = ModalStateMachine()
    changes: List[ModeChange] = []
    machine.add_listener(changes.append)

    machine.process_input(ESCAPE)
    machine.process_input("h")
    machine.process_input("d")

    assert [(c.old_state, c.new_state) for c in changes] == [
        (ModeState.INSERT, ModeState.NORMAL),
        (ModeState.NORMAL, ModeState.PENDING_DELETE),
    ]
    assert changes[-1].display_name == "DELETE"


def test_failing_listener_does_not_stop_others() -> None:
    machine = ModalStateMachine()
    changes: List[ModeChange] = []

    def explode(change: ModeChange) -> None:
        raise RuntimeError("boom")

    machine.add_listener(explode)
    machine.add_listener(changes.append)

    result = machine.process_input(ESCAPE)

    assert result.state_changed is True
    assert len(changes) == 1
    assert machine.state is ModeState.NORMAL


def test_removed_listener_is_not_called() -> None:
    machine = ModalStateMachine()
    changes: List[ModeChange] = []
    machine.add_listener(changes.append)
    machine.remove_listener(changes.append)

    machine.process_input(ESCAPE)

    assert changes == []


def test_reset_returns_to_insert_and_reports_change() -> None:
    machine = make_machine(ModeState.PENDING_CHANGE)
    changes: List[ModeChange] = []
    machine.add_listener(changes.append)

    assert machine.reset() is True
    assert machine.state is ModeState.INSERT
    assert changes[0].result is None
    assert machine.reset() is False
    assert len(changes) == 1


def test_machines_do_not_share_state() -> None:
    first = ModalStateMachine()
    second = ModalStateMachine()

    first.process_input(ESCAPE)

    assert first.state is ModeState.NORMAL
    assert second.state is ModeState.INSERT


def test_default_table_actions_cover_every_action_name() -> None:
    assert build_default_table().actions() == frozenset(ActionName)


def test_default_table_pending_states_have_defaults() -> None:
    table = build_default_table()
    defaults = {
        state: transition
        for state, key, transition in table.transitions()
        if key is None
    }

    assert defaults == {
        ModeState.PENDING_DELETE: GotoState(ModeState.NORMAL),
        ModeState.PENDING_CHANGE: GotoState(ModeState.NORMAL),
    }


def test_duplicate_registration_raises_conflict() -> None:
    table = build_default_table()

    with pytest.raises(TransitionConflictError) as excinfo:
        table.register(ModeState.NORMAL, "h", GotoState(ModeState.INSERT))

    assert excinfo.value.key == "h"
    assert excinfo.value.state is ModeState.NORMAL


def test_replace_overrides_existing_transition() -> None:
    table = build_default_table()
    table.register(
        ModeState.NORMAL,
        "h",
        GotoStateWithAction(ModeState.NORMAL, ActionName.MOVE_RIGHT),
        replace=True,
    )
    machine = ModalStateMachine(table)
    machine.set_state(ModeState.NORMAL)

    assert machine.process_input("h").action is ActionName.MOVE_RIGHT


def test_custom_table_limits_actions() -> None:
    table = TransitionTable()
    table.register(ModeState.INSERT, ESCAPE, GotoState(ModeState.NORMAL))
    table.register(
        ModeState.NORMAL,
        "x",
        GotoStateWithAction(ModeState.NORMAL, ActionName.MOVE_LEFT),
    )

    assert table.actions() == frozenset({ActionName.MOVE_LEFT})
    assert table.lookup(ModeState.NORMAL, "q") is None
