from __future__ import annotations

from typing import List, Optional

import pytest

from modal_engine.dispatch import (
    ACTION_HANDLERS,
    DispatchResult,
    HostingContext,
    InputDispatcher,
    UnknownActionError,
    normalize_key,
)
from modal_engine.machine import ActionName, ModeChange, ModeState
from modal_engine.surface import (
    InputEvent,
    RichTextContainer,
    StructuredSurface,
    TextField,
)


def make_dispatcher(
    target: Optional[object],
    *,
    active: bool = True,
    changes: Optional[List[ModeChange]] = None,
) -> InputDispatcher:
    context = HostingContext(
        enabled=True,
        site_match=active,
        focus=lambda: target,
        on_mode_change=changes.append if changes is not None else None,
    )
    return InputDispatcher(context)


def press(dispatcher: InputDispatcher, *keys: str) -> List[DispatchResult]:
    return [dispatcher.handle_key(key) for key in keys]


def test_normalize_key() -> None:
    assert normalize_key("escape") == "Escape"
    assert normalize_key("Escape") == "Escape"
    assert normalize_key("ArrowLeft") == "arrowleft"
    assert normalize_key("left") == "arrowleft"
    assert normalize_key("W") == "w"


def test_word_forward_moves_cursor() -> None:
    field = TextField("hello world")
    dispatcher = make_dispatcher(field)

    escape, motion = press(dispatcher, "Escape", "w")

    assert escape.handled and escape.state_changed
    assert motion.handled
    assert motion.action is ActionName.MOVE_WORD_FORWARD
    assert motion.performed
    assert field.selection_start == 6


def test_word_forward_through_punctuation() -> None:
    field = TextField("foo.bar baz")
    dispatcher = make_dispatcher(field)
    press(dispatcher, "Escape")

    offsets = []
    for _ in range(3):
        dispatcher.handle_key("w")
        offsets.append(field.selection_start)

    assert offsets == [3, 4, 8]


def test_delete_word() -> None:
    field = TextField("foo bar")
    dispatcher = make_dispatcher(field)

    *_, result = press(dispatcher, "Escape", "d", "w")

    assert field.value == "bar"
    assert field.selection_start == 0
    assert result.action is ActionName.DELETE_WORD_SPAN
    assert result.performed
    assert dispatcher.machine.state is ModeState.NORMAL


def test_change_word_enters_insert() -> None:
    field = TextField("foo bar")
    dispatcher = make_dispatcher(field)

    press(dispatcher, "Escape", "c", "w")

    assert field.value == " bar"
    assert field.selection_start == 0
    assert dispatcher.machine.state is ModeState.INSERT


def test_escape_then_i_leaves_text_alone() -> None:
    field = TextField("hello")
    changes: List[ModeChange] = []
    dispatcher = make_dispatcher(field, changes=changes)

    press(dispatcher, "Escape", "i")

    assert field.value == "hello"
    assert [change.new_state for change in changes] == [
        ModeState.NORMAL,
        ModeState.INSERT,
    ]


def test_vertical_motion_on_first_line_is_handled_but_inert() -> None:
    field = TextField("abc\ndef", multiline=True)
    field.set_selection_range(1, 1)
    dispatcher = make_dispatcher(field)
    press(dispatcher, "Escape")

    result = dispatcher.handle_key("k")

    assert result.handled
    assert not result.performed
    assert field.selection_start == 1
    assert dispatcher.handle_key("j").performed
    assert field.selection_start == 5


def test_cancelled_delete_does_not_mutate() -> None:
    field = TextField("foo bar")
    dispatcher = make_dispatcher(field)

    *_, result = press(dispatcher, "Escape", "d", "x")

    assert field.value == "foo bar"
    assert result.handled
    assert result.action is None
    assert dispatcher.machine.state is ModeState.NORMAL


def test_normal_mode_swallows_unbound_keys() -> None:
    field = TextField("foo")
    dispatcher = make_dispatcher(field)
    press(dispatcher, "Escape")

    result = dispatcher.handle_key("x")

    assert result.handled
    assert result.action is None
    assert field.value == "foo"


def test_insert_mode_passes_printable_keys_through() -> None:
    field = TextField("foo")
    dispatcher = make_dispatcher(field)

    result = dispatcher.handle_key("h")

    assert result == DispatchResult()


def test_uppercase_keys_match_lowercase_bindings() -> None:
    field = TextField("hello world")
    dispatcher = make_dispatcher(field)
    press(dispatcher, "Escape", "W")

    assert field.selection_start == 6


def test_inactive_context_passes_keys_through() -> None:
    field = TextField("foo")
    dispatcher = make_dispatcher(field, active=False)

    result = dispatcher.handle_key("Escape")

    assert not result.handled
    assert dispatcher.machine.state is ModeState.INSERT


def test_arrow_keys_work_even_when_inactive() -> None:
    field = TextField("abc")
    field.set_selection_range(1, 1)
    dispatcher = make_dispatcher(field, active=False)

    moved = dispatcher.handle_key("ArrowLeft")
    stuck = dispatcher.handle_key("ArrowLeft")

    assert moved.handled and moved.performed
    assert field.selection_start == 0
    assert not stuck.handled


def test_arrow_keys_work_in_insert_mode() -> None:
    field = TextField("abc")
    dispatcher = make_dispatcher(field)

    result = dispatcher.handle_key("ArrowRight")

    assert result.handled
    assert field.selection_start == 1
    assert dispatcher.machine.state is ModeState.INSERT


def test_non_editable_focus_is_ignored() -> None:
    dispatcher = make_dispatcher(object())

    result = dispatcher.handle_key("Escape")

    assert not result.handled
    assert dispatcher.machine.state is ModeState.INSERT


def test_explicit_target_overrides_focus() -> None:
    focused = TextField("focused")
    explicit = TextField("abc def")
    dispatcher = make_dispatcher(focused)
    press(dispatcher, "Escape")

    dispatcher.handle_key("w", explicit)

    assert explicit.selection_start == 4
    assert focused.selection_start == 0


def test_reentrant_key_is_passed_through() -> None:
    field = TextField("foo bar")
    dispatcher = make_dispatcher(field)
    nested: List[DispatchResult] = []

    def on_input(event: InputEvent) -> None:
        nested.append(dispatcher.handle_key("i"))

    field.events.subscribe("input", on_input)

    press(dispatcher, "Escape", "d", "w")

    assert nested == [DispatchResult()]
    assert field.value == "bar"
    assert dispatcher.machine.state is ModeState.NORMAL


def test_focus_leaving_editables_resets_to_insert() -> None:
    field = TextField("foo")
    dispatcher = make_dispatcher(field)
    press(dispatcher, "Escape")

    dispatcher.focus_changed(field)
    assert dispatcher.machine.state is ModeState.NORMAL

    dispatcher.focus_changed(None)
    assert dispatcher.machine.state is ModeState.INSERT


def test_disabling_resets_and_passes_through() -> None:
    field = TextField("foo")
    dispatcher = make_dispatcher(field)
    press(dispatcher, "Escape")

    dispatcher.settings_changed(enabled=False)

    assert dispatcher.machine.state is ModeState.INSERT
    assert not dispatcher.handle_key("Escape").handled

    dispatcher.settings_changed(enabled=True)
    assert dispatcher.handle_key("Escape").handled


def test_site_match_toggle() -> None:
    field = TextField("foo")
    dispatcher = make_dispatcher(field, active=False)

    dispatcher.settings_changed(site_match=True)

    assert dispatcher.handle_key("Escape").state_changed


def test_teardown_detaches_sink() -> None:
    field = TextField("foo")
    changes: List[ModeChange] = []
    dispatcher = make_dispatcher(field, changes=changes)
    press(dispatcher, "Escape")

    dispatcher.teardown()
    count = len(changes)
    dispatcher.machine.set_state(ModeState.NORMAL)

    assert dispatcher.machine.state is ModeState.NORMAL
    assert len(changes) == count
    assert changes[-1].new_state is ModeState.INSERT


def test_contexts_are_isolated() -> None:
    first_field = TextField("one")
    second_field = TextField("two")
    first = make_dispatcher(first_field)
    second = make_dispatcher(second_field)

    first.handle_key("Escape")

    assert first.machine.state is ModeState.NORMAL
    assert second.machine.state is ModeState.INSERT
    assert not second.handle_key("h").handled


def test_missing_handlers_are_rejected_up_front() -> None:
    handlers = dict(ACTION_HANDLERS)
    del handlers[ActionName.DELETE_WORD_SPAN]

    with pytest.raises(UnknownActionError) as excinfo:
        InputDispatcher(HostingContext(site_match=True), handlers=handlers)

    assert excinfo.value.actions == ("deleteWordSpan",)


def test_custom_handler_is_used() -> None:
    calls: List[str] = []
    handlers = dict(ACTION_HANDLERS)

    def fake_left(surface: object) -> bool:
        calls.append("left")
        return False

    handlers[ActionName.MOVE_LEFT] = fake_left
    field = TextField("abc")
    context = HostingContext(site_match=True, focus=lambda: field)
    dispatcher = InputDispatcher(context, handlers=handlers)
    press(dispatcher, "Escape", "h")

    assert calls == ["left"]


def test_structured_container_delete_word() -> None:
    container = RichTextContainer("<p>foo bar</p><p>baz</p>")
    dispatcher = make_dispatcher(container)

    press(dispatcher, "Escape", "d", "w")

    surface = StructuredSurface(container)
    assert surface.get_text() == "bar\nbaz"
    assert surface.get_cursor_offset() == 0


def test_structured_container_motions() -> None:
    container = RichTextContainer("<p>foo bar</p><p>baz</p>")
    dispatcher = make_dispatcher(container)
    surface = StructuredSurface(container)

    press(dispatcher, "Escape", "w")
    assert surface.get_cursor_offset() == 4

    press(dispatcher, "j")
    assert surface.get_cursor_offset() == 11

    press(dispatcher, "b")
    assert surface.get_cursor_offset() == 8


def test_arrow_moves_without_cancelling_pending_delete() -> None:
    field = TextField("foo bar")
    dispatcher = make_dispatcher(field)

    press(dispatcher, "Escape", "d")
    arrow = dispatcher.handle_key("ArrowRight")

    assert arrow.handled and arrow.performed
    assert arrow.state_changed is False
    assert field.selection_start == 1
    assert dispatcher.machine.state is ModeState.PENDING_DELETE

    result = dispatcher.handle_key("w")

    assert result.action is ActionName.DELETE_WORD_SPAN
    assert field.value == "fbar"
    assert dispatcher.machine.state is ModeState.NORMAL


def test_blocked_arrow_cancels_pending_change() -> None:
    field = TextField("foo")
    dispatcher = make_dispatcher(field)

    press(dispatcher, "Escape", "c")
    result = dispatcher.handle_key("ArrowLeft")

    assert result.handled
    assert result.action is None
    assert dispatcher.machine.state is ModeState.NORMAL
    assert field.value == "foo"
