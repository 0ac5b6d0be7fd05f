"""Executable Textual demo hosting the modal engine on two editors."""

from __future__ import annotations

import argparse
import os
from dataclasses import replace
from typing import Dict, Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widget import Widget
from textual.widgets import Footer, Header, Input, Static, TextArea

from modal_engine.config import EngineSettings
from modal_engine.dispatch import HostingContext, InputDispatcher
from modal_engine.machine import ModeState

from .controller import TextualModalAdapter, TextualUIHooks
from .hosts import TextAreaHost, TextualInputHost

SAMPLE_TEXT = "hello world\nfoo.bar baz\n\nthe quick brown fox"


class _ModalKeys:
    """Mixin giving the engine first refusal on every key press."""

    async def _on_key(self, event: events.Key) -> None:
        # prevent_default skips the widget's own _on_key further down the MRO
        app = self.app  # type: ignore[attr-defined]
        if isinstance(app, ModalEngineApp) and app.route_key(self, event.key):  # type: ignore[arg-type]
            event.prevent_default()
            event.stop()


class ModalInput(_ModalKeys, Input):
    pass


class ModalTextArea(_ModalKeys, TextArea):
    pass


class ModalEngineApp(App[None]):
    """Single-document host: one ``HostingContext`` shared by both editors."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editors {
		height: 1fr;
	}

	#multi-line {
		height: 1fr;
	}

	ModalTextArea {
		border: round $accent;
	}

	#mode-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#mode-line.-normal {
		background: $warning-darken-2;
	}

	.modal-editor.-normal {
		border: round $warning;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        settings: Optional[EngineSettings] = None,
        url: str = "https://github.com/demo",
    ) -> None:
        super().__init__()
        self.settings = settings or EngineSettings.from_env()
        self.url = url
        self.adapter: TextualModalAdapter | None = None
        self._hosts: Dict[int, object] = {}
        self._mode_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="editors"):
            yield ModalInput(
                value="single line field", id="single-line", classes="modal-editor"
            )
            yield ModalTextArea(SAMPLE_TEXT, id="multi-line", classes="modal-editor")
        self._mode_widget = Static("", id="mode-line")
        self._status_widget = Static("", id="status-line")
        yield self._mode_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        single = self.query_one("#single-line", ModalInput)
        multi = self.query_one("#multi-line", ModalTextArea)
        self._hosts = {
            id(single): TextualInputHost(single),
            id(multi): TextAreaHost(multi),
        }
        context = HostingContext.from_settings(
            self.settings,
            url=self.url,
            focus=self._focused_host,
            name="textual-demo",
        )
        hooks = TextualUIHooks(
            update_mode=self._update_mode,
            update_status=self._update_status,
            log=self.log.info,
        )
        self.adapter = TextualModalAdapter(InputDispatcher(context), hooks)
        if not context.active:
            self._update_status(f"engine inactive for {self.url}")

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        if self.adapter:
            self.adapter.focus_changed(self._hosts.get(id(event.widget)))

    def route_key(self, widget: Widget, key: str) -> bool:
        if not self.adapter:
            return False
        host = self._hosts.get(id(widget))
        result = self.adapter.handle_textual_key(key, target=host)
        return result.handled

    def _focused_host(self) -> Optional[object]:
        if self.focused is None:
            return None
        return self._hosts.get(id(self.focused))

    def _update_mode(self, state: ModeState) -> None:
        normal = state is not ModeState.INSERT
        if self._mode_widget:
            self._mode_widget.update(f"-- {state.display_name} --")
            if self.settings.colored_indicator:
                self._mode_widget.set_class(normal, "-normal")
        if self.settings.colored_cursor:
            for widget in self.query(".modal-editor"):
                widget.set_class(normal, "-normal")

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the modal engine Textual demo.")
    parser.add_argument(
        "--url",
        default=os.environ.get("MODAL_ENGINE_URL", "https://github.com/demo"),
        help="URL the demo document pretends to live at (matched against sites)",
    )
    parser.add_argument(
        "--disabled",
        action="store_true",
        help="Start with the engine disabled (arrow keys still work)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = EngineSettings.from_env()
    if args.disabled:
        settings = replace(settings, enabled=False)
    ModalEngineApp(settings=settings, url=args.url).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
