"""Executable Textual app that hosts the editing engine on a character grid."""

from __future__ import annotations

import argparse
import os
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widget import Widget
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use paragraph_engine.adapters.textual.app"
    ) from exc

from rich.text import Text

from paragraph_engine.config import EditorConfig
from paragraph_engine.dispatch import EditDispatcher, EditorSnapshot
from paragraph_engine.layout import MonospaceLayoutEngine
from paragraph_engine.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks
from .render import render_paragraph

SAMPLE_TEXT = (
    "Double-click a word to select it, drag to extend a selection, and use the "
    "arrow keys to move the caret.\n"
    "Mixed runs like abc123 or 漢字かな split into separate words."
)


def create_default_dispatcher(
    config: Optional[EditorConfig] = None,
) -> EditDispatcher:
    """Dispatcher over unit character cells; one font size equals one row."""

    config = config or EditorConfig.from_env(font_size=1.0)
    return EditDispatcher(
        MonospaceLayoutEngine(char_width=1.0, line_height=1.0), config=config
    )


class ParagraphView(Widget, can_focus=True):
    """Paints the current snapshot and forwards mouse input to the adapter."""

    DEFAULT_CSS = """
    ParagraphView {
        height: 1fr;
        padding: 0;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.adapter: TextualEditorAdapter | None = None
        self._rendered = Text()
        self._pressed = False

    def show(self, snapshot: EditorSnapshot) -> None:
        self._rendered = render_paragraph(snapshot, rows=self.size.height or None)
        self.refresh()

    def render(self) -> Text:
        return self._rendered

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.handle_resize(event.size.width, event.size.height)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        self.adapter.handle_textual_key(event.key, text=event.character)
        event.stop()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if self.adapter:
            self._pressed = True
            self.capture_mouse()
            self.adapter.handle_pointer("down", event.x, event.y)

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self.adapter and self._pressed:
            self.adapter.handle_pointer("move", event.x, event.y)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self.adapter:
            self._pressed = False
            self.release_mouse()
            self.adapter.handle_pointer("up", event.x, event.y)

    def on_click(self, event: events.Click) -> None:
        if self.adapter and getattr(event, "chain", 1) == 2:
            self.adapter.handle_pointer("double", event.x, event.y)

    def on_leave(self, event: events.Leave) -> None:
        del event
        if self.adapter and not self._pressed:
            self.adapter.handle_leave()

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        del event
        if self.adapter:
            self.adapter.handle_scroll(1)

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        del event
        if self.adapter:
            self.adapter.handle_scroll(-1)


class ParagraphEngineApp(App[None]):
    """Minimal Textual UI embedding the editing engine."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self._config = config
        self.dispatcher: EditDispatcher | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._view: ParagraphView | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._view = ParagraphView(id="paragraph-view")
        yield self._view
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.dispatcher = create_default_dispatcher(self._config)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.dispatcher, hooks)
        if self._view:
            self._view.adapter = self.adapter
            self._view.focus()
            size = self._view.size
            if size.width and size.height:
                self.adapter.handle_resize(size.width, size.height)

    def _update_view(self, snapshot: EditorSnapshot) -> None:
        if self._view:
            self._view.show(snapshot)

    def _update_status(self, status: str) -> None:
        if not self._status_widget or not self.dispatcher:
            return
        snapshot = self.dispatcher.snapshot
        self._status_widget.update(
            f"{status} | {snapshot.selection} | "
            f"{len(snapshot.model)} chars, v{snapshot.model.version}"
        )

    def _log_line(self, line: str) -> None:
        self.log(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the paragraph engine Textual demo.")
    parser.add_argument(
        "--text",
        default=os.environ.get("PARAGRAPH_ENGINE_INITIAL_TEXT", SAMPLE_TEXT),
        help="Initial paragraph text",
    )
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("PARAGRAPH_ENGINE_LOG_PRESET", "quiet"),
        choices=("development", "production", "quiet"),
        help="Telemetry preset (default: quiet, keeps the terminal clean)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    config = EditorConfig.from_env(font_size=1.0, initial_text=args.text)
    ParagraphEngineApp(config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
