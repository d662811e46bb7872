"""Textual front end for the record browser."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Header, Static

from slb import config
from slb.browser import Browser
from slb.model import StoreError
from slb.state import Editing, EditingFocus, Exiting, Main, MainFocus, Screen, Snapshot

logger = logging.getLogger(__name__)


def mode_label(screen: Screen) -> tuple[str, str]:
    """Mode name and its color for the footer."""
    if isinstance(screen, Main):
        if screen.focus is MainFocus.NONE:
            return "Normal Mode", "green"
        return "Filter Mode", "white"
    if isinstance(screen, Editing):
        return "Editing Mode", "yellow"
    return "Exiting Mode", "bright_red"


def focus_label(screen: Screen) -> str:
    if isinstance(screen, Editing):
        if screen.focus is EditingFocus.KEY:
            return "Editing Key"
        return "Editing Value"
    if screen == Main(MainFocus.FILTER):
        return "Editing filter"
    return "Not Editing"


def key_hints(screen: Screen) -> str:
    if isinstance(screen, Main):
        if screen.focus is MainFocus.NONE:
            return (
                "(q) quit | (e) edit | (f) filter | (r) refresh | (w) write layer"
                " | (↑) move up | (↓) move down"
            )
        return "(ESC) / (Enter) quit search mode"
    if isinstance(screen, Editing):
        return "(ESC) cancel | (Tab) / (Enter) switch boxes | (ctrl+s) commit"
    return "(y) quit | (n) / (q) back | (w) write layer"


class RecordList(Widget, can_focus=True):
    """Scrolling list of record names with a highlighted row."""

    DEFAULT_CSS = """
    RecordList {
        height: 1fr;
        background: $surface;
    }
    """

    HIGHLIGHT = " █ "

    @dataclass
    class KeyPressed(Message):
        key: str
        character: str | None

    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.names: tuple[str, ...] = ()
        self.position: int = 0
        self.scroll_pos: int = 0
        self.scroll_length: int = 0
        self._scroll_top: int = 0

    def set_rows(
        self,
        names: tuple[str, ...],
        position: int,
        scroll_pos: int = 0,
        scroll_length: int = 0,
    ) -> None:
        self.names = names
        self.position = position
        self.scroll_pos = scroll_pos
        self.scroll_length = scroll_length
        self.refresh()

    def _ensure_position_visible(self, height: int) -> None:
        if self.position < self._scroll_top:
            self._scroll_top = self.position
        elif self.position >= self._scroll_top + height:
            self._scroll_top = self.position - height + 1
        self._scroll_top = max(0, min(self._scroll_top, max(0, len(self.names) - height)))

    def _thumb_row(self, height: int) -> int:
        if self.scroll_length <= 0:
            return 0
        return min(height - 1, self.scroll_pos * height // (self.scroll_length + 1))

    def render(self) -> Text:
        width = self.content_region.width
        height = self.content_region.height
        if not self.names:
            return Text("(no data)", style="dim italic")
        if height < 1 or width < 6:
            return Text("")

        self._ensure_position_visible(height)
        thumb = self._thumb_row(height)
        text_width = width - len(self.HIGHLIGHT) - 1
        result = Text()
        for row in range(height):
            idx = self._scroll_top + row
            bar = "┃" if row == thumb and len(self.names) > height else " "
            if idx < len(self.names):
                label = self.names[idx][:text_width].ljust(text_width)
                if idx == self.position:
                    result.append(self.HIGHLIGHT, style="bold")
                    result.append(label, style="reverse")
                else:
                    result.append(" " * len(self.HIGHLIGHT))
                    result.append(label)
            else:
                result.append(" " * (width - 1))
            result.append(bar, style="dim")
            if row < height - 1:
                result.append("\n")
        return result

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        self.post_message(self.KeyPressed(event.key, event.character))


class LayerBuilderApp(App):
    """Browse captured messages and edit the layer next to them."""

    CSS = """
    Screen {
        layout: vertical;
        layers: base overlay;
    }
    #body {
        height: 1fr;
    }
    #left {
        width: 50%;
    }
    #filter {
        height: 3;
        border: solid $accent 50%;
    }
    #filter.active {
        border: solid $success;
        background: $boost;
    }
    #records {
        border: solid $accent 50%;
    }
    #payload {
        width: 50%;
        height: 1fr;
        border: solid $accent 50%;
        overflow-y: auto;
    }
    #footer {
        height: 3;
    }
    #mode, #hints {
        width: 50%;
        border: solid $accent 50%;
    }
    .panel {
        layer: overlay;
        dock: top;
        display: none;
        width: 60%;
        height: auto;
        margin: 8 0 0 20;
        padding: 1;
        background: $panel;
    }
    .panel.visible {
        display: block;
    }
    .panel Horizontal {
        height: auto;
    }
    .input-box {
        width: 50%;
        height: 3;
        border: solid $accent 50%;
    }
    .input-box.active {
        border: solid $success;
        background: $boost;
    }
    #exit-text {
        color: $error;
    }
    """

    TITLE = config.APP_TITLE
    BINDINGS = []
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, browser: Browser, source: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.browser = browser
        self.source = source
        self.payload_text = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="body"):
            with Vertical(id="left"):
                yield Static("", id="filter")
                yield RecordList(id="records")
            yield Static("", id="payload")
        with Horizontal(id="footer"):
            yield Static("", id="mode")
            yield Static("", id="hints")
        with Vertical(id="edit-panel", classes="panel"):
            yield Static("[b]Enter a new key-value pair[/b]")
            with Horizontal():
                yield Static("", id="key-box", classes="input-box")
                yield Static("", id="value-box", classes="input-box")
        with Vertical(id="exit-panel", classes="panel"):
            yield Static("[b]Y/N[/b]")
            yield Static("Would you like to quit ?", id="exit-text")

    def on_mount(self) -> None:
        self.query_one("#filter", Static).border_title = "Filter"
        self.query_one("#key-box", Static).border_title = "Key"
        self.query_one("#value-box", Static).border_title = "Value"
        self.query_one("#records").focus()
        self._run_tick(None, None)

    def on_record_list_key_pressed(self, event: RecordList.KeyPressed) -> None:
        self._run_tick(event.key, event.character)

    # -- Tick --------------------------------------------------------------

    def _run_tick(self, key: str | None, character: str | None) -> None:
        try:
            snapshot = self.browser.tick(key, character)
        except StoreError as exc:
            logger.error("tick failed: %s", exc)
            self.notify(str(exc), severity="error", timeout=6)
            snapshot = self.browser.snapshot(self.browser.cached_payload())
            self._paint(snapshot, payload_error=str(exc))
        else:
            self._paint(snapshot)
        if self.browser.exit_requested:
            self.exit()

    # -- Painting ----------------------------------------------------------

    def _paint(self, snap: Snapshot, payload_error: str = "") -> None:
        dirty = " [+]" if snap.layer_dirty else ""
        self.sub_title = f"{self.source} ({len(snap.names)}/{snap.total}){dirty}"

        filter_box = self.query_one("#filter", Static)
        filter_box.update(Text(snap.filter_text, style="green"))
        filter_box.set_class(snap.screen == Main(MainFocus.FILTER), "active")

        self.query_one("#records", RecordList).set_rows(
            snap.names, snap.position, snap.scroll, snap.scroll_length
        )

        if snap.payload is not None:
            self.payload_text = snap.payload
            style = ""
        elif payload_error and snap.names:
            self.payload_text = "(payload unavailable)"
            style = "dim italic"
        else:
            self.payload_text = ""
            style = ""
        self.query_one("#payload", Static).update(Text(self.payload_text, style=style))

        label, color = mode_label(snap.screen)
        mode = Text()
        mode.append(label, style=color)
        mode.append(" | ", style="white")
        focus = focus_label(snap.screen)
        mode.append(focus, style="dim" if focus == "Not Editing" else "green")
        if snap.status:
            mode.append(f"  {snap.status}", style="italic")
        self.query_one("#mode", Static).update(mode)
        self.query_one("#hints", Static).update(Text(key_hints(snap.screen), style="green"))

        editing = isinstance(snap.screen, Editing)
        self.query_one("#edit-panel").set_class(editing, "visible")
        key_box = self.query_one("#key-box", Static)
        value_box = self.query_one("#value-box", Static)
        key_box.update(Text(snap.key_text))
        value_box.update(Text(snap.value_text))
        key_box.set_class(snap.screen == Editing(EditingFocus.KEY), "active")
        value_box.set_class(snap.screen == Editing(EditingFocus.VALUE), "active")

        exiting = isinstance(snap.screen, Exiting)
        self.query_one("#exit-panel").set_class(exiting, "visible")
        if exiting:
            prompt = "Would you like to quit ?"
            if snap.layer_dirty:
                prompt += " (layer has unsaved changes, (w) writes it)"
            self.query_one("#exit-text", Static).update(prompt)
