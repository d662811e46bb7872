"""Key routing and per-tick state updates for the record browser."""

from __future__ import annotations

import logging
from typing import Protocol

from slb import config
from slb._cache import PayloadCache
from slb._filter import filter_records
from slb._inputs import InputArena, InputId
from slb._selection import SelectionController
from slb.model import Record, StoreError
from slb.state import (
    Editing,
    EditingFocus,
    Exiting,
    Main,
    MainFocus,
    Screen,
    Snapshot,
    editing_input,
    focused_input,
)

logger = logging.getLogger(__name__)


class Store(Protocol):
    dirty: bool

    def list_records(self) -> list[Record]: ...

    def fetch_payload(self, record_id: int) -> str: ...

    def set_layer_entry(self, section: str | None, key: str, value: str) -> None: ...

    def save_layer(self) -> None: ...


class Browser:
    """Screen state machine over the record list.

    Screens and keys:
      Main:     e edit  q quit  f filter  up/down move  r refresh  w write layer
      Filter:   typing / Backspace / Enter or Escape to leave
      Editing:  typing / Backspace / Enter or Tab switch  Escape cancel
                ctrl+s commit the pair into the layer
      Exiting:  y quit  n or q back  w write layer
    """

    def __init__(
        self,
        store: Store,
        exit_cancel_focus: MainFocus = config.EXIT_CANCEL_FOCUS,
    ) -> None:
        self.store = store
        self.exit_cancel_focus = exit_cancel_focus
        self.inputs = InputArena()
        self.records: list[Record] = store.list_records()
        self.filtered: list[int] = filter_records(self.records, "")
        self.selection = SelectionController(len(self.filtered))
        self.cache = PayloadCache()
        self.screen: Screen = Main()
        self.status_msg: str = ""
        self.exit_requested: bool = False

    # -- Queries -----------------------------------------------------------

    @property
    def filter_text(self) -> str:
        return self.inputs.get_content(InputId.FILTER)

    def filtered_records(self) -> list[Record]:
        return [self.records[i] for i in self.filtered if i < len(self.records)]

    def selected_record(self) -> Record | None:
        return self.cache.selected_record(
            self.selection.position, self.filtered, self.records
        )

    # -- Tick --------------------------------------------------------------

    def tick(self, key: str | None = None, character: str | None = None) -> Snapshot:
        """Apply one key press and bring the derived state up to date."""
        if key is not None or character is not None:
            self.handle_key(key or "", character)
        self.apply_filter()
        payload = self.resolve_payload()
        self.inputs.set_active(focused_input(self.screen))
        return self.snapshot(payload)

    def apply_filter(self) -> None:
        self.filtered = filter_records(self.records, self.filter_text)
        self.selection.resize(len(self.filtered))

    def cached_payload(self) -> str | None:
        """Cached payload if it still belongs to the selected record."""
        record = self.selected_record()
        entry = self.cache.entry
        if record is None or entry is None or entry[0] != record.id:
            return None
        return entry[1]

    def resolve_payload(self) -> str | None:
        return self.cache.resolve(
            self.selection.position,
            self.filtered,
            self.records,
            self.store.fetch_payload,
        )

    def snapshot(self, payload: str | None) -> Snapshot:
        return Snapshot(
            screen=self.screen,
            filter_text=self.filter_text,
            key_text=self.inputs.get_content(InputId.KEY),
            value_text=self.inputs.get_content(InputId.VALUE),
            names=tuple(rec.name for rec in self.filtered_records()),
            position=self.selection.position,
            scroll=self.selection.scroll,
            scroll_length=self.selection.scroll_length,
            payload=payload,
            total=len(self.records),
            status=self.status_msg,
            layer_dirty=self.store.dirty,
        )

    # -- Dispatch ----------------------------------------------------------

    def handle_key(self, key: str, character: str | None = None) -> None:
        char = character or ""
        screen = self.screen
        self.status_msg = ""
        logger.debug("key=%r char=%r screen=%r", key, char, screen)

        if isinstance(screen, Main):
            if screen.focus is MainFocus.NONE:
                self._handle_main(key, char)
            else:
                self._handle_filter(key, char)
        elif isinstance(screen, Editing):
            self._handle_editing(key, char, screen.focus)
        elif isinstance(screen, Exiting):
            self._handle_exiting(key, char)

        if self.screen != screen:
            logger.debug("screen %r -> %r", screen, self.screen)

    # -- MAIN --------------------------------------------------------------

    def _handle_main(self, key: str, char: str) -> None:
        if char == "e":
            self.screen = Editing(EditingFocus.KEY)
        elif char == "q":
            self.screen = Exiting()
        elif char == "f":
            self.screen = Main(MainFocus.FILTER)
        elif key == "down":
            self.selection.next()
        elif key == "up":
            self.selection.previous()
        elif char == "r":
            self.refresh()
        elif char == "w":
            self.save_layer()

    def _handle_filter(self, key: str, char: str) -> None:
        if key == "backspace":
            self.inputs.pop_char(InputId.FILTER)
            return
        if key in ("enter", "escape"):
            self.screen = Main(MainFocus.NONE)
            return
        if char and char.isprintable():
            self.inputs.push_char(InputId.FILTER, char)

    def refresh(self) -> None:
        """Reload the record list, keeping the selection in range."""
        self.records = self.store.list_records()
        self.apply_filter()
        self.status_msg = f"{len(self.records)} records loaded"

    def save_layer(self) -> None:
        try:
            self.store.save_layer()
        except StoreError as exc:
            self.status_msg = f"save failed: {exc}"
            raise
        self.status_msg = "layer saved"

    # -- EDITING -----------------------------------------------------------

    def _handle_editing(self, key: str, char: str, focus: EditingFocus) -> None:
        if key in ("enter", "tab"):
            self.screen = Editing(focus.other)
            return
        if key == "backspace":
            self.inputs.pop_char(editing_input(focus))
            return
        if key == "escape":
            self.screen = Main(MainFocus.NONE)
            return
        if key == "ctrl+s":
            self.commit_pair()
            return
        if char and char.isprintable():
            self.inputs.push_char(editing_input(focus), char)

    def commit_pair(self) -> bool:
        """Write the Key/Value inputs into the layer under the selected record."""
        key = self.inputs.get_content(InputId.KEY).strip()
        if not key:
            self.status_msg = "key is empty"
            return False
        value = self.inputs.get_content(InputId.VALUE)
        record = self.selected_record()
        section = record.name if record is not None else None
        self.store.set_layer_entry(section, key, value)
        self.inputs.clear(InputId.KEY)
        self.inputs.clear(InputId.VALUE)
        self.screen = Main(MainFocus.NONE)
        target = f"[{section}] " if section else ""
        self.status_msg = f"set {target}{key}"
        logger.info("committed %s%s", target, key)
        return True

    # -- EXITING -----------------------------------------------------------

    def _handle_exiting(self, key: str, char: str) -> None:
        if char == "y":
            self.exit_requested = True
        elif char in ("n", "q"):
            self.screen = Main(self.exit_cancel_focus)
        elif char == "w":
            self.save_layer()

