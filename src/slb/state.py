"""Screen states and the frozen view handed to the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from slb._inputs import InputId


class MainFocus(Enum):
    NONE = auto()
    FILTER = auto()


class EditingFocus(Enum):
    KEY = auto()
    VALUE = auto()

    @property
    def other(self) -> EditingFocus:
        return EditingFocus.VALUE if self is EditingFocus.KEY else EditingFocus.KEY


@dataclass(frozen=True)
class Main:
    focus: MainFocus = MainFocus.NONE


@dataclass(frozen=True)
class Editing:
    focus: EditingFocus = EditingFocus.KEY


@dataclass(frozen=True)
class Exiting:
    pass


Screen = Main | Editing | Exiting


def focused_input(screen: Screen) -> InputId | None:
    """Input receiving keystrokes on *screen*, if any."""
    if isinstance(screen, Main):
        return InputId.FILTER if screen.focus is MainFocus.FILTER else None
    if isinstance(screen, Editing):
        return editing_input(screen.focus)
    return None


def editing_input(focus: EditingFocus) -> InputId:
    if focus is EditingFocus.KEY:
        return InputId.KEY
    return InputId.VALUE


@dataclass(frozen=True)
class Snapshot:
    """Everything the UI paints for one tick."""

    screen: Screen
    filter_text: str
    key_text: str
    value_text: str
    names: tuple[str, ...] = ()
    position: int = 0
    scroll: int = 0
    scroll_length: int = 0
    payload: str | None = None
    total: int = 0
    status: str = ""
    layer_dirty: bool = False
