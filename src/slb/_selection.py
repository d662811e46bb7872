"""Highlighted row tracking for the filtered record list."""

from __future__ import annotations

from slb.config import ROW_HEIGHT


class SelectionController:
    """Position within the filtered view plus the derived scrollbar offset."""

    def __init__(self, length: int = 0, row_height: int = ROW_HEIGHT) -> None:
        self.row_height = row_height
        self.length = max(0, length)
        self.position = 0
        self.scroll = 0

    @property
    def scroll_length(self) -> int:
        """Total scrollbar extent for the current view."""
        return max(0, self.length - 1) * self.row_height

    def set_position(self, position: int) -> None:
        # No bounds check; resize() and callers keep it valid.
        self.position = position
        self.scroll = position * self.row_height

    def next(self) -> None:
        if self.length == 0:
            self.set_position(0)
        elif self.position >= self.length - 1:
            self.set_position(0)
        else:
            self.set_position(self.position + 1)

    def previous(self) -> None:
        if self.length == 0:
            self.set_position(0)
        elif self.position == 0 or self.position > self.length - 1:
            self.set_position(self.length - 1)
        else:
            self.set_position(self.position - 1)

    def resize(self, length: int) -> None:
        """Adopt a new view length, clamping the position into range."""
        self.length = max(0, length)
        if self.length == 0:
            self.set_position(0)
        elif self.position > self.length - 1:
            self.set_position(self.length - 1)
