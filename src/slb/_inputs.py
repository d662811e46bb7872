"""Fixed set of single-line text inputs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class InputId(Enum):
    FILTER = auto()
    KEY = auto()
    VALUE = auto()


class InputNotFound(KeyError):
    """Raised when an input id is not part of the arena."""


@dataclass
class InputField:
    content: str = ""
    is_active: bool = False


class InputArena:
    """Owns the text of the Filter, Key and Value inputs."""

    def __init__(self) -> None:
        self._fields: dict[InputId, InputField] = {
            input_id: InputField() for input_id in InputId
        }

    def get(self, input_id: InputId) -> InputField:
        try:
            return self._fields[input_id]
        except KeyError:
            raise InputNotFound(f"Cannot find {input_id!r} in the input arena") from None

    def get_content(self, input_id: InputId) -> str:
        return self.get(input_id).content

    def push_char(self, input_id: InputId, char: str) -> None:
        field = self.get(input_id)
        field.content += char

    def pop_char(self, input_id: InputId) -> None:
        field = self.get(input_id)
        field.content = field.content[:-1]

    def clear(self, input_id: InputId) -> None:
        self.get(input_id).content = ""

    def set_active(self, input_id: InputId | None) -> None:
        """Mark one field active (or none) and the rest inactive."""
        for fid, field in self._fields.items():
            field.is_active = fid == input_id
