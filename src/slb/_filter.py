"""Substring filtering over the record list."""

from __future__ import annotations

from typing import Sequence

from slb.model import Record


def matches_filter(value: str, text: str) -> bool:
    return text in value


def filter_records(records: Sequence[Record], text: str) -> list[int]:
    """Return indices of records whose name contains *text*, in load order.

    An empty filter selects every record.
    """
    if not text:
        return list(range(len(records)))
    return [i for i, rec in enumerate(records) if matches_filter(rec.name, text)]
