"""Single-entry cache for the selected record's payload."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from slb.model import Record

logger = logging.getLogger(__name__)


class PayloadCache:
    """Remembers the last fetched payload so redraws skip the database."""

    def __init__(self) -> None:
        self.entry: tuple[int, str] | None = None  # (record_id, payload)

    def clear(self) -> None:
        self.entry = None

    def selected_record(
        self, position: int, view: Sequence[int], records: Sequence[Record]
    ) -> Record | None:
        """Record under *position*, falling back to the last filtered row."""
        if not view:
            return None
        return records[view[min(position, len(view) - 1)]]

    def resolve(
        self,
        position: int,
        view: Sequence[int],
        records: Sequence[Record],
        fetch: Callable[[int], str],
    ) -> str | None:
        record = self.selected_record(position, view, records)
        if record is None:
            self.entry = None
            return None

        if self.entry is not None and self.entry[0] == record.id:
            return self.entry[1]

        logger.debug("payload cache miss for record %s", record.id)
        payload = fetch(record.id)
        self.entry = (record.id, payload)
        return payload
