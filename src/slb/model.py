"""Read-only access to the captured messages and the TOML layer."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError
from tomlkit.toml_document import TOMLDocument

from slb.config import DEFAULT_TABLE

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for data source and layer failures."""


class StoreOpenError(StoreError):
    pass


class LayerError(StoreError):
    pass


class RecordNotFound(StoreError):
    pass


@dataclass(frozen=True)
class Record:
    id: int
    group: int | None
    name: str
    timestamp: str


class RecordStore:
    """SQLite message table plus the layer document edited alongside it."""

    def __init__(
        self,
        db_path: str | Path,
        layer_path: str | Path,
        table: str = DEFAULT_TABLE,
    ) -> None:
        self.db_path = Path(db_path)
        self.layer_path = Path(layer_path)
        self.table = table
        self.dirty = False
        self.conn = self._connect(self.db_path)
        try:
            self.layer = self._load_layer(self.layer_path)
        except LayerError:
            self.conn.close()
            raise

    @staticmethod
    def _connect(db_path: Path) -> sqlite3.Connection:
        if not db_path.is_file():
            raise StoreOpenError(f"Failing to connect to `{db_path}`: no such file")
        uri = db_path.resolve().as_uri() + "?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as e:
            logger.error("Failed to open database at %s: %s", db_path, e)
            raise StoreOpenError(f"Failing to connect to `{db_path}`: {e}") from e
        return conn

    @staticmethod
    def _load_layer(layer_path: Path) -> TOMLDocument:
        try:
            contents = layer_path.read_text(encoding="utf-8")
        except OSError as e:
            raise LayerError(f"Could not read file `{layer_path}`: {e}") from e
        try:
            return tomlkit.parse(contents)
        except ParseError as e:
            raise LayerError(f"Unable to parse TOML from `{layer_path}`: {e}") from e

    # -- Records -----------------------------------------------------------

    def list_records(self) -> list[Record]:
        sql = f'SELECT rowid, session, proto, timestamp FROM "{self.table}" ORDER BY rowid'
        try:
            rows = self.conn.execute(sql).fetchall()
        except sqlite3.Error as e:
            logger.error("Query on %s failed: %s", self.table, e)
            raise StoreOpenError(f"Cannot query table `{self.table}`: {e}") from e
        records = [
            Record(
                id=row[0],
                group=row[1],
                name="" if row[2] is None else str(row[2]),
                timestamp="" if row[3] is None else str(row[3]),
            )
            for row in rows
        ]
        logger.info("loaded %d records from %s", len(records), self.table)
        return records

    def fetch_payload(self, record_id: int) -> str:
        sql = f'SELECT data FROM "{self.table}" WHERE rowid = ?'
        try:
            row = self.conn.execute(sql, (record_id,)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot read data of record {record_id}: {e}") from e
        if row is None:
            raise RecordNotFound(f"No record with rowid {record_id}")
        data = row[0]
        if data is None:
            return ""
        if isinstance(data, bytes):
            return data.decode("utf-8", errors="replace")
        return str(data)

    # -- Layer -------------------------------------------------------------

    def set_layer_entry(self, section: str | None, key: str, value: str) -> None:
        """Store key = value in the layer, under [section] when given."""
        if section:
            table = self.layer.get(section)
            if table is None:
                table = tomlkit.table()
                self.layer[section] = table
            elif not isinstance(table, dict):
                raise LayerError(f"`{section}` is not a table in the layer")
            table[key] = value
        else:
            self.layer[key] = value
        self.dirty = True
        logger.debug("layer entry set: [%s] %s", section or "", key)

    def get_layer_entry(self, section: str | None, key: str) -> str | None:
        container = self.layer.get(section) if section else self.layer
        if not isinstance(container, dict) or key not in container:
            return None
        return str(container[key])

    def save_layer(self) -> None:
        try:
            self.layer_path.write_text(tomlkit.dumps(self.layer), encoding="utf-8")
        except OSError as e:
            logger.error("Saving layer to %s failed: %s", self.layer_path, e)
            raise LayerError(f"Could not write `{self.layer_path}`: {e}") from e
        self.dirty = False
        logger.info("layer saved to %s", self.layer_path)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> RecordStore:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
