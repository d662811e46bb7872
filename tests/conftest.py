"""Shared fixtures for slb tests."""

import sqlite3

import pytest

from slb.model import Record, RecordNotFound

SAMPLE_ROWS = [
    (7, "tcp_syn", "2024-01-01 10:00:00", "SYN payload"),
    (7, "tcp_ack", "2024-01-01 10:00:01", "ACK payload"),
    (None, "udp_ping", "2024-01-01 10:00:02", "PING payload"),
]


class FakeStore:
    """In-memory stand-in for RecordStore that counts payload fetches."""

    def __init__(self, names=("tcp_syn", "tcp_ack", "udp_ping")):
        self.set_names(names)
        self.fetches: list[int] = []
        self.layer: dict = {}
        self.saves = 0
        self.dirty = False
        self.fail_fetch = False

    def set_names(self, names):
        self.records = [
            Record(id=i + 1, group=None, name=name, timestamp=f"t{i}")
            for i, name in enumerate(names)
        ]

    def list_records(self):
        return list(self.records)

    def fetch_payload(self, record_id):
        self.fetches.append(record_id)
        if self.fail_fetch:
            raise RecordNotFound(f"No record with rowid {record_id}")
        return f"payload-{record_id}"

    def set_layer_entry(self, section, key, value):
        target = self.layer.setdefault(section, {}) if section else self.layer
        target[key] = value
        self.dirty = True

    def save_layer(self):
        self.saves += 1
        self.dirty = False


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "capture.sqlite"
    conn = sqlite3.connect(path)
    conn.execute(
        "CREATE TABLE tcp_proto_messages "
        "(session INTEGER, proto TEXT, timestamp TEXT, data TEXT)"
    )
    conn.executemany(
        "INSERT INTO tcp_proto_messages (session, proto, timestamp, data) "
        "VALUES (?, ?, ?, ?)",
        SAMPLE_ROWS,
    )
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def layer_path(tmp_path):
    path = tmp_path / "layer.toml"
    path.write_text('# semantic layer\ntitle = "demo"\n\n[tcp_syn]\nkind = "handshake"\n')
    return path
