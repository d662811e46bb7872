"""Application constants and defaults."""

from __future__ import annotations

from slb.state import MainFocus

APP_TITLE = "Semantic Layer Builder"

# Table holding the captured messages
DEFAULT_TABLE = "tcp_proto_messages"

# Scrollbar units per list row
ROW_HEIGHT = 4

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Focus restored when the quit prompt is dismissed with n/q.
# FILTER matches the historical behavior; NONE is the other option.
EXIT_CANCEL_FOCUS = MainFocus.FILTER
