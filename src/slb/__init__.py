"""Terminal browser for captured protocol messages with a TOML side layer."""

__version__ = "0.1.0"
