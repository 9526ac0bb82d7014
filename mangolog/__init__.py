"""Error codes, token identifiers, fixed-layout records and event log encoding for a margin trading program."""

__version__ = "0.1.0"
__all__ = ["errors", "events", "ids", "loadable"]