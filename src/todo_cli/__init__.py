"""Personal task tracker: a JSON-file task store behind a small CLI."""

__version__ = "0.1.0"
