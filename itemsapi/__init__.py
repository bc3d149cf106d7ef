"""itemsapi: CRUD HTTP facade over a single key-value table."""

__version__ = "0.1.0"
