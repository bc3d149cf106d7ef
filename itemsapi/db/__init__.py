"""Database connection management."""

from itemsapi.db.pool import PostgresPool

__all__ = ["PostgresPool"]
