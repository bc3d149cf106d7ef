"""HTTP API for itemsapi."""

from itemsapi.api.app import create_app

__all__ = ["create_app"]
