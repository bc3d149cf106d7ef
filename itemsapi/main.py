"""ASGI entry point: ``uvicorn itemsapi.main:app``."""

from itemsapi.api.app import create_app

app = create_app()
