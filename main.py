"""ASGI entry point: ``uvicorn main:app``."""

from dobot_engine.api_factory import create_app

app = create_app()
