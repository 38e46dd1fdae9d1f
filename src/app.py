"""
ASGI entry point for the event location resolver API.

Re-exports the FastAPI app from src/api/main.py for deployment.
"""

from src.api.main import app

__all__ = ["app"]
