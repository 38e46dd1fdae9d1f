"""
Event location resolver API module.

Provides FastAPI HTTP endpoints for location resolution.
"""

from src.api.main import app, run_server

__all__ = ["app", "run_server"]
