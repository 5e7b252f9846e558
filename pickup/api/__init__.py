"""
HTTP API for Pickup events.

FastAPI application with event, user and friend endpoints.
"""

from pickup.api.main import app, run_server

__all__ = ["app", "run_server"]
