"""
ASGI entry point for the Pickup API.

Re-exports the FastAPI app from pickup/api/main.py, e.g. `uvicorn pickup.app:app`.
"""

from pickup.api.main import app

__all__ = ["app"]
