"""HTTP API (FastAPI)."""

from rfp_desk.api.server import create_app

__all__ = ["create_app"]
