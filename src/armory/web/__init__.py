"""HTTP interface (FastAPI, JSON responses)."""

from armory.web.app import create_app

__all__ = ["create_app"]
