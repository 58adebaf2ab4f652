"""Application package for the as3ts FastAPI server."""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
