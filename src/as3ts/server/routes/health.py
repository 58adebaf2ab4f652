"""Health route."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter


def build_health_router() -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    return router


__all__ = ["build_health_router"]
