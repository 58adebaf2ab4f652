"""Conversion API routes."""

from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, HTTPException

from ...errors import As3tsError
from ..schemas import ConversionNoteModel, ConversionSummary, ConvertRequest, ConvertResponse


def build_convert_router(convert_source: Callable[[str], tuple[str, list, list]]) -> APIRouter:
    router = APIRouter()

    @router.post("/api/convert", response_model=ConvertResponse)
    def api_convert(payload: ConvertRequest) -> ConvertResponse:
        if payload.source == "":
            return ConvertResponse(source="", changes_summary=ConversionSummary())
        try:
            converted, changes, notes = convert_source(payload.source)
        except As3tsError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ConvertResponse(
            source=converted,
            changes_summary=ConversionSummary(
                edits=len(changes),
                changed=converted != payload.source,
                notes=[ConversionNoteModel(**note.to_dict()) for note in notes],
            ),
        )

    return router


__all__ = ["build_convert_router"]
