"""Pydantic schemas used by the FastAPI server."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConvertRequest(BaseModel):
    source: str = Field(..., description="ActionScript 3 source text")


class ConversionNoteModel(BaseModel):
    line: int
    column: int
    message: str


class ConversionSummary(BaseModel):
    edits: int = 0
    changed: bool = False
    notes: list[ConversionNoteModel] = []


class ConvertResponse(BaseModel):
    source: str
    changes_summary: ConversionSummary


__all__ = [
    "ConvertRequest",
    "ConversionNoteModel",
    "ConversionSummary",
    "ConvertResponse",
]
