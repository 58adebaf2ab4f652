"""
Span-based text edits over original-source coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .errors import EditOverlapError
from .tokens import Token


@dataclass(frozen=True)
class TextSpan:
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class TextChange:
    span: TextSpan
    new_text: str = ""

    def to_dict(self) -> dict:
        """JSON-ready form; keys are snake_case like the rest of the HTTP API payloads."""
        return {"span": {"start": self.span.start, "length": self.span.length}, "new_text": self.new_text}


def replace_token(token: Token, text: str = "") -> TextChange:
    return TextChange(TextSpan(token.start, token.length), text)


def insert_at(offset: int, text: str) -> TextChange:
    return TextChange(TextSpan(offset, 0), text)


def apply_text_changes(text: str, changes: Iterable[TextChange]) -> str:
    """
    Apply every change at once against the original text.

    Changes are ordered by start offset; at equal offsets an insertion comes
    before a replacement, and equal spans keep the order they were recorded in.
    Overlapping spans are a converter bug and raise EditOverlapError.
    """
    ordered: List[TextChange] = sorted(changes, key=lambda change: (change.span.start, change.span.end))
    pieces: List[str] = []
    cursor = 0
    for change in ordered:
        span = change.span
        if span.start < 0 or span.length < 0 or span.end > len(text):
            raise EditOverlapError(f"Edit {span.start}+{span.length} lies outside the {len(text)}-character text")
        if span.start < cursor:
            raise EditOverlapError(f"Edit {span.start}+{span.length} overlaps an edit ending at {cursor}")
        pieces.append(text[cursor : span.start])
        pieces.append(change.new_text)
        cursor = span.end
    pieces.append(text[cursor:])
    return "".join(pieces)
