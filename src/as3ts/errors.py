"""
Custom error types for the as3ts converter.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class As3tsError(Exception):
    """Base error with optional location metadata."""

    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        location = ""
        if self.line is not None:
            location = f" (line {self.line}"
            if self.column is not None:
                location += f", column {self.column}"
            location += ")"
        return f"{self.message}{location}"


class EditOverlapError(As3tsError):
    """Two text changes claim overlapping spans, or a change lies outside the text."""


class ScopeMismatchError(As3tsError):
    """Brace-depth bookkeeping no longer agrees with the scope stack."""


class ConfigError(As3tsError):
    """Invalid as3ts.toml configuration."""
