"""
ActionScript 3 to TypeScript source converter.
"""

from .version import __version__  # noqa: F401
from .converter import Converter, convert, convert_with_changes  # noqa: F401
from .edits import TextChange, TextSpan, apply_text_changes  # noqa: F401
from .tokens import Token, TokenType  # noqa: F401

__all__ = [
    "Converter",
    "convert",
    "convert_with_changes",
    "TextChange",
    "TextSpan",
    "apply_text_changes",
    "Token",
    "TokenType",
    "__version__",
]
