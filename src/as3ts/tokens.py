"""
Token model shared by the scanner and the converter.

Tokens never carry their text; it is always sliced back out of the source,
so the source string stays the single source of truth.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """All token types produced by the scanner."""

    # Structural punctuation
    LEFTBRACE = "{"
    RIGHTBRACE = "}"
    LEFTPAREN = "("
    RIGHTPAREN = ")"
    LEFTBRACKET = "["
    RIGHTBRACKET = "]"
    COLON = ":"
    DOUBLECOLON = "::"
    SEMICOLON = ";"
    COMMA = ","
    DOT = "."
    DOUBLEDOT = ".."
    DOTLESSTHAN = ".<"
    ATSIGN = "@"
    MULT = "*"
    EQUALS = "="

    # Keywords
    PACKAGE = "package"
    NAMESPACE = "namespace"
    IMPORT = "import"
    USE = "use"
    INCLUDE = "include"
    CLASS = "class"
    INTERFACE = "interface"
    FUNCTION = "function"
    VAR = "var"
    CONST = "const"
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    STATIC = "static"
    IS = "is"
    IN = "in"
    FOR = "for"
    NULL = "null"

    # Literals and names
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"
    XMLMARKUP = "XMLMARKUP"
    REGEX = "REGEX"

    # Anything else, passed through untouched
    OTHER = "OTHER"

    EOS = "EOS"


KEYWORDS: dict[str, TokenType] = {
    "package": TokenType.PACKAGE,
    "namespace": TokenType.NAMESPACE,
    "import": TokenType.IMPORT,
    "use": TokenType.USE,
    "include": TokenType.INCLUDE,
    "class": TokenType.CLASS,
    "interface": TokenType.INTERFACE,
    "function": TokenType.FUNCTION,
    "var": TokenType.VAR,
    "const": TokenType.CONST,
    "public": TokenType.PUBLIC,
    "protected": TokenType.PROTECTED,
    "private": TokenType.PRIVATE,
    "static": TokenType.STATIC,
    "is": TokenType.IS,
    "in": TokenType.IN,
    "for": TokenType.FOR,
    "null": TokenType.NULL,
}

ACCESS_MODIFIERS = (TokenType.PUBLIC, TokenType.PROTECTED, TokenType.PRIVATE)


@dataclass(frozen=True)
class Token:
    type: TokenType
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Token({self.type.name}, {self.start}+{self.length})"
