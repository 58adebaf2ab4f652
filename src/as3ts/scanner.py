"""
Lazy scanner for ActionScript 3 source text.

The scanner owns a single cursor, ``pos``. Tokens are produced on demand by
re-scanning from that cursor, so lookahead is just ``peek()`` and nothing is
ever buffered beyond the last peeked token. The scanner never raises: text it
cannot classify comes back as single-character ``OTHER`` tokens.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .tokens import KEYWORDS, Token, TokenType

_PUNCTUATION = {
    "{": TokenType.LEFTBRACE,
    "}": TokenType.RIGHTBRACE,
    "(": TokenType.LEFTPAREN,
    ")": TokenType.RIGHTPAREN,
    "[": TokenType.LEFTBRACKET,
    "]": TokenType.RIGHTBRACKET,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "@": TokenType.ATSIGN,
}

# Longest first. A lone ">" is never fused so "Vector.<Vector.<int>>" closes cleanly.
_OPERATORS = (
    "===",
    "!==",
    "<<=",
    "&&=",
    "||=",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "++",
    "--",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "<<",
)

# A "<" right after one of these starts inline XML rather than a comparison.
_MARKUP_PRECEDERS = set("(,=:[?!&|{};+")
_MARKUP_KEYWORDS = {"return", "case", "yield"}
# A "/" right after one of these starts a regular expression literal rather than a division.
_REGEX_PRECEDERS = set("(,=:[!&|?{};}")


def _is_ident_start(char: str) -> bool:
    return char.isalpha() or char in "_$"


def _is_ident_part(char: str) -> bool:
    return char.isalnum() or char in "_$"


class Scanner:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = self._skip_trivia(0)
        self._peeked: Optional[Tuple[int, Token]] = None

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def peek(self) -> Token:
        """Return the next token without advancing."""
        if self._peeked is not None and self._peeked[0] == self.pos:
            return self._peeked[1]
        token = self._scan(self.pos)
        self._peeked = (self.pos, token)
        return token

    def consume(self, type: Optional[TokenType] = None, text: Optional[str] = None) -> Optional[Token]:
        """
        Advance past the next token if it matches the optional constraints.

        Returns None and leaves the cursor alone when it does not match.
        """
        token = self.peek()
        if token.type is TokenType.EOS or not self._matches(token, type, text):
            return None
        self.pos = self._skip_trivia(token.end)
        return token

    def match(self, type: Optional[TokenType] = None, text: Optional[str] = None) -> bool:
        token = self.peek()
        if token.type is TokenType.EOS:
            return type is TokenType.EOS
        return self._matches(token, type, text)

    def peek_after(self, token: Token) -> Token:
        """Return the token following ``token`` without moving the cursor."""
        return self._scan(token.end)

    def advance(self) -> Token:
        """Unconditionally step over the next token."""
        token = self.peek()
        self.pos = len(self.text) if token.type is TokenType.EOS else self._skip_trivia(token.end)
        return token

    def get_token_text(self, token: Optional[Token] = None) -> str:
        if token is None:
            token = self.peek()
        return self.text[token.start : token.end]

    def eos(self) -> bool:
        return self.peek().type is TokenType.EOS

    def location(self, offset: int) -> Tuple[int, int]:
        """1-based (line, column) of a source offset."""
        line = self.text.count("\n", 0, offset) + 1
        column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1
        return line, column

    # ------------------------------------------------------------------
    # Lexing
    # ------------------------------------------------------------------

    def _matches(self, token: Token, type: Optional[TokenType], text: Optional[str]) -> bool:
        if type is not None and token.type is not type:
            return False
        if text is not None and self.get_token_text(token) != text:
            return False
        return True

    def _skip_trivia(self, i: int) -> int:
        text = self.text
        n = len(text)
        while i < n:
            if text[i].isspace():
                i += 1
            elif text.startswith("//", i):
                end = text.find("\n", i)
                i = n if end < 0 else end
            elif text.startswith("/*", i):
                end = text.find("*/", i + 2)
                i = n if end < 0 else end + 2
            else:
                break
        return i

    def _scan(self, pos: int) -> Token:
        text = self.text
        start = self._skip_trivia(pos)
        if start >= len(text):
            return Token(TokenType.EOS, len(text), 0)
        char = text[start]
        nxt = text[start + 1] if start + 1 < len(text) else ""

        if _is_ident_start(char):
            end = start + 1
            while end < len(text) and _is_ident_part(text[end]):
                end += 1
            kind = KEYWORDS.get(text[start:end], TokenType.IDENTIFIER)
            return Token(kind, start, end - start)

        if char.isdigit() or (char == "." and nxt.isdigit()):
            return Token(TokenType.NUMBER, start, self._scan_number(start) - start)

        if char in "\"'":
            return Token(TokenType.STRING, start, self._scan_string(start) - start)

        if char in _PUNCTUATION:
            return Token(_PUNCTUATION[char], start, 1)

        if char == ":":
            if nxt == ":":
                return Token(TokenType.DOUBLECOLON, start, 2)
            return Token(TokenType.COLON, start, 1)

        if char == ".":
            if text.startswith("...", start):
                return Token(TokenType.OTHER, start, 3)
            if nxt == ".":
                return Token(TokenType.DOUBLEDOT, start, 2)
            if nxt == "<":
                return Token(TokenType.DOTLESSTHAN, start, 2)
            return Token(TokenType.DOT, start, 1)

        if char == "/" and self._in_expression_position(start, _REGEX_PRECEDERS):
            end = self._scan_regex(start)
            if end is not None:
                return Token(TokenType.REGEX, start, end - start)

        if char == "<" and _is_ident_start(nxt) and self._in_expression_position(start, _MARKUP_PRECEDERS):
            end = self._scan_markup(start)
            if end is not None:
                return Token(TokenType.XMLMARKUP, start, end - start)

        for op in _OPERATORS:
            if text.startswith(op, start):
                return Token(TokenType.OTHER, start, len(op))

        if char == "*":
            return Token(TokenType.MULT, start, 1)
        if char == "=":
            return Token(TokenType.EQUALS, start, 1)
        return Token(TokenType.OTHER, start, 1)

    def _scan_number(self, i: int) -> int:
        text = self.text
        n = len(text)
        if text.startswith(("0x", "0X"), i):
            i += 2
            while i < n and text[i] in "0123456789abcdefABCDEF":
                i += 1
            return i
        while i < n and text[i].isdigit():
            i += 1
        if i + 1 < n and text[i] == "." and text[i + 1].isdigit():
            i += 1
            while i < n and text[i].isdigit():
                i += 1
        if i < n and text[i] in "eE":
            j = i + 1
            if j < n and text[j] in "+-":
                j += 1
            if j < n and text[j].isdigit():
                i = j
                while i < n and text[i].isdigit():
                    i += 1
        return i

    def _scan_string(self, i: int) -> int:
        # Unterminated strings stop at the end of their line.
        text = self.text
        quote = text[i]
        i += 1
        while i < len(text):
            char = text[i]
            if char == "\\":
                i += 2
                continue
            if char == quote:
                return i + 1
            if char == "\n":
                return i
            i += 1
        return len(text)

    def _scan_regex(self, i: int) -> Optional[int]:
        """Return the end offset of the regex literal at ``i`` (flags included), or None if the line ends first."""
        text = self.text
        i += 1
        in_class = False
        while i < len(text):
            char = text[i]
            if char == "\\":
                i += 2
                continue
            if char == "\n":
                return None
            if char == "[":
                in_class = True
            elif char == "]":
                in_class = False
            elif char == "/" and not in_class:
                i += 1
                while i < len(text) and _is_ident_part(text[i]):
                    i += 1
                return i
            i += 1
        return None

    def _in_expression_position(self, start: int, preceders: set) -> bool:
        i = start - 1
        while i >= 0 and self.text[i].isspace():
            i -= 1
        if i < 0:
            return True
        if self.text[i] in preceders:
            return True
        end = i + 1
        while i >= 0 and _is_ident_part(self.text[i]):
            i -= 1
        return self.text[i + 1 : end] in _MARKUP_KEYWORDS

    def _scan_markup(self, start: int) -> Optional[int]:
        """Return the end offset of the XML literal at ``start``, or None if it never closes."""
        text = self.text
        i = start
        depth = 0
        while i < len(text):
            if text.startswith("<!--", i):
                end = text.find("-->", i + 4)
                if end < 0:
                    return None
                i = end + 3
            elif text.startswith("<![CDATA[", i):
                end = text.find("]]>", i + 9)
                if end < 0:
                    return None
                i = end + 3
            elif text.startswith("</", i):
                end = text.find(">", i + 2)
                if end < 0:
                    return None
                depth -= 1
                i = end + 1
                if depth <= 0:
                    return i
            elif text[i] == "<":
                end = self._scan_tag(i + 1)
                if end is None:
                    return None
                if text[end - 2] == "/":
                    if depth == 0:
                        return end
                else:
                    depth += 1
                i = end
            elif text[i] == "{":
                end = self._scan_braced(i)
                if end is None:
                    return None
                i = end
            else:
                i += 1
        return None

    def _scan_tag(self, i: int) -> Optional[int]:
        text = self.text
        while i < len(text):
            char = text[i]
            if char in "\"'":
                end = text.find(char, i + 1)
                if end < 0:
                    return None
                i = end + 1
            elif char == "{":
                end = self._scan_braced(i)
                if end is None:
                    return None
                i = end
            elif char == ">":
                return i + 1
            elif char == "<":
                return None
            else:
                i += 1
        return None

    def _scan_braced(self, i: int) -> Optional[int]:
        text = self.text
        depth = 0
        while i < len(text):
            char = text[i]
            if char in "\"'":
                i = self._scan_string(i)
                continue
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return i + 1
            i += 1
        return None
