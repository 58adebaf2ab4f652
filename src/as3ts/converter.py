"""
Scope-aware ActionScript 3 -> TypeScript rewriter.

One forward pass over the token stream. Scopes are tracked purely from brace
depth: a declaration keyword registers a pending scope, the next "{" activates
it at the depth it opens to, and the "}" that brings the depth back down pops
it. Every decision is recorded as a TextChange against the original text and
applied once at the end, so untouched bytes survive exactly.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .config import ConvertConfig
from .edits import TextChange, TextSpan, apply_text_changes, insert_at, replace_token
from .errors import ScopeMismatchError
from .scanner import Scanner
from .tokens import ACCESS_MODIFIERS, Token, TokenType
from .typemap import VECTOR_REPLACEMENT, VECTOR_TYPE, needs_parentheses

log = logging.getLogger(__name__)

PROXY_MARKER = "flash_proxy"
OVERRIDE_MARKER = "override"
INTERNAL_MARKER = "internal"
EACH_MARKER = "each"
CONSTRUCTOR_NAME = "constructor"
COMMENT_PREFIX = "// "

# Identifiers that can only start a declaration outside function bodies.
DECLARATION_MARKERS = {PROXY_MARKER, OVERRIDE_MARKER, INTERNAL_MARKER, "final", "dynamic"}
FUNCTION_MARKERS = {PROXY_MARKER, OVERRIDE_MARKER, INTERNAL_MARKER}

NAMESPACE_KEYWORDS = (TokenType.FUNCTION, TokenType.VAR, TokenType.CLASS, TokenType.INTERFACE, TokenType.CONST)
CLASS_KEYWORDS = (TokenType.FUNCTION, TokenType.VAR, TokenType.CONST)


class ScopeKind(enum.Enum):
    PROGRAM = "program"
    NAMESPACE = "namespace"
    CLASS = "class"
    INTERFACE = "interface"
    FUNCTION = "function"


_SCOPE_FOR_KEYWORD = {
    TokenType.CLASS: ScopeKind.CLASS,
    TokenType.INTERFACE: ScopeKind.INTERFACE,
    TokenType.FUNCTION: ScopeKind.FUNCTION,
}


@dataclass(frozen=True)
class Scope:
    kind: ScopeKind
    open_depth: int


@dataclass(frozen=True)
class PendingScope:
    kind: ScopeKind
    token: Token


@dataclass(frozen=True)
class BraceRewrite:
    depth: int
    replacement: str


@dataclass
class ConverterState:
    brace_depth: int = 0
    scopes: List[Scope] = field(default_factory=list)
    pending: Optional[PendingScope] = None
    brace_rewrites: List[BraceRewrite] = field(default_factory=list)
    class_name: str = ""


@dataclass(frozen=True)
class ConversionNote:
    """A construct that was commented out and needs a human to port it."""

    line: int
    column: int
    message: str

    def to_dict(self) -> dict:
        return {"line": self.line, "column": self.column, "message": self.message}


@dataclass
class _Declaration:
    proxy: Optional[Token]
    override: Optional[Token]
    access: Optional[Token]
    modifiers: List[Token]
    keyword: Optional[Token]


class Converter:
    """
    Single-use converter for one source unit.

    ``convert()`` runs the pass and returns the new text; afterwards
    ``changes`` holds the edit list and ``notes`` the review markers.
    """

    def __init__(self, source: str, config: Optional[ConvertConfig] = None) -> None:
        self.config = config or ConvertConfig()
        self.scanner = Scanner(source)
        self.changes: List[TextChange] = []
        self.notes: List[ConversionNote] = []
        self.state = ConverterState()
        self._handlers: Dict[ScopeKind, Callable[[], None]] = {
            ScopeKind.PROGRAM: self._program_scope,
            ScopeKind.NAMESPACE: self._namespace_scope,
            ScopeKind.CLASS: self._class_scope,
            ScopeKind.INTERFACE: self._interface_scope,
            ScopeKind.FUNCTION: self._function_scope,
        }

    @property
    def source(self) -> str:
        return self.scanner.text

    def convert(self) -> str:
        scanner = self.scanner
        while not scanner.eos():
            pos = scanner.pos
            self._handlers[self.current_scope()]()
            self._bookkeeping()
            if scanner.pos == pos:
                scanner.advance()
        return apply_text_changes(self.source, self.changes)

    def current_scope(self) -> ScopeKind:
        if self.state.scopes:
            return self.state.scopes[-1].kind
        return ScopeKind.PROGRAM

    # ------------------------------------------------------------------
    # Universal bookkeeping
    # ------------------------------------------------------------------

    def _bookkeeping(self) -> None:
        token_type = self.scanner.peek().type
        if token_type is TokenType.LEFTBRACE:
            self._open_brace()
        elif token_type is TokenType.RIGHTBRACE:
            self._close_brace()
        elif token_type is TokenType.COLON:
            self._type_annotation()
        elif token_type is TokenType.IMPORT:
            self._delete(self.scanner.consume())
            self._remove_identifier_chain()
        elif token_type is TokenType.LEFTBRACKET:
            self._metadata()

    def _open_brace(self) -> None:
        state = self.state
        brace = self.scanner.consume()
        state.brace_depth += 1
        if state.pending is None:
            return
        kind = state.pending.kind
        if kind is ScopeKind.NAMESPACE:
            self._delete(brace)
        log.debug("scope: %s -> %s", self.current_scope().value, kind.value)
        state.scopes.append(Scope(kind, state.brace_depth))
        state.pending = None

    def _close_brace(self) -> None:
        state = self.state
        brace = self.scanner.consume()
        depth = state.brace_depth
        rewritten = False
        if state.brace_rewrites and state.brace_rewrites[-1].depth == depth:
            self.changes.append(replace_token(brace, state.brace_rewrites.pop().replacement))
            rewritten = True
        if state.scopes:
            scope = state.scopes[-1]
            if scope.open_depth > depth:
                line, column = self.scanner.location(brace.start)
                raise ScopeMismatchError(
                    f"{scope.kind.value} scope opened at depth {scope.open_depth} is still open at depth {depth}",
                    line,
                    column,
                )
            if scope.open_depth == depth:
                if scope.kind is ScopeKind.NAMESPACE and not rewritten:
                    self._delete(brace)
                if scope.kind is ScopeKind.CLASS:
                    state.class_name = ""
                state.scopes.pop()
                log.debug("scope: %s <- %s", self.current_scope().value, scope.kind.value)
        state.brace_depth = max(depth - 1, 0)

    def _type_annotation(self) -> None:
        scanner = self.scanner
        colon = scanner.consume(TokenType.COLON)
        type_token = scanner.peek()
        type_text = scanner.get_token_text(type_token)
        following = scanner.peek_after(type_token).type
        if following is TokenType.LEFTPAREN:
            # "key: String(value)" in an object literal is a call, not an annotation.
            return
        if following is TokenType.DOT and type_text in self.config.type_map:
            # "ok ? 1 : Number.MAX_VALUE" reads a static member of a builtin class.
            return
        if self._is_switch_label(colon):
            return
        last = self.replace_type()
        if last is None or type_text == "null":
            return
        if scanner.consume(TokenType.EQUALS) and scanner.consume(TokenType.NULL):
            mapped = self.config.type_map.get(type_text)
            if last is type_token and mapped is not None and needs_parentheses(mapped):
                self.changes.append(insert_at(type_token.start, "("))
                self.changes.append(insert_at(last.end, ") | null"))
            else:
                self.changes.append(insert_at(last.end, " | null"))

    def _metadata(self) -> None:
        scanner = self.scanner
        bracket = scanner.consume()
        if not scanner.match(TokenType.IDENTIFIER):
            return
        tag_name = scanner.get_token_text()
        if tag_name in self.config.embed_tags:
            self._note(bracket, f"[{tag_name}] metadata commented out")
            self._comment(bracket)
            prev = bracket
            tag = scanner.consume()
            if self._crosses_line(prev, tag):
                self._comment(tag)
            prev = tag
            depth = 1
            while depth > 0 and not scanner.eos():
                cur = scanner.peek()
                if cur.type is TokenType.LEFTBRACKET:
                    depth += 1
                elif cur.type is TokenType.RIGHTBRACKET:
                    depth -= 1
                if self._crosses_line(prev, cur):
                    self._comment(cur)
                prev = scanner.advance()
        elif tag_name in self.config.hint_tags:
            self._comment(bracket)

    # ------------------------------------------------------------------
    # Scope handlers
    # ------------------------------------------------------------------

    def _program_scope(self) -> None:
        scanner = self.scanner
        if scanner.match(TokenType.PACKAGE):
            package = scanner.consume()
            self._delete(package)
            self._remove_identifier_chain()
            self._register(ScopeKind.NAMESPACE, package)
            return
        # File-level helpers outside the package block behave like package members.
        self._namespace_scope()

    def _namespace_scope(self) -> None:
        scanner = self.scanner
        token_type = scanner.peek().type
        if token_type is TokenType.USE:
            self._delete(scanner.consume())
            namespace = scanner.consume(TokenType.NAMESPACE)
            if namespace:
                self._delete(namespace)
            self._remove_identifier_chain()
        elif token_type is TokenType.INCLUDE:
            self._comment_directive()
        elif token_type in ACCESS_MODIFIERS or token_type in (
            TokenType.CLASS,
            TokenType.INTERFACE,
            TokenType.FUNCTION,
        ):
            self._declaration_in_namespace()
        elif token_type is TokenType.IDENTIFIER:
            text = scanner.get_token_text()
            if self._awaiting_class_name():
                self.state.class_name = text
                log.debug("class name: %s", text)
                scanner.consume()
            elif text in DECLARATION_MARKERS:
                self._declaration_in_namespace()

    def _interface_scope(self) -> None:
        if self.scanner.match(TokenType.FUNCTION):
            self._delete(self.scanner.consume())

    def _class_scope(self) -> None:
        scanner = self.scanner
        token_type = scanner.peek().type
        if token_type is TokenType.INCLUDE:
            self._comment_directive()
        elif token_type in ACCESS_MODIFIERS or token_type in (
            TokenType.STATIC,
            TokenType.FUNCTION,
            TokenType.VAR,
            TokenType.CONST,
        ):
            self._declaration_in_class()
        elif token_type is TokenType.IDENTIFIER:
            text = scanner.get_token_text()
            if text in DECLARATION_MARKERS:
                self._declaration_in_class()
            elif text == VECTOR_TYPE:
                self.replace_type()
            elif text in self.config.config_namespaces:
                self._conditional_block(in_function=False)

    def _function_scope(self) -> None:
        scanner = self.scanner
        token = scanner.peek()
        if token.type is TokenType.XMLMARKUP:
            scanner.consume()
            self.changes.append(replace_token(token, "`" + scanner.get_token_text(token) + "`"))
        elif token.type is TokenType.FOR:
            self._for_loop()
        elif token.type is TokenType.IS:
            self.changes.append(replace_token(scanner.consume(), "instanceof"))
        elif token.type is TokenType.DOUBLEDOT:
            self.changes.append(replace_token(scanner.consume(), "."))
        elif token.type is TokenType.ATSIGN:
            self.changes.append(replace_token(scanner.consume()))
        elif token.type is TokenType.IDENTIFIER:
            text = scanner.get_token_text(token)
            if text in FUNCTION_MARKERS:
                self._declaration_in_class()
            elif text == VECTOR_TYPE:
                self.replace_type()
            elif text in self.config.config_namespaces:
                self._conditional_block(in_function=True)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _read_declaration(self, keywords: Sequence[TokenType]) -> _Declaration:
        # Modifiers may come in any order: "override public", "static private", "dynamic public".
        scanner = self.scanner
        proxy: Optional[Token] = None
        override: Optional[Token] = None
        access: Optional[Token] = None
        modifiers: List[Token] = []
        while True:
            token = scanner.peek()
            text = scanner.get_token_text(token)
            is_identifier = token.type is TokenType.IDENTIFIER
            if is_identifier and text == PROXY_MARKER and proxy is None:
                proxy = scanner.consume()
            elif is_identifier and text == OVERRIDE_MARKER and override is None:
                override = scanner.consume()
            elif access is None and (
                token.type in ACCESS_MODIFIERS or (is_identifier and text == INTERNAL_MARKER)
            ):
                access = scanner.consume()
            elif is_identifier or token.type is TokenType.STATIC:
                modifiers.append(scanner.consume())
            else:
                break
        keyword = None
        for kind in keywords:
            keyword = scanner.consume(kind)
            if keyword:
                break
        return _Declaration(proxy, override, access, modifiers, keyword)

    def _declaration_in_namespace(self) -> None:
        decl = self._read_declaration(NAMESPACE_KEYWORDS)
        if decl.keyword is None:
            return
        for marker in (decl.proxy, decl.override):
            if marker:
                self._delete(marker)
        # public | internal -> export, protected | private -> removed
        if decl.access:
            if decl.access.type is TokenType.PUBLIC or self._text(decl.access) == INTERNAL_MARKER:
                self.changes.append(replace_token(decl.access, "export"))
            else:
                self._delete(decl.access)
        for modifier in decl.modifiers:
            self._delete(modifier)
        kind = _SCOPE_FOR_KEYWORD.get(decl.keyword.type)
        if kind is not None:
            self._register(kind, decl.keyword)

    def _declaration_in_class(self) -> None:
        scanner = self.scanner
        decl = self._read_declaration(CLASS_KEYWORDS)
        if decl.keyword is None:
            return
        bare = not (decl.proxy or decl.override or decl.access or decl.modifiers)
        if bare and decl.keyword.type is TokenType.FUNCTION and scanner.match(TokenType.LEFTPAREN):
            # Anonymous function expression, e.g. a field initializer.
            self._register(ScopeKind.FUNCTION, decl.keyword)
            return
        if decl.proxy:
            self._delete(decl.proxy)
        if decl.override and decl.access:
            self._delete(decl.override)
        # internal -> public, public | protected | private kept
        if decl.access and self._text(decl.access) == INTERNAL_MARKER:
            self.changes.append(replace_token(decl.access, "public"))
        for modifier in decl.modifiers:
            if modifier.type is not TokenType.STATIC:
                self._delete(modifier)
        self._delete(decl.keyword)
        if decl.keyword.type is TokenType.FUNCTION:
            self._register(ScopeKind.FUNCTION, decl.keyword)
            class_name = self.state.class_name
            if class_name and scanner.match(TokenType.IDENTIFIER, class_name):
                self.changes.append(replace_token(scanner.consume(), CONSTRUCTOR_NAME))

    def _awaiting_class_name(self) -> bool:
        pending = self.state.pending
        return not self.state.class_name and pending is not None and pending.kind is ScopeKind.CLASS

    def _register(self, kind: ScopeKind, token: Token) -> None:
        self.state.pending = PendingScope(kind, token)
        log.debug("pending %s scope", kind.value)

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def replace_type(self) -> Optional[Token]:
        """
        Translate the type reference at the cursor.

        Consumes the whole reference (qualified names and ``Vector.<T>``
        included) and returns its last token, or None when the cursor is not
        on a type.
        """
        scanner = self.scanner
        token = scanner.peek()
        if token.type not in (TokenType.IDENTIFIER, TokenType.MULT):
            return None
        text = scanner.get_token_text(token)
        scanner.consume()
        if text == VECTOR_TYPE:
            self.changes.append(replace_token(token, VECTOR_REPLACEMENT))
            last = token
            if scanner.match(TokenType.DOTLESSTHAN):
                last = scanner.consume()
                self.changes.append(replace_token(last, "<"))
                last = self.replace_type() or last
                last = scanner.consume(TokenType.OTHER, ">") or last
            return last
        mapped = self.config.type_map.get(text)
        if mapped is not None:
            self.changes.append(replace_token(token, mapped))
            return token
        last = token
        while scanner.match(TokenType.DOT):
            dot = scanner.consume()
            last = scanner.consume(TokenType.IDENTIFIER) or dot
        return last

    def _skip_type(self) -> Optional[Token]:
        """Consume a type reference without translating it."""
        scanner = self.scanner
        last = scanner.consume(TokenType.IDENTIFIER) or scanner.consume(TokenType.MULT)
        if last is None:
            return None
        while True:
            if scanner.match(TokenType.DOT):
                dot = scanner.consume()
                last = scanner.consume(TokenType.IDENTIFIER) or dot
            elif scanner.match(TokenType.DOTLESSTHAN):
                last = scanner.consume()
                last = self._skip_type() or last
                last = scanner.consume(TokenType.OTHER, ">") or last
            else:
                return last

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _for_loop(self) -> None:
        scanner = self.scanner
        for_token = scanner.consume(TokenType.FOR)
        each = scanner.consume(TokenType.IDENTIFIER, EACH_MARKER)
        if each:
            following = scanner.peek()
            if "\n" in self.source[for_token.end : following.start]:
                self._delete(each)
            else:
                self._replace_span(for_token.end, following.start, "")
        scanner.consume(TokenType.LEFTPAREN)
        binding = scanner.consume(TokenType.VAR)
        name = scanner.consume(TokenType.IDENTIFIER)
        if name and scanner.consume(TokenType.COLON):
            type_end = self._skip_type()
            if type_end:
                self._replace_span(name.end, type_end.end, "")
        membership = scanner.consume(TokenType.IN)
        if binding:
            self.changes.append(replace_token(binding, "const" if (each or membership) else "let"))
        if each and membership:
            self.changes.append(replace_token(membership, "of"))

    def _conditional_block(self, *, in_function: bool) -> None:
        scanner = self.scanner
        marker = scanner.consume()
        last = marker
        while scanner.match(TokenType.DOUBLECOLON) or scanner.match(TokenType.DOT):
            separator = scanner.consume()
            last = scanner.consume(TokenType.IDENTIFIER) or separator
        guard = self.source[marker.start : last.end]
        if scanner.match(TokenType.LEFTBRACE):
            self._note(marker, f"conditional compilation block {guard} kept live")
            self._comment(marker)
            brace = scanner.peek()
            if self._crosses_line(marker, brace):
                self._comment(brace)
            self.state.brace_rewrites.append(BraceRewrite(self.state.brace_depth + 1, COMMENT_PREFIX + "}"))
            return
        self._note(marker, f"conditional compilation guard {guard} neutralized")
        replacement = f"/* {guard} */"
        if in_function:
            replacement += " true"
        self._replace_span(marker.start, last.end, replacement)

    def _comment_directive(self) -> None:
        token = self.scanner.consume()
        self._note(token, f"{self._text(token)} directive commented out")
        self._comment(token)

    def _remove_identifier_chain(self) -> None:
        scanner = self.scanner
        if scanner.match(TokenType.IDENTIFIER):
            self._delete(scanner.consume())
            while scanner.match(TokenType.DOT):
                self._delete(scanner.consume())
                if scanner.match(TokenType.IDENTIFIER) or scanner.match(TokenType.MULT):
                    self._delete(scanner.consume())
        if scanner.match(TokenType.SEMICOLON):
            self._delete(scanner.consume())

    # ------------------------------------------------------------------
    # Edit helpers
    # ------------------------------------------------------------------

    def _text(self, token: Token) -> str:
        return self.scanner.get_token_text(token)

    def _is_switch_label(self, colon: Token) -> bool:
        line_start = self.source.rfind("\n", 0, colon.start) + 1
        label = self.source[line_start : colon.start].strip()
        return label == "default" or label.startswith("case ")

    def _crosses_line(self, first: Token, second: Token) -> bool:
        return "\n" in self.source[first.start : second.start]

    def _delete(self, token: Token) -> None:
        """Remove a token together with the spaces that follow it on its line."""
        end = token.end
        text = self.source
        while end < len(text) and text[end] in " \t":
            end += 1
        self._replace_span(token.start, end, "")

    def _replace_span(self, start: int, end: int, text: str) -> None:
        self.changes.append(TextChange(TextSpan(start, end - start), text))

    def _comment(self, token: Token) -> None:
        self.changes.append(replace_token(token, COMMENT_PREFIX + self._text(token)))

    def _note(self, token: Token, message: str) -> None:
        line, column = self.scanner.location(token.start)
        self.notes.append(ConversionNote(line, column, message))


def convert_with_changes(
    source: str, config: Optional[ConvertConfig] = None
) -> Tuple[str, List[TextChange], List[ConversionNote]]:
    converter = Converter(source, config)
    text = converter.convert()
    return text, list(converter.changes), list(converter.notes)


def convert(source: str, config: Optional[ConvertConfig] = None) -> str:
    """Convert ActionScript 3 source text to TypeScript."""
    return Converter(source, config).convert()
