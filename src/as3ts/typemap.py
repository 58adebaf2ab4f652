"""ActionScript 3 type names and their TypeScript spellings."""

from __future__ import annotations

VECTOR_TYPE = "Vector"
VECTOR_REPLACEMENT = "Array"

DEFAULT_TYPE_MAP: dict[str, str] = {
    "Function": "() => void",
    "Boolean": "boolean",
    "Number": "number",
    "int": "number",
    "uint": "number",
    "String": "string",
    "Array": "any[]",
    "Object": "Record<string, any>",
    "*": "any",
}


def build_type_map(overrides: dict[str, str] | None = None) -> dict[str, str]:
    merged = dict(DEFAULT_TYPE_MAP)
    if overrides:
        merged.update(overrides)
    return merged


def needs_parentheses(type_text: str) -> bool:
    """Function types bind looser than a union and need wrapping before ``| null``."""
    return "=>" in type_text


__all__ = ["DEFAULT_TYPE_MAP", "VECTOR_TYPE", "VECTOR_REPLACEMENT", "build_type_map", "needs_parentheses"]
