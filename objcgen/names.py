"""Helpers that turn Objective-C identifiers into Go identifiers."""

from __future__ import annotations

import json

_REPLACEMENTS = str.maketrans({":": "_", "-": "_"})

_GO_KEYWORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}

_KEYWORD_ALIASES = {
    "type": "typ",
    "select": "sel",
    "range": "rng",
}


def sanitize_name(name: str) -> str:
    """Replace selector and protocol separators; applying it twice is a no-op."""
    return name.translate(_REPLACEMENTS)


def to_go_name(name: str, exported: bool) -> str:
    """Return a Go identifier with the requested visibility."""
    if not name:
        return ""
    name = sanitize_name(name)
    head = name[0].upper() if exported else name[0].lower()
    name = head + name[1:]
    if name in _GO_KEYWORDS:
        return _KEYWORD_ALIASES.get(name, name + "_")
    return name


def to_exported_name(name: str) -> str:
    return to_go_name(name, True)


def go_quote(text: str) -> str:
    """Quote text as a Go interpreted string literal."""
    return json.dumps(text)


__all__ = ["go_quote", "sanitize_name", "to_exported_name", "to_go_name"]
