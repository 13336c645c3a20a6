"""Tests for Go identifier helpers."""

from __future__ import annotations

from objcgen.names import go_quote, sanitize_name, to_exported_name, to_go_name


def test_sanitize_name_replaces_separators_and_is_idempotent() -> None:
    once = sanitize_name("addButtonWithTitle:-p")
    assert once == "addButtonWithTitle__p"
    assert sanitize_name(once) == once


def test_to_go_name_controls_visibility() -> None:
    assert to_go_name("title", exported=True) == "Title"
    assert to_go_name("Title", exported=False) == "title"
    assert to_exported_name("setTitle:") == "SetTitle_"
    assert to_go_name("", exported=True) == ""


def test_to_go_name_avoids_keywords() -> None:
    assert to_go_name("type", exported=False) == "typ"
    assert to_go_name("range", exported=False) == "rng"
    assert to_go_name("func", exported=False) == "func_"
    assert to_go_name("type", exported=True) == "Type"


def test_go_quote_escapes_quotes() -> None:
    assert go_quote("initWithFrame:") == '"initWithFrame:"'
    assert go_quote('a"b') == '"a\\"b"'
