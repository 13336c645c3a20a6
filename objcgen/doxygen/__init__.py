"""Doxygen XML index reader."""

from __future__ import annotations

from .index import DoxygenIndex, DoxygenIndexError, decode_compound, open_index

__all__ = ["DoxygenIndex", "DoxygenIndexError", "decode_compound", "open_index"]
