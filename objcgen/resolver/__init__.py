"""Signature resolution from documentation text to IR types."""

from __future__ import annotations

from .constants import OVERRIDE_TYPES, PRIMITIVE_TYPES, WRAPPERS, Wrapper
from .signature import SignatureError, SignatureResolver

__all__ = [
    "OVERRIDE_TYPES",
    "PRIMITIVE_TYPES",
    "SignatureError",
    "SignatureResolver",
    "WRAPPERS",
    "Wrapper",
]
