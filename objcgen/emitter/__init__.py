"""Go wrapper emission for loaded entities."""

from __future__ import annotations

from .outcome import EmitReport, EmitStatus, EntityReport, MemberOutcome
from .wrappers import (
    DEFAULT_FOUNDATION_IMPORT,
    DEFAULT_RUNTIME_IMPORT,
    EmitResult,
    WrapperEmitter,
    protocol_method_name,
    setter_selector,
    struct_method_name,
)

__all__ = [
    "DEFAULT_FOUNDATION_IMPORT",
    "DEFAULT_RUNTIME_IMPORT",
    "EmitReport",
    "EmitResult",
    "EmitStatus",
    "EntityReport",
    "MemberOutcome",
    "WrapperEmitter",
    "protocol_method_name",
    "setter_selector",
    "struct_method_name",
]
