"""Lookup tables used by the signature resolver."""

from __future__ import annotations

from typing import Callable, Dict, List, NamedTuple, Optional

from ..ir import (
    Array,
    Const,
    ExternWrapper,
    Nullable,
    ObjectType,
    Pointer,
    Primitive,
    Strong,
    StringType,
    Type,
)

VOID = "void"

OVERRIDE_TYPES: Dict[str, Type] = {
    "": Primitive("interface{}"),
    "void *": Primitive("uintptr"),
    "__strong void *": Primitive("uintptr"),
    "char *": Array(Primitive("byte"), ""),
    "NSString *": StringType(),
    "id": ObjectType(),
    "instancetype": ObjectType(),
}

# Widths assume the 64-bit Apple ABI (LP64).
PRIMITIVE_TYPES: Dict[str, str] = {
    "BOOL": "bool",
    "bool": "bool",
    "char": "byte",
    "signed char": "int8",
    "unsigned char": "uint8",
    "int8_t": "int8",
    "int16_t": "int16",
    "int32_t": "int32",
    "int64_t": "int64",
    "uint8_t": "uint8",
    "uint16_t": "uint16",
    "uint32_t": "uint32",
    "uint64_t": "uint64",
    "short": "int16",
    "int": "int",
    "long": "int64",
    "long long": "int64",
    "unsigned": "uint",
    "unsigned int": "uint",
    "unsigned short": "uint16",
    "signed int": "int",
    "unsigned long": "uint64",
    "unsigned long long": "uint64",
    "uintptr_t": "uintptr",
    "NSInteger": "int",
    "NSUInteger": "uint",
    "float": "float32",
    "double": "float64",
    "CGFloat": "float64",
}


def _keep(elem: Optional[Type]) -> Optional[Type]:
    return elem


class Wrapper(NamedTuple):
    """A prefix or suffix token stripped before resolving the remainder."""

    token: str
    wrap: Callable[[Optional[Type]], Optional[Type]]
    suffix: bool = False


# Order matters: the first matching wrapper is applied, one per resolver call.
WRAPPERS: List[Wrapper] = [
    Wrapper("APPKIT_EXTERN ", ExternWrapper),
    Wrapper("__nullable ", lambda elem: Nullable(elem, True)),
    Wrapper("nullable ", lambda elem: Nullable(elem, True)),
    Wrapper("_Nullable ", lambda elem: Nullable(elem, True)),
    Wrapper("__null_unspecified ", _keep),
    Wrapper("const ", Const),
    Wrapper("__strong ", Strong),
    Wrapper("*", Pointer, suffix=True),
    Wrapper("_Nullable", lambda elem: Nullable(elem, True), suffix=True),
    Wrapper("__nonnull", lambda elem: Nullable(elem, False), suffix=True),
    Wrapper("_Nonnull", lambda elem: Nullable(elem, False), suffix=True),
    Wrapper("__nullable", lambda elem: Nullable(elem, True), suffix=True),
    Wrapper("__null_unspecified", _keep, suffix=True),
    Wrapper("_Null_unspecified", _keep, suffix=True),
]

OPAQUE_POINTER = Primitive("uintptr")

__all__ = [
    "OPAQUE_POINTER",
    "OVERRIDE_TYPES",
    "PRIMITIVE_TYPES",
    "VOID",
    "WRAPPERS",
    "Wrapper",
]
