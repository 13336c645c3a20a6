"""Intermediate representation of native type expressions.

Every type answers three questions for the emitter:

* ``host_type_name`` - the Go spelling of the type,
* ``cast_to_native`` - how to pass a Go value of that type into a message send,
* ``cast_to_host`` - how to turn the ``objc.Object`` a message send returns into it.

Each returns ``(text, ok)``. When ``ok`` is False the type cannot be bridged yet;
the text is still returned so it can be surfaced in comments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .entities.store import EntityStore

Rendered = Tuple[str, bool]

NO_TYPE = "interface{}"

_HOST_ACCESSORS = {
    "bool": "{0}.Bool()",
    "int64": "{0}.Int()",
    "uint64": "{0}.Uint()",
    "float64": "{0}.Float()",
    "uintptr": "{0}.Pointer()",
    "int": "int({0}.Int())",
    "int8": "int8({0}.Int())",
    "int16": "int16({0}.Int())",
    "int32": "int32({0}.Int())",
    "uint": "uint({0}.Uint())",
    "uint8": "uint8({0}.Uint())",
    "uint16": "uint16({0}.Uint())",
    "uint32": "uint32({0}.Uint())",
    "byte": "byte({0}.Uint())",
    "float32": "float32({0}.Float())",
    NO_TYPE: "{0}",
}


class Type(ABC):
    """Contract shared by every IR variant and by entity definitions."""

    @abstractmethod
    def host_type_name(self) -> Rendered:
        """Return the Go type name."""

    @abstractmethod
    def cast_to_native(self, expr: str) -> Rendered:
        """Convert a Go expression of this type into a message-send argument."""

    @abstractmethod
    def cast_to_host(self, expr: str) -> Rendered:
        """Convert an ``objc.Object`` expression into this Go type."""


@dataclass(frozen=True)
class Primitive(Type):
    name: str

    def host_type_name(self) -> Rendered:
        return self.name, True

    def cast_to_native(self, expr: str) -> Rendered:
        return expr, True

    def cast_to_host(self, expr: str) -> Rendered:
        accessor = _HOST_ACCESSORS.get(self.name)
        if accessor is None:
            return expr, False
        return accessor.format(expr), True


@dataclass(frozen=True)
class Named(Type):
    """Opaque reference by name; nothing has claimed the name as an entity."""

    name: str

    def host_type_name(self) -> Rendered:
        return self.name, True

    def cast_to_native(self, expr: str) -> Rendered:
        return expr, False

    def cast_to_host(self, expr: str) -> Rendered:
        return expr, False


@dataclass(frozen=True)
class _Transparent(Type):
    """Wrapper that forwards casts to its element and adds nothing to the name."""

    elem: Optional[Type]

    def host_type_name(self) -> Rendered:
        if self.elem is None:
            return "", False
        return self.elem.host_type_name()

    def cast_to_native(self, expr: str) -> Rendered:
        if self.elem is None:
            return expr, False
        return self.elem.cast_to_native(expr)

    def cast_to_host(self, expr: str) -> Rendered:
        if self.elem is None:
            return expr, False
        return self.elem.cast_to_host(expr)


@dataclass(frozen=True)
class Pointer(_Transparent):
    def host_type_name(self) -> Rendered:
        name, ok = super().host_type_name()
        return "*" + name, ok


@dataclass(frozen=True)
class Array(_Transparent):
    size: str = ""

    def host_type_name(self) -> Rendered:
        name, ok = super().host_type_name()
        return "[" + self.size + "]" + name, ok


@dataclass(frozen=True)
class Const(_Transparent):
    pass


@dataclass(frozen=True)
class Strong(_Transparent):
    """``__strong`` ownership qualifier."""


@dataclass(frozen=True)
class Nullable(_Transparent):
    is_nullable: bool = True


@dataclass(frozen=True)
class ExternWrapper(_Transparent):
    """Symbol visibility macro; stripped by the loader before the type is stored."""


@dataclass(frozen=True)
class FuncArg:
    name: str
    type: Optional[Type]


@dataclass(frozen=True)
class FunctionType(Type):
    """Function signature; also used for function pointer types."""

    ret: Optional[Type] = None
    args: Tuple[FuncArg, ...] = ()

    def host_type_name(self) -> Rendered:
        args, ok = self.render_args()
        return "func" + args, ok

    def render_args(self) -> Rendered:
        """Render ``(name type, ...) ret`` the way Go spells a signature."""
        has_names = any(arg.name for arg in self.args)
        ok = True
        parts: List[str] = []
        for index, arg in enumerate(self.args):
            name = arg.name
            if has_names and not name:
                name = f"arg{index}"
            if arg.type is None:
                ok = False
                parts.append(name)
                continue
            type_name, arg_ok = arg.type.host_type_name()
            ok = ok and arg_ok
            parts.append(f"{name} {type_name}" if name else type_name)
        rendered = "(" + ", ".join(parts) + ")"
        if self.ret is not None:
            ret_name, ret_ok = self.ret.host_type_name()
            ok = ok and ret_ok
            rendered += " " + ret_name
        return rendered, ok

    def cast_to_native(self, expr: str) -> Rendered:
        # Go closures cannot cross into the runtime without generated cgo trampolines.
        return expr, False

    def cast_to_host(self, expr: str) -> Rendered:
        return expr, False


@dataclass(frozen=True)
class Unknown(Type):
    """Fallback for text the resolver does not understand."""

    raw: str = ""
    comment: str = ""

    def host_type_name(self) -> Rendered:
        note = self.comment or self.raw
        if note:
            return f"{NO_TYPE} /* {note.replace('*/', '* /')} */", False
        return NO_TYPE, False

    def cast_to_native(self, expr: str) -> Rendered:
        return expr, False

    def cast_to_host(self, expr: str) -> Rendered:
        return expr, False


@dataclass(frozen=True)
class StringType(Type):
    """``NSString *`` bridged to a Go string."""

    def host_type_name(self) -> Rendered:
        return "string", True

    def cast_to_native(self, expr: str) -> Rendered:
        return f"foundation.NSStringFromString({expr})", True

    def cast_to_host(self, expr: str) -> Rendered:
        return f"{expr}.String()", True


@dataclass(frozen=True)
class ObjectType(Type):
    """Untyped object reference (``id``)."""

    def host_type_name(self) -> Rendered:
        return "objc.Object", True

    def cast_to_native(self, expr: str) -> Rendered:
        return expr, True

    def cast_to_host(self, expr: str) -> Rendered:
        return expr, True


@dataclass(frozen=True)
class EntityRef(Type):
    """Reference to a struct or protocol entity, resolved through the store on use."""

    refid: str
    store: "EntityStore" = field(compare=False, repr=False)

    @property
    def target(self) -> Optional[Type]:
        return self.store.get(self.refid)

    def host_type_name(self) -> Rendered:
        target = self.target
        if target is None:
            return self.refid, False
        name, ok = target.host_type_name()
        if not name:
            # Referenced but never defined; keep the id so advisories still name it.
            return self.refid, False
        return name, ok

    def cast_to_native(self, expr: str) -> Rendered:
        target = self.target
        if target is None:
            return expr, False
        return target.cast_to_native(expr)

    def cast_to_host(self, expr: str) -> Rendered:
        target = self.target
        if target is None:
            return expr, False
        return target.cast_to_host(expr)


def describe(typ: Optional[Type]) -> str:
    """Short human readable form used in advisory comments and logs."""
    if typ is None:
        return "void"
    name, _ = typ.host_type_name()
    return name or type(typ).__name__


__all__ = [
    "Array",
    "Const",
    "EntityRef",
    "ExternWrapper",
    "FuncArg",
    "FunctionType",
    "NO_TYPE",
    "Named",
    "Nullable",
    "ObjectType",
    "Pointer",
    "Primitive",
    "Rendered",
    "Strong",
    "StringType",
    "Type",
    "Unknown",
    "describe",
]
