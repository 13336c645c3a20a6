"""Concrete classes and structs."""

from __future__ import annotations

from typing import List

from ..ir import Rendered
from .base import (
    Attribute,
    AttributeHost,
    Entity,
    MethodHost,
    Property,
    PropertyHost,
    append_unique_method,
)
from .function import Function


class StructType(Entity, AttributeHost, PropertyHost, MethodHost):
    """Allocatable class or struct; also the placeholder for unresolved references."""

    kind = "struct"

    def __init__(self, refid: str = "", *, is_class: bool = False) -> None:
        super().__init__(refid)
        self.is_class = is_class
        self.attributes: List[Attribute] = []
        self.properties: List[Property] = []
        self.methods: List[Function] = []

    def _reset_members(self) -> None:
        self.attributes = []
        self.properties = []
        self.methods = []

    def add_attribute(self, attribute: Attribute) -> None:
        self.attributes.append(attribute)

    def add_property(self, prop: Property) -> None:
        self.properties.append(prop)

    def add_method(self, method: Function) -> bool:
        return append_unique_method(self.name, self.methods, method)

    def host_type_name(self) -> Rendered:
        if not self.ensure_host_name():
            return "", False
        return self.host_name, True

    def cast_to_native(self, expr: str) -> Rendered:
        if not self.ensure_host_name():
            return "", False
        # The wrapper embeds objc.Object, so it is passed through as is.
        return expr, True

    def cast_to_host(self, expr: str) -> Rendered:
        if not self.ensure_host_name():
            return "", False
        return f"As{self.host_name}({expr})", True


__all__ = ["StructType"]
