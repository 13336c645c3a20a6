"""Protocols: capability contracts implemented on the Go side."""

from __future__ import annotations

from typing import List

from ..ir import Rendered
from .base import Entity, MethodHost, Property, PropertyHost, append_unique_method
from .function import Function

PROTOCOL_MARKER = "-p"
# Appended to the Go name of a protocol that shares its name with a class.
PROTOCOL_SUFFIX = "Protocol"


def strip_protocol_marker(name: str) -> str:
    """Drop the ``-p`` suffix the documentation index appends to protocol names."""
    name = name.rstrip()
    if name.endswith(PROTOCOL_MARKER):
        name = name[: -len(PROTOCOL_MARKER)].rstrip()
    return name


class ProtocolType(Entity, PropertyHost, MethodHost):
    kind = "protocol"

    def __init__(self, refid: str = "") -> None:
        super().__init__(refid)
        self.properties: List[Property] = []
        self.methods: List[Function] = []

    def define(self, name: str, **kwargs) -> None:
        super().define(strip_protocol_marker(name), **kwargs)

    def _reset_members(self) -> None:
        self.properties = []
        self.methods = []

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
        return expr, True

    def cast_to_host(self, expr: str) -> Rendered:
        if not self.ensure_host_name():
            return "", False
        return expr, True


__all__ = ["PROTOCOL_MARKER", "PROTOCOL_SUFFIX", "ProtocolType", "strip_protocol_marker"]
