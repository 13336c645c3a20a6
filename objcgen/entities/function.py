"""Functions, methods and the file containers that hold free functions."""

from __future__ import annotations

from typing import List, Optional

from ..ir import FunctionType
from ..models import LineRange, Location, Protection
from .base import BaseNode, MethodHost, append_unique_method

SCOPE_SEPARATOR = "::"


class Function(BaseNode):
    """A free function or a method waiting to be attached to its receiver."""

    def __init__(
        self,
        name: str,
        signature: Optional[FunctionType] = None,
        *,
        receiver: str = "",
        protocol_receiver: bool = False,
        extern: bool = False,
        static: bool = False,
        protection: Protection = Protection.PUBLIC,
        location: Optional[Location] = None,
        body: Optional[LineRange] = None,
    ) -> None:
        super().__init__(name=name, protection=protection, location=location, body=body)
        self.signature = signature or FunctionType()
        self.receiver = receiver
        self.protocol_receiver = protocol_receiver
        self.extern = extern
        self.static = static

    @property
    def key(self) -> str:
        return f"{self.receiver}{SCOPE_SEPARATOR}{self.name}"


class FileNode(BaseNode, MethodHost):
    """Header file entry; only hosts free functions."""

    kind = "file"

    def __init__(self, refid: str = "", name: str = "", **kwargs) -> None:
        super().__init__(refid=refid, name=name, **kwargs)
        self.functions: List[Function] = []

    def add_method(self, method: Function) -> bool:
        return append_unique_method(self.name, self.functions, method)


__all__ = ["FileNode", "Function", "SCOPE_SEPARATOR"]
