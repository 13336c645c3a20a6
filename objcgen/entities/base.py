"""Base node and member-hosting capabilities shared by entity kinds."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from ..ir import Type
from ..logging import get_logger
from ..models import LineRange, Location, Protection
from ..names import sanitize_name

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .function import Function

_LOGGER = get_logger("entities")


class BaseNode:
    """Fields common to every declaration known to the store."""

    def __init__(
        self,
        refid: str = "",
        name: str = "",
        protection: Protection = Protection.PUBLIC,
        location: Optional[Location] = None,
        body: Optional[LineRange] = None,
    ) -> None:
        self.refid = refid
        self.name = name
        self.protection = protection
        self.location = location
        self.body = body
        self.host_name = ""

    def ensure_host_name(self) -> bool:
        """Derive the Go-safe name once the source name is known."""
        if not self.name:
            return False
        if not self.host_name:
            self.host_name = sanitize_name(self.name)
        return True

    @property
    def is_public(self) -> bool:
        return self.protection in (Protection.PUBLIC, Protection.PACKAGE)

    def _assign(
        self,
        name: str,
        protection: Protection,
        location: Optional[Location],
        body: Optional[LineRange],
    ) -> None:
        self.name = name
        self.protection = protection
        self.location = location
        self.body = body
        self.host_name = ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(refid={self.refid!r}, name={self.name!r})"


class Entity(BaseNode, Type):
    """A named declaration that can also be used as a type."""

    kind = "entity"

    def __init__(self, refid: str = "") -> None:
        super().__init__(refid=refid)
        self.defined = False

    def define(
        self,
        name: str,
        *,
        protection: Protection = Protection.PUBLIC,
        location: Optional[Location] = None,
        body: Optional[LineRange] = None,
    ) -> None:
        """Fill in the definition while keeping this object as the identity for its refid."""
        self._assign(name, protection, location, body)
        self._reset_members()
        self.defined = True

    def _reset_members(self) -> None:
        pass


@dataclass
class Attribute:
    name: str
    type: Optional[Type]
    protection: Protection = Protection.PUBLIC
    static: bool = False
    location: Optional[Location] = None
    body: Optional[LineRange] = None


@dataclass
class Property:
    name: str
    type: Optional[Type]
    readable: bool = False
    writable: bool = False
    location: Optional[Location] = None
    body: Optional[LineRange] = None


class AttributeHost(ABC):
    """Entity kinds that can own instance or static variables."""

    @abstractmethod
    def add_attribute(self, attribute: Attribute) -> None:
        """Append an attribute in declaration order."""


class PropertyHost(ABC):
    """Entity kinds that can own declared properties."""

    @abstractmethod
    def add_property(self, prop: Property) -> None:
        """Append a property in declaration order."""


class MethodHost(ABC):
    """Entity kinds that can own functions or methods."""

    @abstractmethod
    def add_method(self, method: "Function") -> bool:
        """Attach a method; returns False when the name was already taken."""


def append_unique_method(owner: str, methods: List["Function"], method: "Function") -> bool:
    for existing in methods:
        if existing.name == method.name:
            _LOGGER.warning("Redeclaration of %s.%s ignored; keeping the first", owner, method.name)
            return False
    methods.append(method)
    return True


__all__ = [
    "Attribute",
    "AttributeHost",
    "BaseNode",
    "Entity",
    "MethodHost",
    "Property",
    "PropertyHost",
    "append_unique_method",
]
