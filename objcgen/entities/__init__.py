"""Entity model: declarations resolved from the documentation index."""

from __future__ import annotations

from .base import (
    Attribute,
    AttributeHost,
    BaseNode,
    Entity,
    MethodHost,
    Property,
    PropertyHost,
)
from .function import FileNode, Function
from .protocol import ProtocolType
from .store import DuplicateDefinitionError, EntityStore, StoreError, StoreSealedError
from .struct import StructType

__all__ = [
    "Attribute",
    "AttributeHost",
    "BaseNode",
    "DuplicateDefinitionError",
    "Entity",
    "EntityStore",
    "FileNode",
    "Function",
    "MethodHost",
    "Property",
    "PropertyHost",
    "ProtocolType",
    "StoreError",
    "StoreSealedError",
    "StructType",
]
