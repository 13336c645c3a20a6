"""Run-scoped table of entities keyed by documentation reference id."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..ir import EntityRef
from ..logging import get_logger
from ..names import sanitize_name
from .base import Entity
from .function import FileNode
from .protocol import PROTOCOL_SUFFIX, ProtocolType
from .struct import StructType


class StoreError(RuntimeError):
    """Raised when the entity store is used inconsistently."""


class StoreSealedError(StoreError):
    """Raised when the store is mutated after loading has finished."""


class DuplicateDefinitionError(StoreError):
    """Raised when a reference id is defined twice within one load."""


class EntityStore:
    """Owns every entity of a generation run.

    Entities are created once per reference id. Later definitions fill the
    existing object in place so references handed out earlier stay valid.
    """

    def __init__(self) -> None:
        self._entities: Dict[str, Entity] = {}
        self._files: Dict[str, FileNode] = {}
        self._sealed = False
        self.logger = get_logger("store")

    def seal(self) -> None:
        """Freeze the store for emission; protocols sharing a class name get a distinct Go name."""
        if not self._sealed:
            self._rename_shadowed_protocols()
        self._sealed = True

    def get(self, refid: str) -> Optional[Entity]:
        return self._entities.get(refid)

    def __contains__(self, refid: object) -> bool:
        return refid in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def get_or_create(self, refid: str) -> Entity:
        entity = self._entities.get(refid)
        if entity is None:
            self._check_writable()
            entity = StructType(refid)
            self._entities[refid] = entity
            self.logger.debug("Forward declared %s", refid)
        return entity

    def reference(self, refid: str) -> EntityRef:
        """Return a type that follows whatever entity ends up defined under ``refid``."""
        self.get_or_create(refid)
        return EntityRef(refid, self)

    def define_struct(self, refid: str, *, is_class: bool = False) -> StructType:
        self._check_writable()
        existing = self._entities.get(refid)
        if isinstance(existing, StructType):
            existing.is_class = is_class
            return existing
        if existing is not None:
            self.logger.warning("%s was a %s; redefining it as a struct", refid, existing.kind)
        entity = StructType(refid, is_class=is_class)
        self._entities[refid] = entity
        return entity

    def define_protocol(self, refid: str) -> ProtocolType:
        self._check_writable()
        existing = self._entities.get(refid)
        if isinstance(existing, ProtocolType):
            return existing
        if existing is not None and existing.defined:
            self.logger.warning("%s was a %s; redefining it as a protocol", refid, existing.kind)
        # Placeholders are always structs; EntityRef lookups pick up the replacement.
        entity = ProtocolType(refid)
        self._entities[refid] = entity
        return entity

    def register_file(self, node: FileNode) -> FileNode:
        self._check_writable()
        if node.refid in self._files:
            raise DuplicateDefinitionError(f"Duplicated file definition: {node.refid}")
        self._files[node.refid] = node
        return node

    def lookup_by_name(self, name: str) -> Optional[Entity]:
        """Return the defined entity whose source name is ``name``."""
        for entity in self._entities.values():
            if entity.defined and entity.name == name:
                return entity
        return None

    def index_by_name(self, kind: str | None = None) -> Dict[str, Entity]:
        index: Dict[str, Entity] = {}
        for entity in self._entities.values():
            if entity.defined and (kind is None or entity.kind == kind):
                index.setdefault(entity.name, entity)
        return index

    def entities(self, *, include_placeholders: bool = False) -> List[Entity]:
        selected = [
            entity
            for entity in self._entities.values()
            if include_placeholders or entity.defined
        ]
        return sorted(selected, key=lambda entity: (entity.name, entity.refid))

    def files(self) -> List[FileNode]:
        return sorted(self._files.values(), key=lambda node: (node.name, node.refid))

    def _rename_shadowed_protocols(self) -> None:
        structs = self.index_by_name(StructType.kind)
        for entity in self._entities.values():
            if isinstance(entity, ProtocolType) and entity.defined and entity.name in structs:
                entity.host_name = sanitize_name(entity.name) + PROTOCOL_SUFFIX
                self.logger.debug("Protocol %s shares a class name; emitting it as %s", entity.name, entity.host_name)

    def _check_writable(self) -> None:
        if self._sealed:
            raise StoreSealedError("Entity store is read-only once emission has started")


__all__ = [
    "DuplicateDefinitionError",
    "EntityStore",
    "StoreError",
    "StoreSealedError",
]
