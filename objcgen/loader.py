"""Populate the entity store from documentation index entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Set

from .entities import (
    Attribute,
    AttributeHost,
    BaseNode,
    DuplicateDefinitionError,
    EntityStore,
    FileNode,
    Function,
    MethodHost,
    Property,
    PropertyHost,
    ProtocolType,
    StructType,
)
from .entities.function import SCOPE_SEPARATOR
from .entities.protocol import PROTOCOL_MARKER, strip_protocol_marker
from .ir import Array, ExternWrapper, FuncArg, FunctionType, Type, Unknown, describe
from .logging import get_logger
from .models import CompoundDef, IndexEntry, LinkedText, MemberDef, Protection, SectionDef
from .resolver import SignatureError, SignatureResolver

STRUCT_KINDS = frozenset({"struct", "class", "interface"})
PROTOCOL_KINDS = frozenset({"protocol"})
FILE_KINDS = frozenset({"file"})

ATTRIBUTE = "attribute"
PROPERTY = "property"
FUNCTION = "function"

_CAPABILITIES: Dict[str, type] = {
    ATTRIBUTE: AttributeHost,
    PROPERTY: PropertyHost,
    FUNCTION: MethodHost,
}


@dataclass(frozen=True)
class SectionKind:
    """Member category, visibility and storage implied by a section tag."""

    category: str
    protection: Protection = Protection.PUBLIC
    static: bool = False


def _build_section_kinds() -> Dict[str, SectionKind]:
    kinds: Dict[str, SectionKind] = {
        "property": SectionKind(PROPERTY),
        "func": SectionKind(FUNCTION),
    }
    for protection in (Protection.PUBLIC, Protection.PROTECTED, Protection.PRIVATE):
        prefix = protection.value
        kinds[f"{prefix}-attrib"] = SectionKind(ATTRIBUTE, protection)
        kinds[f"{prefix}-static-attrib"] = SectionKind(ATTRIBUTE, protection, static=True)
        kinds[f"{prefix}-func"] = SectionKind(FUNCTION, protection)
        kinds[f"{prefix}-static-func"] = SectionKind(FUNCTION, protection, static=True)
    return kinds


SECTION_KINDS: Dict[str, SectionKind] = _build_section_kinds()


class LoadError(RuntimeError):
    """Raised when an entry cannot be loaded into the store."""


class UnsupportedSectionError(LoadError):
    """Raised when a section asks an entity to host members it cannot hold."""


@dataclass
class AttachSummary:
    attached: int = 0
    unresolved: int = 0
    duplicates: int = 0


def receiver_from_definition(definition: str) -> str:
    """Return the owning type named before ``::`` in a qualified definition."""
    index = definition.find(SCOPE_SEPARATOR)
    if index < 0:
        return ""
    owner = strip_protocol_marker(definition[:index])
    parts = owner.split()
    return parts[-1] if parts else ""


def receiver_is_protocol(definition: str) -> bool:
    """True when the qualified owner carries the protocol marker, as in ``NSObject-p::hash``."""
    index = definition.find(SCOPE_SEPARATOR)
    return index >= 0 and definition[:index].rstrip().endswith(PROTOCOL_MARKER)


class EntityLoader:
    """Loads entries into an :class:`EntityStore` in two passes.

    ``load_entries`` builds entities and collects methods whose receiver is not
    the entry being loaded; ``attach_methods`` then binds those methods once
    every entry is known.
    """

    def __init__(self, store: EntityStore, resolver: SignatureResolver | None = None) -> None:
        self.store = store
        self.resolver = resolver or SignatureResolver(store)
        self.logger = get_logger("loader")
        self._pending: List[Function] = []
        self._functions: Dict[str, Function] = {}
        self._handlers: Dict[str, Callable[[IndexEntry], None]] = {}
        for kind in STRUCT_KINDS:
            self._handlers[kind] = self._load_struct
        for kind in PROTOCOL_KINDS:
            self._handlers[kind] = self._load_protocol
        for kind in FILE_KINDS:
            self._handlers[kind] = self._load_file

    @property
    def pending(self) -> List[Function]:
        return list(self._pending)

    def load(self, entries: Iterable[IndexEntry]) -> AttachSummary:
        """Load every entry and attach deferred methods."""
        self.load_entries(entries)
        return self.attach_methods()

    def load_entries(self, entries: Iterable[IndexEntry]) -> int:
        """First pass: define entities in index order; returns the number loaded."""
        seen: Set[str] = set()
        loaded = 0
        for entry in entries:
            handler = self._handlers.get(entry.kind)
            if handler is None:
                self.logger.debug("Ignoring %s entry %s", entry.kind, entry.name)
                continue
            if entry.refid in seen:
                raise DuplicateDefinitionError(f"Duplicate definition of {entry.name} ({entry.refid})")
            seen.add(entry.refid)
            handler(entry)
            loaded += 1
        self.logger.debug("Loaded %d entries; %d methods pending", loaded, len(self._pending))
        return loaded

    def attach_methods(self) -> AttachSummary:
        """Second pass: bind pending methods to their receivers by name."""
        summary = AttachSummary()
        structs = self.store.index_by_name(StructType.kind)
        protocols = self.store.index_by_name(ProtocolType.kind)
        for method in self._pending:
            # A class and a protocol may share a name; the marker on the definition picks one.
            preferred, fallback = (protocols, structs) if method.protocol_receiver else (structs, protocols)
            target = preferred.get(method.receiver)
            if target is None:
                target = fallback.get(method.receiver)
            if target is None:
                summary.unresolved += 1
                self.logger.debug("No receiver %s for method %s", method.receiver, method.name)
                continue
            if not isinstance(target, MethodHost):
                summary.unresolved += 1
                self.logger.warning("%s cannot host method %s", target.name, method.name)
                continue
            if target.add_method(method):
                summary.attached += 1
            else:
                summary.duplicates += 1
        self._pending = []
        return summary

    def function_by_name(self, key: str) -> Optional[Function]:
        """Look up a loaded function by ``receiver::name``."""
        return self._functions.get(key)

    def load_compound(self, host: BaseNode, definition: CompoundDef) -> None:
        """Populate ``host`` from every section of a decoded definition."""
        for section in definition.sections:
            kind = SECTION_KINDS.get(section.kind)
            if kind is None:
                self.logger.debug("Unhandled section %s in %s", section.kind, host.name)
                continue
            capability = _CAPABILITIES[kind.category]
            if not isinstance(host, capability):
                raise UnsupportedSectionError(
                    f"{type(host).__name__} {host.name or host.refid} cannot host {kind.category}s "
                    f"(section {section.kind})"
                )
            if kind.category == ATTRIBUTE:
                self._load_attributes(host, section, kind)
            elif kind.category == PROPERTY:
                self._load_properties(host, section)
            else:
                self._load_functions(host, section, kind)

    def _load_struct(self, entry: IndexEntry) -> None:
        definition = entry.decode()
        entity = self.store.define_struct(entry.refid, is_class=entry.kind == "class")
        self._define(entity, entry, definition)
        self.load_compound(entity, definition)

    def _load_protocol(self, entry: IndexEntry) -> None:
        definition = entry.decode()
        entity = self.store.define_protocol(entry.refid)
        self._define(entity, entry, definition)
        self.load_compound(entity, definition)

    def _load_file(self, entry: IndexEntry) -> None:
        definition = entry.decode()
        location = definition.location
        node = FileNode(
            refid=entry.refid,
            name=entry.name,
            protection=Protection.parse(definition.prot),
            location=location.as_location() if location else None,
            body=location.as_line_range() if location else None,
        )
        self.store.register_file(node)
        self.load_compound(node, definition)

    def _define(self, entity, entry: IndexEntry, definition: CompoundDef) -> None:
        location = definition.location
        entity.define(
            entry.name,
            protection=Protection.parse(definition.prot),
            location=location.as_location() if location else None,
            body=location.as_line_range() if location else None,
        )

    def _load_attributes(self, host: AttributeHost, section: SectionDef, kind: SectionKind) -> None:
        for member in section.members:
            if member.kind != "variable":
                self.logger.debug("Unexpected attribute kind %s for %s", member.kind, member.name)
            location = member.location
            host.add_attribute(
                Attribute(
                    name=member.name,
                    type=self._member_type(member),
                    protection=Protection.parse(member.prot),
                    static=kind.static,
                    location=location.as_location() if location else None,
                    body=location.as_line_range() if location else None,
                )
            )

    def _load_properties(self, host: PropertyHost, section: SectionDef) -> None:
        for member in section.members:
            if member.kind != "property":
                self.logger.debug("Unexpected property kind %s for %s", member.kind, member.name)
            location = member.location
            host.add_property(
                Property(
                    name=member.name,
                    type=self._member_type(member),
                    readable=member.readable,
                    writable=member.writable,
                    location=location.as_location() if location else None,
                    body=location.as_line_range() if location else None,
                )
            )

    def _load_functions(self, host: MethodHost, section: SectionDef, kind: SectionKind) -> None:
        host_name = getattr(host, "name", "")
        for member in section.members:
            if member.kind != "function":
                self.logger.debug("Unhandled function kind %s for %s", member.kind, member.name)
                continue
            function = self._build_function(member, kind)
            self._functions.setdefault(function.key, function)
            if not function.receiver or (
                function.receiver == host_name
                and (isinstance(host, ProtocolType) or not function.protocol_receiver)
            ):
                host.add_method(function)
            else:
                self._pending.append(function)

    def _build_function(self, member: MemberDef, kind: SectionKind) -> Function:
        location = member.location
        ret = self._linked_type(member.type, member.name)
        extern = False
        if isinstance(ret, ExternWrapper):
            ret = ret.elem
            extern = True

        args: List[FuncArg] = []
        for index, param in enumerate(member.params):
            arg_type = self._linked_type(param.type, f"{member.name} argument {index}")
            if param.array and arg_type is not None:
                arg_type = Array(arg_type, param.array.strip().strip("[]").strip())
            args.append(FuncArg(name=param.declname, type=arg_type))

        return Function(
            member.name,
            FunctionType(ret=ret, args=tuple(args)),
            receiver=receiver_from_definition(member.definition),
            protocol_receiver=receiver_is_protocol(member.definition),
            extern=extern,
            static=kind.static or member.static,
            protection=Protection.parse(member.prot or kind.protection.value),
            location=location.as_location() if location else None,
            body=location.as_line_range() if location else None,
        )

    def _member_type(self, member: MemberDef) -> Optional[Type]:
        try:
            return self.resolver.resolve_member(member)
        except SignatureError as exc:
            self.logger.warning("Cannot parse type of %s: %s", member.name, exc)
            return Unknown(raw=member.type.text if member.type else "", comment=str(exc))

    def _linked_type(self, linked: Optional[LinkedText], context: str) -> Optional[Type]:
        try:
            typ = self.resolver.resolve_linked(linked)
        except SignatureError as exc:
            self.logger.warning("Cannot parse type of %s: %s", context, exc)
            return Unknown(raw=linked.text if linked else "", comment=str(exc))
        self.logger.debug("Resolved %s as %s", context, describe(typ))
        return typ


__all__ = [
    "AttachSummary",
    "EntityLoader",
    "LoadError",
    "SECTION_KINDS",
    "SectionKind",
    "UnsupportedSectionError",
    "receiver_from_definition",
    "receiver_is_protocol",
]
