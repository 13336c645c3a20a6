"""Render Go wrappers for loaded entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..entities import Entity, EntityStore, FileNode, Function, Property, ProtocolType, StructType
from ..ir import Type
from ..logging import get_logger
from ..names import go_quote, sanitize_name, to_exported_name, to_go_name
from .outcome import EmitReport, EmitStatus, EntityReport, MemberOutcome

DEFAULT_RUNTIME_IMPORT = "github.com/mkrautz/objc"
DEFAULT_FOUNDATION_IMPORT = "github.com/mkrautz/objc/Foundation"

CONSTRUCTOR = "constructor"
SETTER = "setter"
METHOD = "method"
CLASS_METHOD = "class method"
FUNCTION = "function"

# Receiver of generated Go methods; parameters are renamed away from it.
RECEIVER = "o"


@dataclass
class EmitResult:
    text: str
    report: EmitReport


@dataclass(frozen=True)
class _Argument:
    name: str
    type_name: str
    typ: Type


@dataclass(frozen=True)
class _Registration:
    selector: str
    go_name: str


def setter_selector(name: str) -> str:
    """Selector of the setter the runtime synthesises for a property."""
    return "set" + name[:1].upper() + name[1:] + ":"


def struct_method_name(selector: str) -> str:
    if selector.endswith(":"):
        selector = selector[:-1] + "_"
    return to_exported_name(selector.replace(":", "_"))


def protocol_method_name(selector: str) -> str:
    if selector.endswith(":"):
        selector = selector[:-1]
    return to_exported_name(selector.replace(":", "_"))


class WrapperEmitter:
    """Translates entities into Go source, one member at a time.

    A member whose arguments cannot all be bridged is skipped entirely; an
    unbridgeable return only downgrades the member to an advisory annotation.
    """

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        runtime_import: str = DEFAULT_RUNTIME_IMPORT,
        foundation_import: str = DEFAULT_FOUNDATION_IMPORT,
    ) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self.runtime_import = runtime_import
        self.foundation_import = foundation_import
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._env.filters["go_quote"] = go_quote
        self.logger = get_logger("emitter")

    def emit_file(
        self,
        store: EntityStore,
        package: str,
        *,
        names: Sequence[str] | None = None,
    ) -> EmitResult:
        """Render a complete Go file for the selected entities (all when ``names`` is empty)."""
        store.seal()
        report = EmitReport()
        blocks: List[str] = []
        wanted = set(names) if names else None
        for entity in store.entities():
            if wanted is not None and entity.name not in wanted:
                continue
            block, entity_report = self.emit_entity(entity)
            report.entities.append(entity_report)
            if block:
                blocks.append(block)
        if wanted is None:
            for node in store.files():
                block, file_report = self.emit_functions(node)
                if file_report.outcomes:
                    report.entities.append(file_report)
                if block:
                    blocks.append(block)

        template = self._env.get_template("file.go.j2")
        text = template.render(
            package=package,
            runtime_import=self.runtime_import,
            foundation_import=self.foundation_import,
            blocks=blocks,
        )
        return EmitResult(text=text, report=report)

    def emit_entity(self, entity: Entity) -> Tuple[str, EntityReport]:
        if isinstance(entity, ProtocolType):
            return self.emit_protocol(entity)
        if isinstance(entity, StructType):
            return self.emit_struct(entity)
        report = EntityReport(name=entity.name, kind=entity.kind)
        self.logger.debug("No wrapper for %s entity %s", entity.kind, entity.name)
        return "", report

    def emit_struct(self, entity: StructType) -> Tuple[str, EntityReport]:
        report = EntityReport(name=entity.name, kind=entity.kind)
        if not entity.ensure_host_name():
            return "", report
        go_name = entity.host_name
        report.add(MemberOutcome(member="init", kind=CONSTRUCTOR, status=EmitStatus.EMITTED))

        members: List[str] = []
        for prop in _sorted_by_name(entity.properties):
            outcome = report.add(self._emit_setter(go_name, prop))
            if outcome.text:
                members.append(outcome.text)
        for method in _sorted_by_name(entity.methods):
            if method.static:
                outcome = self._emit_class_method(entity, method)
            else:
                outcome = self._emit_method(go_name, method)
            report.add(outcome)
            if outcome.text:
                members.append(outcome.text)
        self._log_report(report)

        template = self._env.get_template("struct.go.j2")
        text = template.render(
            comment=_header_comment(entity),
            name=entity.name,
            go_name=go_name,
            members=members,
        )
        return text, report

    def emit_protocol(self, entity: ProtocolType) -> Tuple[str, EntityReport]:
        report = EntityReport(name=entity.name, kind=entity.kind)
        if not entity.ensure_host_name():
            return "", report
        go_name = entity.host_name

        interface_lines: List[str] = []
        members: List[str] = []
        registrations: List[_Registration] = []
        for prop in _sorted_by_name(entity.properties):
            report.add(
                MemberOutcome(
                    member=prop.name,
                    kind=SETTER,
                    status=EmitStatus.SKIPPED,
                    detail="protocol properties are not bridged",
                )
            )
        # Selectors differing only by a trailing colon would map to one Go name.
        method_names: Set[str] = {"SetObjcRef"}
        for method in _sorted_by_name(entity.methods):
            if method.static:
                report.add(
                    MemberOutcome(
                        member=method.name,
                        kind=CLASS_METHOD,
                        status=EmitStatus.SKIPPED,
                        detail="class methods cannot be implemented on a protocol",
                    )
                )
                continue
            name = _unique(protocol_method_name(method.name), method_names)
            outcome, lines, impl = self._emit_protocol_method(go_name, name, method)
            report.add(outcome)
            if outcome.status is EmitStatus.SKIPPED:
                continue
            interface_lines.extend(lines)
            members.append(impl)
            registrations.append(_Registration(method.name, name))
        self._log_report(report)

        template = self._env.get_template("protocol.go.j2")
        text = template.render(
            comment=_header_comment(entity),
            name=entity.name,
            go_name=go_name,
            interface_lines=interface_lines,
            members=members,
            registrations=registrations,
        )
        return text, report

    def emit_functions(self, node: FileNode) -> Tuple[str, EntityReport]:
        """Render stubs for the free functions declared in a header."""
        report = EntityReport(name=node.name, kind=node.kind)
        blocks: List[str] = []
        for function in _sorted_by_name(node.functions):
            outcome = report.add(self._emit_function(function))
            if outcome.text:
                blocks.append(outcome.text)
        return "\n".join(blocks), report

    def _emit_setter(self, go_name: str, prop: Property) -> MemberOutcome:
        if not prop.writable:
            return MemberOutcome(prop.name, SETTER, EmitStatus.SKIPPED, "read-only property")
        if prop.type is None:
            return MemberOutcome(prop.name, SETTER, EmitStatus.SKIPPED, "property has no type")
        type_name, ok = prop.type.host_type_name()
        if not ok:
            return MemberOutcome(prop.name, SETTER, EmitStatus.SKIPPED, f"unrepresentable type {type_name}")
        cast, ok = prop.type.cast_to_native("v")
        if not ok:
            return MemberOutcome(prop.name, SETTER, EmitStatus.SKIPPED, f"no native cast for {type_name}")
        text = (
            f"func ({RECEIVER} {go_name}) Set{to_exported_name(prop.name)}(v {type_name}) {{\n"
            f"\t{RECEIVER}.SendMsg({go_quote(setter_selector(prop.name))}, {cast})\n"
            "}\n"
        )
        return MemberOutcome(prop.name, SETTER, EmitStatus.EMITTED, text=text)

    def _emit_method(self, go_name: str, method: Function) -> MemberOutcome:
        return self._emit_call(
            method,
            kind=METHOD,
            header=f"func ({RECEIVER} {go_name}) {struct_method_name(method.name)}",
            target=RECEIVER,
        )

    def _emit_class_method(self, entity: StructType, method: Function) -> MemberOutcome:
        return self._emit_call(
            method,
            kind=CLASS_METHOD,
            header=f"func {entity.host_name}{struct_method_name(method.name)}",
            target=f"objc.GetClass({go_quote(entity.name)})",
        )

    def _emit_call(self, method: Function, *, kind: str, header: str, target: str) -> MemberOutcome:
        if not method.is_public:
            return MemberOutcome(method.name, kind, EmitStatus.SKIPPED, f"{method.protection.value} member")
        arguments, failure = _bridge_arguments(method)
        if failure:
            return MemberOutcome(method.name, kind, EmitStatus.SKIPPED, failure)

        casts = [go_quote(method.name)]
        for argument in arguments:
            cast, _ = argument.typ.cast_to_native(argument.name)
            casts.append(cast)
        call = f"{target}.SendMsg({', '.join(casts)})"

        status = EmitStatus.EMITTED
        detail = ""
        result = ""
        body = f"\t{call}"
        ret = method.signature.ret
        if ret is not None:
            type_name, ok = ret.host_type_name()
            if not ok:
                status = EmitStatus.ADVISORY
                detail = f"unrepresentable return {type_name}"
                body = f"\t{call}\n\t// FIXME: return {type_name}"
            else:
                cast, ok = ret.cast_to_host(call)
                if ok:
                    result = f" {type_name}"
                    body = f"\treturn {cast}"
                else:
                    status = EmitStatus.ADVISORY
                    detail = f"no host cast for return {type_name}"
                    result = f" /* TODO: {type_name} */"

        params = ", ".join(f"{argument.name} {argument.type_name}" for argument in arguments)
        text = f"{header}({params}){result} {{\n{body}\n}}\n"
        return MemberOutcome(method.name, kind, status, detail, text)

    def _emit_protocol_method(
        self, go_name: str, name: str, method: Function
    ) -> Tuple[MemberOutcome, List[str], str]:
        if not method.is_public:
            return (
                MemberOutcome(method.name, METHOD, EmitStatus.SKIPPED, f"{method.protection.value} member"),
                [],
                "",
            )
        arguments, failure = _bridge_arguments(method)
        if not failure:
            for argument in arguments:
                _, ok = argument.typ.cast_to_host(argument.name)
                if not ok:
                    failure = f"argument {argument.name} cannot be bridged back as {argument.type_name}"
                    break
        if failure:
            return MemberOutcome(method.name, METHOD, EmitStatus.SKIPPED, failure), [], ""

        status = EmitStatus.EMITTED
        detail = ""
        lines: List[str] = []
        result = ""
        bridged_return: Optional[Type] = None
        ret = method.signature.ret
        if ret is not None:
            type_name, ok = ret.host_type_name()
            if not ok:
                status = EmitStatus.ADVISORY
                detail = f"unrepresentable return {type_name}"
                lines.append(f"\t// FIXME: return {type_name}")
            else:
                _, ok = ret.cast_to_native("v")
                if ok:
                    result = f" {type_name}"
                    bridged_return = ret
                else:
                    status = EmitStatus.ADVISORY
                    detail = f"no native cast for return {type_name}"
                    result = f" /* TODO: {type_name} */"

        params = ", ".join(f"{argument.name} {argument.type_name}" for argument in arguments)
        lines.append(f"\t{name}({params}){result}")

        host_args = []
        for argument in arguments:
            cast, _ = argument.typ.cast_to_host(argument.name)
            host_args.append(cast)
        call = f"{RECEIVER}.v.{name}({', '.join(host_args)})"
        native_params = ", ".join(f"{argument.name} objc.Object" for argument in arguments)
        if bridged_return is not None:
            cast, _ = bridged_return.cast_to_native(call)
            impl = f"func ({RECEIVER} go{go_name}) {name}({native_params}) objc.Object {{\n\treturn {cast}\n}}\n"
        else:
            impl = f"func ({RECEIVER} go{go_name}) {name}({native_params}) {{\n\t{call}\n}}\n"
        return MemberOutcome(method.name, METHOD, status, detail, impl), lines, impl

    def _emit_function(self, function: Function) -> MemberOutcome:
        if not function.is_public:
            return MemberOutcome(function.name, FUNCTION, EmitStatus.SKIPPED, f"{function.protection.value} member")
        rendered, ok = function.signature.render_args()
        if not ok:
            return MemberOutcome(function.name, FUNCTION, EmitStatus.SKIPPED, f"unrepresentable signature {rendered}")
        text = f"func {sanitize_name(function.name)}{rendered} {{\n\tpanic(\"not implemented\")\n}}\n"
        return MemberOutcome(function.name, FUNCTION, EmitStatus.EMITTED, text=text)

    def _log_report(self, report: EntityReport) -> None:
        for outcome in report.outcomes:
            if outcome.status is EmitStatus.SKIPPED:
                self.logger.debug("Skipped %s %s.%s: %s", outcome.kind, report.name, outcome.member, outcome.detail)
            elif outcome.status is EmitStatus.ADVISORY:
                self.logger.debug("Advisory %s %s.%s: %s", outcome.kind, report.name, outcome.member, outcome.detail)


def _bridge_arguments(method: Function) -> Tuple[List[_Argument], str]:
    arguments: List[_Argument] = []
    taken = {RECEIVER}
    for index, arg in enumerate(method.signature.args):
        name = _unique(to_go_name(arg.name, exported=False) or f"arg{index}", taken)
        if arg.type is None:
            return [], f"argument {name} has no type"
        type_name, ok = arg.type.host_type_name()
        if not ok:
            return [], f"argument {name} has unrepresentable type {type_name}"
        _, ok = arg.type.cast_to_native(name)
        if not ok:
            return [], f"argument {name} of type {type_name} has no native cast"
        arguments.append(_Argument(name=name, type_name=type_name, typ=arg.type))
    return arguments, ""


def _unique(name: str, taken: Set[str]) -> str:
    while name in taken:
        name += "_"
    taken.add(name)
    return name


def _header_comment(entity: Entity) -> str:
    comment = f"// {entity.name}"
    if entity.location is not None:
        comment += f" ({entity.location})"
    return comment


def _sorted_by_name(items: Iterable) -> list:
    return sorted(items, key=lambda item: item.name)


__all__ = [
    "DEFAULT_FOUNDATION_IMPORT",
    "DEFAULT_RUNTIME_IMPORT",
    "EmitResult",
    "WrapperEmitter",
    "protocol_method_name",
    "setter_selector",
    "struct_method_name",
]
