"""In-memory documentation entries for loader and emitter tests."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from objcgen.models import CompoundDef, IndexEntry, LinkedText, MemberDef, Param, SectionDef, SourceLocation


def text(value: str) -> LinkedText:
    return LinkedText(text=value)


def ref(refid: str, value: str = "") -> LinkedText:
    return LinkedText(text=value, refs=[refid])


def method(
    name: str,
    receiver: str,
    ret: LinkedText | None = None,
    params: Sequence[Param] = (),
    *,
    prot: str = "public",
    static: bool = False,
) -> MemberDef:
    return MemberDef(
        name=name,
        kind="function",
        prot=prot,
        static=static,
        type=ret if ret is not None else text("void"),
        definition=f"void {receiver}::{name}" if receiver else f"void {name}",
        params=list(params),
    )


def param(declname: str, typ: LinkedText) -> Param:
    return Param(declname=declname, type=typ)


def prop(name: str, typ: LinkedText, *, writable: bool = True) -> MemberDef:
    return MemberDef(name=name, kind="property", type=typ, readable=True, writable=writable)


def attribute(name: str, typ: LinkedText, argsstring: str = "") -> MemberDef:
    return MemberDef(name=name, kind="variable", type=typ, argsstring=argsstring)


def section(kind: str, members: Iterable[MemberDef]) -> SectionDef:
    return SectionDef(kind=kind, members=list(members))


def entry(kind: str, refid: str, name: str, sections: Iterable[SectionDef] = ()) -> IndexEntry:
    compound = CompoundDef(
        location=SourceLocation(file=f"{name}.h", line=10, column=1),
        sections=list(sections),
    )
    return IndexEntry(kind=kind, refid=refid, name=name, decoder=lambda: compound)


def entries(*items: IndexEntry) -> List[IndexEntry]:
    return list(items)


__all__ = ["attribute", "entries", "entry", "method", "param", "prop", "ref", "section", "text"]
