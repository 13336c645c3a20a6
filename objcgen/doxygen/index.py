"""Reader for Doxygen XML output (``index.xml`` plus one file per compound)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from functools import partial
from pathlib import Path
from typing import List, Optional

from ..logging import get_logger
from ..models import (
    CompoundDef,
    IndexEntry,
    LinkedText,
    MemberDef,
    Param,
    SectionDef,
    SourceLocation,
)

INDEX_FILE = "index.xml"

_LOGGER = get_logger("doxygen")


class DoxygenIndexError(RuntimeError):
    """Raised when the index or one of its compound files cannot be read."""


class DoxygenIndex:
    """Entries of one Doxygen XML directory, in index order."""

    def __init__(self, directory: Path, entries: List[IndexEntry]) -> None:
        self.directory = directory
        self._entries = entries

    def entries(self) -> List[IndexEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def open_index(directory: Path | str) -> DoxygenIndex:
    """Parse ``index.xml``; compound files are decoded lazily per entry."""
    root_dir = Path(directory).expanduser()
    index_path = root_dir / INDEX_FILE
    if not index_path.is_file():
        raise DoxygenIndexError(f"No {INDEX_FILE} found in {root_dir}")
    root = _parse(index_path)

    entries: List[IndexEntry] = []
    for compound in root.findall("compound"):
        refid = compound.get("refid", "")
        if not refid:
            continue
        entries.append(
            IndexEntry(
                kind=compound.get("kind", ""),
                refid=refid,
                name=compound.findtext("name", default=""),
                decoder=partial(decode_compound, root_dir, refid),
            )
        )
    _LOGGER.debug("Read %d entries from %s", len(entries), index_path)
    return DoxygenIndex(root_dir, entries)


def decode_compound(directory: Path, refid: str) -> CompoundDef:
    path = directory / f"{refid}.xml"
    if not path.is_file():
        raise DoxygenIndexError(f"Missing compound file {path}")
    root = _parse(path)
    element = root.find("compounddef")
    if element is None:
        raise DoxygenIndexError(f"{path.name} has no compounddef")
    return CompoundDef(
        prot=element.get("prot", "public"),
        language=element.get("language", ""),
        location=_location(element.find("location")),
        sections=[_section(section) for section in element.findall("sectiondef")],
    )


def _parse(path: Path) -> ET.Element:
    try:
        return ET.parse(path).getroot()
    except (ET.ParseError, OSError) as exc:
        raise DoxygenIndexError(f"Failed to read {path}: {exc}") from exc


def _section(element: ET.Element) -> SectionDef:
    return SectionDef(
        kind=element.get("kind", ""),
        members=[_member(member) for member in element.findall("memberdef")],
    )


def _member(element: ET.Element) -> MemberDef:
    return MemberDef(
        name=element.findtext("name", default=""),
        kind=element.get("kind", ""),
        prot=element.get("prot", "public"),
        static=_flag(element.get("static")),
        type=_linked_text(element.find("type")),
        definition=element.findtext("definition", default=""),
        argsstring=element.findtext("argsstring", default=""),
        params=[_param(param) for param in element.findall("param")],
        readable=_flag(element.get("readable")),
        writable=_flag(element.get("writable")),
        location=_location(element.find("location")),
    )


def _param(element: ET.Element) -> Param:
    return Param(
        declname=element.findtext("declname", default=""),
        type=_linked_text(element.find("type")),
        array=element.findtext("array", default=""),
    )


def _linked_text(element: Optional[ET.Element]) -> Optional[LinkedText]:
    if element is None:
        return None
    text = " ".join("".join(element.itertext()).split())
    refs = [ref.get("refid", "") for ref in element.findall("ref") if ref.get("refid")]
    return LinkedText(text=text, refs=refs)


def _location(element: Optional[ET.Element]) -> Optional[SourceLocation]:
    if element is None:
        return None
    return SourceLocation(
        file=element.get("file", ""),
        line=_int(element.get("line"), 0),
        column=_int(element.get("column"), 0),
        body_file=element.get("bodyfile", ""),
        body_start=_int(element.get("bodystart"), 0),
        body_end=_int(element.get("bodyend"), -1),
    )


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "yes"


def _int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


__all__ = ["DoxygenIndex", "DoxygenIndexError", "INDEX_FILE", "decode_compound", "open_index"]
