"""Data models describing documentation index entries consumed by the generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional


class Protection(str, Enum):
    """Visibility of a declaration as reported by the documentation index."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    PACKAGE = "package"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Protection":
        if not value:
            return cls.PUBLIC
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.PUBLIC


@dataclass(frozen=True)
class Location:
    """Declaration position inside a header."""

    file: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        if self.column <= 1:
            return f"{self.file}:{self.line}"
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class LineRange:
    """Line span of a declaration body."""

    file: str
    start_line: int
    end_line: int


@dataclass
class SourceLocation:
    """Raw location record as it appears in the documentation index."""

    file: str = ""
    line: int = 0
    column: int = 0
    body_file: str = ""
    body_start: int = 0
    body_end: int = -1

    def as_location(self) -> Optional[Location]:
        if not self.file:
            return None
        return Location(file=self.file, line=self.line, column=self.column)

    def as_line_range(self) -> Optional[LineRange]:
        if not self.body_file or self.body_end < 0:
            return None
        return LineRange(file=self.body_file, start_line=self.body_start, end_line=self.body_end)


@dataclass
class LinkedText:
    """Type text that may embed cross-reference tokens to other entries."""

    text: str = ""
    refs: List[str] = field(default_factory=list)


@dataclass
class Param:
    """Function parameter declaration."""

    declname: str = ""
    type: Optional[LinkedText] = None
    array: str = ""


@dataclass
class MemberDef:
    """A single member (variable, property, function) inside a section."""

    name: str
    kind: str
    prot: str = "public"
    static: bool = False
    type: Optional[LinkedText] = None
    definition: str = ""
    argsstring: str = ""
    params: List[Param] = field(default_factory=list)
    readable: bool = False
    writable: bool = False
    location: Optional[SourceLocation] = None


@dataclass
class SectionDef:
    """Ordered group of members sharing a section kind such as ``public-func``."""

    kind: str
    members: List[MemberDef] = field(default_factory=list)


@dataclass
class CompoundDef:
    """Decoded definition of an index entry."""

    prot: str = "public"
    language: str = ""
    location: Optional[SourceLocation] = None
    sections: List[SectionDef] = field(default_factory=list)


@dataclass
class IndexEntry:
    """Entry of the documentation index; ``decode`` loads the full definition lazily."""

    kind: str
    refid: str
    name: str
    decoder: Callable[[], CompoundDef] = field(repr=False, compare=False, default=CompoundDef)

    def decode(self) -> CompoundDef:
        return self.decoder()


__all__ = [
    "CompoundDef",
    "IndexEntry",
    "LineRange",
    "LinkedText",
    "Location",
    "MemberDef",
    "Param",
    "Protection",
    "SectionDef",
    "SourceLocation",
]
