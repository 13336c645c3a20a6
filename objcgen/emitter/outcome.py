"""Per-member emission outcomes and their aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List


class EmitStatus(str, Enum):
    EMITTED = "emitted"
    ADVISORY = "advisory"
    SKIPPED = "skipped"


@dataclass
class MemberOutcome:
    """Result of translating one member; ``text`` is empty for skipped members."""

    member: str
    kind: str
    status: EmitStatus
    detail: str = ""
    text: str = ""


@dataclass
class EntityReport:
    name: str
    kind: str
    outcomes: List[MemberOutcome] = field(default_factory=list)

    def add(self, outcome: MemberOutcome) -> MemberOutcome:
        self.outcomes.append(outcome)
        return outcome

    def count(self, status: EmitStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    def with_status(self, status: EmitStatus) -> List[MemberOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is status]


@dataclass
class EmitReport:
    """Run-wide view of what was emitted, annotated or skipped."""

    entities: List[EntityReport] = field(default_factory=list)

    def __iter__(self) -> Iterator[EntityReport]:
        return iter(self.entities)

    def summary(self) -> Dict[str, int]:
        totals = {status.value: 0 for status in EmitStatus}
        for report in self.entities:
            for status in EmitStatus:
                totals[status.value] += report.count(status)
        totals["entities"] = len(self.entities)
        return totals

    def format_lines(self) -> List[str]:
        lines: List[str] = []
        for report in self.entities:
            lines.append(
                f"{report.name} ({report.kind}): "
                f"{report.count(EmitStatus.EMITTED)} emitted, "
                f"{report.count(EmitStatus.ADVISORY)} advisory, "
                f"{report.count(EmitStatus.SKIPPED)} skipped"
            )
            for outcome in report.outcomes:
                if outcome.status is EmitStatus.EMITTED:
                    continue
                lines.append(f"  {outcome.status.value}: {outcome.kind} {outcome.member}: {outcome.detail}")
        return lines


__all__ = ["EmitReport", "EmitStatus", "EntityReport", "MemberOutcome"]
