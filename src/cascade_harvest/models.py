"""
Domain models (dataclasses) for option harvesting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True, slots=True)
class Option:
    """
    One entry of a selection widget.

    ``value`` is the enumeration key, ``label`` the display text. ``element``
    is the live handle the option was read from; it does not take part in
    equality or repr.
    """
    value: str
    label: str = ""
    element: Any = field(default=None, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.value


class ExpansionStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    TIMEOUT = "timeout"


@dataclass(frozen=True, slots=True)
class ExpansionOutcome:
    """Result of expanding one parent option."""
    parent: str
    status: ExpansionStatus
    children: tuple[str, ...] = ()

    @classmethod
    def from_children(cls, parent: str, children: list[str]) -> ExpansionOutcome:
        status = ExpansionStatus.OK if children else ExpansionStatus.EMPTY
        return cls(parent=parent, status=status, children=tuple(children))

    @classmethod
    def timed_out(cls, parent: str) -> ExpansionOutcome:
        return cls(parent=parent, status=ExpansionStatus.TIMEOUT)


class CollectorState(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    DONE = "done"


@dataclass(slots=True)
class EnumerationReport:
    """
    Final product of a dependent enumeration.

    ``mapping`` holds parent value -> child values in parent document order;
    ``outcomes`` keeps one entry per expanded parent, in call order.
    """
    mapping: dict[str, list[str]] = field(default_factory=dict)
    outcomes: list[ExpansionOutcome] = field(default_factory=list)
    skipped: int = 0
    steps: int = 0

    @property
    def expanded(self) -> int:
        return len(self.outcomes)

    @property
    def empty(self) -> int:
        return sum(1 for o in self.outcomes if o.status is ExpansionStatus.EMPTY)

    @property
    def timed_out(self) -> int:
        return sum(1 for o in self.outcomes if o.status is ExpansionStatus.TIMEOUT)

    def stats(self) -> dict[str, int]:
        return {
            "steps": self.steps,
            "expanded": self.expanded,
            "skipped": self.skipped,
            "empty": self.empty,
            "timed_out": self.timed_out,
        }
