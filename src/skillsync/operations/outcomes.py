"""
Per-item outcomes and operation reports.

Each loop iteration of an operation (one submodule, one vendor, one skill
pair) produces an Outcome. Operations only raise for their designated fatal
step; everything else is recorded here and summarized at the end.
"""

from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "OperationError",
    "OperationReport",
    "Outcome",
    "OutcomeStatus",
]


class OperationError(Exception):
    """A fatal step failed and the whole operation was aborted."""


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome:
    """Result of processing one item."""

    item: str
    status: OutcomeStatus
    reason: str = ""

    @classmethod
    def success(cls, item: str) -> "Outcome":
        return cls(item, OutcomeStatus.SUCCESS)

    @classmethod
    def skipped(cls, item: str, reason: str) -> "Outcome":
        return cls(item, OutcomeStatus.SKIPPED, reason)

    @classmethod
    def failed(cls, item: str, reason: str) -> "Outcome":
        return cls(item, OutcomeStatus.FAILED, reason)


@dataclass
class OperationReport:
    """Outcomes collected during one operation run."""

    outcomes: list[Outcome] = field(default_factory=list)

    def add(self, outcome: Outcome) -> Outcome:
        self.outcomes.append(outcome)
        return outcome

    def _with_status(self, status: OutcomeStatus) -> list[Outcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def succeeded(self) -> list[Outcome]:
        return self._with_status(OutcomeStatus.SUCCESS)

    @property
    def skipped(self) -> list[Outcome]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> list[Outcome]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed
