"""
Per-phase results for steps that mix best-effort and hard-failure work.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class OutcomeKind(Enum):
    SUCCEEDED = "succeeded"
    SUPPRESSED = "suppressed"
    FAILED = "failed"


@dataclass(frozen=True)
class PhaseOutcome:
    phase: str
    kind: OutcomeKind
    error: Optional[Exception] = None

    @classmethod
    def succeeded(cls, phase: str) -> "PhaseOutcome":
        return cls(phase, OutcomeKind.SUCCEEDED)

    @classmethod
    def suppressed(cls, phase: str, error: Exception) -> "PhaseOutcome":
        return cls(phase, OutcomeKind.SUPPRESSED, error)

    @classmethod
    def failed(cls, phase: str, error: Exception) -> "PhaseOutcome":
        return cls(phase, OutcomeKind.FAILED, error)

    @property
    def is_failure(self) -> bool:
        return self.kind is OutcomeKind.FAILED

    def raise_for_failure(self):
        if self.is_failure and self.error is not None:
            raise self.error


def first_failure(outcomes: Iterable[PhaseOutcome]) -> Optional[PhaseOutcome]:
    for outcome in outcomes:
        if outcome.is_failure:
            return outcome
    return None
