from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SubjectStatus(str, Enum):
    PENDING = "PENDING"
    SCHEDULING = "SCHEDULING"
    FULLY_SCHEDULED = "FULLY_SCHEDULED"
    PARTIALLY_SCHEDULED = "PARTIALLY_SCHEDULED"
    UNSCHEDULABLE = "UNSCHEDULABLE"


NO_QUALIFIED_TEACHER = "no qualified teacher"
NO_SUITABLE_ROOM = "no suitable room"
NO_FREE_SLOT = "no conflict-free slot"
INVALID_WEEKLY_HOURS = "invalid weekly hours"


@dataclass(frozen=True)
class SubjectOutcome:
    subject: str
    status: SubjectStatus
    hours_scheduled: int
    hours_required: int
    reason: str | None = None

    @property
    def shortfall(self) -> int:
        return max(0, self.hours_required - self.hours_scheduled)

    def describe(self) -> str:
        text = f"{self.subject}: {self.status.value} ({self.hours_scheduled}/{self.hours_required})"
        if self.reason:
            text += f" - {self.reason}"
        return text
