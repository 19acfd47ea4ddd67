from __future__ import annotations

from dataclasses import dataclass
from typing import List

DAYS: List[str] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
PERIODS: List[int] = list(range(1, 9))
LUNCH_PERIOD = 5

# Display labels for periods 1..8
PERIOD_LABELS = {
    1: "8-9",
    2: "9-10",
    3: "10-11",
    4: "11-12",
    5: "Lunch",
    6: "1-2",
    7: "2-3",
    8: "3-4",
}


@dataclass(frozen=True)
class Timeslot:
    day: str
    period: int

    def sort_key(self) -> tuple[int, int]:
        return (DAYS.index(self.day), self.period)


def teaching_slots(lunch_period: int = LUNCH_PERIOD) -> List[Timeslot]:
    """All teachable slots of the week in (day, period) order."""
    return [Timeslot(d, p) for d in DAYS for p in PERIODS if p != lunch_period]
