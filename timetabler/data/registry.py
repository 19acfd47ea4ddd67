from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Dict, Set, Tuple

if TYPE_CHECKING:
    from ..models.assignment import TimetableEntry
    from ..models.classroom import Classroom
    from ..models.period import Timeslot
    from ..models.teacher import Teacher


class AvailabilityIndex:
    """Booked slots per teacher and per classroom.

    Only committed entries are recorded. Lookups are set membership tests and
    never modify the index.
    """

    def __init__(self) -> None:
        self.teacher_busy: Dict[str, Set[Timeslot]] = {}
        self.room_busy: Dict[str, Set[Timeslot]] = {}
        self.daily_load: Counter[Tuple[str, str]] = Counter()

    def teacher_available(self, teacher: Teacher, slot: Timeslot) -> bool:
        return slot not in self.teacher_busy.get(teacher.name, ())

    def classroom_available(self, classroom: Classroom, slot: Timeslot) -> bool:
        return slot not in self.room_busy.get(classroom.room_id, ())

    def teacher_hours_on(self, teacher: Teacher, day: str) -> int:
        return self.daily_load.get((teacher.name, day), 0)

    def book(self, entry: TimetableEntry) -> None:
        slot = entry.timeslot
        self.teacher_busy.setdefault(entry.teacher.name, set()).add(slot)
        self.room_busy.setdefault(entry.classroom.room_id, set()).add(slot)
        self.daily_load[(entry.teacher.name, slot.day)] += 1
