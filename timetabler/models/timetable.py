from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from ..data.registry import AvailabilityIndex
from ..errors import SlotTakenError
from .assignment import TimetableEntry
from .classroom import Classroom
from .outcome import SubjectOutcome, SubjectStatus
from .period import Timeslot
from .teacher import Teacher


@dataclass
class Timetable:
    cells: Dict[Timeslot, TimetableEntry] = field(default_factory=dict)
    index: AvailabilityIndex = field(default_factory=AvailabilityIndex)

    def add_entry(self, entry: TimetableEntry) -> None:
        if entry.timeslot in self.cells:
            raise SlotTakenError(f"{entry.timeslot.day} period {entry.timeslot.period} is already taken")
        self.cells[entry.timeslot] = entry
        self.index.book(entry)

    def get_entry(self, slot: Timeslot) -> TimetableEntry | None:
        return self.cells.get(slot)

    def is_slot_free(self, slot: Timeslot) -> bool:
        return slot not in self.cells

    def is_teacher_available(self, teacher: Teacher, slot: Timeslot) -> bool:
        return self.index.teacher_available(teacher, slot)

    def is_classroom_available(self, classroom: Classroom, slot: Timeslot) -> bool:
        return self.index.classroom_available(classroom, slot)

    def entries(self) -> List[TimetableEntry]:
        return sorted(self.cells.values(), key=lambda e: e.timeslot.sort_key())

    def entries_for_subject(self, name: str) -> List[TimetableEntry]:
        return [e for e in self.entries() if e.subject.name == name]

    def __iter__(self) -> Iterator[TimetableEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self.cells)


@dataclass
class ScheduleResult:
    timetable: Timetable
    outcomes: List[SubjectOutcome]
    audit: List[str] = field(default_factory=list)

    def outcome_for(self, subject: str) -> SubjectOutcome | None:
        for o in self.outcomes:
            if o.subject == subject:
                return o
        return None

    def unmet(self) -> List[SubjectOutcome]:
        return [o for o in self.outcomes if o.status != SubjectStatus.FULLY_SCHEDULED]
