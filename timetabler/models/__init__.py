# Re-export common types
from .assignment import TimetableEntry
from .classroom import Classroom
from .outcome import SubjectOutcome, SubjectStatus
from .period import DAYS, LUNCH_PERIOD, PERIODS, Timeslot, teaching_slots
from .subject import Subject
from .teacher import Teacher
from .timetable import ScheduleResult, Timetable

__all__ = [
    "Teacher",
    "Subject",
    "Classroom",
    "Timeslot",
    "TimetableEntry",
    "Timetable",
    "ScheduleResult",
    "SubjectOutcome",
    "SubjectStatus",
    "DAYS",
    "PERIODS",
    "LUNCH_PERIOD",
    "teaching_slots",
]
