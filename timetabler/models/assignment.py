from dataclasses import dataclass

from .classroom import Classroom
from .period import Timeslot
from .subject import Subject
from .teacher import Teacher


@dataclass(frozen=True)
class TimetableEntry:
    teacher: Teacher
    classroom: Classroom
    timeslot: Timeslot
    subject: Subject
