from __future__ import annotations

import logging
from typing import List, Sequence

from ..errors import EmptyInputError
from ..models.classroom import Classroom
from ..models.subject import Subject
from ..models.teacher import Teacher


def qualified_teachers(subject: Subject, teachers: Sequence[Teacher]) -> List[Teacher]:
    # Input order is kept; an empty list means nobody can teach the subject
    return [t for t in teachers if subject.name in t.subjects]


def eligible_rooms(subject: Subject, classrooms: Sequence[Classroom]) -> List[Classroom]:
    return [r for r in classrooms if not subject.requires_lab or r.is_lab]


def require_inputs(
    teachers: Sequence[Teacher], subjects: Sequence[Subject], classrooms: Sequence[Classroom]
) -> None:
    missing = [
        label
        for label, items in (("teacher", teachers), ("subject", subjects), ("classroom", classrooms))
        if not items
    ]
    if missing:
        raise EmptyInputError(
            "Please add at least one " + ", ".join(missing) + " before generating a timetable"
        )


def usable_teachers(teachers: Sequence[Teacher], audit: List[str]) -> List[Teacher]:
    """Teachers with a positive daily limit; the rest are left out of the run."""
    logger = logging.getLogger(__name__)
    out: List[Teacher] = []
    for t in teachers:
        if t.max_hours_per_day <= 0:
            logger.warning(f"Excluding {t.name}: max hours/day is {t.max_hours_per_day}")
            audit.append(f"Excluded teacher {t.name} (max hours/day {t.max_hours_per_day}).")
            continue
        out.append(t)
    return out
