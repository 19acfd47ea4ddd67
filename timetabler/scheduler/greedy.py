from __future__ import annotations

import itertools
import logging
import random
from typing import List, Sequence

from ..errors import ConfigError
from ..models.assignment import TimetableEntry
from ..models.classroom import Classroom
from ..models.outcome import (
    INVALID_WEEKLY_HOURS,
    NO_FREE_SLOT,
    NO_QUALIFIED_TEACHER,
    NO_SUITABLE_ROOM,
    SubjectOutcome,
    SubjectStatus,
)
from ..models.period import LUNCH_PERIOD, Timeslot, teaching_slots
from ..models.subject import Subject
from ..models.teacher import Teacher
from ..models.timetable import ScheduleResult, Timetable
from .candidates import eligible_rooms, qualified_teachers, require_inputs, usable_teachers


def _check_max_attempts(max_attempts: int | None) -> None:
    if max_attempts is not None and max_attempts < 0:
        raise ConfigError(f"max_attempts must be >= 0, got {max_attempts}")


def find_placement(
    tt: Timetable,
    subject: Subject,
    teachers: Sequence[Teacher],
    rooms: Sequence[Classroom],
    slots: Sequence[Timeslot],
    rng: random.Random,
    *,
    max_attempts: int | None = None,
    enforce_daily_limit: bool = False,
) -> TimetableEntry | None:
    """First free (teacher, room, slot) triple in a freshly shuffled order.

    Each axis is shuffled independently with ``rng``. At most ``max_attempts``
    triples are inspected (all of them when None or 0). Nothing is committed here.
    """
    _check_max_attempts(max_attempts)
    t_order = list(teachers)
    r_order = list(rooms)
    s_order = list(slots)
    rng.shuffle(t_order)
    rng.shuffle(r_order)
    rng.shuffle(s_order)
    limit = len(t_order) * len(r_order) * len(s_order)
    if max_attempts:
        limit = min(limit, max_attempts)

    for teacher, room, slot in itertools.islice(itertools.product(t_order, r_order, s_order), limit):
        # One lesson per slot across the whole timetable
        if not tt.is_slot_free(slot):
            continue
        if not tt.is_teacher_available(teacher, slot):
            continue
        if not tt.is_classroom_available(room, slot):
            continue
        if enforce_daily_limit and tt.index.teacher_hours_on(teacher, slot.day) >= teacher.max_hours_per_day:
            continue
        return TimetableEntry(teacher, room, slot, subject)
    return None


def schedule_subject(
    tt: Timetable,
    subject: Subject,
    teachers: Sequence[Teacher],
    classrooms: Sequence[Classroom],
    rng: random.Random,
    *,
    max_attempts: int | None = None,
    lunch_period: int = LUNCH_PERIOD,
    enforce_daily_limit: bool = False,
) -> SubjectOutcome:
    logger = logging.getLogger(__name__)
    if subject.weekly_hours <= 0:
        logger.warning(f"Skipping {subject.name}: weekly hours is {subject.weekly_hours}")
        return SubjectOutcome(subject.name, SubjectStatus.UNSCHEDULABLE, 0, 0, INVALID_WEEKLY_HOURS)

    cands = qualified_teachers(subject, teachers)
    if not cands:
        logger.warning(f"No qualified teacher for: {subject.name}")
        return SubjectOutcome(
            subject.name, SubjectStatus.UNSCHEDULABLE, 0, subject.weekly_hours, NO_QUALIFIED_TEACHER
        )
    rooms = eligible_rooms(subject, classrooms)
    if not rooms:
        logger.warning(f"No suitable room for: {subject.name}")
        return SubjectOutcome(
            subject.name, SubjectStatus.UNSCHEDULABLE, 0, subject.weekly_hours, NO_SUITABLE_ROOM
        )

    logger.debug(f"{subject.name}: scheduling with {len(cands)} teachers, {len(rooms)} rooms")
    # Availability moves as earlier subjects commit, so the slot list is rebuilt per subject
    slots = teaching_slots(lunch_period)
    placed = 0
    while placed < subject.weekly_hours:
        entry = find_placement(
            tt,
            subject,
            cands,
            rooms,
            slots,
            rng,
            max_attempts=max_attempts,
            enforce_daily_limit=enforce_daily_limit,
        )
        if entry is None:
            break
        tt.add_entry(entry)
        placed += 1
        logger.info(
            f"Place {subject.name} {entry.timeslot.day} P{entry.timeslot.period} -> "
            f"{entry.teacher.name} @ {entry.classroom.room_id}"
        )

    if placed == subject.weekly_hours:
        return SubjectOutcome(subject.name, SubjectStatus.FULLY_SCHEDULED, placed, subject.weekly_hours)
    logger.warning(f"Could not schedule all hours for: {subject.name} ({placed}/{subject.weekly_hours})")
    if placed == 0:
        return SubjectOutcome(
            subject.name, SubjectStatus.UNSCHEDULABLE, 0, subject.weekly_hours, NO_FREE_SLOT
        )
    return SubjectOutcome(subject.name, SubjectStatus.PARTIALLY_SCHEDULED, placed, subject.weekly_hours)


def generate_timetable(
    teachers: Sequence[Teacher],
    subjects: Sequence[Subject],
    classrooms: Sequence[Classroom],
    *,
    rng: random.Random | None = None,
    max_attempts: int | None = None,
    lunch_period: int = LUNCH_PERIOD,
    enforce_daily_limit: bool = False,
) -> ScheduleResult:
    """Greedy best-effort timetable for ``subjects`` in input order.

    Every subject is visited once and never revisited; hours that cannot be
    placed show up as a shortfall in the returned outcomes. Pass a seeded
    ``random.Random`` for reproducible output.

    Raises EmptyInputError when any of the three lists is empty and
    ConfigError for a negative max_attempts.
    """
    require_inputs(teachers, subjects, classrooms)
    _check_max_attempts(max_attempts)
    if rng is None:
        rng = random.Random()
    audit: List[str] = []
    pool = usable_teachers(teachers, audit)

    tt = Timetable()
    outcomes: List[SubjectOutcome] = []
    for subject in subjects:
        outcome = schedule_subject(
            tt,
            subject,
            pool,
            classrooms,
            rng,
            max_attempts=max_attempts,
            lunch_period=lunch_period,
            enforce_daily_limit=enforce_daily_limit,
        )
        outcomes.append(outcome)
        audit.append(outcome.describe())
    return ScheduleResult(tt, outcomes, audit)
