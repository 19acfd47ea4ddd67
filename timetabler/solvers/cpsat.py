from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from ortools.sat.python import cp_model

from ..config import SolverConfig
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
from ..scheduler.candidates import eligible_rooms, qualified_teachers, require_inputs, usable_teachers

# (subject index, teacher name, room id, slot)
Key = Tuple[int, str, str, Timeslot]


def solve_cpsat(
    teachers: Sequence[Teacher],
    subjects: Sequence[Subject],
    classrooms: Sequence[Classroom],
    *,
    config: SolverConfig | None = None,
    lunch_period: int = LUNCH_PERIOD,
    enforce_daily_limit: bool = False,
) -> ScheduleResult:
    """Place as many required hours as possible with CP-SAT.

    Same hard rules as the greedy engine: qualified teacher, lab-capable room
    when needed, at most one lesson per slot. Unlike the greedy engine it
    can move earlier subjects to make room for later ones.
    """
    logger = logging.getLogger(__name__)
    cfg = config or SolverConfig()
    require_inputs(teachers, subjects, classrooms)
    audit: List[str] = []
    pool = usable_teachers(teachers, audit)
    slots = teaching_slots(lunch_period)

    teacher_by_name = {t.name: t for t in pool}
    room_by_id = {r.room_id: r for r in classrooms}

    model = cp_model.CpModel()
    X: Dict[Key, cp_model.IntVar] = {}
    early: Dict[int, SubjectOutcome] = {}

    for i, subject in enumerate(subjects):
        if subject.weekly_hours <= 0:
            early[i] = SubjectOutcome(subject.name, SubjectStatus.UNSCHEDULABLE, 0, 0, INVALID_WEEKLY_HOURS)
            continue
        cands = qualified_teachers(subject, pool)
        rooms = eligible_rooms(subject, classrooms)
        if not cands or not rooms:
            reason = NO_QUALIFIED_TEACHER if not cands else NO_SUITABLE_ROOM
            early[i] = SubjectOutcome(
                subject.name, SubjectStatus.UNSCHEDULABLE, 0, subject.weekly_hours, reason
            )
            continue
        terms = []
        for t in cands:
            for r in rooms:
                for s in slots:
                    var = model.NewBoolVar(f"x[{i},{t.name},{r.room_id},{s.day},{s.period}]")
                    X[(i, t.name, r.room_id, s)] = var
                    terms.append(var)
        model.Add(sum(terms) <= subject.weekly_hours)

    by_slot: Dict[Timeslot, List[cp_model.IntVar]] = defaultdict(list)
    by_teacher_day: Dict[Tuple[str, str], List[cp_model.IntVar]] = defaultdict(list)
    for (i, tname, rid, s), var in X.items():
        by_slot[s].append(var)
        by_teacher_day[(tname, s.day)].append(var)
    # One lesson per slot; teacher and room double-bookings are covered by this
    for s, terms in by_slot.items():
        model.Add(sum(terms) <= 1)
    if enforce_daily_limit:
        for (tname, day), terms in by_teacher_day.items():
            model.Add(sum(terms) <= teacher_by_name[tname].max_hours_per_day)

    model.Maximize(sum(X.values()))

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = float(cfg.timeout_sec)
    solver.parameters.num_workers = int(cfg.workers)
    status = solver.Solve(model)
    audit.append(f"CP-SAT status={solver.StatusName(status)} vars={len(X)}")
    logger.info(f"CP-SAT status={solver.StatusName(status)} vars={len(X)}")
    solved = status in (cp_model.OPTIMAL, cp_model.FEASIBLE)

    tt = Timetable()
    placed: Dict[int, int] = defaultdict(int)
    if solved:
        for (i, tname, rid, s), var in sorted(X.items(), key=lambda kv: (kv[0][0], kv[0][3].sort_key())):
            if solver.Value(var) == 1:
                tt.add_entry(TimetableEntry(teacher_by_name[tname], room_by_id[rid], s, subjects[i]))
                placed[i] += 1
    else:
        logger.error(f"CP-SAT returned no solution ({solver.StatusName(status)})")

    outcomes: List[SubjectOutcome] = []
    for i, subject in enumerate(subjects):
        if i in early:
            outcome = early[i]
        elif placed[i] == subject.weekly_hours:
            outcome = SubjectOutcome(subject.name, SubjectStatus.FULLY_SCHEDULED, placed[i], subject.weekly_hours)
        elif placed[i] > 0:
            outcome = SubjectOutcome(
                subject.name, SubjectStatus.PARTIALLY_SCHEDULED, placed[i], subject.weekly_hours
            )
        else:
            outcome = SubjectOutcome(
                subject.name, SubjectStatus.UNSCHEDULABLE, 0, subject.weekly_hours, NO_FREE_SLOT
            )
        outcomes.append(outcome)
        audit.append(outcome.describe())
    return ScheduleResult(tt, outcomes, audit)
