from __future__ import annotations

from collections import Counter

from timetabler.config import SolverConfig
from timetabler.models import Classroom, Subject, SubjectStatus, Teacher
from timetabler.models.outcome import NO_SUITABLE_ROOM
from timetabler.solvers import solve_cpsat

CFG = SolverConfig(timeout_sec=10, workers=1)


def test_cpsat_fills_small_school() -> None:
    teachers = [Teacher("A", ("Math",)), Teacher("B", ("Chemistry",))]
    subjects = [Subject("Math", 3), Subject("Chemistry", 2, requires_lab=True), Subject("Biology", 1, requires_lab=True)]
    result = solve_cpsat(teachers, subjects, [Classroom("R1")], config=CFG)
    assert result.outcome_for("Math").status == SubjectStatus.FULLY_SCHEDULED
    assert result.outcome_for("Chemistry").reason == NO_SUITABLE_ROOM
    assert result.outcome_for("Biology").status == SubjectStatus.UNSCHEDULABLE
    entries = result.timetable.entries()
    assert len(entries) == 3
    assert len({e.timeslot for e in entries}) == 3


def test_cpsat_finds_assignment_greedy_can_miss() -> None:
    # Only B can teach Physics; giving Math to A every day keeps B free for Physics
    teachers = [Teacher("A", ("Math",), 1), Teacher("B", ("Math", "Physics"), 1)]
    subjects = [Subject("Math", 5), Subject("Physics", 5)]
    result = solve_cpsat(teachers, subjects, [Classroom("R1")], config=CFG, enforce_daily_limit=True)
    assert [o.status for o in result.outcomes] == [SubjectStatus.FULLY_SCHEDULED] * 2
    per_day = Counter((e.teacher.name, e.timeslot.day) for e in result.timetable.entries())
    assert max(per_day.values()) == 1
    assert all(e.teacher.name == "B" for e in result.timetable.entries_for_subject("Physics"))


def test_cpsat_caps_at_available_slots() -> None:
    result = solve_cpsat([Teacher("A", ("Math",))], [Subject("Math", 40)], [Classroom("R1")], config=CFG)
    o = result.outcomes[0]
    assert o.status == SubjectStatus.PARTIALLY_SCHEDULED
    assert o.hours_scheduled == 35
    assert o.shortfall == 5
