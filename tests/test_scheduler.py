from __future__ import annotations

import random
from collections import Counter

import pytest

from timetabler.errors import ConfigError, EmptyInputError
from timetabler.models import Classroom, Subject, SubjectStatus, Teacher, Timeslot
from timetabler.models.outcome import (
    INVALID_WEEKLY_HOURS,
    NO_FREE_SLOT,
    NO_QUALIFIED_TEACHER,
    NO_SUITABLE_ROOM,
)
from timetabler.models.timetable import Timetable
from timetabler.scheduler import find_placement, generate_timetable


def assert_hard_rules(result) -> None:
    entries = result.timetable.entries()
    teacher_slots = Counter((e.teacher.name, e.timeslot) for e in entries)
    room_slots = Counter((e.classroom.room_id, e.timeslot) for e in entries)
    assert all(c == 1 for c in teacher_slots.values())
    assert all(c == 1 for c in room_slots.values())
    for e in entries:
        assert e.subject.name in e.teacher.subjects
        assert not e.subject.requires_lab or e.classroom.is_lab
    placed = Counter(e.subject.name for e in entries)
    for o in result.outcomes:
        assert placed.get(o.subject, 0) == o.hours_scheduled
        assert o.hours_scheduled <= max(0, o.hours_required)


def school() -> tuple[list, list, list]:
    teachers = [
        Teacher("Alice", ("Math", "Physics"), 5),
        Teacher("Bob", ("Science", "Chemistry"), 4),
        Teacher("Carol", ("History", "English"), 5),
    ]
    subjects = [
        Subject("Math", 5),
        Subject("Science", 4, requires_lab=True),
        Subject("History", 3),
        Subject("English", 5),
        Subject("Physics", 3, requires_lab=True),
    ]
    rooms = [Classroom("R101"), Classroom("LAB1", is_lab=True, capacity=24)]
    return teachers, subjects, rooms


def test_single_teacher_single_room_math() -> None:
    result = generate_timetable(
        [Teacher("Ama", ("Math",), 5)], [Subject("Math", 5)], [Classroom("R1")], rng=random.Random(1)
    )
    entries = result.timetable.entries()
    assert len(entries) == 5
    assert {e.teacher.name for e in entries} == {"Ama"}
    assert {e.classroom.room_id for e in entries} == {"R1"}
    assert len({e.timeslot for e in entries}) == 5
    assert result.outcomes[0].status == SubjectStatus.FULLY_SCHEDULED
    assert_hard_rules(result)


def test_lab_subject_without_lab_room_does_not_stop_the_run() -> None:
    teachers = [Teacher("Kofi", ("Chemistry", "Math"))]
    subjects = [Subject("Chemistry", 3, requires_lab=True), Subject("Math", 4)]
    result = generate_timetable(teachers, subjects, [Classroom("R1")], rng=random.Random(3))
    chem, math = result.outcomes
    assert chem.status == SubjectStatus.UNSCHEDULABLE
    assert chem.reason == NO_SUITABLE_ROOM
    assert chem.shortfall == 3
    assert result.timetable.entries_for_subject("Chemistry") == []
    assert math.status == SubjectStatus.FULLY_SCHEDULED
    assert len(result.timetable.entries_for_subject("Math")) == 4


def test_subject_without_qualified_teacher() -> None:
    result = generate_timetable(
        [Teacher("Kofi", ("Math",))],
        [Subject("French", 2), Subject("Math", 2)],
        [Classroom("R1")],
        rng=random.Random(0),
    )
    french = result.outcome_for("French")
    assert french.status == SubjectStatus.UNSCHEDULABLE
    assert french.reason == NO_QUALIFIED_TEACHER
    assert result.timetable.entries_for_subject("French") == []
    assert result.outcome_for("Math").status == SubjectStatus.FULLY_SCHEDULED
    assert [o.subject for o in result.unmet()] == ["French"]


def test_disjoint_teachers_both_fully_scheduled() -> None:
    teachers = [Teacher("A", ("Math",)), Teacher("B", ("History",))]
    subjects = [Subject("Math", 5), Subject("History", 5)]
    rooms = [Classroom("R1"), Classroom("R2")]
    result = generate_timetable(teachers, subjects, rooms, rng=random.Random(11))
    assert [o.status for o in result.outcomes] == [SubjectStatus.FULLY_SCHEDULED] * 2
    assert len(result.timetable) == 10
    assert_hard_rules(result)


def test_more_hours_than_slots_reports_exact_shortfall() -> None:
    result = generate_timetable(
        [Teacher("A", ("Math",))], [Subject("Math", 40)], [Classroom("R1")], rng=random.Random(5)
    )
    o = result.outcomes[0]
    assert o.status == SubjectStatus.PARTIALLY_SCHEDULED
    assert o.hours_scheduled == 35
    assert o.shortfall == o.hours_required - o.hours_scheduled == 5
    assert_hard_rules(result)


def test_later_subject_starved_by_earlier_one() -> None:
    teachers = [Teacher("A", ("Math", "Art"))]
    subjects = [Subject("Math", 35), Subject("Art", 2)]
    result = generate_timetable(teachers, subjects, [Classroom("R1")], rng=random.Random(2))
    art = result.outcome_for("Art")
    assert result.outcome_for("Math").status == SubjectStatus.FULLY_SCHEDULED
    assert art.status == SubjectStatus.UNSCHEDULABLE
    assert art.reason == NO_FREE_SLOT
    assert art.shortfall == 2


def test_same_seed_same_timetable() -> None:
    teachers, subjects, rooms = school()
    a = generate_timetable(teachers, subjects, rooms, rng=random.Random(42))
    b = generate_timetable(teachers, subjects, rooms, rng=random.Random(42))
    assert a.timetable.entries() == b.timetable.entries()
    assert a.outcomes == b.outcomes


def test_school_sample_respects_hard_rules() -> None:
    teachers, subjects, rooms = school()
    for seed in range(5):
        result = generate_timetable(teachers, subjects, rooms, rng=random.Random(seed))
        assert_hard_rules(result)
        assert [o.subject for o in result.outcomes] == [s.name for s in subjects]
        # 20 hours fit in 35 slots with a qualified teacher and room for each subject
        assert all(o.status == SubjectStatus.FULLY_SCHEDULED for o in result.outcomes)


@pytest.mark.parametrize("missing", ["teachers", "subjects", "classrooms"])
def test_empty_input_is_rejected(missing: str) -> None:
    kwargs = {
        "teachers": [Teacher("A", ("Math",))],
        "subjects": [Subject("Math", 1)],
        "classrooms": [Classroom("R1")],
    }
    kwargs[missing] = []
    with pytest.raises(EmptyInputError):
        generate_timetable(kwargs["teachers"], kwargs["subjects"], kwargs["classrooms"], rng=random.Random(0))


def test_invalid_values_are_skipped_not_fatal() -> None:
    teachers = [Teacher("Zero", ("Math",), 0), Teacher("Ok", ("History",), 3)]
    subjects = [Subject("Math", 2), Subject("Empty", 0), Subject("History", 2)]
    result = generate_timetable(teachers, subjects, [Classroom("R1")], rng=random.Random(9))
    assert result.outcome_for("Math").reason == NO_QUALIFIED_TEACHER
    empty = result.outcome_for("Empty")
    assert empty.status == SubjectStatus.UNSCHEDULABLE
    assert empty.reason == INVALID_WEEKLY_HOURS
    assert result.outcome_for("History").status == SubjectStatus.FULLY_SCHEDULED
    assert any("Zero" in line for line in result.audit)


def test_daily_limit_is_enforced_when_enabled() -> None:
    teachers = [Teacher("A", ("Math",), 1)]
    subjects = [Subject("Math", 10)]
    limited = generate_timetable(
        teachers, subjects, [Classroom("R1")], rng=random.Random(4), enforce_daily_limit=True
    )
    assert limited.outcomes[0].hours_scheduled == 5
    assert Counter(e.timeslot.day for e in limited.timetable.entries()) == Counter(
        {d: 1 for d in ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]}
    )
    free = generate_timetable(teachers, subjects, [Classroom("R1")], rng=random.Random(4))
    assert free.outcomes[0].hours_scheduled == 10


def test_max_attempts_bounds_the_scan() -> None:
    tt = Timetable()
    slots = [Timeslot("Monday", 1), Timeslot("Monday", 2)]
    teacher, room, subj = Teacher("A", ("Math",)), Classroom("R1"), Subject("Math", 2)
    first = find_placement(tt, subj, [teacher], [room], slots, random.Random(0), max_attempts=1)
    assert first is not None
    tt.add_entry(first)
    # The only remaining free slot can be missed when a single triple is inspected
    results = {
        find_placement(tt, subj, [teacher], [room], slots, random.Random(seed), max_attempts=1) is None
        for seed in range(20)
    }
    assert results == {True, False}
    assert find_placement(tt, subj, [teacher], [room], slots, random.Random(0)) is not None


def test_find_placement_does_not_commit() -> None:
    tt = Timetable()
    entry = find_placement(
        tt, Subject("Math", 1), [Teacher("A", ("Math",))], [Classroom("R1")],
        [Timeslot("Monday", 1)], random.Random(0),
    )
    assert entry is not None
    assert len(tt) == 0
    assert tt.is_slot_free(Timeslot("Monday", 1))


def test_negative_max_attempts_is_rejected() -> None:
    with pytest.raises(ConfigError, match="max_attempts"):
        generate_timetable(
            [Teacher("A", ("Math",))], [Subject("Math", 1)], [Classroom("R1")],
            rng=random.Random(0), max_attempts=-1,
        )
    with pytest.raises(ConfigError):
        find_placement(
            Timetable(), Subject("Math", 1), [Teacher("A", ("Math",))], [Classroom("R1")],
            [Timeslot("Monday", 1)], random.Random(0), max_attempts=-3,
        )


class CountingRandom(random.Random):
    def __init__(self, seed: int) -> None:
        super().__init__(seed)
        self.shuffles: list[list] = []

    def shuffle(self, x) -> None:
        super().shuffle(x)
        self.shuffles.append(list(x))


def test_order_is_redrawn_for_every_hour() -> None:
    teachers = [Teacher(n, ("Math",)) for n in "ABCDEF"]
    rng = CountingRandom(3)
    result = generate_timetable(teachers, [Subject("Math", 4)], [Classroom("R1")], rng=rng)
    assert result.outcomes[0].status == SubjectStatus.FULLY_SCHEDULED
    # teacher, room and slot orders are drawn once per placed hour
    assert len(rng.shuffles) == 3 * 4
    teacher_orders = [tuple(t.name for t in rng.shuffles[i]) for i in range(0, 12, 3)]
    assert len(set(teacher_orders)) > 1


def test_unmet_includes_invalid_hours_subject() -> None:
    result = generate_timetable(
        [Teacher("A", ("Math",))], [Subject("Math", 2), Subject("Empty", 0)], [Classroom("R1")],
        rng=random.Random(1),
    )
    unmet = result.unmet()
    assert [o.subject for o in unmet] == ["Empty"]
    assert unmet[0].shortfall == 0
