from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

from ..models.subject import Subject
from ..models.timetable import Timetable


def validate_all(tt: Timetable, subjects: Sequence[Subject]) -> Dict[str, object]:
    report: Dict[str, object] = {}
    entries = tt.entries()

    # Collisions, recomputed from the entries rather than the availability index
    teacher_slots: Counter = Counter()
    room_slots: Counter = Counter()
    for e in entries:
        teacher_slots[(e.teacher.name, e.timeslot)] += 1
        room_slots[(e.classroom.room_id, e.timeslot)] += 1
    report["clash_count"] = sum(1 for c in teacher_slots.values() if c > 1) + sum(
        1 for c in room_slots.values() if c > 1
    )

    qualification: List[str] = []
    lab: List[str] = []
    for e in entries:
        where = f"{e.timeslot.day} P{e.timeslot.period}"
        if e.subject.name not in e.teacher.subjects:
            qualification.append(f"{where}: {e.teacher.name} cannot teach {e.subject.name}")
        if e.subject.requires_lab and not e.classroom.is_lab:
            lab.append(f"{where}: {e.subject.name} needs a lab, got {e.classroom.room_id}")
    report["qualification_violations"] = qualification
    report["lab_violations"] = lab

    placed = Counter(e.subject.name for e in entries)
    over: Dict[str, int] = {}
    unmet: Dict[str, int] = {}
    for s in subjects:
        have = placed.get(s.name, 0)
        if have > max(0, s.weekly_hours):
            over[s.name] = have - s.weekly_hours
        elif have < s.weekly_hours:
            unmet[s.name] = s.weekly_hours - have
    report["over_quota"] = over
    report["unmet_weekly_hours"] = unmet
    report["entry_count"] = len(entries)
    return report


def is_clean(report: Dict[str, object]) -> bool:
    """True when no hard rule is broken; unmet hours do not count."""
    return (
        report.get("clash_count") == 0
        and not report.get("qualification_violations")
        and not report.get("lab_violations")
        and not report.get("over_quota")
    )
