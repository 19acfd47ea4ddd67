from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import List

from ..models.outcome import SubjectOutcome
from ..models.period import DAYS, LUNCH_PERIOD, PERIOD_LABELS, PERIODS, Timeslot
from ..models.timetable import Timetable

GRID_HEADER = ["Time"] + DAYS
ENTRY_HEADER = ["Day", "Period", "Subject", "Teacher", "Room"]


def _to_text(rows: List[List[str]]) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerows(rows)
    return buf.getvalue()


def grid_csv(tt: Timetable, lunch_period: int = LUNCH_PERIOD) -> str:
    # One row per period, one column per day; cells read "Subject / Teacher / Room"
    rows: List[List[str]] = [GRID_HEADER]
    for p in PERIODS:
        if p == lunch_period:
            rows.append(["Lunch"] + ["" for _ in DAYS])
            continue
        label = PERIOD_LABELS[p] if PERIOD_LABELS[p] != "Lunch" else f"P{p}"
        row = [label]
        for d in DAYS:
            e = tt.get_entry(Timeslot(d, p))
            row.append("" if e is None else f"{e.subject.name} / {e.teacher.name} / {e.classroom.room_id}")
        rows.append(row)
    return _to_text(rows)


def entries_csv(tt: Timetable) -> str:
    rows: List[List[str]] = [ENTRY_HEADER]
    for e in tt.entries():
        rows.append(
            [e.timeslot.day, str(e.timeslot.period), e.subject.name, e.teacher.name, e.classroom.room_id]
        )
    return _to_text(rows)


def outcomes_text(outcomes: List[SubjectOutcome]) -> str:
    return "\n".join(o.describe() for o in outcomes)


def write_csv_blocks(grid: str, entries: str, outputs_dir: Path) -> None:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    with (outputs_dir / "timetable.csv").open("w", encoding="utf-8") as f:
        f.write(grid)
    with (outputs_dir / "entries.csv").open("w", encoding="utf-8") as f:
        f.write(entries)
