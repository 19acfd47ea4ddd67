from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from ..errors import InputError
from ..models.classroom import Classroom
from ..models.subject import Subject
from ..models.teacher import Teacher


@dataclass
class LoadedData:
    teachers: List[Teacher]
    subjects: List[Subject]
    classrooms: List[Classroom]


def load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _name(record: Dict[str, Any], key: str, what: str) -> str:
    value = str(record.get(key) or "").strip()
    if not value:
        raise InputError(f"{what} {key} cannot be empty")
    return value


def _positive_int(record: Dict[str, Any], key: str, what: str, default: int | None = None) -> int:
    raw = record.get(key, default)
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise InputError(f"{what}: please enter a valid number for {key} (got {raw!r})") from None
    if value <= 0:
        raise InputError(f"{what}: {key} must be positive (got {value})")
    return value


def _flag(record: Dict[str, Any], key: str, what: str) -> bool:
    raw = record.get(key, False)
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in ("true", "yes"):
        return True
    if text in ("false", "no", ""):
        return False
    raise InputError(f"{what}: {key} must be true or false (got {raw!r})")


def _unique(names: List[str], what: str) -> None:
    seen: set[str] = set()
    for n in names:
        if n in seen:
            raise InputError(f"{what} {n!r} already exists")
        seen.add(n)


def parse_teachers(data: Dict[str, Any]) -> List[Teacher]:
    out: List[Teacher] = []
    for t in data.get("teachers", []):
        name = _name(t, "name", "Teacher")
        subjects = [str(s).strip() for s in t.get("subjects", []) if str(s).strip()]
        if not subjects:
            raise InputError(f"Teacher {name}: please select at least one subject")
        out.append(Teacher(name, tuple(subjects), _positive_int(t, "max_hours_per_day", f"Teacher {name}", 5)))
    _unique([t.name for t in out], "Teacher")
    return out


def parse_subjects(data: Dict[str, Any]) -> List[Subject]:
    out: List[Subject] = []
    for s in data.get("subjects", []):
        name = _name(s, "name", "Subject")
        hours = _positive_int(s, "weekly_hours", f"Subject {name}", 3)
        out.append(Subject(name, hours, _flag(s, "requires_lab", f"Subject {name}")))
    _unique([s.name for s in out], "Subject")
    return out


def parse_classrooms(data: Dict[str, Any]) -> List[Classroom]:
    out: List[Classroom] = []
    for r in data.get("classrooms", []):
        room_id = _name(r, "room_id", "Classroom")
        capacity = _positive_int(r, "capacity", f"Classroom {room_id}", 30)
        out.append(Classroom(room_id, _flag(r, "is_lab", f"Classroom {room_id}"), capacity))
    _unique([r.room_id for r in out], "Classroom")
    return out


def load_data(root: Path) -> LoadedData:
    data_dir = root / "data"
    return LoadedData(
        teachers=parse_teachers(load_json(data_dir / "teachers.json")),
        subjects=parse_subjects(load_json(data_dir / "subjects.json")),
        classrooms=parse_classrooms(load_json(data_dir / "classrooms.json")),
    )
