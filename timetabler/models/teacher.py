from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Teacher:
    name: str
    subjects: Tuple[str, ...]
    max_hours_per_day: int = 5

    def __post_init__(self) -> None:
        # Accept any iterable of subject names; keep order, drop repeats
        object.__setattr__(self, "subjects", tuple(dict.fromkeys(self.subjects)))
