from dataclasses import dataclass


@dataclass(frozen=True)
class Subject:
    name: str
    weekly_hours: int
    requires_lab: bool = False
