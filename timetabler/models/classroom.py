from dataclasses import dataclass


@dataclass(frozen=True)
class Classroom:
    room_id: str
    is_lab: bool = False
    capacity: int = 30  # not used by any placement rule yet
