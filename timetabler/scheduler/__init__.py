from .candidates import eligible_rooms, qualified_teachers
from .greedy import find_placement, generate_timetable, schedule_subject

__all__ = [
    "qualified_teachers",
    "eligible_rooms",
    "find_placement",
    "schedule_subject",
    "generate_timetable",
]
