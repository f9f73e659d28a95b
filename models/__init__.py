from models.school import School
from models.course import Course
from models.schedule import Schedule, LevelConfigRecord
from models.timeslot import TimeSlot
from models.school_data import SchoolData, IntegrityReport

__all__ = [
    "School",
    "Course",
    "Schedule",
    "LevelConfigRecord",
    "TimeSlot",
    "SchoolData",
    "IntegrityReport",
]
