"""Anlegen konkreter Stundenpläne mit Snapshot des geltenden Tagesrasters."""

import logging
from datetime import datetime, timezone
from typing import Iterable

from analysis.snapshot import snapshot_of
from config.errors import NotFoundError
from data.store import ScheduleStore, new_id
from models.schedule import Schedule
from services._access import SchoolAccess
from services.schedule_config import ScheduleConfigService

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, store: ScheduleStore, school_ids: Iterable[str],
                 config_service: ScheduleConfigService) -> None:
        self.store = store
        self.access = SchoolAccess(school_ids)
        self.config_service = config_service

    def create_schedule(self, course_id: str, name: str = "") -> Schedule:
        course = self.store.get_course(course_id)
        if course is None:
            raise NotFoundError("Kurs", course_id)
        self.access.require(course.school_id)
        config = self.config_service.get_config_for_level(
            course.school_id, course.academic_level)
        schedule = Schedule(
            id=new_id(),
            school_id=course.school_id,
            course_id=course.id,
            name=name or f"Stundenplan {course.name}",
            config_snapshot=snapshot_of(config).to_text(),
            created_at=datetime.now(timezone.utc),
        )
        logger.info(f"Stundenplan {schedule.id} für Kurs {course.id} angelegt")
        return self.store.add_schedule(schedule)
