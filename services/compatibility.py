"""Veraltete Stundenpläne erkennen, markieren und wiederherstellen."""

import logging
from typing import Iterable, Optional

from pydantic import BaseModel

from analysis.compatibility import CompatibilityResult, check_schedule_compatibility
from analysis.snapshot import (
    ConfigSnapshot, create_config_snapshot, parse_config_snapshot, snapshot_of,
)
from config.errors import NotFoundError
from config.schema import AcademicLevel, ScheduleLevelConfig
from data.store import ScheduleStore
from models.schedule import Schedule
from services._access import SchoolAccess
from services.schedule_config import ScheduleConfigService

logger = logging.getLogger(__name__)


class ScheduleCompatibilityInfo(BaseModel):
    is_deprecated: bool
    has_snapshot: bool
    schedule_snapshot: Optional[ConfigSnapshot] = None
    current_config: ConfigSnapshot
    compatibility: CompatibilityResult


class DeprecatedStats(BaseModel):
    deprecated: int
    active: int
    total: int
    percentage: int


class CompatibilityService:
    def __init__(self, store: ScheduleStore, school_ids: Iterable[str],
                 config_service: ScheduleConfigService) -> None:
        self.store = store
        self.access = SchoolAccess(school_ids)
        self.config_service = config_service

    def _load_schedule(self, schedule_id: str) -> Schedule:
        schedule = self.store.get_schedule(schedule_id)
        if schedule is None:
            raise NotFoundError("Stundenplan", schedule_id)
        self.access.require(schedule.school_id)
        return schedule

    def _level_of(self, schedule: Schedule) -> AcademicLevel:
        course = self.store.get_course(schedule.course_id)
        if course is None:
            raise NotFoundError("Kurs", schedule.course_id)
        return course.academic_level

    # ─── Markieren ───

    def mark_schedules_as_deprecated_for_level(self, school_id: str,
                                               academic_level: AcademicLevel) -> int:
        self.access.require(school_id)
        count = self.store.mark_deprecated(school_id, academic_level)
        logger.info(f"{count} Stundenpläne als veraltet markiert ({school_id}/{academic_level.value})")
        return count

    def on_config_saved(self, previous: Optional[ScheduleLevelConfig],
                        saved: ScheduleLevelConfig) -> None:
        """Hook nach dem Speichern: nur Änderungen an Beginn, Ende oder Blocklänge zählen."""
        if previous is None or previous.is_same_shape(saved):
            return
        self.mark_schedules_as_deprecated_for_level(saved.school_id, saved.academic_level)

    # ─── Abgleichen ───

    def update_schedule_config_snapshot(self, schedule_id: str, start_time: str,
                                        end_time: str, block_duration: int,
                                        academic_level) -> Schedule:
        """Ersetzt den Snapshot und hebt die Veraltet-Markierung auf."""
        self._load_schedule(schedule_id)
        snapshot = create_config_snapshot(start_time, end_time, block_duration, academic_level)
        return self.store.update_schedule(
            schedule_id, config_snapshot=snapshot, is_deprecated=False)

    def accept_current_config(self, schedule_id: str) -> Schedule:
        """Übernimmt das aktuelle Raster des Kurs-Niveaus als neuen Snapshot."""
        schedule = self._load_schedule(schedule_id)
        config = self.config_service.get_config_for_level(
            schedule.school_id, self._level_of(schedule))
        return self.update_schedule_config_snapshot(
            schedule_id, config.start_time, config.end_time,
            config.block_duration, config.academic_level)

    def restore_schedule(self, schedule_id: str) -> Schedule:
        """Hebt die Veraltet-Markierung auf, ohne den Snapshot zu ändern."""
        self._load_schedule(schedule_id)
        return self.store.update_schedule(schedule_id, is_deprecated=False)

    # ─── Auswerten ───

    def get_schedule_compatibility_info(self, schedule_id: str) -> ScheduleCompatibilityInfo:
        schedule = self._load_schedule(schedule_id)
        level = self._level_of(schedule)
        current = snapshot_of(
            self.config_service.get_config_for_level(schedule.school_id, level))
        stored = parse_config_snapshot(schedule.config_snapshot)
        return ScheduleCompatibilityInfo(
            is_deprecated=schedule.is_deprecated,
            has_snapshot=stored is not None,
            schedule_snapshot=stored,
            current_config=current,
            compatibility=check_schedule_compatibility(stored, current),
        )

    def get_deprecated_schedules_stats(self, school_id: str) -> DeprecatedStats:
        self.access.require(school_id)
        active = self.store.find_active_schedules(school_id)
        total = len(active)
        deprecated = sum(1 for s in active if s.is_deprecated)
        # kaufmännisch runden (0,5 → aufrunden)
        percentage = int(deprecated * 100 / total + 0.5) if total > 0 else 0
        return DeprecatedStats(
            deprecated=deprecated,
            active=total - deprecated,
            total=total,
            percentage=percentage,
        )
