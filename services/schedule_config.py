"""Tagesraster pro Schule × Niveau lesen und speichern.

Beim Speichern werden registrierte Hooks mit (vorherige, gespeicherte)
Konfiguration aufgerufen; so bleibt die Kompatibilitätsprüfung unabhängig
vom Speicherpfad.
"""

import logging
from typing import Callable, Iterable, Literal, Optional

from pydantic import BaseModel

from config.defaults import default_level_config
from config.errors import ConfigValidationError, NotFoundError
from config.schema import AcademicLevel, ScheduleLevelConfig
from data.store import ScheduleStore
from models.school import validate_level_is_active
from services._access import SchoolAccess
from timegrid.arithmetic import time_to_minutes
from timegrid.generator import calculate_blocks_for_config

logger = logging.getLogger(__name__)

PostSaveHook = Callable[[Optional[ScheduleLevelConfig], ScheduleLevelConfig], None]


class ScheduleRange(BaseModel):
    """Gesamtspanne aller Tagesraster einer Schule."""

    start_time: str
    end_time: str
    block_duration: int
    source: Literal["level_configs", "legacy"]
    details: list[tuple[str, str, int]] = []


class ScheduleConfigService:
    """Lesen und Speichern von Tagesrastern mit Zugriffs- und Regelprüfung."""

    def __init__(self, store: ScheduleStore, school_ids: Iterable[str]) -> None:
        self.store = store
        self.access = SchoolAccess(school_ids)
        self._hooks: list[PostSaveHook] = []

    def add_post_save_hook(self, hook: PostSaveHook) -> None:
        self._hooks.append(hook)

    # ─── Lesen ───

    def get_config_for_level(self, school_id: str,
                             academic_level: AcademicLevel) -> ScheduleLevelConfig:
        """Gespeichertes Raster oder das Default-Raster des Niveaus (ohne zu speichern)."""
        self.access.require(school_id)
        config = self.store.get_level_config(school_id, academic_level)
        if config is None:
            logger.debug(f"Kein Raster für {school_id}/{academic_level.value}, verwende Default")
            return default_level_config(academic_level, school_id)
        return config

    def get_config_for_course(self, course_id: str) -> ScheduleLevelConfig:
        course = self.store.get_course(course_id)
        if course is None:
            raise NotFoundError("Kurs", course_id)
        return self.get_config_for_level(course.school_id, course.academic_level)

    def get_all_configs_for_school(self, school_id: str) -> list[ScheduleLevelConfig]:
        """Nur gespeicherte Raster, keine Defaults."""
        self.access.require(school_id)
        return self.store.list_level_configs(school_id)

    def get_widest_config_for_school(self, school_id: str) -> ScheduleLevelConfig:
        """Raster mit dem frühesten Beginn (bei Gleichstand dem spätesten Ende).

        Für Ansichten über alle Niveaus hinweg, z.B. den Plan einer Lehrkraft.
        Ohne gespeicherte Raster gilt das MIDDLE-Default der Schule.
        """
        self.access.require(school_id)
        configs = self.store.list_level_configs(school_id)
        if not configs:
            return default_level_config(AcademicLevel.MIDDLE, school_id)
        return min(configs, key=lambda c: (time_to_minutes(c.start_time),
                                           -time_to_minutes(c.end_time)))

    def get_school_schedule_range(self, school_id: str) -> ScheduleRange:
        """Frühester Beginn, spätestes Ende und kleinste Blocklänge aller Niveaus.

        Ohne gespeicherte Raster gelten die Altfelder der Schule.
        """
        self.access.require(school_id)
        configs = self.store.list_level_configs(school_id)
        if not configs:
            school = self.store.get_school(school_id)
            if school is None:
                raise NotFoundError("Schule", school_id)
            return ScheduleRange(
                start_time=school.schedule_start_time,
                end_time=school.schedule_end_time,
                block_duration=school.block_duration,
                source="legacy",
            )
        return ScheduleRange(
            start_time=min((c.start_time for c in configs), key=time_to_minutes),
            end_time=max((c.end_time for c in configs), key=time_to_minutes),
            block_duration=min(c.block_duration for c in configs),
            source="level_configs",
            details=[(c.start_time, c.end_time, c.block_duration) for c in configs],
        )

    # ─── Speichern ───

    def save_config_for_level(self, config: ScheduleLevelConfig) -> ScheduleLevelConfig:
        """Prüft und speichert ein Raster (Upsert), danach laufen die Hooks.

        Raises:
            AccessDeniedError: Schule wird vom Aufrufer nicht verwaltet.
            NotFoundError: Schule existiert nicht.
            ConfigValidationError: Regelverstoß; es wird nichts geschrieben.
        """
        self.access.require(config.school_id)

        school = self.store.get_school(config.school_id)
        if school is None:
            raise NotFoundError("Schule", config.school_id)

        errors = config.validation_errors()
        ok, msg = validate_level_is_active(
            school.active_academic_levels, config.academic_level)
        if not ok:
            errors.append(msg)
        if errors:
            raise ConfigValidationError(errors)

        available = calculate_blocks_for_config(
            config.start_time, config.end_time, config.block_duration)
        for b in config.breaks:
            if b.after_block >= available:
                logger.warning(
                    f"Pause '{b.name}' nach Block {b.after_block}, aber nur "
                    f"{available} Blöcke passen in {config.start_time}–{config.end_time}"
                )

        previous = self.store.get_level_config(config.school_id, config.academic_level)
        saved = self.store.upsert_level_config(config)
        logger.info(
            f"Raster gespeichert: {saved.school_id}/{saved.academic_level.value} "
            f"{saved.start_time}–{saved.end_time}, {saved.block_duration} min"
        )
        for hook in self._hooks:
            hook(previous, saved)
        return saved
