"""ScheduleStore: Zugriff auf Schulen, Kurse, Tagesraster und Stundenpläne.

Hält einen SchoolData-Datensatz im Speicher und schreibt ihn bei commit()
als JSON zurück, wenn ein Pfad angegeben ist. Jede Methode bildet genau
einen Lese- oder Schreibzugriff ab.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

from config.schema import AcademicLevel, ScheduleLevelConfig
from models.course import Course
from models.schedule import LevelConfigRecord, Schedule
from models.school import School
from models.school_data import SchoolData

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex[:12]


class ScheduleStore:
    """In-Memory-Speicher über SchoolData mit optionaler JSON-Datei."""

    def __init__(self, data: Optional[SchoolData] = None,
                 path: Optional[Path] = None) -> None:
        self.data = data if data is not None else SchoolData()
        self.path = Path(path) if path is not None else None

    @classmethod
    def open(cls, path: Path) -> "ScheduleStore":
        """Öffnet einen Datensatz; fehlende Datei ergibt einen leeren Speicher."""
        path = Path(path)
        if path.exists():
            return cls(SchoolData.load_json(path), path)
        logger.info(f"Kein Datensatz unter {path}, starte leer")
        return cls(SchoolData(), path)

    def commit(self) -> None:
        if self.path is not None:
            self.data.save_json(self.path)
            logger.debug(f"Datensatz gespeichert: {self.path}")

    # ─── Schulen & Kurse ───

    def add_school(self, school: School) -> School:
        self.data.schools.append(school)
        return school

    def get_school(self, school_id: str) -> Optional[School]:
        return next((s for s in self.data.schools if s.id == school_id), None)

    def add_course(self, course: Course) -> Course:
        self.data.courses.append(course)
        return course

    def get_course(self, course_id: str) -> Optional[Course]:
        return next((c for c in self.data.courses if c.id == course_id), None)

    def list_courses(self, school_id: str) -> list[Course]:
        return [c for c in self.data.courses if c.school_id == school_id]

    # ─── Tagesraster ───

    def _find_record(self, school_id: str,
                     level: AcademicLevel) -> Optional[LevelConfigRecord]:
        return next(
            (r for r in self.data.level_configs
             if r.school_id == school_id and r.academic_level == level),
            None,
        )

    def get_level_config(self, school_id: str,
                         level: AcademicLevel) -> Optional[ScheduleLevelConfig]:
        record = self._find_record(school_id, level)
        return record.to_config() if record is not None else None

    def list_level_configs(self, school_id: str) -> list[ScheduleLevelConfig]:
        return [r.to_config() for r in self.data.level_configs
                if r.school_id == school_id]

    def upsert_level_config(self, config: ScheduleLevelConfig) -> ScheduleLevelConfig:
        """Legt das Raster für (Schule, Niveau) an oder ersetzt es vollständig."""
        existing = self._find_record(config.school_id, config.academic_level)
        record_id = existing.id if existing is not None else new_id()
        record = LevelConfigRecord.from_config(config, record_id)
        if existing is not None:
            idx = self.data.level_configs.index(existing)
            self.data.level_configs[idx] = record
        else:
            self.data.level_configs.append(record)
        self.commit()
        return record.to_config()

    # ─── Stundenpläne ───

    def add_schedule(self, schedule: Schedule) -> Schedule:
        self.data.schedules.append(schedule)
        self.commit()
        return schedule

    def get_schedule(self, schedule_id: str) -> Optional[Schedule]:
        return next((s for s in self.data.schedules if s.id == schedule_id), None)

    def find_active_schedules(self, school_id: str,
                              level: Optional[AcademicLevel] = None) -> list[Schedule]:
        """Aktive Stundenpläne einer Schule, optional nur Kurse eines Niveaus."""
        result = []
        for s in self.data.schedules:
            if s.school_id != school_id or not s.is_active:
                continue
            if level is not None:
                course = self.get_course(s.course_id)
                if course is None or course.academic_level != level:
                    continue
            result.append(s)
        return result

    def update_schedule(self, schedule_id: str, **changes) -> Schedule:
        """Ersetzt einzelne Felder eines Stundenplans und speichert."""
        schedule = self.get_schedule(schedule_id)
        if schedule is None:
            raise KeyError(schedule_id)
        updated = schedule.model_copy(update=changes)
        idx = self.data.schedules.index(schedule)
        self.data.schedules[idx] = updated
        self.commit()
        return updated

    def mark_deprecated(self, school_id: str, level: AcademicLevel) -> int:
        """Markiert alle aktiven Pläne des Niveaus als veraltet; gibt die Anzahl zurück."""
        targets = {s.id for s in self.find_active_schedules(school_id, level)}
        self.data.schedules = [
            s.model_copy(update={"is_deprecated": True}) if s.id in targets else s
            for s in self.data.schedules
        ]
        if targets:
            self.commit()
        return len(targets)
