"""Testdaten-Generator: Schulen, Kurse und Stundenpläne für Demo und Tests.

Erzeugt absichtlich gemischte Bestände:
  1. Stundenpläne mit Snapshot des Default-Rasters (kompatibel)
  2. Altbestände ohne Snapshot (Empfehlung: neu erstellen)
"""

import random
from datetime import datetime, timezone
from typing import Optional

from analysis.snapshot import snapshot_of
from config.defaults import default_level_config
from config.schema import AcademicLevel
from models.course import Course
from models.schedule import Schedule
from models.school import School
from models.school_data import SchoolData

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_SCHOOL_NAMES = [
    "Colegio San Martín", "Liceo Bicentenario", "Escuela Los Andes",
    "Colegio Santa Teresa", "Liceo Gabriela Mistral", "Escuela Pedro de Valdivia",
    "Colegio Bernardo O'Higgins", "Liceo Arturo Prat",
]

_COURSE_PATTERNS: dict[AcademicLevel, tuple[str, int]] = {
    AcademicLevel.BASIC: ("{n}° Básico {p}", 8),
    AcademicLevel.MIDDLE: ("{n}° Medio {p}", 4),
}

# Anteil der Stundenpläne ohne Snapshot
_LEGACY_SHARE = 0.2


class FakeDataGenerator:
    """Erzeugt einen SchoolData-Datensatz reproduzierbar aus einem Seed."""

    def __init__(self, seed: Optional[int] = None, num_schools: int = 1,
                 parallels: int = 2) -> None:
        self.rng = random.Random(seed)
        self.num_schools = num_schools
        self.parallels = parallels
        self._counter = 0

    def _next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter:04d}"

    def _generate_schools(self) -> list[School]:
        names = self.rng.sample(_SCHOOL_NAMES, k=min(self.num_schools, len(_SCHOOL_NAMES)))
        return [School(id=self._next_id("S"), name=name) for name in names]

    def _generate_courses(self, school: School) -> list[Course]:
        courses = []
        for level in school.levels:
            pattern, grades = _COURSE_PATTERNS[level]
            for n in range(1, grades + 1):
                for p in "ABCDEF"[:self.parallels]:
                    courses.append(Course(
                        id=self._next_id("C"),
                        school_id=school.id,
                        name=pattern.format(n=n, p=p),
                        academic_level=level,
                    ))
        return courses

    def _generate_schedules(self, courses: list[Course]) -> list[Schedule]:
        now = datetime.now(timezone.utc)
        schedules = []
        for course in courses:
            snapshot = None
            if self.rng.random() >= _LEGACY_SHARE:
                config = default_level_config(course.academic_level, course.school_id)
                snapshot = snapshot_of(config).to_text()
            schedules.append(Schedule(
                id=self._next_id("H"),
                school_id=course.school_id,
                course_id=course.id,
                name=f"Stundenplan {course.name}",
                config_snapshot=snapshot,
                created_at=now,
            ))
        return schedules

    # ─── Vollständiger Datensatz ──────────────────────────────────────────────

    def generate(self) -> SchoolData:
        """Erzeugt den vollständigen Datensatz (ohne gespeicherte Raster)."""
        schools = self._generate_schools()
        courses = [c for s in schools for c in self._generate_courses(s)]
        schedules = self._generate_schedules(courses)
        return SchoolData(schools=schools, courses=courses, schedules=schedules)

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, data: SchoolData) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Testdaten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")
        table.add_column("Details")

        legacy = sum(1 for s in data.schedules if s.config_snapshot is None)
        table.add_row("Schulen", str(len(data.schools)),
                      ", ".join(f"{s.id} {s.name}" for s in data.schools))
        for level in AcademicLevel:
            n = sum(1 for c in data.courses if c.academic_level == level)
            table.add_row(f"Kurse {level.value}", str(n), "")
        table.add_row("Stundenpläne", str(len(data.schedules)),
                      f"{legacy} ohne Snapshot")

        console.print(table)
