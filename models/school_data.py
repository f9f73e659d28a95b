"""SchoolData: Vollständiger Datensatz (Schulen, Kurse, Raster, Stundenpläne) + Integritäts-Check."""

from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from analysis.snapshot import parse_config_snapshot
from models.course import Course
from models.schedule import LevelConfigRecord, Schedule
from models.school import School


class IntegrityReport(BaseModel):
    """Ergebnis des Integritäts-Checks."""

    is_consistent: bool
    errors: list[str]      # Verwaiste oder doppelte Datensätze
    warnings: list[str]    # Auffälligkeiten, die den Betrieb nicht verhindern

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_consistent:
            status = "[bold green]✓ KONSISTENT[/bold green]"
        else:
            status = "[bold red]✗ INKONSISTENT[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Integritäts-Check", border_style="cyan"))


class SchoolData(BaseModel):
    """Vollständiger Datensatz, wie er als JSON gespeichert wird."""

    schools: list[School] = []
    courses: list[Course] = []
    level_configs: list[LevelConfigRecord] = []
    schedules: list[Schedule] = []
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        active = [s for s in self.schedules if s.is_active]
        deprecated = sum(1 for s in active if s.is_deprecated)
        lines = [
            f"Schulen: {len(self.schools)}",
            f"Kurse: {len(self.courses)}",
            f"Tagesraster (gespeichert): {len(self.level_configs)}",
            f"Stundenpläne: {len(active)} aktiv, davon {deprecated} veraltet",
        ]
        return "\n".join(lines)

    # ─── Integritäts-Check ───

    def check_integrity(self) -> IntegrityReport:
        """Prüft Verweise und Eindeutigkeit.

        Prüfungen:
        1. Kurse verweisen auf existierende Schulen
        2. Stundenpläne verweisen auf existierende Kurse derselben Schule
        3. Tagesraster verweisen auf existierende Schulen, höchstens eines pro Schule × Niveau
        4. Kurse nur in aktiven Niveaus ihrer Schule
        5. Pausen- und Snapshot-Texte sind lesbar
        """
        errors: list[str] = []
        warnings: list[str] = []

        schools = {s.id: s for s in self.schools}
        courses = {c.id: c for c in self.courses}

        for course in self.courses:
            school = schools.get(course.school_id)
            if school is None:
                errors.append(f"Kurs {course.id}: Schule {course.school_id} existiert nicht")
            elif course.academic_level not in school.levels:
                warnings.append(
                    f"Kurs {course.id}: Niveau {course.academic_level.value} "
                    f"ist an Schule {school.id} nicht aktiv"
                )

        for schedule in self.schedules:
            course = courses.get(schedule.course_id)
            if course is None:
                errors.append(
                    f"Stundenplan {schedule.id}: Kurs {schedule.course_id} existiert nicht")
            elif course.school_id != schedule.school_id:
                errors.append(
                    f"Stundenplan {schedule.id}: Kurs {course.id} gehört zu Schule "
                    f"{course.school_id}, nicht {schedule.school_id}"
                )
            if schedule.config_snapshot is None:
                warnings.append(f"Stundenplan {schedule.id}: kein Konfigurations-Snapshot")
            elif parse_config_snapshot(schedule.config_snapshot) is None:
                warnings.append(f"Stundenplan {schedule.id}: Snapshot nicht lesbar")

        keys = Counter((r.school_id, r.academic_level) for r in self.level_configs)
        for (school_id, level), n in sorted(keys.items()):
            if n > 1:
                errors.append(
                    f"{n} Tagesraster für Schule {school_id} / {level.value}")

        for record in self.level_configs:
            if record.school_id not in schools:
                errors.append(
                    f"Tagesraster {record.id}: Schule {record.school_id} existiert nicht")
            if not record.breaks_readable():
                warnings.append(
                    f"Tagesraster {record.id}: Pausen nicht lesbar (werden ignoriert)")

        return IntegrityReport(
            is_consistent=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ─── Persistenz ───

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "SchoolData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                return cls.model_validate_json(f.read())
            except ValidationError as e:
                raise ValueError(
                    f"Datensatz ungültig: {path}\nPydantic-Fehler: {e}"
                ) from e
