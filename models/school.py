"""Datenmodell für eine Schule und ihre aktiven Niveaus (Pydantic v2)."""

from typing import Iterable, Optional

from pydantic import BaseModel

from config.schema import ACADEMIC_LEVEL_LABELS, AcademicLevel


def parse_active_academic_levels(active: str) -> list[AcademicLevel]:
    """"BASIC,MIDDLE" → [BASIC, MIDDLE]. Leere Einträge werden übersprungen."""
    return [AcademicLevel(part.strip()) for part in active.split(",") if part.strip()]


def serialize_active_academic_levels(levels: Iterable[AcademicLevel]) -> str:
    return ",".join(level.value for level in levels)


def is_level_active(active: str, level: AcademicLevel) -> bool:
    return level in parse_active_academic_levels(active)


def validate_level_is_active(active: str,
                             level: AcademicLevel) -> tuple[bool, Optional[str]]:
    """Gibt (True, None) zurück oder (False, Fehlermeldung)."""
    levels = parse_active_academic_levels(active)
    if level in levels:
        return True, None
    labels = ", ".join(ACADEMIC_LEVEL_LABELS[l] for l in levels) or "keine"
    return False, (
        f"Das Niveau {ACADEMIC_LEVEL_LABELS[level]} ist an dieser Schule nicht aktiv. "
        f"Aktive Niveaus: {labels}"
    )


class School(BaseModel):
    """Eine Schule. Die Raster-Felder sind Altbestand und dienen nur als Fallback."""

    id: str
    name: str
    active_academic_levels: str = "BASIC,MIDDLE"
    schedule_start_time: str = "08:00"
    schedule_end_time: str = "17:00"
    block_duration: int = 45

    @property
    def levels(self) -> list[AcademicLevel]:
        return parse_active_academic_levels(self.active_academic_levels)
