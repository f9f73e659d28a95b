"""Konfigurations-Snapshot: die Rasterfelder, mit denen ein Stundenplan erstellt wurde.

Wird beim Anlegen eines Stundenplans als JSON-Text am Datensatz gespeichert
und später gegen die aktuelle Konfiguration verglichen.
"""

import logging
from typing import Optional, Union

from pydantic import BaseModel, ValidationError

from config.schema import AcademicLevel

logger = logging.getLogger(__name__)


class ConfigSnapshot(BaseModel):
    """Form-relevante Felder eines Tagesrasters (ohne Pausen)."""

    start_time: str
    end_time: str
    block_duration: int
    academic_level: str

    def to_text(self) -> str:
        """Serialisiert in fester Feldreihenfolge (start, end, block, level)."""
        return self.model_dump_json()

    @classmethod
    def from_text(cls, text: Optional[str]) -> Optional["ConfigSnapshot"]:
        """Liest einen Snapshot. Fehlender oder defekter Text ergibt None."""
        if not text:
            return None
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            logger.warning(f"Defekter Konfigurations-Snapshot ignoriert: {e.error_count()} Fehler")
            return None


def _level_value(academic_level: Union[AcademicLevel, str]) -> str:
    return academic_level.value if hasattr(academic_level, "value") else str(academic_level)


def create_config_snapshot(start_time: str, end_time: str, block_duration: int,
                           academic_level: Union[AcademicLevel, str]) -> str:
    """Erzeugt den Snapshot-Text für einen neuen oder neu abgeglichenen Stundenplan."""
    return ConfigSnapshot(
        start_time=start_time,
        end_time=end_time,
        block_duration=block_duration,
        academic_level=_level_value(academic_level),
    ).to_text()


def parse_config_snapshot(text: Optional[str]) -> Optional[ConfigSnapshot]:
    return ConfigSnapshot.from_text(text)


def snapshot_of(config) -> ConfigSnapshot:
    """Snapshot einer ScheduleLevelConfig."""
    return ConfigSnapshot(
        start_time=config.start_time,
        end_time=config.end_time,
        block_duration=config.block_duration,
        academic_level=_level_value(config.academic_level),
    )
