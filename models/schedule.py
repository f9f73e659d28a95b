"""Datenmodelle für gespeicherte Stundenpläne und Tagesraster (Pydantic v2)."""

import json
import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, TypeAdapter, ValidationError

from config.schema import AcademicLevel, BreakConfig, ScheduleLevelConfig

logger = logging.getLogger(__name__)

_BREAKS_ADAPTER = TypeAdapter(list[BreakConfig])


class Schedule(BaseModel):
    """Ein konkreter Stundenplan eines Kurses."""

    id: str
    school_id: str
    course_id: str
    name: str = ""
    is_active: bool = True
    # Gesetzt, wenn sich das Tagesraster seit dem Snapshot geändert hat
    is_deprecated: bool = False
    # JSON-Text eines ConfigSnapshot; None bei Altbeständen
    config_snapshot: Optional[str] = None
    created_at: Optional[datetime] = None


class LevelConfigRecord(BaseModel):
    """Gespeicherte Form einer ScheduleLevelConfig; Pausen als JSON-Text."""

    id: str
    school_id: str
    academic_level: AcademicLevel
    start_time: str
    end_time: str
    block_duration: int
    breaks: str = "[]"

    @classmethod
    def from_config(cls, config: ScheduleLevelConfig, record_id: str) -> "LevelConfigRecord":
        return cls(
            id=record_id,
            school_id=config.school_id,
            academic_level=config.academic_level,
            start_time=config.start_time,
            end_time=config.end_time,
            block_duration=config.block_duration,
            breaks=json.dumps([b.model_dump() for b in config.breaks], ensure_ascii=False),
        )

    def breaks_readable(self) -> bool:
        """True wenn der Pausen-Text einer Liste von BreakConfig entspricht."""
        try:
            _BREAKS_ADAPTER.validate_json(self.breaks)
        except ValidationError:
            return False
        return True

    def decode_breaks(self) -> list[BreakConfig]:
        """Liest die Pausen. Defekter Text ergibt eine leere Liste."""
        try:
            return _BREAKS_ADAPTER.validate_json(self.breaks)
        except ValidationError:
            logger.warning(
                f"Pausen von {self.school_id}/{self.academic_level.value} "
                f"nicht lesbar – verwende keine Pausen"
            )
            return []

    def to_config(self) -> ScheduleLevelConfig:
        return ScheduleLevelConfig(
            id=self.id,
            school_id=self.school_id,
            academic_level=self.academic_level,
            start_time=self.start_time,
            end_time=self.end_time,
            block_duration=self.block_duration,
            breaks=self.decode_breaks(),
        )
