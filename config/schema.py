from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class AcademicLevel(str, Enum):
    BASIC = "BASIC"
    MIDDLE = "MIDDLE"


ACADEMIC_LEVEL_LABELS: dict[AcademicLevel, str] = {
    AcademicLevel.BASIC: "Grundstufe (1.–8.)",
    AcademicLevel.MIDDLE: "Mittelstufe (1.–4.)",
}

# Uhrzeiten werden überall als "HH:MM" geführt
TIME_PATTERN = r"^\d{2}:\d{2}$"

# Block- und Pausenlängen müssen auf dieses Raster fallen
MINUTE_STEP = 15


# ─── TAGESRASTER PRO NIVEAU ───

class BreakConfig(BaseModel):
    """Eine Pause, die direkt nach dem n-ten Unterrichtsblock eingefügt wird."""
    # Nach welchem Block die Pause folgt (z.B. 2 = nach 2. Block)
    after_block: int
    # Dauer der Pause in Minuten (Vielfaches von 15)
    duration: int
    # Bezeichnung, z.B. "Pause" oder "Mittagspause"
    name: str = "Pause"


class ScheduleLevelConfig(BaseModel):
    """Tagesraster eines Schulniveaus (ein Eintrag pro Schule × Niveau).

    Beschreibt Beginn und Ende des Schultags, die feste Blocklänge und die
    Pausen. Die fachlichen Regeln werden nicht beim Erzeugen geprüft, sondern
    über validation_errors() vom Speicherpfad abgefragt: auch ein ungültiges
    Raster muss sich laden und anzeigen lassen.
    """
    id: Optional[str] = None
    school_id: str
    academic_level: AcademicLevel
    start_time: str = Field(pattern=TIME_PATTERN,
        description="Beginn des Schultags (HH:MM)")
    end_time: str = Field(pattern=TIME_PATTERN,
        description="Ende des Schultags (HH:MM)")
    block_duration: int = Field(
        description="Länge eines Unterrichtsblocks in Minuten")
    breaks: list[BreakConfig] = Field(default_factory=list,
        description="Pausen, jeweils nach einem Blocknummer")

    def validation_errors(self) -> list[str]:
        """Sammelt alle Regelverstöße. Leere Liste = gültig."""
        from timegrid.arithmetic import time_to_minutes

        errors: list[str] = []
        if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
            errors.append(
                f"Beginn {self.start_time} muss vor Ende {self.end_time} liegen")
        if self.block_duration <= 0:
            errors.append("Die Blocklänge muss größer als 0 sein")
        elif self.block_duration % MINUTE_STEP != 0:
            errors.append(
                f"Die Blocklänge muss ein Vielfaches von {MINUTE_STEP} Minuten sein")

        seen: set[int] = set()
        for b in self.breaks:
            if b.after_block < 1:
                errors.append(
                    f"Pause '{b.name}': after_block muss mindestens 1 sein")
            if b.duration <= 0 or b.duration % MINUTE_STEP != 0:
                errors.append(
                    f"Pause '{b.name}': Dauer muss ein positives Vielfaches "
                    f"von {MINUTE_STEP} Minuten sein")
            if b.after_block in seen:
                errors.append(
                    f"Mehrere Pausen nach Block {b.after_block}")
            seen.add(b.after_block)
        return errors

    def is_same_shape(self, other: "ScheduleLevelConfig") -> bool:
        """True wenn Beginn, Ende und Blocklänge übereinstimmen (Pausen egal)."""
        return (
            self.start_time == other.start_time
            and self.end_time == other.end_time
            and self.block_duration == other.block_duration
        )


# ─── ANWENDUNGS-EINSTELLUNGEN ───

class AppSettings(BaseModel):
    """Einstellungen der Kommandozeilen-Anwendung."""
    # Pfad zur JSON-Datei mit allen Schuldaten
    data_path: str = Field("output/school_data.json",
        description="Pfad zum Datensatz (JSON)")
    # Schulen, die der Bediener verwalten darf
    school_ids: list[str] = Field(default_factory=list,
        description="Verwaltete Schulen (IDs)")
    # Log-Level für die Konsole
    log_level: str = Field("WARNING",
        description="Log-Level (DEBUG, INFO, WARNING, ERROR)")
