"""Datenmodell für einen Zeitslot im Tagesraster."""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class TimeSlot:
    """Ein Abschnitt des Schultags: Unterrichtsblock oder Pause.

    Wird vom Generator immer neu erzeugt und nie gespeichert.
    """

    # Beginn "HH:MM"
    time: str
    # Ende "HH:MM"
    end_time: str
    type: Literal["block", "break"]
    # Nur bei type="block": laufende Blocknummer, 1-basiert
    block_number: Optional[int] = None
    # Nur bei type="break": Bezeichnung der Pause
    break_name: Optional[str] = None

    @property
    def is_block(self) -> bool:
        return self.type == "block"

    @property
    def is_break(self) -> bool:
        return self.type == "break"

    def __str__(self) -> str:
        if self.is_block:
            return f"{self.block_number}. Block {self.time}–{self.end_time}"
        return f"{self.break_name} {self.time}–{self.end_time}"
