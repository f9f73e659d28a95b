"""Uhrzeit-Arithmetik auf "HH:MM"-Strings (Minuten seit Mitternacht)."""

import logging
import re

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{1,2})\s*$")


def time_to_minutes(time: str) -> int:
    """Wandelt "HH:MM" in Minuten seit Mitternacht um.

    Ungültige Eingaben werfen keinen Fehler, sondern ergeben 0 (mit Warnung).
    Aufrufer sollen nur validierte Uhrzeiten übergeben.
    """
    m = _TIME_RE.match(time or "")
    if m is None:
        logger.warning(f"Ungültige Uhrzeit {time!r}, verwende 00:00")
        return 0
    return int(m.group(1)) * 60 + int(m.group(2))


def minutes_to_time(minutes: int) -> str:
    """Wandelt Minuten seit Mitternacht in "HH:MM" um (kein Umbruch bei 24:00)."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def calculate_duration(start_time: str, end_time: str) -> int:
    """Dauer in Minuten; negativ wenn end_time vor start_time liegt."""
    return time_to_minutes(end_time) - time_to_minutes(start_time)


def times_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    """Prüft ob sich die halboffenen Intervalle [start1, end1) und [start2, end2) schneiden."""
    return (
        time_to_minutes(start1) < time_to_minutes(end2)
        and time_to_minutes(end1) > time_to_minutes(start2)
    )
