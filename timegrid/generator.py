"""Erzeugt das Tagesraster (Blöcke + Pausen) aus einer Niveau-Konfiguration."""

import logging

from config.errors import ConfigValidationError
from config.schema import ScheduleLevelConfig
from models.timeslot import TimeSlot
from timegrid.arithmetic import minutes_to_time, time_to_minutes

logger = logging.getLogger(__name__)

# Schutz gegen Endlosschleifen, keine fachliche Obergrenze
MAX_BLOCKS = 20


def generate_time_slots_with_breaks(config: ScheduleLevelConfig) -> list[TimeSlot]:
    """Erzeugt die geordnete Folge von Blöcken und Pausen eines Schultags.

    Ablauf ab start_time:
    1. Block [t, t + block_duration) mit laufender Nummer ausgeben
    2. t um block_duration vorrücken
    3. Gibt es eine Pause nach diesem Block und liegt t noch vor end_time,
       Pause ausgeben und t um deren Dauer vorrücken
    4. Wiederholen solange t < end_time

    Der letzte Block darf über end_time hinausragen; eine Pause nach dem
    letzten Block entfällt.

    Raises:
        ConfigValidationError: block_duration <= 0.
    """
    if config.block_duration <= 0:
        raise ConfigValidationError(["Die Blocklänge muss größer als 0 sein"])

    # Bei doppelten after_block gewinnt die zuletzt genannte Pause
    break_map = {b.after_block: b for b in config.breaks}

    current = time_to_minutes(config.start_time)
    end = time_to_minutes(config.end_time)
    slots: list[TimeSlot] = []
    block_number = 1

    while current < end:
        slots.append(TimeSlot(
            time=minutes_to_time(current),
            end_time=minutes_to_time(current + config.block_duration),
            type="block",
            block_number=block_number,
        ))
        current += config.block_duration

        pause = break_map.get(block_number)
        if pause is not None and current < end:
            slots.append(TimeSlot(
                time=minutes_to_time(current),
                end_time=minutes_to_time(current + pause.duration),
                type="break",
                break_name=pause.name,
            ))
            current += pause.duration

        block_number += 1
        if block_number > MAX_BLOCKS:
            logger.warning(
                f"Mehr als {MAX_BLOCKS} Blöcke für {config.academic_level.value} "
                f"(Schule {config.school_id}) – Generierung abgebrochen"
            )
            break

    return slots


def calculate_blocks_for_config(start_time: str, end_time: str,
                                block_duration: int) -> int:
    """Anzahl vollständiger Blöcke, die zwischen start_time und end_time passen."""
    if block_duration <= 0:
        return 0
    total = time_to_minutes(end_time) - time_to_minutes(start_time)
    return max(total // block_duration, 0)


def is_block_in_range(block_number: int, start_time: str, end_time: str,
                      block_duration: int) -> bool:
    """Prüft eine Blocknummer gegen das Raster, ohne es neu zu erzeugen."""
    max_blocks = calculate_blocks_for_config(start_time, end_time, block_duration)
    return 0 < block_number <= max_blocks
