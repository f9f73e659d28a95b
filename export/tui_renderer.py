"""Renderer für die Terminal-Anzeige des Tagesrasters.

Wird von `level show` und `schedule check` verwendet.
"""

from typing import TYPE_CHECKING

from rich import box
from rich.table import Table

from timegrid.arithmetic import calculate_duration

if TYPE_CHECKING:
    from config.schema import ScheduleLevelConfig
    from models.timeslot import TimeSlot


def render_time_slot_rows(slots: list["TimeSlot"]) -> list[list[str]]:
    """Gibt Tabellenzeilen für das Tagesraster zurück.

    Jede Zeile: [block_label, time_label, duration, info]
    Pausen erhalten '—' als Blocknummer und ihren Namen als Info.
    """
    rows: list[list[str]] = []
    for slot in slots:
        minutes = f"{calculate_duration(slot.time, slot.end_time)} min"
        time_label = f"{slot.time}–{slot.end_time}"
        if slot.is_break:
            rows.append(["—", time_label, minutes, slot.break_name or ""])
        else:
            rows.append([str(slot.block_number), time_label, minutes, ""])
    return rows


def build_grid_table(config: "ScheduleLevelConfig", slots: list["TimeSlot"]) -> Table:
    """Rich-Tabelle des Tagesrasters; Pausen gelb hervorgehoben."""
    from config.schema import ACADEMIC_LEVEL_LABELS

    table = Table(
        title=f"Tagesraster {ACADEMIC_LEVEL_LABELS[config.academic_level]}",
        caption=f"{config.start_time}–{config.end_time}, Blöcke à {config.block_duration} min",
        box=box.ROUNDED,
    )
    table.add_column("Block", style="bold", width=6)
    table.add_column("Zeit", width=13)
    table.add_column("Dauer", justify="right", width=7)
    table.add_column("Info", width=20)
    for slot, row in zip(slots, render_time_slot_rows(slots)):
        if slot.is_break:
            table.add_row(*(f"[yellow]{cell}[/yellow]" for cell in row))
        else:
            table.add_row(*row)
    return table
