"""Tests für Uhrzeit-Arithmetik und Tagesraster-Generator."""

import pytest

from config.defaults import default_basic_config, default_middle_config
from config.errors import ConfigValidationError
from config.schema import AcademicLevel, BreakConfig, ScheduleLevelConfig
from timegrid.arithmetic import (
    calculate_duration, minutes_to_time, time_to_minutes, times_overlap,
)
from timegrid.generator import (
    MAX_BLOCKS, calculate_blocks_for_config, generate_time_slots_with_breaks,
    is_block_in_range,
)


def _config(start="08:00", end="17:00", block=45, breaks=None) -> ScheduleLevelConfig:
    return ScheduleLevelConfig(
        school_id="S1",
        academic_level=AcademicLevel.BASIC,
        start_time=start,
        end_time=end,
        block_duration=block,
        breaks=breaks or [],
    )


def _as_tuples(slots):
    return [
        (s.type, s.time, s.end_time, s.block_number if s.is_block else s.break_name)
        for s in slots
    ]


# ─── ARITHMETIK ───────────────────────────────────────────────────────────────

class TestArithmetic:
    def test_time_to_minutes(self):
        assert time_to_minutes("00:00") == 0
        assert time_to_minutes("08:30") == 510
        assert time_to_minutes("23:59") == 1439

    def test_minutes_to_time_zero_padded(self):
        assert minutes_to_time(0) == "00:00"
        assert minutes_to_time(545) == "09:05"

    def test_minutes_to_time_does_not_wrap(self):
        """Werte ≥ 24:00 werden nicht umgebrochen."""
        assert minutes_to_time(1500) == "25:00"

    def test_malformed_time_does_not_raise(self):
        assert time_to_minutes("kaputt") == 0
        assert time_to_minutes("") == 0

    def test_calculate_duration(self):
        assert calculate_duration("08:00", "09:30") == 90
        assert calculate_duration("10:00", "09:00") == -60

    def test_times_overlap_half_open(self):
        assert times_overlap("08:00", "09:00", "08:30", "09:30")
        assert times_overlap("08:00", "10:00", "08:30", "09:00")
        # Angrenzende Intervalle überlappen nicht
        assert not times_overlap("08:00", "09:00", "09:00", "10:00")
        assert not times_overlap("09:00", "10:00", "08:00", "09:00")


# ─── GENERATOR ────────────────────────────────────────────────────────────────

class TestGenerator:
    def test_scenario_three_named_breaks(self):
        """Recreo / Almuerzo / Recreo Tarde nach Block 2, 4 und 6."""
        config = _config(breaks=[
            BreakConfig(after_block=2, duration=15, name="Recreo"),
            BreakConfig(after_block=4, duration=45, name="Almuerzo"),
            BreakConfig(after_block=6, duration=15, name="Recreo Tarde"),
        ])
        slots = generate_time_slots_with_breaks(config)
        assert _as_tuples(slots) == [
            ("block", "08:00", "08:45", 1),
            ("block", "08:45", "09:30", 2),
            ("break", "09:30", "09:45", "Recreo"),
            ("block", "09:45", "10:30", 3),
            ("block", "10:30", "11:15", 4),
            ("break", "11:15", "12:00", "Almuerzo"),
            ("block", "12:00", "12:45", 5),
            ("block", "12:45", "13:30", 6),
            ("break", "13:30", "13:45", "Recreo Tarde"),
            ("block", "13:45", "14:30", 7),
            ("block", "14:30", "15:15", 8),
            ("block", "15:15", "16:00", 9),
            ("block", "16:00", "16:45", 10),
            ("block", "16:45", "17:30", 11),
        ]

    def test_break_follows_its_block(self):
        config = _config(breaks=[BreakConfig(after_block=3, duration=30, name="X")])
        slots = generate_time_slots_with_breaks(config)
        idx = next(i for i, s in enumerate(slots) if s.is_break)
        assert slots[idx - 1].block_number == 3
        assert slots[idx].time == slots[idx - 1].end_time

    def test_no_breaks_contiguous_blocks(self):
        """Ohne Pausen: lückenlose Blöcke, Anzahl = Zeitfenster / Blocklänge."""
        for start, end, block in [("08:00", "17:00", 45), ("07:30", "13:30", 90),
                                  ("08:00", "12:00", 60)]:
            slots = generate_time_slots_with_breaks(_config(start, end, block))
            assert all(s.is_block for s in slots)
            assert len(slots) == calculate_blocks_for_config(start, end, block)
            assert slots[0].time == start
            for prev, cur in zip(slots, slots[1:]):
                assert cur.time == prev.end_time
                assert cur.block_number == prev.block_number + 1

    def test_uneven_window_last_block_overruns_end(self):
        """Geht das Zeitfenster nicht auf, ragt der letzte Block über das Ende hinaus."""
        slots = generate_time_slots_with_breaks(_config("08:00", "09:00", 45))
        assert calculate_blocks_for_config("08:00", "09:00", 45) == 1
        assert len(slots) == 2
        assert slots[-1].time == "08:45"
        assert slots[-1].end_time == "09:30"

    def test_break_after_last_block_is_dropped(self):
        config = _config("08:00", "10:00", 60,
                         [BreakConfig(after_block=2, duration=15, name="Pause")])
        slots = generate_time_slots_with_breaks(config)
        assert [s.type for s in slots] == ["block", "block"]

    def test_break_beyond_generated_blocks_is_ignored(self):
        config = _config("08:00", "10:00", 60,
                         [BreakConfig(after_block=7, duration=15, name="Pause")])
        assert all(s.is_block for s in generate_time_slots_with_breaks(config))

    def test_default_basic_grid(self):
        slots = generate_time_slots_with_breaks(default_basic_config("S1"))
        breaks = [s for s in slots if s.is_break]
        assert [(b.time, b.end_time, b.break_name) for b in breaks] == [
            ("09:30", "09:45", "Pause"),
            ("11:15", "11:30", "Pause"),
            ("13:00", "13:45", "Mittagspause"),
        ]
        assert sum(1 for s in slots if s.is_block) == 11

    def test_default_middle_grid_drops_final_break(self):
        slots = generate_time_slots_with_breaks(default_middle_config("S1"))
        assert [s.type for s in slots] == [
            "block", "block", "break", "block", "block", "break", "block", "block",
        ]
        assert slots[-1].end_time == "18:00"
        assert slots[5].break_name == "Mittagspause"

    def test_block_cap(self):
        """Mehr als MAX_BLOCKS Blöcke werden abgeschnitten."""
        slots = generate_time_slots_with_breaks(_config("00:00", "23:45", 15))
        assert len(slots) == MAX_BLOCKS
        assert slots[-1].block_number == MAX_BLOCKS
        assert slots[-1].end_time == "05:00"

    def test_zero_block_duration_raises(self):
        with pytest.raises(ConfigValidationError):
            generate_time_slots_with_breaks(_config(block=0))

    def test_duplicate_after_block_last_wins(self):
        config = _config("08:00", "12:00", 60, [
            BreakConfig(after_block=1, duration=15, name="Erste"),
            BreakConfig(after_block=1, duration=30, name="Zweite"),
        ])
        slots = generate_time_slots_with_breaks(config)
        assert slots[1].break_name == "Zweite"
        assert slots[1].end_time == "09:30"


class TestBlockRange:
    def test_scenario_range(self):
        assert calculate_blocks_for_config("08:00", "17:00", 45) == 12
        assert is_block_in_range(5, "08:00", "17:00", 45)
        assert is_block_in_range(12, "08:00", "17:00", 45)
        assert not is_block_in_range(13, "08:00", "17:00", 45)

    def test_non_positive_block_numbers(self):
        assert not is_block_in_range(0, "08:00", "17:00", 45)
        assert not is_block_in_range(-1, "08:00", "17:00", 45)

    def test_floor_division(self):
        assert calculate_blocks_for_config("08:00", "09:40", 45) == 2

    def test_invalid_duration_gives_no_blocks(self):
        assert calculate_blocks_for_config("08:00", "17:00", 0) == 0
        assert not is_block_in_range(1, "08:00", "17:00", 0)
