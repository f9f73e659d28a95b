from .arithmetic import (
    time_to_minutes, minutes_to_time, calculate_duration, times_overlap,
)
from .generator import (
    MAX_BLOCKS, generate_time_slots_with_breaks, calculate_blocks_for_config,
    is_block_in_range,
)

__all__ = [
    "time_to_minutes", "minutes_to_time", "calculate_duration", "times_overlap",
    "MAX_BLOCKS", "generate_time_slots_with_breaks",
    "calculate_blocks_for_config", "is_block_in_range",
]
