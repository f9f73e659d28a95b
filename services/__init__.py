from typing import Iterable, NamedTuple

from data.store import ScheduleStore
from services.compatibility import CompatibilityService
from services.schedule_config import ScheduleConfigService
from services.schedules import ScheduleService


class Services(NamedTuple):
    configs: ScheduleConfigService
    compatibility: CompatibilityService
    schedules: ScheduleService


def build_services(store: ScheduleStore, school_ids: Iterable[str]) -> Services:
    """Verdrahtet die Services; Raster-Änderungen markieren Pläne als veraltet."""
    school_ids = list(school_ids)
    configs = ScheduleConfigService(store, school_ids)
    compatibility = CompatibilityService(store, school_ids, configs)
    configs.add_post_save_hook(compatibility.on_config_saved)
    return Services(
        configs=configs,
        compatibility=compatibility,
        schedules=ScheduleService(store, school_ids, configs),
    )


__all__ = [
    "Services",
    "build_services",
    "ScheduleConfigService",
    "CompatibilityService",
    "ScheduleService",
]
