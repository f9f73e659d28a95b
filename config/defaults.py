from config.schema import (
    AcademicLevel,
    AppSettings,
    BreakConfig,
    ScheduleLevelConfig,
)


def default_basic_config(school_id: str = "") -> ScheduleLevelConfig:
    """Standard-Tagesraster der Grundstufe.

    08:00 – 17:00, Blöcke à 45 Minuten:
       nach Block 2 ── Pause (15 min) ──
       nach Block 4 ── Pause (15 min) ──
       nach Block 6 ── Mittagspause (45 min) ──
    """
    return ScheduleLevelConfig(
        school_id=school_id,
        academic_level=AcademicLevel.BASIC,
        start_time="08:00",
        end_time="17:00",
        block_duration=45,
        breaks=[
            BreakConfig(after_block=2, duration=15, name="Pause"),
            BreakConfig(after_block=4, duration=15, name="Pause"),
            BreakConfig(after_block=6, duration=45, name="Mittagspause"),
        ],
    )


def default_middle_config(school_id: str = "") -> ScheduleLevelConfig:
    """Standard-Tagesraster der Mittelstufe.

    08:00 – 18:00, Blöcke à 90 Minuten:
       nach Block 2 ── Pause (15 min) ──
       nach Block 4 ── Mittagspause (45 min) ──
       nach Block 6 ── Pause (15 min) ── (entfällt, Block 6 endet um 18:00)
    """
    return ScheduleLevelConfig(
        school_id=school_id,
        academic_level=AcademicLevel.MIDDLE,
        start_time="08:00",
        end_time="18:00",
        block_duration=90,
        breaks=[
            BreakConfig(after_block=2, duration=15, name="Pause"),
            BreakConfig(after_block=4, duration=45, name="Mittagspause"),
            BreakConfig(after_block=6, duration=15, name="Pause"),
        ],
    )


def default_level_config(academic_level: AcademicLevel,
                         school_id: str = "") -> ScheduleLevelConfig:
    """Default-Raster für ein Niveau. Wird nur zurückgegeben, nie gespeichert."""
    if academic_level == AcademicLevel.BASIC:
        return default_basic_config(school_id)
    return default_middle_config(school_id)


def default_settings() -> AppSettings:
    return AppSettings()
