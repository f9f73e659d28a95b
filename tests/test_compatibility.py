"""Tests für Konfigurations-Snapshots und Kompatibilitätsprüfung."""

import pytest

from analysis.compatibility import (
    NO_SNAPSHOT_ISSUE, CompatibilityResult, Recommendation,
    check_schedule_compatibility, get_compatibility_message,
)
from analysis.snapshot import (
    ConfigSnapshot, create_config_snapshot, parse_config_snapshot, snapshot_of,
)
from config.defaults import default_basic_config
from config.schema import AcademicLevel


def _snap(start="08:00", end="17:00", block=45, level="BASIC") -> ConfigSnapshot:
    return ConfigSnapshot(start_time=start, end_time=end,
                          block_duration=block, academic_level=level)


# ─── SNAPSHOT ─────────────────────────────────────────────────────────────────

class TestSnapshot:
    @pytest.mark.parametrize("args", [
        ("08:00", "17:00", 45, "BASIC"),
        ("07:30", "18:15", 90, "MIDDLE"),
    ])
    def test_roundtrip(self, args):
        parsed = parse_config_snapshot(create_config_snapshot(*args))
        assert parsed == _snap(*args)

    def test_field_order(self):
        text = create_config_snapshot("08:00", "17:00", 45, "BASIC")
        positions = [text.index(k) for k in
                     ("start_time", "end_time", "block_duration", "academic_level")]
        assert positions == sorted(positions)

    def test_enum_level_is_stored_as_plain_value(self):
        text = create_config_snapshot("08:00", "17:00", 45, AcademicLevel.MIDDLE)
        assert parse_config_snapshot(text).academic_level == "MIDDLE"

    @pytest.mark.parametrize("text", [None, "", "{kaputt", "[]", '{"start_time": "08:00"}'])
    def test_missing_or_corrupt_is_none(self, text):
        assert parse_config_snapshot(text) is None

    def test_snapshot_of_config(self):
        assert snapshot_of(default_basic_config("S1")) == _snap()


# ─── KOMPATIBILITÄT ───────────────────────────────────────────────────────────

class TestCompatibility:
    def test_no_snapshot_recreate(self):
        result = check_schedule_compatibility(None, _snap())
        assert not result.is_compatible
        assert result.issues == [NO_SNAPSHOT_ISSUE]
        assert not result.can_auto_migrate
        assert result.recommendation == Recommendation.RECREATE

    def test_identical_keep(self):
        result = check_schedule_compatibility(_snap(), _snap())
        assert result.is_compatible
        assert result.issues == []
        assert result.can_auto_migrate
        assert result.recommendation == Recommendation.KEEP

    def test_block_duration_change_recreate(self):
        result = check_schedule_compatibility(_snap(), _snap(block=90))
        assert len(result.issues) == 1
        assert not result.can_auto_migrate
        assert result.recommendation == Recommendation.RECREATE

    def test_start_time_change_migrate(self):
        result = check_schedule_compatibility(_snap(), _snap(start="08:30"))
        assert len(result.issues) == 1
        assert result.can_auto_migrate
        assert result.recommendation == Recommendation.MIGRATE

    def test_start_and_end_change_migrate(self):
        result = check_schedule_compatibility(_snap(), _snap(start="08:30", end="16:00"))
        assert len(result.issues) == 2
        assert result.recommendation == Recommendation.MIGRATE

    def test_level_change_blocks_migration(self):
        result = check_schedule_compatibility(_snap(), _snap(level="MIDDLE"))
        assert not result.can_auto_migrate
        assert result.recommendation == Recommendation.RECREATE

    def test_many_changes_recreate(self):
        result = check_schedule_compatibility(
            _snap(), _snap(start="07:00", end="18:00", block=60, level="MIDDLE"))
        assert len(result.issues) == 4
        assert result.recommendation == Recommendation.RECREATE

    def test_issue_order(self):
        """Reihenfolge: Niveau, Blocklänge, Beginn, Ende."""
        result = check_schedule_compatibility(
            _snap(), _snap(start="07:00", end="18:00", block=60, level="MIDDLE"))
        assert "Niveau" in result.issues[0]
        assert "Blocklänge" in result.issues[1]
        assert "Beginn" in result.issues[2]
        assert "Ende" in result.issues[3]


class TestMessage:
    def test_compatible_message(self):
        msg = get_compatibility_message(check_schedule_compatibility(_snap(), _snap()))
        assert "kompatibel" in msg
        assert "•" not in msg

    def test_incompatible_message_lists_issues(self):
        result = check_schedule_compatibility(_snap(), _snap(start="08:30"))
        msg = result.message()
        assert "• Beginn geändert von 08:00 auf 08:30" in msg
        assert "migrieren" in msg

    @pytest.mark.parametrize("rec,fragment", [
        (Recommendation.MIGRATE, "migrieren"),
        (Recommendation.RECREATE, "neu erstellen"),
        (Recommendation.ARCHIVE, "Archivieren"),
        (Recommendation.KEEP, "Manuell prüfen"),
    ])
    def test_recommendation_templates(self, rec, fragment):
        result = CompatibilityResult(
            is_compatible=False, issues=["x"], can_auto_migrate=False, recommendation=rec)
        assert fragment in get_compatibility_message(result)
