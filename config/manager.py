"""Konfigurationsmanager: Laden und Speichern der Anwendungs-Einstellungen.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import AppSettings

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


_YAML_HEADER = f"""\
# ============================================
# Tagesraster-Verwaltung — Einstellungen
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_FIELD_COMMENTS = {
    "data_path": "Datensatz mit Schulen, Kursen, Rastern und Stundenplänen",
    "school_ids": "Schulen, die von dieser Installation verwaltet werden",
    "log_level": "DEBUG, INFO, WARNING oder ERROR",
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "settings.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Einstellungen existieren (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> AppSettings:
        """Lade Einstellungen aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Einstellungsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py setup' aus."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return AppSettings.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Einstellungsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    # ─── Speichern ───

    def save(self, settings: AppSettings, path: Optional[Path] = None) -> None:
        """Speichere Einstellungen als YAML mit Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(settings)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Einstellungen gespeichert: {target}")

    def _build_commented_yaml(self, settings: AppSettings) -> CommentedMap:
        """Baut die YAML-Struktur mit Zeilenkommentaren auf."""
        cm = CommentedMap(json.loads(settings.model_dump_json()))
        for field, comment in _FIELD_COMMENTS.items():
            if field in cm:
                cm.yaml_add_eol_comment(comment, field)
        return cm

    def add_school_ids(self, settings: AppSettings, school_ids: list[str]) -> AppSettings:
        """Ergänzt verwaltete Schulen (ohne Duplikate) und speichert."""
        merged = list(dict.fromkeys([*settings.school_ids, *school_ids]))
        updated = settings.model_copy(update={"school_ids": merged})
        self.save(updated)
        return updated
