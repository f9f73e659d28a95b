"""Kompatibilitätsprüfung: passt ein Stundenplan noch zur aktuellen Konfiguration?

Vergleicht den beim Erstellen gespeicherten Snapshot mit dem aktuellen
Tagesraster des Niveaus und leitet daraus eine Empfehlung ab.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from analysis.snapshot import ConfigSnapshot

# Snapshot fehlt: Plan stammt aus der Zeit vor dem Snapshot-Tracking
NO_SNAPSHOT_ISSUE = "Stundenplan wurde ohne Konfigurations-Snapshot erstellt"


class Recommendation(str, Enum):
    KEEP = "keep"
    MIGRATE = "migrate"
    RECREATE = "recreate"
    # Wird von der Prüfung nie erzeugt, nur manuell vergeben
    ARCHIVE = "archive"


_RECOMMENDATION_TEXT = {
    Recommendation.MIGRATE: "Automatisch migrieren und Uhrzeiten anpassen",
    Recommendation.RECREATE: "Stundenplan von Grund auf neu erstellen",
    Recommendation.ARCHIVE: "Archivieren und einen neuen Stundenplan anlegen",
    Recommendation.KEEP: "Manuell prüfen",
}


class CompatibilityResult(BaseModel):
    """Ergebnis der Kompatibilitätsprüfung."""

    is_compatible: bool
    issues: list[str]
    can_auto_migrate: bool
    recommendation: Recommendation

    def message(self) -> str:
        return get_compatibility_message(self)

    def print_rich(self) -> None:
        """Gibt das Ergebnis formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_compatible:
            body = "[bold green]✓ KOMPATIBEL[/bold green]"
            style = "green"
        else:
            lines = ["[bold red]✗ NICHT KOMPATIBEL[/bold red]", ""]
            lines += [f"  [yellow]• {i}[/yellow]" for i in self.issues]
            lines.append(
                f"\n[bold]Empfehlung:[/bold] {_RECOMMENDATION_TEXT[self.recommendation]}"
            )
            body = "\n".join(lines)
            style = "red"
        console.print(Panel(body, title="Kompatibilität", border_style=style))


def check_schedule_compatibility(
    snapshot: Optional[ConfigSnapshot],
    current: ConfigSnapshot,
) -> CompatibilityResult:
    """Vergleicht Snapshot und aktuelle Konfiguration Feld für Feld.

    Niveau- oder Blocklängen-Änderungen machen die Blocknummerierung ungültig
    und verhindern eine automatische Migration. Verschobene Anfangs- oder
    Endzeiten allein lassen sich migrieren, solange es höchstens zwei
    Abweichungen gibt.
    """
    if snapshot is None:
        return CompatibilityResult(
            is_compatible=False,
            issues=[NO_SNAPSHOT_ISSUE],
            can_auto_migrate=False,
            recommendation=Recommendation.RECREATE,
        )

    issues: list[str] = []
    can_auto_migrate = True

    if snapshot.academic_level != current.academic_level:
        issues.append(
            f"Niveau geändert von {snapshot.academic_level} auf {current.academic_level}")
        can_auto_migrate = False

    if snapshot.block_duration != current.block_duration:
        issues.append(
            f"Blocklänge geändert von {snapshot.block_duration} auf "
            f"{current.block_duration} Minuten")
        can_auto_migrate = False

    if snapshot.start_time != current.start_time:
        issues.append(
            f"Beginn geändert von {snapshot.start_time} auf {current.start_time}")

    if snapshot.end_time != current.end_time:
        issues.append(
            f"Ende geändert von {snapshot.end_time} auf {current.end_time}")

    if not issues:
        return CompatibilityResult(
            is_compatible=True,
            issues=[],
            can_auto_migrate=True,
            recommendation=Recommendation.KEEP,
        )

    if can_auto_migrate and len(issues) <= 2:
        recommendation = Recommendation.MIGRATE
    else:
        recommendation = Recommendation.RECREATE

    return CompatibilityResult(
        is_compatible=False,
        issues=issues,
        can_auto_migrate=can_auto_migrate,
        recommendation=recommendation,
    )


def get_compatibility_message(result: CompatibilityResult) -> str:
    """Lesbare Meldung: Bestätigung oder Problemliste mit Empfehlung."""
    if result.is_compatible:
        return "✓ Der Stundenplan ist mit der aktuellen Konfiguration kompatibel"

    lines = ["⚠ Dieser Stundenplan hat Kompatibilitätsprobleme:", ""]
    lines += [f"• {issue}" for issue in result.issues]
    lines += ["", f"Empfehlung: {_RECOMMENDATION_TEXT[result.recommendation]}"]
    return "\n".join(lines)
