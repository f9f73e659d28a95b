"""Tagesraster-Verwaltung — Haupt-CLI.

Verwendung:
  python main.py setup                          Einstellungen anlegen
  python main.py config show                    Einstellungen anzeigen
  python main.py generate                       Demo-Daten erzeugen
  python main.py validate                       Integritäts-Check des Datensatzes
  python main.py level show <schule> <niveau>   Tagesraster anzeigen
  python main.py level list <schule>            Gespeicherte Raster auflisten
  python main.py level save <schule> <niveau>   Tagesraster speichern
  python main.py range <schule>                 Gesamtspanne aller Raster
  python main.py schedule create <kurs>         Stundenplan anlegen
  python main.py schedule check <plan>          Kompatibilität prüfen
  python main.py schedule sync <plan>           Aktuelles Raster übernehmen
  python main.py schedule restore <plan>        Veraltet-Markierung aufheben
  python main.py schedule deprecate <s> <n>     Pläne eines Niveaus als veraltet markieren
  python main.py schedule stats <schule>        Anteil veralteter Pläne
"""

import functools
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

_LEVEL_CHOICE = click.Choice(["BASIC", "MIDDLE"], case_sensitive=False)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_settings_or_abort():
    """Lädt die Einstellungen oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    if mgr.first_run_check():
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]python main.py setup[/bold] aus."
        )
        sys.exit(1)
    settings = mgr.load()
    _setup_logging(settings.log_level)
    return mgr, settings


def _open_services():
    """Öffnet Datensatz und Services mit den verwalteten Schulen des Bedieners."""
    from data.store import ScheduleStore
    from services import build_services

    _, settings = _load_settings_or_abort()
    store = ScheduleStore.open(Path(settings.data_path))
    return store, build_services(store, settings.school_ids)


def _handle_errors(func):
    """Fachliche Fehler rot ausgeben und mit Exit-Code 1 beenden."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from config.errors import ConfigValidationError, ScheduleConfigError
        try:
            return func(*args, **kwargs)
        except ConfigValidationError as e:
            console.print("[red bold]Ungültige Konfiguration:[/red bold]")
            for err in e.errors:
                console.print(f"  [red]• {err}[/red]")
            sys.exit(1)
        except ScheduleConfigError as e:
            console.print(f"[red bold]Fehler:[/red bold] {e}")
            sys.exit(1)
    return wrapper


def _parse_break(value: str):
    """'NACH:DAUER[:NAME]' → BreakConfig, z.B. '4:45:Mittagspause'."""
    from config.schema import BreakConfig
    parts = value.split(":", 2)
    try:
        after, duration = int(parts[0]), int(parts[1])
    except (ValueError, IndexError):
        raise click.BadParameter(
            f"'{value}' – erwartet NACH:DAUER[:NAME], z.B. 2:15:Pause")
    name = parts[2] if len(parts) > 2 and parts[2] else "Pause"
    return BreakConfig(after_block=after, duration=duration, name=name)


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.option("--data-path", default="output/school_data.json",
              help="Pfad für den Datensatz (JSON).")
@click.option("--school", "school_ids", multiple=True,
              help="ID einer verwalteten Schule (mehrfach möglich).")
@click.option("--log-level", default="WARNING",
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def cmd_setup(data_path: str, school_ids: tuple[str, ...], log_level: str):
    """Ersteinrichtung: Einstellungsdatei anlegen."""
    from config.manager import ConfigManager
    from config.schema import AppSettings

    mgr = ConfigManager()
    if not mgr.first_run_check():
        console.print("[yellow]Eine Konfiguration existiert bereits.[/yellow]")
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    mgr.save(AppSettings(
        data_path=data_path,
        school_ids=list(school_ids),
        log_level=log_level.upper(),
    ))
    console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
    console.print("Führen Sie jetzt [bold]python main.py generate[/bold] aus.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Einstellungen anzeigen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuellen Einstellungen an."""
    _, settings = _load_settings_or_abort()
    table = Table(title="Einstellungen", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Datensatz", settings.data_path)
    table.add_row("Verwaltete Schulen", ", ".join(settings.school_ids) or "—")
    table.add_row("Log-Level", settings.log_level)
    console.print(table)


# ─── GENERATE / VALIDATE ──────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--schools", default=1, help="Anzahl Schulen.")
@click.option("--export-json", "json_path", default=None,
              help="Abweichender Pfad für den Datensatz.")
def cmd_generate(seed: int, schools: int, json_path: str | None):
    """Erzeugt Demo-Daten (Schulen, Kurse, Stundenpläne) und speichert sie."""
    mgr, settings = _load_settings_or_abort()
    from data.fake_data import FakeDataGenerator

    gen = FakeDataGenerator(seed=seed, num_schools=schools)
    data = gen.generate()
    gen.print_summary(data)

    out_path = Path(json_path or settings.data_path)
    data.save_json(out_path)
    console.print(f"[green]✓[/green] Datensatz gespeichert: {out_path}")
    mgr.add_school_ids(settings, [s.id for s in data.schools])


@click.command("validate")
def cmd_validate():
    """Führt einen Integritäts-Check auf dem Datensatz durch."""
    store, _ = _open_services()
    console.print(f"\n{store.data.summary()}\n")
    report = store.data.check_integrity()
    report.print_rich()
    sys.exit(0 if report.is_consistent else 1)


# ─── LEVEL ────────────────────────────────────────────────────────────────────

@click.group("level")
def cmd_level():
    """Tagesraster pro Niveau anzeigen und speichern."""


@cmd_level.command("show")
@click.argument("school_id")
@click.argument("level", type=_LEVEL_CHOICE)
@_handle_errors
def level_show(school_id: str, level: str):
    """Zeigt das Tagesraster eines Niveaus mit allen Blöcken und Pausen."""
    from config.schema import AcademicLevel
    from export.tui_renderer import build_grid_table
    from timegrid.generator import generate_time_slots_with_breaks

    _, services = _open_services()
    config = services.configs.get_config_for_level(school_id, AcademicLevel(level.upper()))
    if config.id is None:
        console.print("[dim]Kein gespeichertes Raster – Default wird angezeigt.[/dim]")
    console.print(build_grid_table(config, generate_time_slots_with_breaks(config)))


@cmd_level.command("list")
@click.argument("school_id")
@_handle_errors
def level_list(school_id: str):
    """Listet alle gespeicherten Tagesraster einer Schule."""
    _, services = _open_services()
    configs = services.configs.get_all_configs_for_school(school_id)
    if not configs:
        console.print("[dim]Keine gespeicherten Raster.[/dim]")
        return
    table = Table(title=f"Tagesraster {school_id}", box=box.ROUNDED)
    table.add_column("Niveau", style="bold")
    table.add_column("Beginn")
    table.add_column("Ende")
    table.add_column("Block")
    table.add_column("Pausen")
    for c in configs:
        table.add_row(
            c.academic_level.value, c.start_time, c.end_time,
            f"{c.block_duration} min",
            ", ".join(f"{b.name} nach {b.after_block}" for b in c.breaks) or "—",
        )
    console.print(table)


@cmd_level.command("save")
@click.argument("school_id")
@click.argument("level", type=_LEVEL_CHOICE)
@click.option("--start", "start_time", default=None, help="Beginn HH:MM.")
@click.option("--end", "end_time", default=None, help="Ende HH:MM.")
@click.option("--block", "block_duration", type=int, default=None,
              help="Blocklänge in Minuten (Vielfaches von 15).")
@click.option("--break", "breaks", multiple=True,
              help="Pause NACH:DAUER[:NAME], ersetzt alle bisherigen Pausen.")
@click.option("--no-breaks", is_flag=True, default=False, help="Alle Pausen entfernen.")
@_handle_errors
def level_save(school_id: str, level: str, start_time, end_time, block_duration,
               breaks: tuple[str, ...], no_breaks: bool):
    """Speichert ein Tagesraster. Nicht angegebene Felder bleiben wie bisher."""
    from pydantic import ValidationError
    from config.errors import ConfigValidationError
    from config.schema import AcademicLevel

    store, services = _open_services()
    academic_level = AcademicLevel(level.upper())
    current = services.configs.get_config_for_level(school_id, academic_level)

    update = {}
    if start_time is not None:
        update["start_time"] = start_time
    if end_time is not None:
        update["end_time"] = end_time
    if block_duration is not None:
        update["block_duration"] = block_duration
    if no_breaks:
        update["breaks"] = []
    elif breaks:
        update["breaks"] = [_parse_break(b) for b in breaks]

    try:
        config = current.model_validate({**current.model_dump(), **update})
    except ValidationError as e:
        raise ConfigValidationError(
            [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()])
    before = sum(1 for s in store.data.schedules if s.is_deprecated)
    saved = services.configs.save_config_for_level(config)
    marked = sum(1 for s in store.data.schedules if s.is_deprecated) - before

    console.print(
        f"[green]✓[/green] Tagesraster gespeichert: {saved.school_id} / "
        f"{saved.academic_level.value}"
    )
    if marked:
        console.print(f"[yellow]⚠ {marked} Stundenpläne als veraltet markiert.[/yellow]")


@click.command("range")
@click.argument("school_id")
@_handle_errors
def cmd_range(school_id: str):
    """Zeigt die Gesamtspanne aller Tagesraster einer Schule."""
    _, services = _open_services()
    r = services.configs.get_school_schedule_range(school_id)
    console.print(Panel(
        f"{r.start_time}–{r.end_time}, kleinste Blocklänge {r.block_duration} min\n"
        f"[dim]Quelle: {r.source}[/dim]",
        title=f"Spanne {school_id}",
        border_style="cyan",
    ))


# ─── SCHEDULE ─────────────────────────────────────────────────────────────────

@click.group("schedule")
def cmd_schedule():
    """Stundenpläne anlegen, prüfen und abgleichen."""


@cmd_schedule.command("create")
@click.argument("course_id")
@click.option("--name", default="", help="Bezeichnung des Stundenplans.")
@_handle_errors
def schedule_create(course_id: str, name: str):
    """Legt einen Stundenplan mit Snapshot des aktuellen Rasters an."""
    _, services = _open_services()
    schedule = services.schedules.create_schedule(course_id, name)
    console.print(f"[green]✓[/green] Stundenplan angelegt: {schedule.id}")


@cmd_schedule.command("check")
@click.argument("schedule_id")
@_handle_errors
def schedule_check(schedule_id: str):
    """Prüft ob ein Stundenplan zum aktuellen Raster passt."""
    _, services = _open_services()
    info = services.compatibility.get_schedule_compatibility_info(schedule_id)
    if info.is_deprecated:
        console.print("[yellow]Stundenplan ist als veraltet markiert.[/yellow]")
    info.compatibility.print_rich()


@cmd_schedule.command("sync")
@click.argument("schedule_id")
@_handle_errors
def schedule_sync(schedule_id: str):
    """Übernimmt das aktuelle Raster als neuen Snapshot."""
    _, services = _open_services()
    services.compatibility.accept_current_config(schedule_id)
    console.print(f"[green]✓[/green] Snapshot aktualisiert: {schedule_id}")


@cmd_schedule.command("restore")
@click.argument("schedule_id")
@_handle_errors
def schedule_restore(schedule_id: str):
    """Hebt die Veraltet-Markierung auf (Snapshot bleibt unverändert)."""
    _, services = _open_services()
    services.compatibility.restore_schedule(schedule_id)
    console.print(f"[green]✓[/green] Stundenplan wiederhergestellt: {schedule_id}")


@cmd_schedule.command("deprecate")
@click.argument("school_id")
@click.argument("level", type=_LEVEL_CHOICE)
@_handle_errors
def schedule_deprecate(school_id: str, level: str):
    """Markiert alle aktiven Stundenpläne eines Niveaus als veraltet."""
    from config.schema import AcademicLevel
    _, services = _open_services()
    count = services.compatibility.mark_schedules_as_deprecated_for_level(
        school_id, AcademicLevel(level.upper()))
    console.print(f"[yellow]{count} Stundenpläne als veraltet markiert.[/yellow]")


@cmd_schedule.command("stats")
@click.argument("school_id")
@_handle_errors
def schedule_stats(school_id: str):
    """Zeigt den Anteil veralteter Stundenpläne einer Schule."""
    _, services = _open_services()
    stats = services.compatibility.get_deprecated_schedules_stats(school_id)
    table = Table(title=f"Stundenpläne {school_id}", box=box.ROUNDED)
    table.add_column("Gesamt", justify="right")
    table.add_column("Aktuell", justify="right")
    table.add_column("Veraltet", justify="right")
    table.add_column("Anteil", justify="right")
    table.add_row(str(stats.total), str(stats.active), str(stats.deprecated),
                  f"{stats.percentage}%")
    console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Tagesraster und Stundenplan-Kompatibilität für Schulen.

    Starten Sie mit: python main.py setup
    """


def main():
    """Einstiegspunkt. Startet automatisch das Setup beim ersten Aufruf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Willkommen bei der Tagesraster-Verwaltung![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Das Setup wird jetzt gestartet...",
            border_style="cyan",
        ))
        sys.argv.append("setup")

    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_validate)
cli.add_command(cmd_level)
cli.add_command(cmd_range)
cli.add_command(cmd_schedule)


if __name__ == "__main__":
    main()
