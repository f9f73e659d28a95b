"""Fehlerklassen für Tagesraster, Stundenpläne und Zugriffsrechte."""


class ScheduleConfigError(Exception):
    """Basisklasse aller fachlichen Fehler dieser Anwendung."""


class ConfigValidationError(ScheduleConfigError, ValueError):
    """Ein Tagesraster verletzt fachliche Regeln. Wird vor jedem Schreiben geworfen."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(
            "Ungültige Konfiguration:\n" + "\n".join(f"  • {e}" for e in self.errors)
        )


class AccessDeniedError(ScheduleConfigError):
    """Der Aufrufer verwaltet die betroffene Schule nicht."""

    def __init__(self, school_id: str):
        self.school_id = school_id
        super().__init__(f"Kein Zugriff auf Schule {school_id!r}")


class NotFoundError(ScheduleConfigError):
    """Ein benötigter Datensatz (Schule, Kurs, Stundenplan) existiert nicht."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} nicht gefunden: {key!r}")
