"""Zugriffsprüfung: der Aufrufer darf nur die Schulen verwalten, die ihm zugeordnet sind."""

from typing import Iterable

from config.errors import AccessDeniedError


class SchoolAccess:
    def __init__(self, school_ids: Iterable[str]) -> None:
        self.school_ids = frozenset(school_ids)

    def require(self, school_id: str) -> None:
        if school_id not in self.school_ids:
            raise AccessDeniedError(school_id)
