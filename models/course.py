"""Datenmodell für einen Kurs (Pydantic v2)."""

from pydantic import BaseModel

from config.schema import AcademicLevel


class Course(BaseModel):
    """Ein Kurs (z.B. "3° Básico A"). Das Niveau ist nach der Zuordnung fest."""

    id: str
    school_id: str
    name: str
    academic_level: AcademicLevel
