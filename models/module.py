"""Datenmodell für ein Studienmodul und seine Prüfungsleistungen (Pydantic v2)."""

import uuid
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ModuleEditError(ValueError):
    """Eine Änderung würde die Modul-Invarianten verletzen."""


class AssessmentFormat(str, Enum):
    EINZELARBEIT = "Einzelarbeit"
    GRUPPENARBEIT = "Gruppenarbeit"


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class Assessment(BaseModel):
    """Eine benotete Prüfungsleistung (Klausur, Projekt, Präsentation, ...)."""

    id: str = Field(default_factory=_new_id)
    type: str                                     # "Schriftliche Prüfung"
    weight: int = Field(ge=0)                     # Prozent, Summe pro Modul = 100
    format: AssessmentFormat = AssessmentFormat.EINZELARBEIT
    deadline: Optional[date] = None               # bis der Nutzer sie einträgt


class Module(BaseModel):
    """Repräsentiert ein einzelnes Studienmodul."""

    id: str = Field(default_factory=_new_id)
    name: str                                     # eindeutig innerhalb eines Plans
    ects: int = Field(ge=1)
    workload: int = Field(ge=1)                   # Stunden
    assessments: list[Assessment] = Field(min_length=1)
    content: list[str] = []                       # Inhaltsthemen
    competencies: list[str] = []
    pdf_name: Optional[str] = None                # Quelldokument

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Modulname darf nicht leer sein.")
        return v

    @property
    def weight_total(self) -> int:
        return sum(a.weight for a in self.assessments)

    @property
    def deadlines(self) -> list[date]:
        """Alle eingetragenen Deadlines, aufsteigend."""
        return sorted(a.deadline for a in self.assessments if a.deadline is not None)

    # ─── Bearbeitung (liefert neue Instanzen) ───

    def remove_assessment(self, assessment_id: str) -> "Module":
        """Entfernt eine Prüfungsleistung. Die letzte kann nicht entfernt werden."""
        remaining = [a for a in self.assessments if a.id != assessment_id]
        if len(remaining) == len(self.assessments):
            raise ModuleEditError(
                f"Prüfungsleistung {assessment_id} gehört nicht zu Modul '{self.name}'.")
        if not remaining:
            raise ModuleEditError(
                f"Modul '{self.name}' muss mindestens eine Prüfungsleistung behalten.")
        return self.model_copy(update={"assessments": remaining})

    def with_assessment(self, assessment: Assessment) -> "Module":
        return self.model_copy(update={"assessments": [*self.assessments, assessment]})

    def with_deadline(self, index: int, deadline: Optional[date]) -> "Module":
        """Setzt die Deadline der Prüfungsleistung an Position index (0-basiert)."""
        if not 0 <= index < len(self.assessments):
            raise ModuleEditError(
                f"Modul '{self.name}' hat keine Prüfungsleistung Nr. {index + 1}.")
        updated = list(self.assessments)
        updated[index] = updated[index].model_copy(update={"deadline": deadline})
        return self.model_copy(update={"assessments": updated})

    def with_normalized_weights(self) -> "Module":
        """Gibt eine Kopie zurück, deren Gewichte exakt 100 ergeben."""
        from planner.weights import normalize_assessments
        return self.model_copy(
            update={"assessments": normalize_assessments(self.assessments)}
        )
