"""Datenmodell für den Modul-Lernleitfaden.

Alle Felder haben Defaults: die KI liefert nicht immer jeden Abschnitt,
ein unvollständiger Leitfaden bleibt trotzdem nutzbar.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LearningStrategy(BaseModel):
    method: str = ""
    explanation: Optional[str] = None
    application: Optional[str] = None
    reasoning: str = ""
    timeline: str = ""


class WeeklyFocus(BaseModel):
    week: str = ""                                # "Woche 1-2"
    focus: str = ""
    tasks: list[str] = []


class ExamPreparation(BaseModel):
    """Vorbereitungsplan für eine Prüfungsleistung (4 Wochen bis letzter Tag)."""

    assessment_type: str = ""
    deadline: Optional[str] = None
    format: Optional[str] = None
    weight: Optional[int] = None
    four_weeks: list[str] = []
    two_weeks: list[str] = []
    one_week: list[str] = []
    last_day: list[str] = []


class LearningGuide(BaseModel):
    """Lernleitfaden für ein komplettes Modul."""

    module_name: str
    overview: str = ""
    competencies: list[str] = []
    learning_strategy: LearningStrategy = Field(default_factory=LearningStrategy)
    weekly_plan: list[WeeklyFocus] = []
    exercises: list[str] = []
    tools: list[str] = []
    exam_prep: list[ExamPreparation] = []
    tips: list[str] = []
    common_mistakes: list[str] = []
    success_checklist: list[str] = []
    total_hours: float = 0.0
    session_count: int = 0
    generated_at: Optional[datetime] = None
