"""Datenmodell für eine konkrete, datierte Lernsession."""

import datetime
from typing import Optional

from pydantic import BaseModel

from planner.dates import time_to_minutes


class StudySession(BaseModel):
    """Eine Lerneinheit im Semesterplan.

    Wird ausschließlich vom PlanReconciler erzeugt. Die ID ist die Position
    in der akzeptierten Liste ("1", "2", ...), nicht die ID der KI.
    """

    id: str
    date: datetime.date
    start_time: str                               # "HH:MM"
    end_time: str                                 # "HH:MM"
    module: str                                   # Name eines vorhandenen Moduls
    topic: str
    description: str
    learning_method: Optional[str] = None
    content_topics: Optional[list[str]] = None
    competencies: Optional[list[str]] = None
    study_tips: Optional[str] = None

    @property
    def duration_minutes(self) -> int:
        return time_to_minutes(self.end_time) - time_to_minutes(self.start_time)

    @property
    def hours(self) -> float:
        return self.duration_minutes / 60

    def to_record(self) -> dict:
        """Darstellung im Austauschformat der KI (camelCase, ISO-Datum)."""
        record = {
            "id": self.id,
            "date": self.date.isoformat(),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "module": self.module,
            "topic": self.topic,
            "description": self.description,
        }
        if self.learning_method:
            record["learningMethod"] = self.learning_method
        if self.content_topics:
            record["contentTopics"] = self.content_topics
        if self.competencies:
            record["competencies"] = self.competencies
        if self.study_tips:
            record["studyTips"] = self.study_tips
        return record
