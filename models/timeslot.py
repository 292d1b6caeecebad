"""Datenmodell für ein wöchentlich wiederkehrendes Zeitfenster."""

import uuid
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from planner.dates import is_valid_time, time_to_minutes


class Weekday(str, Enum):
    MONTAG = "Montag"
    DIENSTAG = "Dienstag"
    MITTWOCH = "Mittwoch"
    DONNERSTAG = "Donnerstag"
    FREITAG = "Freitag"
    SAMSTAG = "Samstag"
    SONNTAG = "Sonntag"

    @property
    def index(self) -> int:
        """0=Montag … 6=Sonntag (wie date.weekday())."""
        return list(Weekday).index(self)

    @property
    def short(self) -> str:
        return self.value[:2]

    @classmethod
    def parse(cls, text: str) -> "Weekday":
        """Akzeptiert vollen Namen oder Kürzel ("Mo", "mi", "Freitag")."""
        key = text.strip().lower()
        for day in cls:
            if key == day.value.lower() or key == day.short.lower():
                return day
        raise ValueError(
            f"Unbekannter Wochentag: '{text}'. "
            f"Erlaubt: {', '.join(d.value for d in cls)}"
        )


class TimeSlot(BaseModel):
    """Wöchentliches Lernfenster (Vorlage, gilt für jede Woche des Horizonts)."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    day: Weekday
    start_time: str                               # "HH:MM"
    end_time: str                                 # "HH:MM"

    @model_validator(mode='after')
    def _check_times(self):
        for value in (self.start_time, self.end_time):
            if not is_valid_time(value):
                raise ValueError(f"Ungültige Uhrzeit '{value}' (erwartet HH:MM).")
        if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
            raise ValueError(
                f"Beginn {self.start_time} muss vor Ende {self.end_time} liegen.")
        return self

    @property
    def duration_minutes(self) -> int:
        return time_to_minutes(self.end_time) - time_to_minutes(self.start_time)

    def __str__(self) -> str:
        return f"{self.day.value} {self.start_time}–{self.end_time}"
