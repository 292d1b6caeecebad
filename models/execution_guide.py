"""Datenmodelle für Execution Guides (Ausarbeitung einer einzelnen Session)."""

from datetime import datetime

from pydantic import BaseModel, Field


class AgendaItem(BaseModel):
    """Eine Phase im Ablauf einer Session."""

    phase: str                                    # "Warm-up", "Deep Work", ...
    duration: int = Field(gt=0)                   # Minuten
    description: str


class ExecutionGuide(BaseModel):
    """Ausarbeitung einer Session. Verweist per session_id auf die Session, besitzt sie nicht."""

    session_id: str
    session_goal: str
    agenda: list[AgendaItem]
    method_ideas: list[str]
    tools: list[str]
    deliverable: str
    ready_check: str
    generated_at: datetime

    @property
    def agenda_minutes(self) -> int:
        return sum(item.duration for item in self.agenda)


class ElaborationResult(BaseModel):
    """Ergebnis einer Wochen-Ausarbeitung."""

    guides: list[ExecutionGuide]
    warnings: list[str] = []
    dropped: int = 0
    summary: dict = {}                            # totalSessions, weekStartDate, weekEndDate
