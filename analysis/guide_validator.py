"""Strukturprüfung der Execution Guides aus der Wochen-Ausarbeitung.

Strukturfehler verwerfen einen Guide. Weicht die Agenda-Summe mehr als
5 Minuten von der Session-Dauer ab, gibt es nur eine Warnung.
"""

import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from config.defaults import AGENDA_DURATION_TOLERANCE_MINUTES
from models.execution_guide import AgendaItem, ExecutionGuide
from models.session import StudySession

logger = logging.getLogger(__name__)

_REQUIRED_STRINGS = ("sessionGoal", "deliverable", "readyCheck")
_REQUIRED_LISTS = ("methodIdeas", "tools")


class GuideRejection(BaseModel):
    index: int
    session_id: Optional[str] = None
    reason: str


class GuideValidationResult(BaseModel):
    guides: list[ExecutionGuide]
    rejections: list[GuideRejection]
    warnings: list[str]


def _parse_duration(value) -> Optional[int]:
    """Minuten als int oder numerischer String ("45"); sonst None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class ExecutionGuideValidator:
    """Filtert rohe Guide-Datensätze der KI."""

    def validate(
        self,
        raw_guides: list,
        sessions: list[StudySession],
        generated_at: Optional[datetime] = None,
    ) -> GuideValidationResult:
        generated_at = generated_at or datetime.now()
        session_map = {s.id: s for s in sessions}
        guides: list[ExecutionGuide] = []
        rejections: list[GuideRejection] = []
        warnings: list[str] = []

        for index, raw in enumerate(raw_guides):
            session_id = self._session_id(raw)
            problem = self._structural_problem(raw, session_id)
            agenda: list[AgendaItem] = []
            if problem is None:
                agenda, problem = self._parse_agenda(raw["agenda"])
            if problem is not None:
                logger.warning(f"Execution Guide #{index} verworfen: {problem}")
                rejections.append(GuideRejection(
                    index=index, session_id=session_id, reason=problem))
                continue

            guide = ExecutionGuide(
                session_id=session_id,
                session_goal=raw["sessionGoal"].strip(),
                agenda=agenda,
                method_ideas=[str(m) for m in raw["methodIdeas"]],
                tools=[str(t) for t in raw["tools"]],
                deliverable=raw["deliverable"].strip(),
                ready_check=raw["readyCheck"].strip(),
                generated_at=generated_at,
            )

            session = session_map.get(session_id)
            if session is None:
                warnings.append(f"Guide {session_id}: keine passende Session in dieser Woche.")
            elif abs(guide.agenda_minutes - session.duration_minutes) > AGENDA_DURATION_TOLERANCE_MINUTES:
                warnings.append(
                    f"Guide {session_id}: Agenda {guide.agenda_minutes} min, "
                    f"Session {session.duration_minutes} min."
                )
            if not 2 <= len(guide.method_ideas) <= 4:
                warnings.append(
                    f"Guide {session_id}: {len(guide.method_ideas)} Methoden-Ideen (erwartet 2–4)."
                )
            guides.append(guide)

        for w in warnings:
            logger.warning(w)
        return GuideValidationResult(guides=guides, rejections=rejections, warnings=warnings)

    # ── Einzelprüfungen ───────────────────────────────────────────────────────

    def _session_id(self, raw) -> Optional[str]:
        if not isinstance(raw, dict):
            return None
        value = raw.get("sessionId")
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return None
        value = str(value).strip()
        return value or None

    def _structural_problem(self, raw, session_id: Optional[str]) -> Optional[str]:
        if not isinstance(raw, dict):
            return "kein Objekt"
        if session_id is None:
            return "sessionId fehlt"
        for key in _REQUIRED_STRINGS:
            value = raw.get(key)
            if not isinstance(value, str) or not value.strip():
                return f"{key} fehlt oder ist leer"
        agenda = raw.get("agenda")
        if not isinstance(agenda, list) or not agenda:
            return "agenda fehlt oder ist leer"
        for key in _REQUIRED_LISTS:
            if not isinstance(raw.get(key), list):
                return f"{key} ist keine Liste"
        return None

    def _parse_agenda(self, items: list) -> tuple[list[AgendaItem], Optional[str]]:
        agenda: list[AgendaItem] = []
        for pos, item in enumerate(items):
            if not isinstance(item, dict):
                return [], f"Agenda-Punkt {pos} ist kein Objekt"
            phase = item.get("phase")
            description = item.get("description")
            duration = _parse_duration(item.get("duration"))
            if not isinstance(phase, str) or not phase.strip():
                return [], f"Agenda-Punkt {pos}: phase fehlt"
            if duration is None or duration <= 0:
                return [], f"Agenda-Punkt {pos}: ungültige Dauer {item.get('duration')!r}"
            if not isinstance(description, str) or not description.strip():
                return [], f"Agenda-Punkt {pos}: description fehlt"
            agenda.append(AgendaItem(
                phase=phase.strip(), duration=duration, description=description.strip()))
        return agenda, None
