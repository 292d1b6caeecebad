"""Prüfung der von der KI gelieferten Session-Datensätze.

Jeder Datensatz wird einzeln akzeptiert, repariert oder verworfen. Ein
fehlerhafter Eintrag bricht nie die ganze Antwort ab; verworfene Einträge
werden geloggt und gezählt.

Regeln (in dieser Reihenfolge, erster Verstoß verwirft):
  1. Datum parsebar und innerhalb [Start, Ende]
  2. Modulname exakt bekannt (keine unscharfe Zuordnung)
  3. Unbekannte Lernmethode → Default-Methode (Reparatur, kein Verwerfen)
  4. startTime/endTime im Format HH:MM, Beginn vor Ende
  5. topic und description nicht leer
"""

import logging
from datetime import date
from typing import Optional

from pydantic import BaseModel

from config.defaults import ALLOWED_LEARNING_METHODS, DEFAULT_LEARNING_METHOD
from models.session import StudySession
from planner.dates import is_valid_time, parse_iso_date, time_to_minutes

logger = logging.getLogger(__name__)


class ValidationContext(BaseModel):
    """Alles, was zur Prüfung eines Datensatzes bekannt sein muss."""

    start: date
    end: date
    module_names: set[str]
    allowed_methods: set[str] = set(ALLOWED_LEARNING_METHODS)
    default_method: str = DEFAULT_LEARNING_METHOD


class SessionRejection(BaseModel):
    """Ein verworfener Datensatz."""

    index: int           # Position in der KI-Antwort
    rule: str            # z.B. "date_out_of_range"
    reason: str


class SessionValidationResult(BaseModel):
    """Ergebnis der Prüfung einer kompletten KI-Antwort."""

    accepted: list[StudySession]
    rejections: list[SessionRejection]
    repaired_methods: int = 0

    @property
    def total(self) -> int:
        return len(self.accepted) + len(self.rejections)


def _clean_str_list(value) -> Optional[list[str]]:
    if not isinstance(value, list):
        return None
    cleaned = [v.strip() for v in value if isinstance(v, str) and v.strip()]
    return cleaned or None


def _non_empty_str(value) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class SessionValidator:
    """Filtert und repariert rohe Session-Datensätze."""

    def __init__(self, context: ValidationContext):
        self.ctx = context

    def validate(self, records: list) -> SessionValidationResult:
        """Prüft alle Datensätze; akzeptierte behalten die Reihenfolge der KI.

        IDs werden neu vergeben ("1", "2", ...), die IDs der KI sind unzuverlässig.
        """
        accepted: list[StudySession] = []
        rejections: list[SessionRejection] = []
        repaired = 0

        for index, raw in enumerate(records):
            fields, rejection, was_repaired = self._check_record(raw)
            if rejection is not None:
                rule, reason = rejection
                logger.warning(f"Session #{index} verworfen ({rule}): {reason}")
                rejections.append(SessionRejection(index=index, rule=rule, reason=reason))
                continue
            if was_repaired:
                repaired += 1
            accepted.append(StudySession(id=str(len(accepted) + 1), **fields))

        if rejections:
            logger.info(
                f"{len(accepted)} von {len(records)} Sessions akzeptiert, "
                f"{len(rejections)} verworfen."
            )
        return SessionValidationResult(
            accepted=accepted, rejections=rejections, repaired_methods=repaired,
        )

    # ── Einzelprüfung ─────────────────────────────────────────────────────────

    def _check_record(
        self, raw
    ) -> tuple[Optional[dict], Optional[tuple[str, str]], bool]:
        """Gibt (Felder, None, repariert) oder (None, (Regel, Grund), False) zurück."""
        if not isinstance(raw, dict):
            return None, ("not_an_object", f"Kein Objekt: {raw!r}"), False

        # 1. Datum
        day = parse_iso_date(raw.get("date"))
        if day is None:
            return None, ("invalid_date", f"Ungültiges Datum: {raw.get('date')!r}"), False
        if not self.ctx.start <= day <= self.ctx.end:
            return None, (
                "date_out_of_range",
                f"{day} liegt außerhalb {self.ctx.start} – {self.ctx.end}",
            ), False

        # 2. Modul
        module = raw.get("module")
        if not isinstance(module, str) or module not in self.ctx.module_names:
            return None, ("unknown_module", f"Unbekanntes Modul: {module!r}"), False

        # 3. Lernmethode (Reparatur)
        method = raw.get("learningMethod")
        repaired = False
        if method is not None and method != "":
            if not isinstance(method, str) or method not in self.ctx.allowed_methods:
                logger.info(
                    f"Lernmethode {method!r} unbekannt, ersetzt durch "
                    f"'{self.ctx.default_method}'."
                )
                method = self.ctx.default_method
                repaired = True
        else:
            method = None

        # 4. Uhrzeiten
        start_time, end_time = raw.get("startTime"), raw.get("endTime")
        if not is_valid_time(start_time) or not is_valid_time(end_time):
            return None, (
                "invalid_time", f"Ungültige Uhrzeit: {start_time!r}–{end_time!r}",
            ), False
        if time_to_minutes(start_time) >= time_to_minutes(end_time):
            return None, (
                "invalid_time", f"Beginn {start_time} nicht vor Ende {end_time}",
            ), False

        # 5. Inhalt
        topic = _non_empty_str(raw.get("topic"))
        description = _non_empty_str(raw.get("description"))
        if topic is None or description is None:
            return None, ("missing_content", "topic oder description leer"), False

        fields = {
            "date": day,
            "start_time": start_time,
            "end_time": end_time,
            "module": module,
            "topic": topic,
            "description": description,
            "learning_method": method,
            "content_topics": _clean_str_list(raw.get("contentTopics")),
            "competencies": _clean_str_list(raw.get("competencies")),
            "study_tips": _non_empty_str(raw.get("studyTips")),
        }
        return fields, None, repaired
