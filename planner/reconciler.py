"""Semesterplan-Generierung: KI-Antwort → geprüfte Sessions.

Ablauf eines Generierungszyklus:
  1. Eingaben prüfen (Module, Zeitfenster, API-Key), sonst sofort Fehler
  2. Planungshorizont: späteste plausible Deadline, sonst 16 Wochen
  3. Planungsdaten an die KI (einstufig oder zweistufig)
  4. Antwort parsen, 'sessions' muss vorhanden sein
  5. Jede Session einzeln prüfen (SessionValidator)
  6. Pädagogische Prüfung, Hinweise nur ins Log
  7. Low-Yield-Warnung bei deutlich zu wenigen Sessions

Scheitern Schritt 3–5 (Netzwerk, kein JSON, keine verwertbaren Sessions),
wird ein deterministischer Ersatzplan erzeugt.
"""

import json
import logging
from datetime import date, timedelta
from typing import Optional

from pydantic import BaseModel

from config.defaults import (
    ALLOWED_LEARNING_METHODS,
    DEFAULT_HORIZON_WEEKS,
    LOW_YIELD_RATIO,
    MAX_DEADLINE_YEARS,
    MIN_EXPECTED_SESSIONS,
)
from config.schema import LLMConfig, PlanningMode
from analysis.pedagogical_audit import PedagogicalAuditor
from analysis.session_validator import SessionValidator, ValidationContext
from llm.client import LLMClient, LLMError, LLMResponseError, parse_json_object
from llm.prompts import render_template
from models.module import Module
from models.session import StudySession
from models.timeslot import TimeSlot
from planner.dates import clamp_horizon, weeks_between
from planner.errors import (
    EmptyBatchError,
    FailureKind,
    InputPreconditionError,
    PlannerError,
    ResponseParseError,
    TransportError,
)
from planner.fallback import FallbackPlanGenerator, expand_slots, generic_session_text

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modell ──────────────────────────────────────────────────────────

class GenerationResult(BaseModel):
    """Ergebnis eines Generierungszyklus."""

    sessions: list[StudySession]
    start_date: date
    end_date: date
    weeks: int
    expected_sessions: int
    mode: PlanningMode = PlanningMode.SINGLE
    warnings: list[str] = []           # Audit-Hinweise + Low-Yield
    rejected: int = 0
    repaired_methods: int = 0
    used_fallback: bool = False
    failure_kind: Optional[FailureKind] = None
    failure_message: Optional[str] = None
    plan_summary: Optional[dict] = None


# ─── Payload-Hilfen ───────────────────────────────────────────────────────────

def module_to_payload(module: Module) -> dict:
    """Moduldaten im Austauschformat der KI."""
    return {
        "name": module.name,
        "ects": module.ects,
        "workload": module.workload,
        "content": module.content,
        "competencies": module.competencies,
        "assessments": [
            {
                "type": a.type,
                "weight": a.weight,
                "format": a.format.value,
                "deadline": a.deadline.isoformat() if a.deadline else None,
            }
            for a in module.assessments
        ],
    }


def _to_json(data) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def _call_llm(llm: LLMClient, system_prompt: str, user_prompt: str,
              temperature: float, max_tokens: int) -> dict:
    """KI-Aufruf mit Übersetzung in PlannerError-Arten."""
    try:
        text = llm.complete_json(
            system_prompt, user_prompt, temperature=temperature, max_tokens=max_tokens,
        )
        return parse_json_object(text)
    except LLMResponseError as e:
        raise ResponseParseError(str(e)) from e
    except LLMError as e:
        raise TransportError(str(e)) from e


def _session_records(data: dict) -> list:
    """Liest das 'sessions'-Array; fehlt es oder ist es leer, scheitert der Aufruf."""
    records = data.get("sessions")
    if not isinstance(records, list):
        raise ResponseParseError("Antwort enthält kein 'sessions'-Array.")
    if not records:
        raise EmptyBatchError("Die KI hat keine Sessions geliefert.")
    return records


def _slot_key(record: dict) -> tuple:
    return record.get("date"), record.get("startTime"), record.get("endTime")


def _has_text_key(record, fields=("date", "startTime", "endTime")) -> bool:
    """Nur Datensätze mit Text in allen Schlüsselfeldern taugen als Slot-Schlüssel."""
    return isinstance(record, dict) and all(isinstance(record.get(f), str) for f in fields)


# ─── Reconciler ───────────────────────────────────────────────────────────────

class PlanReconciler:
    """Orchestriert einen kompletten Generierungszyklus."""

    def __init__(
        self,
        llm: LLMClient,
        llm_config: Optional[LLMConfig] = None,
        mode: PlanningMode = PlanningMode.SINGLE,
    ):
        self.llm = llm
        self.cfg = llm_config or LLMConfig()
        self.mode = mode
        self.auditor = PedagogicalAuditor()
        self.fallback = FallbackPlanGenerator()

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def generate(
        self,
        modules: list[Module],
        time_slots: list[TimeSlot],
        today: Optional[date] = None,
    ) -> GenerationResult:
        """Erzeugt einen geprüften Semesterplan (oder einen Ersatzplan)."""
        self._check_inputs(modules, time_slots)

        start = today or date.today()
        end = clamp_horizon(start, self.planning_end(modules, start))
        weeks = weeks_between(start, end)
        slots_per_week = len(time_slots)
        expected = max(MIN_EXPECTED_SESSIONS, weeks * slots_per_week)
        logger.info(
            f"Planungszeitraum {start} – {end} ({weeks} Wochen, "
            f"{slots_per_week} Slots/Woche, erwartet ≥{expected} Sessions)"
        )

        result = GenerationResult(
            sessions=[], start_date=start, end_date=end, weeks=weeks,
            expected_sessions=expected, mode=self.mode,
        )
        context = ValidationContext(
            start=start, end=end, module_names={m.name for m in modules},
        )

        try:
            if self.mode == PlanningMode.STAGED:
                records = self._request_staged(modules, time_slots, start, end)
            else:
                records, result.plan_summary = self._request_single(
                    modules, time_slots, start, end, weeks, expected)
            validation = SessionValidator(context).validate(records)
            if not validation.accepted:
                raise EmptyBatchError(
                    f"Keine der {validation.total} Sessions hat die Prüfung bestanden.")
        except PlannerError as e:
            logger.error(f"Plan-Generierung fehlgeschlagen ({e.kind.value}): {e}")
            result.used_fallback = True
            result.failure_kind = e.kind
            result.failure_message = str(e)
            result.sessions = self.fallback.generate(modules, time_slots, start, end)
        else:
            result.sessions = validation.accepted
            result.rejected = len(validation.rejections)
            result.repaired_methods = validation.repaired_methods

        report = self.auditor.audit(result.sessions, modules)
        result.warnings = report.messages

        accepted = len(result.sessions)
        if accepted < expected * LOW_YIELD_RATIO:
            message = (
                f"Nur {accepted} Sessions geplant, erwartet wurden mindestens {expected}."
            )
            logger.warning(message)
            result.warnings.append(message)

        return result

    def planning_end(self, modules: list[Module], today: date) -> date:
        """Späteste Deadline in der Zukunft (höchstens 2 Jahre), sonst heute + 16 Wochen."""
        limit = today + timedelta(days=365 * MAX_DEADLINE_YEARS)
        plausible = [
            d for m in modules for d in m.deadlines
            if today < d <= limit
        ]
        if plausible:
            return max(plausible)
        logger.info(f"Keine plausible Deadline, Standard-Horizont {DEFAULT_HORIZON_WEEKS} Wochen.")
        return today + timedelta(weeks=DEFAULT_HORIZON_WEEKS)

    def build_planning_data(
        self, modules: list[Module], time_slots: list[TimeSlot],
        start: date, end: date, weeks: int,
    ) -> dict:
        return {
            "planningPeriod": {
                "startDate": start.isoformat(),
                "endDate": end.isoformat(),
                "weeks": weeks,
            },
            "modules": [module_to_payload(m) for m in modules],
            "availableTimeSlots": [
                {"day": s.day.value, "startTime": s.start_time, "endTime": s.end_time}
                for s in time_slots
            ],
        }

    # ─── Eingaben ─────────────────────────────────────────────────────────────

    def _check_inputs(self, modules: list[Module], time_slots: list[TimeSlot]) -> None:
        if not modules:
            raise InputPreconditionError("Keine Module vorhanden. Bitte zuerst Module hinzufügen.")
        if not time_slots:
            raise InputPreconditionError("Keine Zeitfenster definiert. Bitte Lernzeiten festlegen.")
        if not self.llm.has_credentials():
            raise InputPreconditionError("Kein API-Key vorhanden. Bitte OpenAI API-Key setzen.")

    # ─── Einstufig ────────────────────────────────────────────────────────────

    def _request_single(
        self, modules, time_slots, start: date, end: date, weeks: int, expected: int,
    ) -> tuple[list, Optional[dict]]:
        slots_per_week = len(time_slots)
        planning_data = self.build_planning_data(modules, time_slots, start, end, weeks)
        values = {
            "startDate": start.isoformat(),
            "lastExamDate": end.isoformat(),
            "weeksBetween": weeks,
            "totalSlotsPerWeek": slots_per_week,
            "minSessions": expected,
            "maxSessions": expected + slots_per_week,
            "allowedMethods": ", ".join(ALLOWED_LEARNING_METHODS),
            "planningData": _to_json(planning_data),
        }
        data = _call_llm(
            self.llm,
            render_template("plan_system", values),
            render_template("plan_user", values),
            self.cfg.plan_temperature,
            self.cfg.plan_max_tokens,
        )
        summary = data.get("planSummary")
        return _session_records(data), summary if isinstance(summary, dict) else None

    # ─── Zweistufig: Verteilung + Anreicherung ────────────────────────────────

    def _request_staged(self, modules, time_slots, start: date, end: date) -> list[dict]:
        weeks = weeks_between(start, end)
        planning_data = self.build_planning_data(modules, time_slots, start, end, weeks)
        slots = expand_slots(start, end, time_slots)
        known = {m.name for m in modules}

        # Schritt 1: Module auf Slots verteilen
        data = _call_llm(
            self.llm,
            render_template("coach_system", {}),
            render_template("plan_distribution", {
                "slots": _to_json([{**s, "module": None} for s in slots]),
                "planningData": _to_json(planning_data),
            }),
            self.cfg.plan_temperature,
            self.cfg.plan_max_tokens,
        )
        slot_keys = {_slot_key(s) for s in slots}
        assigned: dict[tuple, str] = {}
        for record in _session_records(data):
            if not _has_text_key(record, ("date", "startTime", "endTime", "module")):
                continue
            key = _slot_key(record)
            module = record.get("module")
            if key in slot_keys and key not in assigned and module in known:
                assigned[key] = module
        if not assigned:
            raise EmptyBatchError("Die KI hat keinem Zeitfenster ein Modul zugeordnet.")
        logger.info(f"Verteilung: {len(assigned)} von {len(slots)} Slots belegt.")

        assigned_slots = [
            {**s, "module": assigned[_slot_key(s)]}
            for s in slots if _slot_key(s) in assigned
        ]

        # Schritt 2: Inhalte ergänzen; Datum, Zeit und Modul bleiben aus Schritt 1
        data = _call_llm(
            self.llm,
            render_template("coach_system", {}),
            render_template("plan_enrichment", {
                "planningData": _to_json(planning_data),
                "sessions": _to_json(assigned_slots),
                "allowedMethods": ", ".join(ALLOWED_LEARNING_METHODS),
            }),
            self.cfg.plan_temperature,
            self.cfg.plan_max_tokens,
        )
        enrichment: dict[tuple, dict] = {}
        for record in _session_records(data):
            if _has_text_key(record):
                enrichment.setdefault(_slot_key(record), record)

        module_map = {m.name: m for m in modules}
        counters: dict[str, int] = {}
        merged: list[dict] = []
        missing = 0
        for slot in assigned_slots:
            name = slot["module"]
            counters[name] = counters.get(name, 0) + 1
            record = {**enrichment.get(_slot_key(slot), {}), **slot}
            if not record.get("topic") or not record.get("description"):
                topic, description = generic_session_text(module_map[name], counters[name])
                record["topic"] = record.get("topic") or topic
                record["description"] = record.get("description") or description
                missing += 1
            merged.append(record)
        if missing:
            logger.warning(f"{missing} Sessions ohne Inhalt von der KI, Standardtext ergänzt.")
        return merged
