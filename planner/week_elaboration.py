"""Wochen-Ausarbeitung: konkrete Ablaufpläne (Execution Guides) pro Session."""

import json
import logging
from datetime import date, timedelta
from typing import Optional

from config.schema import LLMConfig
from analysis.guide_validator import ExecutionGuideValidator
from data.guide_store import GuideStore
from llm.client import LLMClient, LLMError, LLMResponseError, parse_json_object
from llm.prompts import render_template
from models.execution_guide import ElaborationResult
from models.module import Module
from models.session import StudySession
from planner.errors import (
    EmptyBatchError,
    InputPreconditionError,
    ResponseParseError,
    TransportError,
)

logger = logging.getLogger(__name__)


def sessions_for_week(sessions: list[StudySession], week_start: date) -> list[StudySession]:
    """Sessions mit week_start ≤ Datum < week_start + 7 Tage."""
    week_end = week_start + timedelta(days=7)
    return [s for s in sessions if week_start <= s.date < week_end]


def _module_payload(module: Module) -> dict:
    return {
        "name": module.name,
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


class WeekElaborator:
    """Erzeugt, prüft und speichert die Execution Guides einer Woche."""

    def __init__(self, llm: LLMClient, store: GuideStore,
                 llm_config: Optional[LLMConfig] = None):
        self.llm = llm
        self.store = store
        self.cfg = llm_config or LLMConfig()
        self.validator = ExecutionGuideValidator()

    def elaborate(
        self,
        week_start: date,
        sessions: list[StudySession],
        modules: list[Module],
    ) -> ElaborationResult:
        week_sessions = sessions_for_week(sessions, week_start)
        if not week_sessions:
            raise InputPreconditionError(
                f"Keine Sessions in der Woche ab {week_start.strftime('%d.%m.%Y')}.")
        if not self.llm.has_credentials():
            raise InputPreconditionError("Kein API-Key vorhanden. Bitte OpenAI API-Key setzen.")

        week_end = week_start + timedelta(days=6)
        used = {s.module for s in week_sessions}
        module_data = [_module_payload(m) for m in modules if m.name in used]

        prompt = render_template("week_elaboration", {
            "weekStart": week_start.isoformat(),
            "weekEnd": week_end.isoformat(),
            "sessionsJson": json.dumps(
                [s.to_record() for s in week_sessions], ensure_ascii=False, indent=2),
            "moduleDataJson": json.dumps(module_data, ensure_ascii=False, indent=2),
        })

        try:
            raw = self.llm.complete_json(
                render_template("coach_system", {}),
                prompt,
                temperature=self.cfg.elaboration_temperature,
                max_tokens=self.cfg.elaboration_max_tokens,
            )
            data = parse_json_object(raw)
        except LLMResponseError as e:
            raise ResponseParseError(str(e)) from e
        except LLMError as e:
            raise TransportError(str(e)) from e

        raw_guides = data.get("executionGuides")
        if not isinstance(raw_guides, list):
            raise ResponseParseError("Antwort enthält kein 'executionGuides'-Array.")

        validation = self.validator.validate(raw_guides, week_sessions)
        if not validation.guides:
            raise EmptyBatchError("Keine gültigen Execution Guides generiert.")

        self.store.set_many(validation.guides)
        logger.info(
            f"Woche {week_start}: {len(validation.guides)} Guides gespeichert, "
            f"{len(validation.rejections)} verworfen."
        )

        return ElaborationResult(
            guides=validation.guides,
            warnings=validation.warnings,
            dropped=len(validation.rejections),
            summary={
                "totalSessions": len(week_sessions),
                "weekStartDate": week_start.isoformat(),
                "weekEndDate": week_end.isoformat(),
            },
        )
