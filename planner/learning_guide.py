"""Lernleitfaden für ein komplettes Modul.

Im Gegensatz zur Plan-Generierung gibt es hier keinen Ersatz: Netzwerk-
und Parse-Fehler werden an den Aufrufer durchgereicht.
"""

import logging
from datetime import datetime
from typing import Optional

from config.schema import LLMConfig
from llm.client import LLMClient, LLMError, LLMResponseError, parse_json_object
from llm.prompts import render_template
from models.learning_guide import (
    ExamPreparation,
    LearningGuide,
    LearningStrategy,
    WeeklyFocus,
)
from models.module import Module
from models.session import StudySession
from planner.errors import InputPreconditionError, ResponseParseError, TransportError

logger = logging.getLogger(__name__)

MAX_SESSION_EXAMPLES = 5


def _strings(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if str(v).strip()]


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _dict(value) -> dict:
    return value if isinstance(value, dict) else {}


class LearningGuideGenerator:

    def __init__(self, llm: LLMClient, llm_config: Optional[LLMConfig] = None):
        self.llm = llm
        self.cfg = llm_config or LLMConfig()

    def generate(self, module: Module, sessions: list[StudySession]) -> LearningGuide:
        """Erzeugt den Leitfaden aus Moduldaten und den geplanten Sessions des Moduls."""
        if not self.llm.has_credentials():
            raise InputPreconditionError("Kein API-Key vorhanden. Bitte OpenAI API-Key setzen.")

        module_sessions = [s for s in sessions if s.module == module.name]
        total_hours = round(sum(s.hours for s in module_sessions), 1)

        examples = "\n".join(
            f"- {s.date.strftime('%d.%m.%Y')}: {s.topic} ({s.learning_method or 'ohne Methode'})"
            for s in module_sessions[:MAX_SESSION_EXAMPLES]
        ) or "- (noch keine Sessions geplant)"
        assessments = "\n".join(
            f"- {a.type}: {a.weight}% ({a.format.value}), Deadline "
            f"{a.deadline.strftime('%d.%m.%Y') if a.deadline else 'offen'}"
            for a in module.assessments
        )
        values = {
            "moduleName": module.name,
            "ects": module.ects,
            "workload": module.workload,
            "totalHours": total_hours,
            "sessionCount": len(module_sessions),
            "content": ", ".join(module.content) or "keine Angabe",
            "competencies": ", ".join(module.competencies) or "keine Angabe",
            "assessments": assessments,
            "sessionExamples": examples,
            "assessmentsList": ", ".join(a.type for a in module.assessments),
        }

        try:
            raw = self.llm.complete_json(
                render_template("learning_guide_system", values),
                render_template("learning_guide_user", values),
                temperature=self.cfg.guide_temperature,
                max_tokens=self.cfg.guide_max_tokens,
            )
            data = parse_json_object(raw)
        except LLMResponseError as e:
            raise ResponseParseError(str(e)) from e
        except LLMError as e:
            raise TransportError(str(e)) from e

        guide = self._build_guide(data, module, total_hours, len(module_sessions))
        logger.info(f"Lernleitfaden für '{module.name}' erstellt ({total_hours}h).")
        return guide

    def _build_guide(self, data: dict, module: Module,
                     total_hours: float, session_count: int) -> LearningGuide:
        strategy = _dict(data.get("learningStrategy"))
        weekly = [
            WeeklyFocus(week=_text(w.get("week")), focus=_text(w.get("focus")),
                        tasks=_strings(w.get("tasks")))
            for w in data.get("weeklyPlan") or [] if isinstance(w, dict)
        ]
        exam_prep = []
        for raw in data.get("examPrep") or []:
            if not isinstance(raw, dict):
                continue
            weight = raw.get("weight")
            exam_prep.append(ExamPreparation(
                assessment_type=_text(raw.get("assessmentType")),
                deadline=_text(raw.get("deadline")) or None,
                format=_text(raw.get("format")) or None,
                weight=weight if isinstance(weight, int) and not isinstance(weight, bool) else None,
                four_weeks=_strings(raw.get("fourWeeks")),
                two_weeks=_strings(raw.get("twoWeeks")),
                one_week=_strings(raw.get("oneWeek")),
                last_day=_strings(raw.get("lastDay")),
            ))

        return LearningGuide(
            module_name=module.name,
            overview=_text(data.get("overview")),
            competencies=_strings(data.get("competencies")) or list(module.competencies),
            learning_strategy=LearningStrategy(
                method=_text(strategy.get("method")),
                explanation=_text(strategy.get("explanation")) or None,
                application=_text(strategy.get("application")) or None,
                reasoning=_text(strategy.get("reasoning")),
                timeline=_text(strategy.get("timeline")),
            ),
            weekly_plan=weekly,
            exercises=_strings(data.get("exercises")),
            tools=_strings(_dict(data.get("resources")).get("tools")),
            exam_prep=exam_prep,
            tips=_strings(data.get("tips")),
            common_mistakes=_strings(data.get("commonMistakes")),
            success_checklist=_strings(data.get("successChecklist")),
            total_hours=total_hours,
            session_count=session_count,
            generated_at=datetime.now(),
        )
