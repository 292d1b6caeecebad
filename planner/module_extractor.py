"""Modul-Eckdaten aus Modulhandbuch-Text per KI.

Die Antwort der KI wird nicht ungeprüft übernommen: unplausible ECTS- und
Workload-Werte werden ersetzt, Gewichte normalisiert, Listen gekürzt.
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from config.defaults import (
    COMPETENCIES_MAX,
    CONTENT_MAX,
    ECTS_DEFAULT,
    ECTS_MAX,
    ECTS_MIN,
    WORKLOAD_MAX,
    WORKLOAD_MIN,
    WORKLOAD_PER_ECTS,
)
from config.schema import LLMConfig
from llm.client import LLMClient, LLMError, LLMResponseError, parse_json_object
from llm.prompts import render_template
from models.module import Assessment, AssessmentFormat, Module
from planner.dates import parse_iso_date
from planner.errors import (
    InputPreconditionError,
    PlannerError,
    ResponseParseError,
    TransportError,
)
from planner.weights import normalize_assessments

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    """Ergebnis eines PDF-Imports: erkannte Module und gescheiterte Dateien."""

    modules: list[Module] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)   # (Dateiname, Meldung)


def _as_number(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip().replace(",", "."))
        except ValueError:
            return None
    else:
        return None
    # inf und nan (z. B. aus 1e999) lassen sich nicht runden
    return number if math.isfinite(number) else None


def _str_list(value, limit: int) -> list[str]:
    if not isinstance(value, list):
        return []
    items = [str(v).strip() for v in value if str(v).strip()]
    return items[:limit]


class ModuleExtractor:
    """Wandelt den Text einer Modulbeschreibung in ein Module-Objekt."""

    def __init__(self, llm: LLMClient, llm_config: Optional[LLMConfig] = None):
        self.llm = llm
        self.cfg = llm_config or LLMConfig()

    def extract(self, text: str, source_name: Optional[str] = None) -> Module:
        if not self.llm.has_credentials():
            raise InputPreconditionError("Kein API-Key vorhanden. Bitte OpenAI API-Key setzen.")
        if not text or not text.strip():
            raise InputPreconditionError("Kein Text zum Analysieren vorhanden.")

        if len(text) > self.cfg.max_text_chars:
            logger.info(
                f"Text auf {self.cfg.max_text_chars} Zeichen gekürzt (Original: {len(text)})."
            )
            text = text[:self.cfg.max_text_chars]

        try:
            raw = self.llm.complete_json(
                render_template("module_extraction_system", {}),
                f"Modulbeschreibung:\n\n{text}",
                temperature=self.cfg.extraction_temperature,
                max_tokens=self.cfg.extraction_max_tokens,
            )
            data = parse_json_object(raw)
        except LLMResponseError as e:
            raise ResponseParseError(str(e)) from e
        except LLMError as e:
            raise TransportError(str(e)) from e

        return self._build_module(data, source_name)

    def process_files(self, paths: list[Path]) -> UploadResult:
        """Importiert PDFs nacheinander; eine fehlerhafte Datei stoppt die übrigen nicht."""
        from data.pdf_extract import PdfExtractionError, extract_text

        result = UploadResult()
        for path in paths:
            path = Path(path)
            try:
                text = extract_text(path)
                module = self.extract(text, source_name=path.name)
            except (PdfExtractionError, PlannerError) as e:
                logger.error(f"{path.name}: {e}")
                result.failures.append((path.name, str(e)))
                continue
            logger.info(f"{path.name}: Modul '{module.name}' erkannt.")
            result.modules.append(module)
        return result

    # ─── Antwort prüfen ───────────────────────────────────────────────────────

    def _build_module(self, data: dict, source_name: Optional[str]) -> Module:
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ResponseParseError("Kein Modultitel in der Antwort gefunden.")

        ects = _as_number(data.get("ects"))
        if ects is None or not ECTS_MIN <= ects <= ECTS_MAX:
            logger.warning(f"Unplausible ECTS ({data.get('ects')!r}), verwende {ECTS_DEFAULT}.")
            ects = ECTS_DEFAULT
        ects = int(round(ects))

        workload = _as_number(data.get("workload"))
        if workload is None or not WORKLOAD_MIN <= workload <= WORKLOAD_MAX:
            logger.warning(
                f"Unplausibler Workload ({data.get('workload')!r}), "
                f"verwende {ects * WORKLOAD_PER_ECTS}h."
            )
            workload = ects * WORKLOAD_PER_ECTS
        workload = int(round(workload))

        raw_assessments = data.get("assessments")
        if not isinstance(raw_assessments, list) or not raw_assessments:
            raise ResponseParseError("Keine Prüfungsleistungen in der Antwort gefunden.")
        assessments = [self._build_assessment(a) for a in raw_assessments]

        return Module(
            name=title.strip(),
            ects=ects,
            workload=workload,
            assessments=normalize_assessments(assessments),
            content=_str_list(data.get("content"), CONTENT_MAX),
            competencies=_str_list(data.get("competencies"), COMPETENCIES_MAX),
            pdf_name=source_name,
        )

    def _build_assessment(self, raw) -> Assessment:
        if not isinstance(raw, dict):
            raw = {}
        type_ = raw.get("type")
        if not isinstance(type_, str) or not type_.strip():
            type_ = "Prüfung"
        weight = _as_number(raw.get("weight"))
        fmt = (
            AssessmentFormat.GRUPPENARBEIT
            if raw.get("format") == AssessmentFormat.GRUPPENARBEIT.value
            else AssessmentFormat.EINZELARBEIT
        )
        return Assessment(
            type=type_.strip(),
            weight=max(0, int(round(weight))) if weight is not None else 0,
            format=fmt,
            deadline=parse_iso_date(raw.get("deadline")),
        )
