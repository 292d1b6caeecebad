"""Pädagogische Prüfung eines fertigen Lernplans.

Rein beratend: die Prüfung verändert keine Sessions und blockiert nichts.
Ausgabe-Reihenfolge folgt der Prüf-Reihenfolge (Tageslast, Monotonie,
Serien, Prüfungsvorbereitung), nicht der Chronologie.
"""

import logging
from collections import Counter, defaultdict
from datetime import date, timedelta

from pydantic import BaseModel

from config.defaults import (
    EXAM_REVIEW_PERIOD_DAYS,
    MAX_CONSECUTIVE_STUDY_DAYS,
    MAX_DAILY_STUDY_MINUTES,
    MAX_SESSIONS_PER_MODULE_PER_DAY,
)
from models.module import Module
from models.session import StudySession

logger = logging.getLogger(__name__)


class AuditWarning(BaseModel):
    """Ein pädagogischer Hinweis."""

    check: str           # "daily_load" | "module_monotony" | "consecutive_days" | "missing_review"
    message: str
    day: date


class AuditReport(BaseModel):
    """Ergebnis der pädagogischen Prüfung."""

    warnings: list[AuditWarning]

    @property
    def messages(self) -> list[str]:
        return [w.message for w in self.warnings]

    @property
    def is_clean(self) -> bool:
        return not self.warnings

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ KEINE AUFFÄLLIGKEITEN[/bold green]"
            if self.is_clean
            else f"[bold yellow]⚠ {len(self.warnings)} HINWEISE[/bold yellow]"
        )
        console.print(Panel(status, title="Pädagogische Prüfung", border_style="cyan"))
        if self.is_clean:
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Prüfung", width=18)
        table.add_column("Datum", width=12)
        table.add_column("Hinweis")
        for w in self.warnings:
            table.add_row(w.check, f"{w.day:%d.%m.%Y}", w.message)
        console.print(table)


class PedagogicalAuditor:
    """Sucht Überlastungsmuster in einem akzeptierten Session-Set."""

    def audit(
        self, sessions: list[StudySession], modules: list[Module]
    ) -> AuditReport:
        """Führt alle Prüfungen durch und gibt einen AuditReport zurück."""
        warnings: list[AuditWarning] = []

        warnings.extend(self._check_daily_load(sessions))
        warnings.extend(self._check_module_monotony(sessions))
        warnings.extend(self._check_consecutive_days(sessions))
        warnings.extend(self._check_exam_review(sessions, modules))

        for w in warnings:
            logger.warning(f"[{w.check}] {w.message}")
        return AuditReport(warnings=warnings)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_daily_load(self, sessions: list[StudySession]) -> list[AuditWarning]:
        """Mehr als 8 Stunden Lernzeit an einem Tag."""
        minutes: dict[date, int] = defaultdict(int)
        for s in sessions:
            minutes[s.date] += s.duration_minutes

        warnings: list[AuditWarning] = []
        for day in sorted(minutes):
            total = minutes[day]
            if total > MAX_DAILY_STUDY_MINUTES:
                warnings.append(AuditWarning(
                    check="daily_load",
                    day=day,
                    message=(
                        f"{day:%d.%m.%Y}: {total} min geplant, "
                        f"{total - MAX_DAILY_STUDY_MINUTES} min über dem Tageslimit "
                        f"von {MAX_DAILY_STUDY_MINUTES} min."
                    ),
                ))
        return warnings

    def _check_module_monotony(self, sessions: list[StudySession]) -> list[AuditWarning]:
        """Ein Modul öfter als zweimal am selben Tag."""
        per_day: dict[date, Counter] = defaultdict(Counter)
        for s in sessions:
            per_day[s.date][s.module] += 1

        warnings: list[AuditWarning] = []
        for day in sorted(per_day):
            for module, count in per_day[day].items():
                if count > MAX_SESSIONS_PER_MODULE_PER_DAY:
                    warnings.append(AuditWarning(
                        check="module_monotony",
                        day=day,
                        message=(
                            f"{day:%d.%m.%Y}: '{module}' {count}× am selben Tag "
                            f"(max. {MAX_SESSIONS_PER_MODULE_PER_DAY})."
                        ),
                    ))
        return warnings

    def _check_consecutive_days(self, sessions: list[StudySession]) -> list[AuditWarning]:
        """Serien von 6 oder mehr Lerntagen am Stück (ein Hinweis pro Serie)."""
        days = sorted({s.date for s in sessions})
        warnings: list[AuditWarning] = []
        run_start = None
        run_length = 0
        previous = None

        for day in days:
            if previous is not None and day - previous == timedelta(days=1):
                run_length += 1
            else:
                run_start = day
                run_length = 1
            if run_length == MAX_CONSECUTIVE_STUDY_DAYS:
                warnings.append(AuditWarning(
                    check="consecutive_days",
                    day=run_start,
                    message=(
                        f"Ab {run_start:%d.%m.%Y}: {MAX_CONSECUTIVE_STUDY_DAYS} "
                        f"Lerntage in Folge ohne Pause (bis mind. {day:%d.%m.%Y})."
                    ),
                ))
            previous = day
        return warnings

    def _check_exam_review(
        self, sessions: list[StudySession], modules: list[Module]
    ) -> list[AuditWarning]:
        """Keine Session des Moduls in den 14 Tagen vor einer Deadline."""
        dates_by_module: dict[str, list[date]] = defaultdict(list)
        for s in sessions:
            dates_by_module[s.module].append(s.date)

        warnings: list[AuditWarning] = []
        for module in modules:
            for assessment in module.assessments:
                deadline = assessment.deadline
                if deadline is None:
                    continue
                window_start = deadline - timedelta(days=EXAM_REVIEW_PERIOD_DAYS)
                covered = any(
                    window_start <= d <= deadline
                    for d in dates_by_module.get(module.name, [])
                )
                if not covered:
                    warnings.append(AuditWarning(
                        check="missing_review",
                        day=deadline,
                        message=(
                            f"'{module.name}': keine Wiederholung in den "
                            f"{EXAM_REVIEW_PERIOD_DAYS} Tagen vor der Deadline "
                            f"{deadline.isoformat()} ({assessment.type})."
                        ),
                    ))
        return warnings
