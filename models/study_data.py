"""StudyData: Module, Zeitfenster und Sessions eines Nutzers + Eingabe-Check (Pydantic v2)."""

from collections import Counter
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from config.defaults import ASSESSMENT_WEIGHT_TOLERANCE
from models.module import Module, ModuleEditError
from models.session import StudySession
from models.timeslot import TimeSlot


class InputReport(BaseModel):
    """Ergebnis des Eingabe-Checks vor der Plan-Generierung."""

    is_ready: bool
    errors: list[str]      # Generierung unmöglich
    warnings: list[str]    # Generierung möglich, Plan evtl. schwächer

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_ready:
            status = "[bold green]✓ BEREIT[/bold green]"
        else:
            status = "[bold red]✗ NICHT BEREIT[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler (kritisch):[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Eingabe-Check", border_style="cyan"))


class StudyData(BaseModel):
    """Vollständiger Datensatz: Module, wöchentliche Zeitfenster, generierte Sessions."""

    modules: list[Module] = []
    time_slots: list[TimeSlot] = []
    sessions: list[StudySession] = []
    plan_start: Optional[date] = None
    plan_end: Optional[date] = None
    used_fallback: bool = False
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        total_ects = sum(m.ects for m in self.modules)
        total_workload = sum(m.workload for m in self.modules)
        weekly_minutes = sum(s.duration_minutes for s in self.time_slots)
        planned_hours = sum(s.hours for s in self.sessions)
        lines = [
            f"Module: {len(self.modules)} ({total_ects} ECTS, {total_workload}h Workload)",
            f"Zeitfenster: {len(self.time_slots)} pro Woche "
            f"({weekly_minutes / 60:.1f}h/Woche)",
            f"Sessions: {len(self.sessions)} ({planned_hours:.1f}h geplant)"
            if self.sessions else "Sessions: noch kein Plan generiert",
            f"Zeitraum: {self.plan_start:%d.%m.%Y} – {self.plan_end:%d.%m.%Y}"
            if self.plan_start and self.plan_end else "",
            "[Ersatzplan ohne KI]" if self.sessions and self.used_fallback else "",
        ]
        return "\n".join(l for l in lines if l)

    # ─── Module ───

    def module_names(self) -> list[str]:
        return [m.name for m in self.modules]

    def find_module(self, name: str) -> Optional[Module]:
        for m in self.modules:
            if m.name == name:
                return m
        return None

    def add_module(self, module: Module) -> "StudyData":
        """Fügt ein Modul hinzu. Namen sind eindeutig, Module werden nie zusammengeführt."""
        if self.find_module(module.name) is not None:
            raise ModuleEditError(f"Modul '{module.name}' existiert bereits.")
        return self.model_copy(update={"modules": [*self.modules, module]})

    def replace_module(self, module: Module) -> "StudyData":
        modules = [module if m.id == module.id else m for m in self.modules]
        return self.model_copy(update={"modules": modules})

    def remove_module(self, name: str) -> "StudyData":
        """Entfernt ein Modul samt Prüfungsleistungen."""
        if self.find_module(name) is None:
            raise ModuleEditError(f"Modul '{name}' nicht gefunden.")
        return self.model_copy(
            update={"modules": [m for m in self.modules if m.name != name]}
        )

    # ─── Zeitfenster ───

    def add_time_slot(self, slot: TimeSlot) -> "StudyData":
        return self.model_copy(update={"time_slots": [*self.time_slots, slot]})

    def remove_time_slot(self, slot_id: str) -> "StudyData":
        remaining = [s for s in self.time_slots if s.id != slot_id]
        if len(remaining) == len(self.time_slots):
            raise ValueError(f"Zeitfenster '{slot_id}' nicht gefunden.")
        return self.model_copy(update={"time_slots": remaining})

    # ─── Eingabe-Check ───

    def validate_inputs(self, today: Optional[date] = None) -> InputReport:
        """Prüft ob ein Semesterplan generiert werden kann.

        Prüfungen:
        1. Mindestens ein Modul und ein Zeitfenster
        2. Modulnamen eindeutig (Sessions referenzieren Module per Name)
        3. Gewichte pro Modul ergeben 100 %
        4. Deadlines eingetragen und nicht in der Vergangenheit
        """
        today = today or date.today()
        errors: list[str] = []
        warnings: list[str] = []

        if not self.modules:
            errors.append("Keine Module vorhanden. Bitte zuerst Module importieren.")
        if not self.time_slots:
            errors.append("Keine Zeitfenster definiert. Bitte Lernzeiten hinzufügen.")

        counts = Counter(m.name for m in self.modules)
        for name, n in counts.items():
            if n > 1:
                errors.append(f"Modulname '{name}' kommt {n}× vor.")

        for m in self.modules:
            if abs(m.weight_total - 100) >= ASSESSMENT_WEIGHT_TOLERANCE:
                warnings.append(
                    f"Modul '{m.name}': Gewichte ergeben {m.weight_total}% statt 100%."
                )
            missing = [a.type for a in m.assessments if a.deadline is None]
            if missing:
                warnings.append(
                    f"Modul '{m.name}': keine Deadline für {', '.join(missing)}."
                )
            for a in m.assessments:
                if a.deadline is not None and a.deadline < today:
                    warnings.append(
                        f"Modul '{m.name}': Deadline {a.deadline:%d.%m.%Y} "
                        f"({a.type}) liegt in der Vergangenheit."
                    )

        return InputReport(
            is_ready=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "StudyData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
