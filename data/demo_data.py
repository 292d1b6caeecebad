"""Demo-Daten für den Lernplaner.

Drei typische Informatik-Module mit Prüfungsleistungen und Deadlines in
der Zukunft sowie drei wöchentliche Lernfenster. Mit festem Seed sind die
Daten reproduzierbar (Tests, Vorführungen ohne eigenes Modulhandbuch).
"""

import random
from datetime import date, datetime, timedelta
from typing import Optional

from models.module import Assessment, AssessmentFormat, Module
from models.study_data import StudyData
from models.timeslot import TimeSlot, Weekday

# ─── Modul-Vorlagen ───────────────────────────────────────────────────────────
# (Name, ECTS, Workload, [(Prüfungsart, Gewicht, Format, Wochen bis Deadline)], Inhalte, Kompetenzen)

_MODULE_TEMPLATES: list[tuple] = [
    (
        "Software Engineering", 6, 180,
        [
            ("Projektarbeit", 60, AssessmentFormat.GRUPPENARBEIT, 10),
            ("Klausur", 40, AssessmentFormat.EINZELARBEIT, 14),
        ],
        ["Anforderungsanalyse", "UML-Modellierung", "Entwurfsmuster",
         "Testen", "Agile Methoden"],
        ["Software-Architekturen entwerfen", "Anforderungen strukturiert erheben",
         "Teststrategien anwenden"],
    ),
    (
        "Datenbanken", 4, 120,
        [
            ("Schriftliche Prüfung", 100, AssessmentFormat.EINZELARBEIT, 12),
        ],
        ["Relationales Modell", "SQL", "Normalisierung", "Transaktionen"],
        ["Datenbankschemata entwerfen", "Komplexe SQL-Abfragen formulieren",
         "Normalformen bewerten"],
    ),
    (
        "Web Development", 5, 150,
        [
            ("Portfolio", 50, AssessmentFormat.EINZELARBEIT, 8),
            ("Präsentation", 50, AssessmentFormat.GRUPPENARBEIT, 13),
        ],
        ["HTML und CSS", "JavaScript", "REST-APIs", "Frontend-Frameworks",
         "Deployment"],
        ["Responsive Oberflächen umsetzen", "Web-APIs anbinden",
         "Webanwendungen veröffentlichen"],
    ),
]

# Mögliche Lernfenster (Tag, Beginn, Ende); drei davon werden gewählt
_SLOT_CHOICES: list[tuple[Weekday, str, str]] = [
    (Weekday.MONTAG, "18:00", "20:00"),
    (Weekday.DIENSTAG, "09:00", "12:00"),
    (Weekday.MITTWOCH, "18:00", "20:00"),
    (Weekday.DONNERSTAG, "14:00", "17:00"),
    (Weekday.SAMSTAG, "10:00", "13:00"),
]


class DemoDataGenerator:
    """Erzeugt einen vollständigen StudyData-Datensatz ohne KI."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def _generate_modules(self, today: date) -> list[Module]:
        modules = []
        for name, ects, workload, assessments, content, competencies in _MODULE_TEMPLATES:
            # Deadlines um bis zu 3 Tage streuen, damit nicht alle auf einen Wochentag fallen
            modules.append(Module(
                name=name,
                ects=ects,
                workload=workload,
                assessments=[
                    Assessment(
                        type=type_,
                        weight=weight,
                        format=fmt,
                        deadline=today + timedelta(weeks=weeks, days=self.rng.randint(0, 3)),
                    )
                    for type_, weight, fmt, weeks in assessments
                ],
                content=list(content),
                competencies=list(competencies),
            ))
        return modules

    def _generate_time_slots(self) -> list[TimeSlot]:
        chosen = self.rng.sample(_SLOT_CHOICES, 3)
        chosen.sort(key=lambda c: c[0].index)
        return [TimeSlot(day=day, start_time=start, end_time=end) for day, start, end in chosen]

    def generate(self, today: Optional[date] = None) -> StudyData:
        """Erzeugt Module und Lernfenster; Sessions bleiben leer."""
        today = today or date.today()
        now = datetime.now()
        return StudyData(
            modules=self._generate_modules(today),
            time_slots=self._generate_time_slots(),
            created_at=now,
            modified_at=now,
        )

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, data: StudyData) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Demo-Daten", box=box.ROUNDED)
        table.add_column("Modul", style="bold cyan")
        table.add_column("ECTS", justify="right")
        table.add_column("Workload", justify="right")
        table.add_column("Prüfungsleistungen")

        for m in data.modules:
            table.add_row(
                m.name, str(m.ects), f"{m.workload}h",
                ", ".join(f"{a.type} ({a.weight}%)" for a in m.assessments),
            )
        console.print(table)
        console.print(
            "Lernfenster: " + ", ".join(str(s) for s in data.time_slots)
        )
