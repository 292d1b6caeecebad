"""Gemeinsame Hilfsfunktionen für alle Exporte."""

from collections import defaultdict
from datetime import date

from models.module import Module
from models.session import StudySession
from planner.dates import week_monday

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "header":   "4472C4",
    "week":     "D9E1F2",
    "fallback": "FFE699",
    "free":     "F5F5F5",
}

METHOD_COLORS: dict[str, str] = {
    "Spaced Repetition": "B3D4FF",
    "Active Recall":     "B3FFB3",
    "Deep Work":         "D4B3FF",
    "Pomodoro":          "FFD4B3",
    "Feynman Technik":   "FFF2B3",
    "Interleaving":      "FFB3E6",
    "Practice Testing":  "FF9999",
}


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def method_color(method: str | None) -> str:
    return METHOD_COLORS.get(method or "", COLORS["free"])


def format_date(d: date) -> str:
    return d.strftime("%d.%m.%Y")


def dated_filename(prefix: str, suffix: str, day: date | None = None) -> str:
    """z.B. lernplan_2026-10-19.csv"""
    return f"{prefix}_{(day or date.today()).isoformat()}.{suffix}"


# ─── Gruppierung ──────────────────────────────────────────────────────────────

def sort_sessions(sessions: list[StudySession]) -> list[StudySession]:
    return sorted(sessions, key=lambda s: (s.date, s.start_time))


def group_sessions_by_week(
    sessions: list[StudySession],
) -> dict[date, list[StudySession]]:
    """{Montag der Kalenderwoche: Sessions chronologisch}, Wochen aufsteigend."""
    weeks: dict[date, list[StudySession]] = defaultdict(list)
    for s in sort_sessions(sessions):
        weeks[week_monday(s.date)].append(s)
    return dict(sorted(weeks.items()))


def hours_per_module(sessions: list[StudySession]) -> dict[str, float]:
    hours: dict[str, float] = defaultdict(float)
    for s in sessions:
        hours[s.module] += s.hours
    return dict(hours)


def module_overview_rows(
    modules: list[Module], sessions: list[StudySession],
) -> list[tuple[str, int, float, int]]:
    """(Modul, Sessions, Stunden, ECTS) je Modul in Eingabereihenfolge."""
    hours = hours_per_module(sessions)
    counts: dict[str, int] = defaultdict(int)
    for s in sessions:
        counts[s.module] += 1
    return [
        (m.name, counts[m.name], round(hours.get(m.name, 0.0), 1), m.ects)
        for m in modules
    ]
