"""Deterministischer Ersatzplan ohne KI.

Läuft jeden Tag des Horizonts ab, setzt in jedes passende Wochen-Zeitfenster
eine Session und verteilt die Module reihum. Wird genutzt, wenn die
Generierung per KI scheitert, damit der Nutzer nie ohne Plan dasteht.
"""

import logging
from datetime import date
from itertools import cycle

from config.defaults import DEFAULT_LEARNING_METHOD
from models.module import Module
from models.session import StudySession
from models.timeslot import TimeSlot
from planner.dates import iter_days

logger = logging.getLogger(__name__)


def expand_slots(start: date, end: date, time_slots: list[TimeSlot]) -> list[dict]:
    """Wöchentliche Zeitfenster → datierte Slots im Austauschformat, chronologisch."""
    by_weekday: dict[int, list[TimeSlot]] = {}
    for slot in sorted(time_slots, key=lambda s: s.start_time):
        by_weekday.setdefault(slot.day.index, []).append(slot)

    slots: list[dict] = []
    for day in iter_days(start, end):
        for slot in by_weekday.get(day.weekday(), []):
            slots.append({
                "date": day.isoformat(),
                "startTime": slot.start_time,
                "endTime": slot.end_time,
            })
    return slots


def generic_session_text(module: Module, number: int) -> tuple[str, str]:
    """Thema und Beschreibung für eine Session ohne KI-Inhalt."""
    topic = f"Lerneinheit {number}: {module.name}"
    if module.content:
        focus = module.content[(number - 1) % len(module.content)]
        description = (
            f"Bearbeite das Thema '{focus}': Unterlagen durchgehen, "
            f"Kernaussagen ohne Vorlage wiedergeben, offene Fragen notieren."
        )
    else:
        description = (
            f"Arbeite die Unterlagen zu {module.name} durch, fasse die Kernaussagen "
            f"zusammen und notiere offene Fragen."
        )
    return topic, description


class FallbackPlanGenerator:
    """Erzeugt Sessions aus Modulen × Zeitfenstern × Zeitraum (ohne Netzwerk)."""

    def generate(
        self,
        modules: list[Module],
        time_slots: list[TimeSlot],
        start: date,
        end: date,
    ) -> list[StudySession]:
        if not modules or not time_slots:
            return []

        module_cycle = cycle(modules)
        counters: dict[str, int] = {}
        sessions: list[StudySession] = []

        for slot in expand_slots(start, end, time_slots):
            module = next(module_cycle)
            counters[module.name] = counters.get(module.name, 0) + 1
            topic, description = generic_session_text(module, counters[module.name])
            sessions.append(StudySession(
                id=str(len(sessions) + 1),
                date=date.fromisoformat(slot["date"]),
                start_time=slot["startTime"],
                end_time=slot["endTime"],
                module=module.name,
                topic=topic,
                description=description,
                learning_method=DEFAULT_LEARNING_METHOD,
            ))

        logger.info(f"Ersatzplan: {len(sessions)} Sessions von {start} bis {end}.")
        return sessions
