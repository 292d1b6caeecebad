"""Datums- und Uhrzeit-Prüfungen für die Planung.

Wirft nie bei ungültigen Zeitspannen: ``weeks_between`` liefert 0 und
loggt eine Warnung, die Horizont-Regeln korrigieren statt abzulehnen.
"""

import logging
import math
import re
from datetime import date, timedelta
from typing import Iterator, Optional

from config.defaults import (
    MAX_HORIZON_DAYS,
    MIN_HORIZON_DAYS,
    SHORT_HORIZON_EXTENSION_DAYS,
    TIME_FORMAT_PATTERN,
)

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(TIME_FORMAT_PATTERN)
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def weeks_between(start: date, end: date) -> int:
    """Anzahl angefangener Wochen zwischen start und end (nie negativ)."""
    if end < start:
        logger.warning(f"Enddatum {end} liegt vor Startdatum {start}, 0 Wochen.")
        return 0
    return math.ceil((end - start).days / 7)


def is_valid_time(value) -> bool:
    """True für "HH:MM" mit HH 00–23 und MM 00–59."""
    return isinstance(value, str) and bool(_TIME_RE.fullmatch(value))


def time_to_minutes(value: str) -> int:
    """"09:30" → 570. Setzt ein gültiges Format voraus."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def parse_iso_date(value) -> Optional[date]:
    """Parst "YYYY-MM-DD" streng. date-Objekte werden durchgereicht, alles andere → None."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value.strip()):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def clamp_horizon(start: date, end: date) -> date:
    """Wendet die Horizont-Regeln an und gibt das (ggf. korrigierte) Enddatum zurück.

    - unter 7 Tagen: um 21 Tage verlängern
    - über 365 Tagen: auf genau 365 Tage ab Start kürzen
    """
    days = (end - start).days
    if days < MIN_HORIZON_DAYS:
        new_end = max(end, start) + timedelta(days=SHORT_HORIZON_EXTENSION_DAYS)
        logger.info(f"Planungszeitraum nur {days} Tage, verlängert bis {new_end}.")
        return new_end
    if days > MAX_HORIZON_DAYS:
        new_end = start + timedelta(days=MAX_HORIZON_DAYS)
        logger.info(f"Planungszeitraum {days} Tage, gekürzt auf {new_end}.")
        return new_end
    return end


def iter_days(start: date, end: date) -> Iterator[date]:
    """Alle Kalendertage von start bis end (inklusive)."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def week_monday(day: date) -> date:
    """Montag der Kalenderwoche von day."""
    return day - timedelta(days=day.weekday())
