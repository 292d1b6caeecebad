"""CSV-Export des Lernplans (Excel-kompatibel, UTF-8 mit BOM)."""

import csv
import logging
from pathlib import Path

from models.session import StudySession
from export.helpers import dated_filename, format_date, sort_sessions

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Datum", "Start", "Ende", "Modul", "Thema", "Beschreibung", "Lernmethode"]


def session_row(session: StudySession) -> list[str]:
    return [
        format_date(session.date),
        session.start_time,
        session.end_time,
        session.module,
        session.topic,
        session.description,
        session.learning_method or "",
    ]


def export_sessions_csv(sessions: list[StudySession], output_dir: Path) -> Path:
    """Schreibt lernplan_YYYY-MM-DD.csv und gibt den Pfad zurück."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / dated_filename("lernplan", "csv")

    # newline="" – Zeilenumbrüche in Feldern quotet das csv-Modul selbst
    with path.open("w", encoding="utf-8-sig", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADERS)
        for session in sort_sessions(sessions):
            writer.writerow(session_row(session))

    logger.info(f"CSV-Export: {len(sessions)} Sessions → {path}")
    return path
