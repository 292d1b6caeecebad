"""JSON-Export von Modulen und Lernplan."""

import json
import logging
from pathlib import Path

from models.module import Module
from models.session import StudySession
from export.helpers import dated_filename, sort_sessions

logger = logging.getLogger(__name__)


def _write(data, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def export_modules_json(modules: list[Module], output_dir: Path) -> Path:
    """module_YYYY-MM-DD.json"""
    path = Path(output_dir) / dated_filename("module", "json")
    _write([m.model_dump(mode="json") for m in modules], path)
    logger.info(f"JSON-Export: {len(modules)} Module → {path}")
    return path


def export_sessions_json(sessions: list[StudySession], output_dir: Path) -> Path:
    """lernplan_YYYY-MM-DD.json im Austauschformat (camelCase)."""
    path = Path(output_dir) / dated_filename("lernplan", "json")
    _write([s.to_record() for s in sort_sessions(sessions)], path)
    logger.info(f"JSON-Export: {len(sessions)} Sessions → {path}")
    return path
