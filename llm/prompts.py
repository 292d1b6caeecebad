"""Prompt-Vorlagen als Textdateien mit {name}-Platzhaltern.

Ersetzt werden nur übergebene Schlüssel, damit JSON-Beispiele mit
geschweiften Klammern in den Vorlagen unverändert bleiben.
"""

from functools import lru_cache
from pathlib import Path
from typing import Mapping

TEMPLATE_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=None)
def load_template(name: str) -> str:
    """Lädt llm/templates/<name>.txt."""
    path = TEMPLATE_DIR / f"{name}.txt"
    if not path.exists():
        raise FileNotFoundError(f"Prompt-Vorlage nicht gefunden: {path}")
    return path.read_text(encoding="utf-8")


def render(template: str, values: Mapping[str, object]) -> str:
    """Ersetzt {key} durch str(value) für jeden übergebenen Schlüssel."""
    result = template
    for key, value in values.items():
        result = result.replace("{" + key + "}", str(value))
    return result


def render_template(name: str, values: Mapping[str, object]) -> str:
    return render(load_template(name), values)
