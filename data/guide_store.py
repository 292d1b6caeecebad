"""Ablage der Execution Guides, Schlüssel ist die Session-ID.

Zwei Backends: im Speicher (Tests, einmalige Läufe) und als JSON-Datei
neben den Lernplan-Daten. Schreiben ist immer last-write-wins.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from models.execution_guide import ExecutionGuide

logger = logging.getLogger(__name__)


class GuideStoreError(Exception):
    """Die Ablage ist nicht lesbar oder nicht schreibbar."""


class GuideStore(ABC):
    """Schlüssel-Wert-Schnittstelle für Execution Guides."""

    @abstractmethod
    def get(self, session_id: str) -> Optional[ExecutionGuide]:
        ...

    @abstractmethod
    def get_all(self) -> dict[str, ExecutionGuide]:
        ...

    def set(self, guide: ExecutionGuide) -> None:
        self.set_many([guide])

    @abstractmethod
    def set_many(self, guides: list[ExecutionGuide]) -> None:
        ...

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def has(self, session_id: str) -> bool:
        return self.get(session_id) is not None


class InMemoryGuideStore(GuideStore):

    def __init__(self):
        self._guides: dict[str, ExecutionGuide] = {}

    def get(self, session_id: str) -> Optional[ExecutionGuide]:
        return self._guides.get(session_id)

    def get_all(self) -> dict[str, ExecutionGuide]:
        return dict(self._guides)

    def set_many(self, guides: list[ExecutionGuide]) -> None:
        for guide in guides:
            self._guides[guide.session_id] = guide

    def delete(self, session_id: str) -> bool:
        return self._guides.pop(session_id, None) is not None

    def clear(self) -> None:
        self._guides.clear()


class JsonGuideStore(GuideStore):
    """Eine JSON-Datei mit dem Objekt {session_id: guide}."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get(self, session_id: str) -> Optional[ExecutionGuide]:
        return self._read().get(session_id)

    def get_all(self) -> dict[str, ExecutionGuide]:
        return self._read()

    def set_many(self, guides: list[ExecutionGuide]) -> None:
        if not guides:
            return
        stored = self._read()
        for guide in guides:
            stored[guide.session_id] = guide
        self._write(stored)
        logger.info(f"{len(guides)} Execution Guides gespeichert → {self.path}")

    def delete(self, session_id: str) -> bool:
        stored = self._read()
        if stored.pop(session_id, None) is None:
            return False
        self._write(stored)
        return True

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    # ─── Datei ────────────────────────────────────────────────────────────────

    def _read(self) -> dict[str, ExecutionGuide]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise GuideStoreError(f"{self.path}: kein JSON-Objekt.")
            return {key: ExecutionGuide.model_validate(value) for key, value in raw.items()}
        except (json.JSONDecodeError, ValidationError) as e:
            raise GuideStoreError(f"Guide-Datei beschädigt ({self.path}): {e}") from e

    def _write(self, guides: dict[str, ExecutionGuide]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {key: guide.model_dump(mode="json") for key, guide in guides.items()}
        self.path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
        )
