"""Tests für Guide-Ablage, PDF-Textextraktion und Demo-Daten."""

from datetime import date, datetime
from pathlib import Path

import fitz
import pytest

from data.demo_data import DemoDataGenerator
from data.guide_store import GuideStore, GuideStoreError, InMemoryGuideStore, JsonGuideStore
from data.pdf_extract import PdfExtractionError, extract_text, is_pdf_signature
from models.execution_guide import AgendaItem, ExecutionGuide


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _make_guide(session_id: str = "1", goal: str = "Joins üben") -> ExecutionGuide:
    return ExecutionGuide(
        session_id=session_id,
        session_goal=goal,
        agenda=[AgendaItem(phase="Deep Work", duration=60, description="Übungen")],
        method_ideas=["Karteikarten", "Selbsttest"],
        tools=["SQLite"],
        deliverable="Übungsblatt",
        ready_check="Drei Joins ohne Vorlage",
        generated_at=datetime(2026, 10, 19, 12, 0),
    )


def _write_pdf(path: Path, text: str) -> Path:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    doc.save(str(path))
    doc.close()
    return path


# ─── GUIDE-ABLAGE ─────────────────────────────────────────────────────────────

class TestGuideStoreInterface:
    def test_base_not_instantiable(self):
        with pytest.raises(TypeError):
            GuideStore()

    def test_incomplete_backend_not_instantiable(self):
        class OnlyGet(GuideStore):
            def get(self, session_id):
                return None

        with pytest.raises(TypeError):
            OnlyGet()


class TestInMemoryGuideStore:
    def test_set_get_delete(self):
        store = InMemoryGuideStore()
        store.set(_make_guide("1"))
        assert store.has("1")
        assert store.get("2") is None
        assert store.delete("1") is True
        assert store.delete("1") is False

    def test_last_write_wins(self):
        store = InMemoryGuideStore()
        store.set_many([_make_guide("1", "alt"), _make_guide("1", "neu")])
        assert store.get("1").session_goal == "neu"
        assert len(store.get_all()) == 1

    def test_clear(self):
        store = InMemoryGuideStore()
        store.set_many([_make_guide("1"), _make_guide("2")])
        store.clear()
        assert store.get_all() == {}


class TestJsonGuideStore:
    def test_persisted_between_instances(self, tmp_path: Path):
        path = tmp_path / "out" / "guides.json"
        JsonGuideStore(path).set_many([_make_guide("1"), _make_guide("2")])

        store = JsonGuideStore(path)
        assert sorted(store.get_all()) == ["1", "2"]
        guide = store.get("1")
        assert guide.agenda[0].duration == 60
        assert guide.generated_at == datetime(2026, 10, 19, 12, 0)
        assert "Übungsblatt" in path.read_text(encoding="utf-8")

    def test_missing_file_is_empty(self, tmp_path: Path):
        store = JsonGuideStore(tmp_path / "fehlt.json")
        assert store.get_all() == {}
        assert not store.has("1")
        assert store.delete("1") is False

    def test_delete_and_clear(self, tmp_path: Path):
        path = tmp_path / "guides.json"
        store = JsonGuideStore(path)
        store.set_many([_make_guide("1"), _make_guide("2")])
        assert store.delete("1") is True
        assert list(JsonGuideStore(path).get_all()) == ["2"]
        store.clear()
        assert not path.exists()

    @pytest.mark.parametrize("content", ["{kaputt", "[1, 2]", '{"1": {"session_id": "1"}}'])
    def test_corrupt_file(self, tmp_path: Path, content):
        path = tmp_path / "guides.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(GuideStoreError):
            JsonGuideStore(path).get_all()


# ─── PDF-TEXT ─────────────────────────────────────────────────────────────────

class TestPdfExtract:
    def test_signature(self):
        assert is_pdf_signature(b"%PDF-1.7")
        assert not is_pdf_signature(b"PK\x03\x04")
        assert not is_pdf_signature(b"")

    def test_extract_text(self, tmp_path: Path):
        text = "Modul Datenbanken. Prüfungsleistung: Klausur 100 Prozent. " * 3
        path = _write_pdf(tmp_path / "modul.pdf", text)
        result = extract_text(path)
        assert "Modul Datenbanken" in result

    def test_short_text_only_warns(self, tmp_path: Path, caplog):
        path = _write_pdf(tmp_path / "kurz.pdf", "Datenbanken")
        assert "Datenbanken" in extract_text(path)
        assert "eingescanntes Dokument" in caplog.text

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(PdfExtractionError, match="nicht gefunden"):
            extract_text(tmp_path / "fehlt.pdf")

    def test_not_a_pdf(self, tmp_path: Path):
        path = tmp_path / "modul.pdf"
        path.write_bytes(b"PK\x03\x04 eigentlich eine ZIP-Datei")
        with pytest.raises(PdfExtractionError, match="keine gültige PDF-Datei"):
            extract_text(path)

    def test_empty_page_has_no_text(self, tmp_path: Path):
        doc = fitz.open()
        doc.new_page()
        path = tmp_path / "leer.pdf"
        doc.save(str(path))
        doc.close()
        with pytest.raises(PdfExtractionError, match="keinen extrahierbaren Text"):
            extract_text(path)


# ─── DEMO-DATEN ───────────────────────────────────────────────────────────────

class TestDemoData:
    TODAY = date(2026, 10, 19)

    def test_same_seed_same_data(self):
        a = DemoDataGenerator(seed=42).generate(today=self.TODAY)
        b = DemoDataGenerator(seed=42).generate(today=self.TODAY)
        assert [s.day for s in a.time_slots] == [s.day for s in b.time_slots]
        assert [m.deadlines for m in a.modules] == [m.deadlines for m in b.modules]

    def test_generated_data_is_ready(self):
        data = DemoDataGenerator(seed=1).generate(today=self.TODAY)
        report = data.validate_inputs(today=self.TODAY)
        assert report.is_ready
        assert report.warnings == []
        assert len(data.modules) == 3
        assert len(data.time_slots) == 3
        assert data.sessions == []

    def test_slots_sorted_by_weekday(self):
        data = DemoDataGenerator(seed=7).generate(today=self.TODAY)
        indices = [s.day.index for s in data.time_slots]
        assert indices == sorted(indices)

    def test_deadlines_in_future(self):
        data = DemoDataGenerator(seed=3).generate(today=self.TODAY)
        assert all(d > self.TODAY for m in data.modules for d in m.deadlines)
