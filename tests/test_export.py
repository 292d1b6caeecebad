"""Tests für die Exporte (CSV, JSON, Excel, PDF)."""

import csv
import json
from datetime import date
from pathlib import Path

import pytest

from models.module import Assessment, Module
from models.session import StudySession
from export.csv_export import CSV_HEADERS, export_sessions_csv
from export.excel_export import ExcelExporter
from export.helpers import (
    dated_filename,
    group_sessions_by_week,
    hex_to_rgb,
    method_color,
    module_overview_rows,
    COLORS,
)
from export.json_export import export_modules_json, export_sessions_json
from export.pdf_export import PdfExporter, _pdf_safe


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _make_sessions() -> list[StudySession]:
    rows = [
        ("1", date(2026, 10, 21), "18:00", "20:00", "Datenbanken", "Pomodoro"),
        ("2", date(2026, 10, 19), "09:00", "10:30", "Web Development", None),
        ("3", date(2026, 10, 27), "18:00", "19:00", "Datenbanken", "Active Recall"),
    ]
    return [
        StudySession(
            id=sid, date=day, start_time=start, end_time=end, module=module,
            topic=f"Thema {sid}", description='Notizen "wichtig", danach Übung',
            learning_method=method,
        )
        for sid, day, start, end, module, method in rows
    ]


def _make_modules() -> list[Module]:
    return [
        Module(name="Datenbanken", ects=5, workload=150,
               assessments=[Assessment(type="Klausur", weight=100)]),
        Module(name="Web Development", ects=6, workload=180,
               assessments=[Assessment(type="Portfolio", weight=100)]),
        Module(name="Mathe", ects=8, workload=240,
               assessments=[Assessment(type="Klausur", weight=100)]),
    ]


# ─── HILFSFUNKTIONEN ──────────────────────────────────────────────────────────

class TestHelpers:
    def test_hex_to_rgb(self):
        assert hex_to_rgb("4472C4") == (0x44, 0x72, 0xC4)
        assert hex_to_rgb("#FFFFFF") == (255, 255, 255)

    def test_method_color_fallback(self):
        assert method_color("Unbekannt") == COLORS["free"]
        assert method_color(None) == COLORS["free"]

    def test_dated_filename(self):
        assert dated_filename("lernplan", "csv", date(2026, 10, 19)) == "lernplan_2026-10-19.csv"

    def test_group_by_week(self):
        weeks = group_sessions_by_week(_make_sessions())
        assert list(weeks) == [date(2026, 10, 19), date(2026, 10, 26)]
        assert [s.id for s in weeks[date(2026, 10, 19)]] == ["2", "1"]

    def test_module_overview_rows(self):
        rows = module_overview_rows(_make_modules(), _make_sessions())
        assert rows == [
            ("Datenbanken", 2, 3.0, 5),
            ("Web Development", 1, 1.5, 6),
            ("Mathe", 0, 0.0, 8),
        ]


# ─── CSV ──────────────────────────────────────────────────────────────────────

class TestCsvExport:
    def test_bom_and_headers(self, tmp_path: Path):
        path = export_sessions_csv(_make_sessions(), tmp_path)
        raw = path.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")
        assert path.name.startswith("lernplan_") and path.suffix == ".csv"

        with path.open(encoding="utf-8-sig", newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == CSV_HEADERS
        assert len(rows) == 4

    def test_sorted_and_quoted(self, tmp_path: Path):
        path = export_sessions_csv(_make_sessions(), tmp_path)
        with path.open(encoding="utf-8-sig", newline="") as f:
            rows = list(csv.reader(f))
        assert [r[0] for r in rows[1:]] == ["19.10.2026", "21.10.2026", "27.10.2026"]
        assert rows[1][5] == 'Notizen "wichtig", danach Übung'
        assert rows[1][6] == ""
        assert '"Notizen ""wichtig"", danach Übung"' in path.read_text(encoding="utf-8-sig")

    def test_empty_plan(self, tmp_path: Path):
        path = export_sessions_csv([], tmp_path)
        with path.open(encoding="utf-8-sig", newline="") as f:
            assert list(csv.reader(f)) == [CSV_HEADERS]


# ─── JSON ─────────────────────────────────────────────────────────────────────

class TestJsonExport:
    def test_sessions_json(self, tmp_path: Path):
        path = export_sessions_json(_make_sessions(), tmp_path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert [r["id"] for r in data] == ["2", "1", "3"]
        assert data[0]["startTime"] == "09:00"
        assert "learningMethod" not in data[0]
        assert "Übung" in path.read_text(encoding="utf-8")   # ensure_ascii=False

    def test_modules_json(self, tmp_path: Path):
        path = export_modules_json(_make_modules(), tmp_path / "sub")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert path.name.startswith("module_")
        assert [m["name"] for m in data] == ["Datenbanken", "Web Development", "Mathe"]
        assert data[0]["assessments"][0]["format"] == "Einzelarbeit"


# ─── EXCEL ────────────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_sheets_and_content(self, tmp_path: Path):
        from openpyxl import load_workbook

        path = tmp_path / "lernplan.xlsx"
        ExcelExporter(_make_sessions(), _make_modules(), used_fallback=True).export(path)
        assert path.exists()

        wb = load_workbook(path)
        assert wb.sheetnames == ["Übersicht", "Lernplan", "Wochen"]

        plan = wb["Lernplan"]
        assert plan.cell(row=1, column=1).value == "Datum"
        assert plan.max_row == 4
        assert plan.freeze_panes == "A2"

        weeks = wb["Wochen"]
        assert weeks.cell(row=2, column=1).value == 43
        assert weeks.cell(row=3, column=3).value == 1

        overview = wb["Übersicht"]
        values = [c.value for row in overview.iter_rows() for c in row if c.value is not None]
        assert "Ersatzplan (ohne KI)" in values
        assert "Mathe" in values

    def test_empty_plan(self, tmp_path: Path):
        path = tmp_path / "leer.xlsx"
        ExcelExporter([], _make_modules()).export(path)
        assert path.exists()


# ─── PDF ──────────────────────────────────────────────────────────────────────

class TestPdfExport:
    def test_pdf_safe(self):
        assert _pdf_safe("A – B → C") == "A - B -> C"
        assert _pdf_safe("Übung") == "Übung"
        assert _pdf_safe("✓") == "?"

    def test_pdf_created(self, tmp_path: Path):
        path = tmp_path / "lernplan.pdf"
        PdfExporter(_make_sessions()).export(path)
        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF-")

    @pytest.mark.parametrize("count", [0, 40])
    def test_page_breaks_and_empty_plan(self, tmp_path: Path, count):
        sessions = [
            StudySession(id=str(i), date=date(2026, 10, 19), start_time="08:00",
                         end_time="09:00", module="Datenbanken", topic="T", description="D")
            for i in range(count)
        ]
        path = tmp_path / f"plan_{count}.pdf"
        PdfExporter(sessions).export(path)
        assert path.stat().st_size > 0
