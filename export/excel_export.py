"""Excel-Export für den Lernplan (openpyxl)."""

import logging
from pathlib import Path

from models.module import Module
from models.session import StudySession

from export.helpers import (
    COLORS, format_date, group_sessions_by_week, method_color,
    module_overview_rows, sort_sessions, today_str,
)

logger = logging.getLogger(__name__)


class ExcelExporter:
    """Exportiert Module und Sessions in eine Excel-Datei mit 3 Sheets."""

    ROW_HEADER_H = 22
    ROW_SESSION_H = 30

    def __init__(self, sessions: list[StudySession], modules: list[Module],
                 used_fallback: bool = False):
        self.sessions = sort_sessions(sessions)
        self.modules = modules
        self.used_fallback = used_fallback

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        """Erstellt die Excel-Datei mit Übersicht, Lernplan und Wochen."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_uebersicht(wb)
        self._sheet_lernplan(wb)
        self._sheet_wochen(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Excel-Export: {len(self.sessions)} Sessions → {output_path}")

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_headers(self, ws, row: int, headers: list[str]) -> None:
        from openpyxl.styles import Alignment, Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            c = ws.cell(row=row, column=col, value=text)
            c.fill = fill
            c.font = Font(bold=True, color="FFFFFF", size=10)
            c.alignment = Alignment(horizontal="center", vertical="center")
            c.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    def _set_widths(self, ws, widths: list[int]) -> None:
        from openpyxl.utils import get_column_letter
        for col, width in enumerate(widths, 1):
            ws.column_dimensions[get_column_letter(col)].width = width

    # ─── Sheet: Übersicht ─────────────────────────────────────────────────────

    def _sheet_uebersicht(self, wb) -> None:
        from openpyxl.styles import Font
        ws = wb.create_sheet(title="Übersicht", index=0)
        border = self._thin_border()

        row = 1
        ws.cell(row=row, column=1, value="Semester-Lernplan").font = Font(bold=True, size=14)
        row += 1
        ws.cell(row=row, column=1, value=f"Erstellt: {today_str()}")
        if self.sessions:
            ws.cell(row=row, column=2, value=(
                f"Zeitraum: {format_date(self.sessions[0].date)} – "
                f"{format_date(self.sessions[-1].date)}"
            ))
        if self.used_fallback:
            c = ws.cell(row=row, column=4, value="Ersatzplan (ohne KI)")
            c.fill = self._fill(COLORS["fallback"])
        row += 2

        self._write_headers(ws, row, ["Modul", "Sessions", "Stunden", "ECTS"])
        row += 1
        total_sessions, total_hours = 0, 0.0
        for name, count, hours, ects in module_overview_rows(self.modules, self.sessions):
            for col, value in enumerate((name, count, hours, ects), 1):
                ws.cell(row=row, column=col, value=value).border = border
            total_sessions += count
            total_hours += hours
            row += 1

        ws.cell(row=row, column=1, value="Gesamt").font = Font(bold=True)
        ws.cell(row=row, column=2, value=total_sessions).font = Font(bold=True)
        ws.cell(row=row, column=3, value=round(total_hours, 1)).font = Font(bold=True)

        self._set_widths(ws, [32, 10, 10, 8])

    # ─── Sheet: Lernplan ──────────────────────────────────────────────────────

    def _sheet_lernplan(self, wb) -> None:
        from openpyxl.styles import Alignment
        ws = wb.create_sheet(title="Lernplan")
        border = self._thin_border()
        wrap = Alignment(wrap_text=True, vertical="top")

        self._write_headers(
            ws, 1, ["Datum", "Start", "Ende", "Modul", "Thema", "Beschreibung", "Lernmethode"])
        for row, s in enumerate(self.sessions, 2):
            values = (format_date(s.date), s.start_time, s.end_time, s.module,
                      s.topic, s.description, s.learning_method or "")
            for col, value in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=value)
                c.border = border
                c.alignment = wrap
            ws.cell(row=row, column=7).fill = self._fill(method_color(s.learning_method))
            ws.row_dimensions[row].height = self.ROW_SESSION_H

        ws.freeze_panes = "A2"
        self._set_widths(ws, [12, 8, 8, 24, 32, 60, 18])

    # ─── Sheet: Wochen ────────────────────────────────────────────────────────

    def _sheet_wochen(self, wb) -> None:
        ws = wb.create_sheet(title="Wochen")
        border = self._thin_border()

        self._write_headers(ws, 1, ["KW", "Woche ab", "Sessions", "Stunden", "Module"])
        row = 2
        for monday, sessions in group_sessions_by_week(self.sessions).items():
            modules = sorted({s.module for s in sessions})
            values = (
                monday.isocalendar()[1],
                format_date(monday),
                len(sessions),
                round(sum(s.hours for s in sessions), 1),
                ", ".join(modules),
            )
            for col, value in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=value)
                c.border = border
                if col == 1:
                    c.fill = self._fill(COLORS["week"])
            row += 1

        self._set_widths(ws, [6, 12, 10, 10, 60])
