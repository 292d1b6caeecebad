"""PDF-Export für den Lernplan (fpdf2)."""

import logging
from datetime import timedelta
from pathlib import Path

from models.session import StudySession

from export.helpers import (
    COLORS, format_date, group_sessions_by_week, hex_to_rgb, method_color, today_str,
)

logger = logging.getLogger(__name__)


def _pdf_safe(text: str) -> str:
    """Ersetzt nicht-latin-1-fähige Zeichen für fpdf2-Built-in-Fonts."""
    text = (
        text
        .replace("—", " - ")   # Geviertstrich
        .replace("–", "-")      # en dash –
        .replace("─", "-")      # BOX DRAWINGS LIGHT HORIZONTAL ─
        .replace("→", "->")     # →
        .replace("•", "-")      # •
        .replace("„", '"')      # „
        .replace("“", '"')      # “
    )
    return text.encode("latin-1", "replace").decode("latin-1")


# ─── A4-Querformat-Dimensionen ────────────────────────────────────────────────
# Nutzbare Breite (Margin 10 links+rechts): 277 mm
# Spalten: Datum(22) + Zeit(24) + Modul(45) + Thema(70) + Beschreibung(86) + Methode(30) = 277 mm

_COLS: list[tuple[str, float]] = [
    ("Datum", 22),
    ("Zeit", 24),
    ("Modul", 45),
    ("Thema", 70),
    ("Beschreibung", 86),
    ("Lernmethode", 30),
]
_ROW_HEADER_H = 7     # mm
_ROW_SESSION_H = 12   # mm
_FONT_HEADER = 8      # pt
_FONT_CONTENT = 7     # pt
_LINE_H = 3.5         # mm pro Zeile bei 7pt
_PAGE_BOTTOM = 190    # mm, darunter neue Seite


class _PlanPdf:
    """Interner Wrapper um fpdf.FPDF für Lernplan-Seiten."""

    def __init__(self, title: str):
        from fpdf import FPDF

        class _Pdf(FPDF):
            def __init__(inner, t):
                super().__init__(orientation="L", unit="mm", format="A4")
                inner._title = t
                inner._week_title = ""
                inner.alias_nb_pages()
                inner.set_auto_page_break(auto=False)
                inner.set_margins(left=10, top=22, right=10)

            def header(inner):
                inner.set_font("Helvetica", "B", 11)
                inner.set_xy(10, 8)
                inner.cell(130, 7, _pdf_safe(inner._title), border=0, align="L")
                inner.cell(0, 7, _pdf_safe(inner._week_title), border=0, align="R")
                inner.ln(0)
                inner.set_draw_color(150, 150, 150)
                inner.line(10, 18, inner.w - 10, 18)

            def footer(inner):
                inner.set_y(-14)
                inner.set_font("Helvetica", "I", 7)
                inner.cell(
                    0, 8,
                    f"{today_str()}  |  Seite {inner.page_no()}/{{nb}}",
                    border=0, align="C",
                )

        self._pdf = _Pdf(title)

    def set_week(self, title: str) -> None:
        self._pdf._week_title = title

    def add_page(self) -> None:
        self._pdf.add_page()

    def save(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._pdf.output(str(path))

    # ─── Zellen-Zeichnung ─────────────────────────────────────────────────────

    def draw_cell(
        self,
        x: float, y: float,
        w: float, h: float,
        text: str = "",
        bg_hex: str | None = None,
        bold: bool = False,
        font_size: int = _FONT_CONTENT,
        text_color: tuple[int, int, int] = (0, 0, 0),
    ) -> None:
        """Zeichnet eine Zelle mit Hintergrund, Rand und linksbündigem Text."""
        pdf = self._pdf

        if bg_hex:
            r, g, b = hex_to_rgb(bg_hex)
            pdf.set_fill_color(r, g, b)
            pdf.rect(x, y, w, h, style="F")

        pdf.set_draw_color(180, 180, 180)
        pdf.rect(x, y, w, h, style="D")

        if text:
            pdf.set_font("Helvetica", "B" if bold else "", font_size)
            pdf.set_text_color(*text_color)
            max_lines = max(1, int(h // _LINE_H) - 1)
            lines = pdf.multi_cell(
                w - 2, _LINE_H, _pdf_safe(text), dry_run=True, output="LINES")[:max_lines]
            y_text = y + 1
            for line in lines:
                pdf.set_xy(x + 1, y_text)
                pdf.cell(w - 2, _LINE_H, line, border=0, align="L")
                y_text += _LINE_H
            pdf.set_text_color(0, 0, 0)

    def draw_header_row(self, x: float, y: float) -> float:
        cx = x
        for label, w in _COLS:
            self.draw_cell(
                cx, y, w, _ROW_HEADER_H, label,
                bg_hex=COLORS["header"], bold=True,
                font_size=_FONT_HEADER, text_color=(255, 255, 255),
            )
            cx += w
        return y + _ROW_HEADER_H

    def draw_session_row(self, x: float, y: float, session: StudySession) -> float:
        values = [
            format_date(session.date),
            f"{session.start_time}-{session.end_time}",
            session.module,
            session.topic,
            session.description,
            session.learning_method or "",
        ]
        cx = x
        for (label, w), value in zip(_COLS, values):
            bg = method_color(session.learning_method) if label == "Lernmethode" else None
            self.draw_cell(cx, y, w, _ROW_SESSION_H, value, bg_hex=bg)
            cx += w
        return y + _ROW_SESSION_H


class PdfExporter:
    """Exportiert den Lernplan als PDF, ein Tabellenblock pro Kalenderwoche."""

    def __init__(self, sessions: list[StudySession], title: str = "Semester-Lernplan"):
        self.sessions = sessions
        self.title = title
        self._table_x = 10.0

    def export(self, output_path: Path) -> None:
        pdf = _PlanPdf(self.title)
        weeks = group_sessions_by_week(self.sessions)

        for monday, sessions in weeks.items():
            sunday = monday + timedelta(days=6)
            hours = sum(s.hours for s in sessions)
            pdf.set_week(
                f"KW {monday.isocalendar()[1]}: {format_date(monday)} - {format_date(sunday)}"
                f" | {len(sessions)} Sessions, {hours:.1f}h"
            )
            pdf.add_page()
            y = pdf.draw_header_row(self._table_x, 22.0)
            for session in sessions:
                if y + _ROW_SESSION_H > _PAGE_BOTTOM:
                    pdf.add_page()
                    y = pdf.draw_header_row(self._table_x, 22.0)
                y = pdf.draw_session_row(self._table_x, y, session)

        if not weeks:
            pdf.add_page()
        pdf.save(output_path)
        logger.info(f"PDF-Export: {len(weeks)} Wochen → {output_path}")
