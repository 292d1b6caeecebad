"""Export-Modul: CSV, JSON, Excel (openpyxl) und PDF (fpdf2) für den Lernplan."""

from export.csv_export import export_sessions_csv
from export.excel_export import ExcelExporter
from export.json_export import export_modules_json, export_sessions_json
from export.pdf_export import PdfExporter

__all__ = [
    "ExcelExporter",
    "PdfExporter",
    "export_modules_json",
    "export_sessions_csv",
    "export_sessions_json",
]
