"""Text aus Modulhandbuch-PDFs (PyMuPDF)."""

import logging
from pathlib import Path

import fitz

from config.defaults import (
    PDF_MAGIC_NUMBER,
    PDF_MAX_FILE_SIZE_BYTES,
    PDF_MAX_FILE_SIZE_MB,
    PDF_MAX_PAGES,
    PDF_MIN_TEXT_LENGTH,
)

logger = logging.getLogger(__name__)


class PdfExtractionError(Exception):
    """Die Datei ist kein verwertbares PDF."""


def is_pdf_signature(head: bytes) -> bool:
    return head.startswith(PDF_MAGIC_NUMBER)


def extract_text(path: Path) -> str:
    """Liest den Text aller Seiten in Seitenreihenfolge.

    Prüft vor dem Parsen Signatur und Dateigröße, danach die Seitenzahl.
    Kein Text → Fehler, sehr wenig Text → nur Warnung (z.B. Scan).
    """
    path = Path(path)
    if not path.exists():
        raise PdfExtractionError(f"Datei nicht gefunden: {path}")

    size = path.stat().st_size
    if size > PDF_MAX_FILE_SIZE_BYTES:
        raise PdfExtractionError(
            f"{path.name} ist zu groß ({size / 1024 / 1024:.1f} MB, max. {PDF_MAX_FILE_SIZE_MB} MB)."
        )

    content = path.read_bytes()
    if not is_pdf_signature(content[:len(PDF_MAGIC_NUMBER)]):
        raise PdfExtractionError(f"{path.name} ist keine gültige PDF-Datei.")

    try:
        doc = fitz.open(stream=content, filetype="pdf")
    except RuntimeError as e:
        raise PdfExtractionError(f"{path.name} konnte nicht gelesen werden: {e}") from e

    with doc:
        page_count = doc.page_count
        if page_count > PDF_MAX_PAGES:
            raise PdfExtractionError(
                f"{path.name} hat zu viele Seiten ({page_count}, max. {PDF_MAX_PAGES})."
            )
        text = "\n".join(page.get_text() for page in doc).strip()

    if not text:
        raise PdfExtractionError(f"{path.name} enthält keinen extrahierbaren Text.")
    if len(text) < PDF_MIN_TEXT_LENGTH:
        logger.warning(
            f"{path.name}: nur {len(text)} Zeichen Text, eventuell eingescanntes Dokument."
        )
    logger.info(f"{path.name}: {page_count} Seiten, {len(text)} Zeichen.")
    return text
