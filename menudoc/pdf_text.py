# menudoc/pdf_text.py
"""
PDF -> text collaborator.

- extract_text(pdf_bytes): whole-document single pass (pdfminer.six), page
  count from pdfplumber.
- extract_pages_text(pdf_bytes): page-by-page pass (pdfplumber), used when
  the single pass looks truncated.
- Scanned menus without a text layer are rasterized with pdf2image (Poppler)
  and read with Tesseract, when OCR fallback is enabled.

Raises PdfExtractionError when the bytes cannot be opened as a PDF.
"""

from __future__ import annotations

import io
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import pdfplumber
import pytesseract
from pdf2image import convert_from_bytes
from pdfminer.high_level import extract_text as pdfminer_extract_text
from PIL import ImageFilter, ImageOps

from . import settings

log = logging.getLogger(__name__)


class PdfExtractionError(Exception):
    """The upload could not be read as a PDF."""


@dataclass
class PdfText:
    text: str
    page_count: int
    method: str  # "pdfminer" | "pdfplumber" | "ocr"


# ── Tesseract discovery ──────────────────────────────

def _tesseract_cmd() -> str:
    """Locate the tesseract executable: env, then PATH, then common installs."""
    if settings.TESSERACT_CMD and Path(settings.TESSERACT_CMD).exists():
        return settings.TESSERACT_CMD
    which = shutil.which("tesseract") or shutil.which("tesseract.exe") or ""
    if which:
        return which
    for p in (
        r"C:\Program Files\Tesseract-OCR\tesseract.exe",
        r"C:\Program Files (x86)\Tesseract-OCR\tesseract.exe",
    ):
        if Path(p).exists():
            return p
    return ""


# ── Text layer ───────────────────────────────────────

def count_pages(pdf_bytes: bytes) -> int:
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            return len(pdf.pages)
    except Exception as e:
        raise PdfExtractionError(f"Not a readable PDF: {e}") from e


def extract_pages_text(pdf_bytes: bytes) -> str:
    """Concatenate the text of every page, extracted one page at a time."""
    chunks: List[str] = []
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                chunks.append(page.extract_text() or "")
    except Exception as e:
        raise PdfExtractionError(f"Page-by-page extraction failed: {e}") from e
    return "\n".join(chunks)


def extract_text(pdf_bytes: bytes) -> PdfText:
    """Single-pass extraction of the whole document."""
    if not pdf_bytes:
        raise PdfExtractionError("Empty upload")

    page_count = count_pages(pdf_bytes)
    try:
        text = pdfminer_extract_text(io.BytesIO(pdf_bytes)) or ""
    except Exception as e:
        raise PdfExtractionError(f"Text extraction failed: {e}") from e

    log.info("Extracted %d chars from %d pages", len(text), page_count)
    log.debug("Extracted text head: %r", text[:500])

    if not text.strip() and settings.OCR_FALLBACK:
        ocr = ocr_pdf_text(pdf_bytes)
        if ocr.strip():
            return PdfText(text=ocr, page_count=page_count, method="ocr")

    return PdfText(text=text, page_count=page_count, method="pdfminer")


# ── OCR fallback (scanned menus) ─────────────────────

def ocr_pdf_text(pdf_bytes: bytes) -> str:
    """
    Rasterize each page with pdf2image (+Poppler) and OCR it.
    Returns "" when Tesseract or Poppler are not available.
    """
    cmd = _tesseract_cmd()
    if not cmd:
        log.warning("OCR fallback skipped: tesseract not found")
        return ""
    pytesseract.pytesseract.tesseract_cmd = cmd

    try:
        pages = convert_from_bytes(pdf_bytes, dpi=settings.OCR_DPI, poppler_path=settings.POPPLER_PATH)
    except Exception as e:
        log.warning("OCR fallback skipped: could not rasterize PDF (%s)", e)
        return ""

    buf: List[str] = []
    for n, pg in enumerate(pages, start=1):
        img = pg.convert("L")
        img = ImageOps.autocontrast(img)
        img = img.filter(ImageFilter.SHARPEN)
        try:
            txt = pytesseract.image_to_string(
                img,
                lang=settings.TESSERACT_LANG,
                config=settings.TESSERACT_CONFIG,
            )
        except pytesseract.TesseractError as e:
            log.warning("OCR failed on page %d: %s", n, e)
            continue
        if txt:
            buf.append(txt)
    log.info("OCR fallback read %d of %d pages", len(buf), len(pages))
    return "\n".join(buf).strip()


def health() -> dict:
    """Tesseract / Poppler availability for the portal health endpoint."""
    cmd = _tesseract_cmd()
    version: Optional[str] = None
    if cmd:
        pytesseract.pytesseract.tesseract_cmd = cmd
        try:
            version = str(pytesseract.get_tesseract_version())
        except pytesseract.TesseractNotFoundError:
            version = None
    return {
        "ocr_fallback": settings.OCR_FALLBACK,
        "tesseract": {"cmd": cmd, "version": version},
        "poppler": {
            "path_env": settings.POPPLER_PATH or "",
            "present": bool(shutil.which("pdftoppm") or settings.POPPLER_PATH),
        },
    }
