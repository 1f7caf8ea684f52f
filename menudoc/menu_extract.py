# menudoc/menu_extract.py
"""
Menu extraction façade: bridges the parsers to the portal and the CLI.

Public API:
- parse_menu_text(text, language, page_count=0, reextract=None) -> ParseOutcome
- extract_menu(text, page_count, language) -> MenuDocument
- extract_menu_from_pdf(pdf_bytes, language) -> ParseOutcome
- process_menu_pdf(pdf_bytes, language, save=menus.save_menu) -> summary dict

Degradation order, never an exception to the caller:
  structured (header pass) -> unstructured (fallback pass) -> unprocessable
  (sentinel "menu not processable" record)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from . import menus, pdf_text
from .locale_strings import normalize_language, sentinel_menu
from .menu_types import (
    STRUCTURED,
    UNPROCESSABLE,
    UNSTRUCTURED,
    MenuDocument,
    ParseOutcome,
    dish_counts,
    is_menu_empty,
)
from .parsers.fallback_grammar import parse_fallback_text
from .parsers.menu_grammar import parse_menu_lines
from .text_lines import choose_text, split_lines

log = logging.getLogger(__name__)

SaveMenu = Callable[..., Any]


def _unprocessable(language: str, reason: str) -> ParseOutcome:
    return ParseOutcome(UNPROCESSABLE, sentinel_menu(language), reason)


def parse_menu_text(
    text: Optional[str],
    language: str = "it",
    page_count: int = 0,
    reextract: Optional[Callable[[], str]] = None,
) -> ParseOutcome:
    """Run normalizer -> primary pass -> fallback pass on already-extracted text."""
    try:
        source = choose_text(text, page_count, reextract)
        lines = split_lines(source)

        menu = parse_menu_lines(lines, language)
        if not is_menu_empty(menu):
            log.info("Structured menu parsed: %s", dish_counts(menu))
            return ParseOutcome(STRUCTURED, menu, "section headers found")

        log.info("No structured menu found (%d lines); trying fragment fallback", len(lines))
        menu = parse_fallback_text(source, language)
        if not is_menu_empty(menu):
            log.info("Unstructured menu parsed: %s", dish_counts(menu))
            return ParseOutcome(UNSTRUCTURED, menu, "no usable section headers")

        log.warning("No priced dish found in %d chars of text", len(source))
        return _unprocessable(language, "no priced dish found")
    except Exception as e:
        log.exception("Menu parsing failed")
        return _unprocessable(language, f"parse error: {e}")


def extract_menu(text: Optional[str], page_count: int = 0, language: str = "it") -> MenuDocument:
    """Pure (text, pageCount, language) -> MenuDocument."""
    return parse_menu_text(text, language, page_count).menu


def extract_menu_from_pdf(pdf_bytes: bytes, language: str = "it") -> ParseOutcome:
    try:
        extracted = pdf_text.extract_text(pdf_bytes)
    except Exception as e:
        log.exception("PDF text extraction failed")
        return _unprocessable(language, f"extraction error: {e}")

    return parse_menu_text(
        extracted.text,
        language,
        page_count=extracted.page_count,
        reextract=lambda: pdf_text.extract_pages_text(pdf_bytes),
    )


def process_menu_pdf(
    pdf_bytes: bytes,
    language: str,
    save: Optional[SaveMenu] = None,
) -> Dict[str, Any]:
    """
    Extract a menu from an uploaded PDF and store it under `language`
    (full replacement). `save(language, menu, outcome=...)` defaults to the
    sqlite store.
    """
    lang = normalize_language(language)
    outcome = extract_menu_from_pdf(pdf_bytes, lang)
    (save or menus.save_menu)(lang, outcome.menu, outcome=outcome.kind)
    return {
        "ok": True,
        "language": lang,
        "outcome": outcome.kind,
        "reason": outcome.reason,
        "counts": dish_counts(outcome.menu),
        "message": f"Menu {lang} processed and saved",
    }
