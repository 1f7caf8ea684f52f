# menudoc/text_lines.py
"""
Text normalizer: raw PDF text -> ordered list of trimmed, non-empty lines.

PDF text layers come back with layout whitespace, NBSPs and the odd
truncated page. When the single-pass text looks too short for a real menu,
the caller-supplied page-by-page re-extraction is tried too and the longer
of the two wins. This step is best effort and never raises.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional

from . import settings

log = logging.getLogger(__name__)

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_SPACES_RE = re.compile(r"[ \t\u00a0\u2007\u202f]+")


def split_lines(text: Optional[str]) -> List[str]:
    """
    >>> split_lines("  ANTIPASTI \\n\\n Insalata  di Mare 14€\\r\\n")
    ['ANTIPASTI', 'Insalata di Mare 14€']
    """
    if not text:
        return []
    out: List[str] = []
    for raw in _NEWLINE_RE.split(text):
        line = _SPACES_RE.sub(" ", raw).strip()
        if line:
            out.append(line)
    return out


def choose_text(
    text: Optional[str],
    page_count: int = 0,
    reextract: Optional[Callable[[], str]] = None,
    min_chars: Optional[int] = None,
) -> str:
    """
    Pick between the single-pass text and the page-by-page re-extraction.

    `reextract` is only called when the single-pass text is shorter than
    `min_chars` (settings.MIN_TEXT_CHARS by default).
    """
    text = text or ""
    threshold = settings.MIN_TEXT_CHARS if min_chars is None else min_chars
    if len(text) >= threshold or reextract is None:
        return text

    log.info(
        "Extracted text looks short (%d chars, %d pages); trying page-by-page extraction",
        len(text), page_count,
    )
    try:
        per_page = reextract() or ""
    except Exception as e:
        log.warning("Page-by-page extraction failed, keeping single pass: %s", e)
        return text

    if len(per_page) > len(text):
        log.info("Using page-by-page text (%d chars vs %d)", len(per_page), len(text))
        return per_page
    return text


def normalize_text(
    text: Optional[str],
    page_count: int = 0,
    reextract: Optional[Callable[[], str]] = None,
    min_chars: Optional[int] = None,
) -> List[str]:
    return split_lines(choose_text(text, page_count, reextract, min_chars))
