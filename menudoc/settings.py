# menudoc/settings.py
"""
Runtime configuration, read from the environment.

A `.env` file at the project root is loaded first when python-dotenv finds
one, so local dev can keep TESSERACT_CMD / POPPLER_PATH / MENU_ADMIN_TOKEN
out of the shell profile.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]  # project root

load_dotenv(ROOT / ".env")


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# --- Storage ---
DB_PATH = Path(os.getenv("MENU_DB_PATH") or (ROOT / "menudoc" / "menus.db"))

# --- Portal ---
SECRET_KEY = os.getenv("SECRET_KEY") or "dev-secret-change-me"
ADMIN_TOKEN: Optional[str] = (os.getenv("MENU_ADMIN_TOKEN") or "").strip() or None
MAX_UPLOAD_MB = _env_int("MENU_MAX_UPLOAD_MB", 20)

# --- Extraction ---
# Below this many characters the single-pass text is suspected truncated and
# the page-by-page variant is tried as well.
MIN_TEXT_CHARS = _env_int("MENU_MIN_TEXT_CHARS", 5000)

# --- OCR fallback for scanned PDFs (no text layer) ---
OCR_FALLBACK = _env_bool("MENU_OCR_FALLBACK", True)
TESSERACT_CMD = os.getenv("TESSERACT_CMD") or None
TESSERACT_LANG = os.getenv("TESSERACT_LANG") or "ita+eng"
TESSERACT_CONFIG = os.getenv("TESSERACT_CONFIG") or "--oem 1 --psm 6"
POPPLER_PATH = os.getenv("POPPLER_PATH") or None
OCR_DPI = _env_int("MENU_OCR_DPI", 300)
