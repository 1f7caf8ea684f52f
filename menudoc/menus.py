# menudoc/menus.py
"""
Menu storage: one JSON MenuDocument per language, full replacement on save
(last writer wins). The portal reads it back for the public menu page.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from . import settings
from .contracts import validate_menu_payload
from .locale_strings import normalize_language, sample_menu
from .menu_types import STRUCTURED, MenuDocument, menu_from_dict, menu_to_dict

# ------------------------------------------------------------
# DB
# ------------------------------------------------------------
def db_connect() -> sqlite3.Connection:
    settings.DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(settings.DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn

def _now() -> str:
    return datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")

# ------------------------------------------------------------
# Schema (idempotent)
# ------------------------------------------------------------
def _ensure_schema(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS menus (
          language   TEXT PRIMARY KEY,   -- 'it' | 'en'
          data       TEXT NOT NULL,      -- MenuDocument JSON
          outcome    TEXT NOT NULL DEFAULT 'structured',
          updated_at TEXT NOT NULL
        )
        """
    )

# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------
def save_menu(language: str, menu: MenuDocument, *, outcome: str = STRUCTURED) -> Dict[str, Any]:
    """Replace the stored menu for `language`. Raises ValueError on a bad document."""
    lang = normalize_language(language)
    payload = menu_to_dict(menu)
    ok, err = validate_menu_payload(payload)
    if not ok:
        raise ValueError(f"invalid menu document: {err}")

    now = _now()
    with db_connect() as conn:
        _ensure_schema(conn)
        conn.execute(
            """
            INSERT INTO menus (language, data, outcome, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(language) DO UPDATE SET
              data=excluded.data, outcome=excluded.outcome, updated_at=excluded.updated_at
            """,
            (lang, json.dumps(payload, ensure_ascii=False), outcome, now),
        )
        conn.commit()
    return {"language": lang, "outcome": outcome, "updated_at": now}

def load_menu(language: str) -> Optional[MenuDocument]:
    lang = normalize_language(language)
    with db_connect() as conn:
        _ensure_schema(conn)
        row = conn.execute("SELECT data FROM menus WHERE language=?", (lang,)).fetchone()
    if not row:
        return None
    return menu_from_dict(json.loads(row["data"]))

def get_menu(language: str) -> Tuple[MenuDocument, str]:
    """Stored menu, or the built-in sample menu until a PDF has been processed."""
    menu = load_menu(language)
    if menu is None:
        return sample_menu(language), "default"
    return menu, "stored"

def list_menus() -> List[Dict[str, Any]]:
    with db_connect() as conn:
        _ensure_schema(conn)
        rows = conn.execute(
            "SELECT language, outcome, updated_at FROM menus ORDER BY language"
        ).fetchall()
    return [{k: r[k] for k in r.keys()} for r in rows]

def delete_menu(language: str) -> bool:
    lang = normalize_language(language)
    with db_connect() as conn:
        _ensure_schema(conn)
        cur = conn.execute("DELETE FROM menus WHERE language=?", (lang,))
        conn.commit()
        return cur.rowcount > 0
