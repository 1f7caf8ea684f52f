# portal/routes_menu.py
"""
Menu API blueprint.

  GET  /api/menus/<language>           public: stored menu or sample menu
  POST /api/menus/<language>/pdf       admin: upload a PDF, parse, replace menu
  POST /api/menus/<language>/preview   admin: parse raw text, nothing saved

Admin calls carry `Authorization: Bearer <token>` or `X-Admin-Token: <token>`
matching MENU_ADMIN_TOKEN.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import logging
import sqlite3
from functools import wraps
from typing import Optional

from flask import Blueprint, jsonify, request

from menudoc import menus, settings
from menudoc.locale_strings import UnsupportedLanguageError, normalize_language
from menudoc.menu_extract import parse_menu_text, process_menu_pdf
from menudoc.menu_types import dish_counts, menu_to_dict

log = logging.getLogger(__name__)

menu_api = Blueprint("menu_api", __name__, url_prefix="/api/menus")


def _error(message: str, status: int):
    return jsonify({"ok": False, "error": message}), status


# ------------------------
# Admin auth
# ------------------------
def _request_token() -> Optional[str]:
    auth = request.headers.get("Authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    return (request.headers.get("X-Admin-Token") or "").strip() or None


def admin_required(view_func):
    @wraps(view_func)
    def wrapper(*args, **kwargs):
        expected = settings.ADMIN_TOKEN
        given = _request_token()
        if not expected or not given or not hmac.compare_digest(
            given.encode("utf-8"), expected.encode("utf-8")
        ):
            return _error("User must be authenticated", 401)
        return view_func(*args, **kwargs)
    return wrapper


def _language_or_400(language: str):
    try:
        return normalize_language(language), None
    except UnsupportedLanguageError as e:
        return None, _error(str(e), 400)


# ------------------------
# Public
# ------------------------
@menu_api.get("/<language>")
def get_menu(language: str):
    lang, err = _language_or_400(language)
    if err:
        return err
    try:
        menu, source = menus.get_menu(lang)
    except sqlite3.Error as e:
        log.exception("Reading menu %s failed", lang)
        return _error(f"Error retrieving menu: {e}", 500)
    return jsonify({"ok": True, "language": lang, "source": source, "menu": menu_to_dict(menu)})


# ------------------------
# Admin
# ------------------------
def _uploaded_pdf_bytes() -> Optional[bytes]:
    f = request.files.get("file")
    if f is not None and f.filename:
        return f.read()
    payload = request.get_json(silent=True)
    data = payload.get("fileData") if isinstance(payload, dict) else None
    if not data or not isinstance(data, str):
        return None
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return None


@menu_api.post("/<language>/pdf")
@admin_required
def upload_menu_pdf(language: str):
    lang, err = _language_or_400(language)
    if err:
        return err

    pdf_bytes = _uploaded_pdf_bytes()
    if not pdf_bytes:
        return _error("File data and language are required", 400)

    try:
        summary = process_menu_pdf(pdf_bytes, lang)
    except (sqlite3.Error, ValueError) as e:
        log.exception("Saving menu %s failed", lang)
        return _error(f"Error processing PDF: {e}", 500)

    log.info("Menu %s replaced (%s): %s", lang, summary["outcome"], summary["counts"])
    return jsonify(summary)


@menu_api.post("/<language>/preview")
@admin_required
def preview_menu_text(language: str):
    lang, err = _language_or_400(language)
    if err:
        return err

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or not isinstance(payload.get("text"), str):
        return _error("Expected JSON payload with a 'text' string", 400)

    try:
        page_count = int(payload.get("page_count") or 0)
    except (TypeError, ValueError):
        return _error("page_count must be an integer", 400)

    outcome = parse_menu_text(payload["text"], lang, page_count=page_count)
    return jsonify({
        "ok": True,
        "language": lang,
        "outcome": outcome.kind,
        "reason": outcome.reason,
        "counts": dish_counts(outcome.menu),
        "menu": menu_to_dict(outcome.menu),
    })
