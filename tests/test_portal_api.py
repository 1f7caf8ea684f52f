"""
Portal HTTP API.

Covers:
  Public:
  - GET /health
  - GET /api/menus/<lang> serves the sample menu, then the stored one
  - unsupported language -> 400

  Admin auth:
  - missing token -> 401
  - wrong token -> 401
  - server without MENU_ADMIN_TOKEN refuses everything -> 401
  - Authorization: Bearer and X-Admin-Token both accepted
  - non-ASCII token -> 401, not a server error

  POST /api/menus/<lang>/pdf:
  - JSON fileData (base64) -> menu parsed and stored
  - multipart file upload
  - missing / undecodable file -> 400
  - unreadable PDF -> 200, sentinel stored
  - storage failure -> 500
  - upload over the size limit -> 413

  POST /api/menus/<lang>/preview:
  - parses text without storing it
  - missing text -> 400

  Response Consistency:
  - error responses have "ok": False + "error"
"""

from __future__ import annotations

import base64
import io
import sqlite3
from typing import Optional

import pytest

import menudoc.menus as menus
from menudoc import pdf_text, settings

TOKEN = "s3cret-admin-token"

MENU_TEXT = """ANTIPASTI
Insalata di Mare 14,00€
Polpo, gamberi e cozze
PRIMI
Spaghetti ai Frutti di Mare 18€
"""

# ---------------------------------------------------------------------------
# In-memory DB + app fixtures
# ---------------------------------------------------------------------------
_TEST_CONN: Optional[sqlite3.Connection] = None


@pytest.fixture
def fresh_db(monkeypatch):
    global _TEST_CONN
    _TEST_CONN = sqlite3.connect(":memory:", check_same_thread=False)
    _TEST_CONN.row_factory = sqlite3.Row
    monkeypatch.setattr(menus, "db_connect", lambda: _TEST_CONN)
    yield _TEST_CONN
    _TEST_CONN.close()
    _TEST_CONN = None


@pytest.fixture
def fake_pdf(monkeypatch):
    """Replace the PDF collaborator: every upload 'contains' MENU_TEXT."""
    monkeypatch.setattr(
        pdf_text, "extract_text",
        lambda _data: pdf_text.PdfText(text=MENU_TEXT, page_count=1, method="pdfminer"),
    )
    monkeypatch.setattr(pdf_text, "extract_pages_text", lambda _data: "")


@pytest.fixture
def client(fresh_db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_TOKEN", TOKEN)
    from portal.app import app
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def _bearer(token: str = TOKEN) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _file_data(data: bytes = b"%PDF-1.4 fake") -> dict:
    return {"fileData": base64.b64encode(data).decode("ascii")}


# ===========================================================================
# Public
# ===========================================================================

class TestPublic:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "ok"

    def test_default_menu(self, client):
        resp = client.get("/api/menus/it")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["ok"] is True
        assert body["source"] == "default"
        assert body["menu"]["antipasti"][0]["price"] == "€14.00"

    def test_english_default_menu(self, client):
        body = client.get("/api/menus/en").get_json()
        assert body["menu"]["primi"][0]["name"] == "Seafood Spaghetti"

    def test_unsupported_language(self, client):
        resp = client.get("/api/menus/fr")
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["ok"] is False
        assert "error" in body


# ===========================================================================
# Admin auth
# ===========================================================================

class TestAdminAuth:
    def test_missing_token(self, client, fake_pdf):
        resp = client.post("/api/menus/it/pdf", json=_file_data())
        assert resp.status_code == 401
        assert resp.get_json()["ok"] is False

    def test_wrong_token(self, client, fake_pdf):
        resp = client.post("/api/menus/it/pdf", json=_file_data(), headers=_bearer("nope"))
        assert resp.status_code == 401

    def test_server_without_token(self, client, fake_pdf, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_TOKEN", None)
        resp = client.post("/api/menus/it/pdf", json=_file_data(), headers=_bearer())
        assert resp.status_code == 401

    def test_x_admin_token_header(self, client, fake_pdf):
        resp = client.post("/api/menus/it/pdf", json=_file_data(), headers={"X-Admin-Token": TOKEN})
        assert resp.status_code == 200

    def test_non_ascii_token(self, client):
        resp = client.post(
            "/api/menus/it/preview",
            json={"text": "ANTIPASTI\nBurrata 9€"},
            headers={"X-Admin-Token": "sécret-admin-token"},
        )
        assert resp.status_code == 401
        assert resp.get_json() == {"ok": False, "error": "User must be authenticated"}

    def test_non_ascii_bearer(self, client):
        resp = client.post("/api/menus/it/preview", json={"text": "x"}, headers=_bearer("tökén"))
        assert resp.status_code == 401


# ===========================================================================
# Upload
# ===========================================================================

class TestUploadPdf:
    def test_json_upload_stores_menu(self, client, fake_pdf):
        resp = client.post("/api/menus/it/pdf", json=_file_data(), headers=_bearer())
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["ok"] is True
        assert body["outcome"] == "structured"
        assert body["message"] == "Menu it processed and saved"

        stored = client.get("/api/menus/it").get_json()
        assert stored["source"] == "stored"
        assert stored["menu"]["antipasti"] == [
            {"name": "Insalata di Mare", "description": "Polpo, gamberi e cozze", "price": "€14.00"},
        ]
        assert stored["menu"]["secondi"] == []

    def test_multipart_upload(self, client, fake_pdf):
        resp = client.post(
            "/api/menus/en/pdf",
            data={"file": (io.BytesIO(b"%PDF-1.4 fake"), "menu.pdf")},
            content_type="multipart/form-data",
            headers=_bearer(),
        )
        assert resp.status_code == 200
        stored = client.get("/api/menus/en").get_json()
        assert stored["menu"]["primi"][0]["description"] == "Delicious dish from our menu"

    def test_missing_file(self, client, fake_pdf):
        resp = client.post("/api/menus/it/pdf", json={}, headers=_bearer())
        assert resp.status_code == 400
        assert resp.get_json()["ok"] is False

    def test_undecodable_file_data(self, client, fake_pdf):
        resp = client.post("/api/menus/it/pdf", json={"fileData": "***"}, headers=_bearer())
        assert resp.status_code == 400

    def test_unsupported_language(self, client, fake_pdf):
        resp = client.post("/api/menus/fr/pdf", json=_file_data(), headers=_bearer())
        assert resp.status_code == 400

    def test_unreadable_pdf_stores_sentinel(self, client, monkeypatch):
        def fail(_data):
            raise pdf_text.PdfExtractionError("Not a readable PDF")

        monkeypatch.setattr(pdf_text, "extract_text", fail)
        resp = client.post("/api/menus/it/pdf", json=_file_data(b"garbage"), headers=_bearer())
        assert resp.status_code == 200
        assert resp.get_json()["outcome"] == "unprocessable"

        stored = client.get("/api/menus/it").get_json()
        assert stored["menu"]["antipasti"][0]["price"] == "€0"

    def test_storage_failure(self, client, fake_pdf, monkeypatch):
        def broken():
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(menus, "db_connect", broken)
        resp = client.post("/api/menus/it/pdf", json=_file_data(), headers=_bearer())
        assert resp.status_code == 500
        assert resp.get_json()["ok"] is False

    def test_too_large(self, client, fake_pdf, monkeypatch):
        from portal.app import app
        monkeypatch.setitem(app.config, "MAX_CONTENT_LENGTH", 16)
        resp = client.post(
            "/api/menus/it/pdf",
            data={"file": (io.BytesIO(b"x" * 1024), "menu.pdf")},
            content_type="multipart/form-data",
            headers=_bearer(),
        )
        assert resp.status_code == 413
        assert resp.get_json()["ok"] is False


# ===========================================================================
# Preview
# ===========================================================================

class TestPreview:
    def test_preview_not_stored(self, client):
        resp = client.post("/api/menus/it/preview", json={"text": MENU_TEXT}, headers=_bearer())
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["outcome"] == "structured"
        assert body["counts"] == {"antipasti": 1, "primi": 1, "secondi": 0}
        assert client.get("/api/menus/it").get_json()["source"] == "default"

    def test_preview_fallback(self, client):
        resp = client.post(
            "/api/menus/it/preview",
            json={"text": "Spaghetti alle vongole 14€ • Burrata pugliese 9€"},
            headers=_bearer(),
        )
        assert resp.get_json()["outcome"] == "unstructured"

    def test_preview_requires_text(self, client):
        resp = client.post("/api/menus/it/preview", json={"page_count": 2}, headers=_bearer())
        assert resp.status_code == 400

    def test_preview_requires_admin(self, client):
        resp = client.post("/api/menus/it/preview", json={"text": MENU_TEXT})
        assert resp.status_code == 401
