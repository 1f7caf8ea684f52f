# portal/app.py
from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

# --- Standard libs ---
import logging
import sys
from datetime import datetime
from pathlib import Path

# Make project root importable so we can import menudoc.*
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from menudoc import pdf_text, settings
from portal.routes_menu import menu_api

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# ------------------------
# App & Config
# ------------------------
app = Flask(__name__)

app.config["SECRET_KEY"] = settings.SECRET_KEY
app.config["MAX_CONTENT_LENGTH"] = settings.MAX_UPLOAD_MB * 1024 * 1024
app.json.ensure_ascii = False  # keep "€" readable in responses

app.register_blueprint(menu_api)


def _now_iso() -> str:
    return datetime.utcnow().isoformat(timespec="seconds") + "Z"


# ------------------------
# Health
# ------------------------
@app.get("/health")
def health():
    return jsonify({"status": "ok", "time": _now_iso()})


@app.get("/ocr/health")
def ocr_health():
    return jsonify(pdf_text.health())


# ------------------------
# Errors
# ------------------------
@app.errorhandler(RequestEntityTooLarge)
def too_large(_e):
    return jsonify({"ok": False, "error": f"upload larger than {settings.MAX_UPLOAD_MB} MB"}), 413


@app.errorhandler(404)
def not_found(_e):
    return jsonify({"ok": False, "error": "not found"}), 404


if __name__ == "__main__":
    app.run(debug=True)
