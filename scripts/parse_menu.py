#!/usr/bin/env python3
"""
Offline menu parser.

Runs the same pipeline the portal uses on a local PDF (or a .txt dump of its
text layer) and prints the resulting MenuDocument as JSON.

  python scripts/parse_menu.py menu.pdf --lang it
  python scripts/parse_menu.py menu.pdf --text        # dump extracted text only
  python scripts/parse_menu.py menu.txt --lang en --save
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from menudoc import menus, pdf_text
from menudoc.locale_strings import SUPPORTED_LANGUAGES
from menudoc.menu_extract import extract_menu_from_pdf, parse_menu_text
from menudoc.menu_types import dish_counts, menu_to_dict


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Parse a restaurant menu PDF into antipasti / primi / secondi.")
    ap.add_argument("input", type=str, help="PDF file or .txt text dump")
    ap.add_argument("--lang", default="it", choices=SUPPORTED_LANGUAGES, help="Language of the menu (default: it)")
    ap.add_argument("--save", action="store_true", help="Replace the stored menu for --lang with the result")
    ap.add_argument("--text", action="store_true", help="Print the extracted text instead of parsing it")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.input)
    if not path.exists():
        print(f"[ERROR] Not found: {path}", file=sys.stderr)
        return 2

    if path.suffix.lower() == ".pdf":
        data = path.read_bytes()
        if args.text:
            try:
                extracted = pdf_text.extract_text(data)
            except pdf_text.PdfExtractionError as e:
                print(f"[ERROR] {e}", file=sys.stderr)
                return 1
            print(extracted.text)
            return 0
        outcome = extract_menu_from_pdf(data, args.lang)
    else:
        text = path.read_text(encoding="utf-8", errors="replace")
        if args.text:
            print(text)
            return 0
        outcome = parse_menu_text(text, args.lang)

    print(json.dumps(
        {
            "outcome": outcome.kind,
            "reason": outcome.reason,
            "counts": dish_counts(outcome.menu),
            "menu": menu_to_dict(outcome.menu),
        },
        ensure_ascii=False,
        indent=2,
    ))

    if args.save:
        saved = menus.save_menu(args.lang, outcome.menu, outcome=outcome.kind)
        print(f"[OK] Saved menu '{saved['language']}' at {saved['updated_at']}", file=sys.stderr)

    return 0 if outcome.ok else 1


if __name__ == "__main__":
    sys.exit(main())
