#!/usr/bin/env python
"""
extract_form_fields.py  –  inspect a packet template against its field map
Usage:  python extract_form_fields.py path/to/form.pdf [path/to/field_map.json]

Writes  <stem>_fields.csv      every widget with its role (blank = untouched)
        <stem>_targets.pdf     overlay targets marked in red, for calibration
"""

import csv
import os
import sys

import fitz  # PyMuPDF

from field_map import load_field_map
from overlay_fill import resolve_page_index, to_page_point

HEADER = ["row", "field_name", "field_type", "role", "x1", "y1", "x2", "y2", "page"]


# ----------------------------------------------------------------------
def extract_form_fields(pdf_path: str, csv_path: str, field_map):
    """Return one row per widget; also writes CSV.

    Coordinates are PDF points with the origin at the bottom-left, the same
    space the overlay targets use.
    """
    doc = fitz.open(pdf_path)

    rows, row_idx = [], 1
    for page_no in range(len(doc)):
        page = doc[page_no]
        height = page.rect.height
        for w in page.widgets():
            if w.rect is None:
                continue

            role = field_map.classify(w.field_name or "")
            rows.append([
                row_idx,
                w.field_name or "",
                w.field_type_string or "",
                role.value if role else "",
                round(w.rect.x0, 2),
                round(height - w.rect.y1, 2),
                round(w.rect.x1, 2),
                round(height - w.rect.y0, 2),
                page_no + 1,
            ])
            row_idx += 1
    doc.close()

    with open(csv_path, "w", newline="", encoding="utf-8") as fh:
        csv.writer(fh).writerows([HEADER] + rows)

    return rows


# ----------------------------------------------------------------------
def annotate_overlay_targets(pdf_path: str, field_map, out_path: str) -> int:
    doc = fitz.open(pdf_path)
    marked = 0
    for target in field_map.overlay_targets:
        page_index = resolve_page_index(target.page, len(doc))
        if page_index is None:
            continue
        page = doc[page_index]
        point = to_page_point(page, target.x, target.y)
        page.draw_circle(point, 2, color=(1, 0, 0))
        page.insert_text(
            fitz.Point(point.x + 4, point.y - 4),
            f"{target.label} ({target.role.value})",
            fontname="helv",
            fontsize=6,
            color=(1, 0, 0),  # red
            overlay=True,
        )
        marked += 1
    doc.save(out_path)
    doc.close()
    return marked


# ----------------------------------------------------------------------
def main() -> None:
    if len(sys.argv) not in (2, 3):
        sys.exit("Usage:  python extract_form_fields.py path/to/form.pdf [field_map.json]")

    in_pdf = sys.argv[1]
    field_map = load_field_map(sys.argv[2] if len(sys.argv) == 3 else None)
    stem, _ = os.path.splitext(in_pdf)
    csv_out = f"{stem}_fields.csv"
    pdf_out = f"{stem}_targets.pdf"

    rows = extract_form_fields(in_pdf, csv_out, field_map)
    marked = annotate_overlay_targets(in_pdf, field_map, pdf_out)

    classified = sum(1 for r in rows if r[3])
    print(f"✓ Wrote CSV with {len(rows)} fields ({classified} classified) → {csv_out}")
    print(f"✓ Marked {marked} overlay targets                  → {pdf_out}")


if __name__ == "__main__":
    main()
