"""Fill the employee-handbook acknowledgment pages of a payroll packet.

Steps
-----
1. Decode the base64 PDF and drop any XFA layer.
2. If the document has live form fields, write the name / initials / date
   values into the empty ones (``native_fill``).
3. Otherwise the template is flat: stamp the values at the coordinates from
   the field map (``overlay_fill``).
4. Flatten the form and return the saved document as base64.

The two paths never run together; the choice depends only on whether the
document has any form fields. When nothing changed the result is ``None``
so callers do not store an unfilled form as complete.

Usage
-----
python handbook_fill.py \\
    --pdf-in pds-employee-handbook-2026.pdf \\
    --name "Jordan Lee" \\
    --date 2024-03-02 \\
    --pdf-out filled.pdf
"""

import argparse
import base64
import binascii
import logging
import sys
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF

import config
from errors import MalformedPdfError
from field_map import FieldMap, load_field_map
from fill_values import FillValues, build_fill_values
from native_fill import count_form_fields, fill_native_fields
from overlay_fill import draw_overlay
from pdf_cleanup import strip_xfa
from template_store import load_template_base64

logger = logging.getLogger(__name__)


def open_pdf(base64_data: str) -> fitz.Document:
    try:
        pdf_bytes = base64.b64decode(base64_data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedPdfError(exc) from exc
    if not pdf_bytes:
        raise MalformedPdfError("empty document")

    pdf_bytes = strip_xfa(pdf_bytes)
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except (RuntimeError, ValueError) as exc:
        raise MalformedPdfError(exc) from exc
    if not doc.is_pdf or len(doc) == 0:
        doc.close()
        raise MalformedPdfError("document has no pages")
    return doc


def flatten(doc: fitz.Document) -> None:
    """Bake form widgets into page content. Failures leave the form live."""
    try:
        doc.bake(annots=False, widgets=True)
    except Exception as exc:
        logger.debug("Flatten failed, returning unflattened form: %s", exc)


def fill_handbook_fields(
    base64_data: str,
    values: FillValues,
    field_map: Optional[FieldMap] = None,
) -> Optional[str]:
    """Return the filled document as base64, or None if nothing could be filled.

    Raises MalformedPdfError when the input is not a readable PDF.
    """
    field_map = field_map or load_field_map()
    logger.info(
        "Filling handbook: name=%r initials=%r date=%r",
        values.full_name, values.initials, values.date_string,
    )

    doc = open_pdf(base64_data)
    try:
        field_count = count_form_fields(doc)
        logger.info("PDF has %d form fields", field_count)

        if field_count == 0:
            logger.info("PDF has no editable fields, falling back to overlay drawing")
            updated = draw_overlay(doc, values, field_map)
        else:
            updated = fill_native_fields(doc, values, field_map)

        if not updated:
            logger.info("No handbook fields were filled")
            return None

        flatten(doc)
        saved = doc.tobytes(garbage=3, deflate=True)
    finally:
        doc.close()

    result = base64.b64encode(saved).decode("ascii")
    logger.info("Saved PDF: %d bytes, base64 length: %d", len(saved), len(result))
    return result


def fill_handbook_template(
    values: FillValues,
    template_path: Optional[Path] = None,
    field_map: Optional[FieldMap] = None,
) -> Optional[str]:
    template = load_template_base64(template_path)
    if template is None:
        return None
    return fill_handbook_fields(template, values, field_map)


def main() -> None:
    parser = argparse.ArgumentParser(description="Fill the handbook acknowledgment name, initials and dates")
    parser.add_argument("--pdf-in", type=Path, default=config.HANDBOOK_TEMPLATE_PATH, help="Blank or partly filled handbook PDF")
    parser.add_argument("--name", required=True, help="Employee full name")
    parser.add_argument("--date", default=None, help="ISO 8601 acknowledgment date (default: today)")
    parser.add_argument("--pdf-out", required=True, type=Path, help="Where to write the filled PDF")
    parser.add_argument("--field-map", type=Path, default=None, help="Field map JSON (default: bundled handbook map)")
    args = parser.parse_args()

    config.configure_logging()
    if not args.pdf_in.exists():
        sys.exit(f"Input PDF not found: {args.pdf_in}")

    values = build_fill_values(args.name, args.date)
    field_map = load_field_map(args.field_map)
    source = base64.b64encode(args.pdf_in.read_bytes()).decode("ascii")

    result = fill_handbook_fields(source, values, field_map)
    if result is None:
        sys.exit("Nothing was filled: no matching empty fields or overlay targets")

    args.pdf_out.write_bytes(base64.b64decode(result))
    print(f"Saved filled handbook to: {args.pdf_out}")


if __name__ == "__main__":
    main()
