#!/usr/bin/env python3
"""
native_fill.py

Write name / initials / date values into the live AcroForm text fields of a
packet form. Only empty fields are touched, so a form the employee already
filled in by hand keeps their entries.
"""

import logging

import fitz  # PyMuPDF

from fill_values import is_encodable

logger = logging.getLogger(__name__)


def iter_widgets(doc):
    for page in doc:
        for widget in page.widgets():
            yield widget


def count_form_fields(doc) -> int:
    return sum(1 for _ in iter_widgets(doc))


def is_text_field(widget) -> bool:
    return widget.field_type == fitz.PDF_WIDGET_TYPE_TEXT


def should_fill(current) -> bool:
    if not current:
        return True
    return not str(current).strip()


def set_text(widget, value: str) -> None:
    widget.text_font = "Helv"
    widget.text_fontsize = 0
    widget.text_color = [0, 0, 0]
    widget.field_value = value
    widget.update()


def fill_native_fields(doc, values, field_map) -> bool:
    """Fill every empty, classified text field. Returns True if any was set."""
    filled = []
    for widget in iter_widgets(doc):
        name = widget.field_name
        if not name or not is_text_field(widget):
            continue

        desired = field_map.value_for(name, values)
        if not desired:
            continue

        if not should_fill(widget.field_value):
            logger.debug("Keeping existing value of %r", name)
            continue

        if not is_encodable(desired):
            logger.warning("Cannot encode value for %r in Helvetica, leaving it empty: %r", name, desired)
            continue

        try:
            set_text(widget, desired)
        except Exception as exc:
            # PyMuPDF raises assorted error types for broken widget dictionaries
            logger.warning("Unable to set field value %r: %s", name, exc)
            continue

        logger.info("Set %r -> %r", name, desired)
        filled.append(name)

    return bool(filled)
