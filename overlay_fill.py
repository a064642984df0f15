"""Stamp fill values onto flat packet pages using PyMuPDF.

Used when a template carries no live form fields (scanned or exported
copies). Each overlay target from the field map names a page and a point in
PDF user space (origin bottom-left); the value for the target's role is
drawn there in 10 pt Helvetica.

The coordinates belong to one template revision. A new revision needs new
coordinates in the field map.
"""

import logging
from typing import Optional

import fitz  # PyMuPDF

from field_map import LAST_PAGE
from fill_values import is_encodable

logger = logging.getLogger(__name__)

FONT_NAME = "helv"
FONT_SIZE = 10
TEXT_COLOR = (0, 0, 0)


def resolve_page_index(page: int, page_count: int) -> Optional[int]:
    index = page_count - 1 if page == LAST_PAGE else page
    if index < 0 or index >= page_count:
        return None
    return index


def to_page_point(page: fitz.Page, x: float, y: float) -> fitz.Point:
    """Convert a bottom-left origin point into PyMuPDF's top-left space."""
    return fitz.Point(x, page.rect.height - y)


def draw_text(page: fitz.Page, x: float, y: float, text: str, fontsize: int = FONT_SIZE) -> None:
    """Draw ``text`` with its baseline starting at (x, y)."""

    page.insert_text(
        to_page_point(page, x, y),
        text,
        fontname=FONT_NAME,
        fontsize=fontsize,
        color=TEXT_COLOR,
        overlay=True,
    )


def draw_overlay(doc: fitz.Document, values, field_map) -> bool:
    """Draw every overlay target that has a value. Returns True if any was drawn."""

    page_count = len(doc)
    if page_count == 0:
        return False

    logger.debug(
        "Overlay on %d pages: name=%r initials=%r date=%r",
        page_count,
        values.full_name,
        values.initials,
        values.date_string,
    )

    drawn = []
    for target in field_map.overlay_targets:
        value = (values.for_role(target.role) or "").strip()
        if not value:
            continue

        if not is_encodable(value):
            logger.warning("Cannot encode value for %s in Helvetica, skipping: %r", target.label, value)
            continue

        page_index = resolve_page_index(target.page, page_count)
        if page_index is None:
            logger.debug("Skipping %s: page %d not in document", target.label, target.page)
            continue

        draw_text(doc[page_index], target.x, target.y, value)
        logger.debug(
            "Drew %r for %s on page %d at x=%s, y=%s",
            value, target.label, page_index + 1, target.x, target.y,
        )
        drawn.append(f"{target.label} on page {page_index + 1}")

    if drawn:
        logger.info("Drew overlay text for: %s", ", ".join(drawn))
    return bool(drawn)
