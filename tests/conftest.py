"""
Pytest fixtures: in-memory packet templates built with PyMuPDF.
"""
import base64

import fitz
import pytest

from field_map import FieldMap, load_field_map

LETTER = (612, 792)


def build_form_pdf(fields, pages=2):
    """PDF with one text widget per (name, value, page) entry."""
    doc = fitz.open()
    for _ in range(pages):
        doc.new_page(width=LETTER[0], height=LETTER[1])
    for i, (name, value, page_no) in enumerate(fields):
        w = fitz.Widget()
        w.field_type = fitz.PDF_WIDGET_TYPE_TEXT
        w.field_name = name
        w.field_value = value
        w.rect = fitz.Rect(72, 72 + i * 40, 320, 92 + i * 40)
        w.text_fontsize = 10
        doc[page_no].add_widget(w)
    data = doc.tobytes()
    doc.close()
    return data


def build_flat_pdf(pages=4):
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page(width=LETTER[0], height=LETTER[1])
        page.insert_text((72, 72), f"Handbook page {i + 1}", fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


def b64(data):
    return base64.b64encode(data).decode("ascii")


def open_b64(encoded):
    return fitz.open(stream=base64.b64decode(encoded), filetype="pdf")


@pytest.fixture
def handbook_map():
    return load_field_map()


@pytest.fixture
def last_page_map():
    return FieldMap.model_validate({
        "name_fields": ["employee_name"],
        "date_fields": ["acknowledgment_date"],
        "overlay_targets": [
            {"label": "signature_name", "role": "name", "page": -1, "x": 120, "y": 300},
            {"label": "signature_date", "role": "date", "page": -1, "x": 360, "y": 300},
        ],
    })


@pytest.fixture
def interactive_handbook():
    """Two-page template with empty employee_name and acknowledgment_date fields."""
    return build_form_pdf([
        ("employee_name", "", 0),
        ("acknowledgment_date", "", 1),
    ])


@pytest.fixture
def flat_handbook():
    return build_flat_pdf(pages=4)
