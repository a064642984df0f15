"""
Tests for filling live AcroForm text fields.
"""
import logging

import fitz

import native_fill
from fill_values import FillValues
from native_fill import count_form_fields, fill_native_fields, should_fill
from tests.conftest import build_form_pdf

VALUES = FillValues("Jordan Lee", "JL", "03/02/2024")


def field_values(doc):
    return {w.field_name: w.field_value for page in doc for w in page.widgets()}


def open_pdf(data):
    return fitz.open(stream=data, filetype="pdf")


class TestShouldFill:

    def test_blank_values(self):
        assert should_fill(None)
        assert should_fill("")
        assert should_fill("   ")

    def test_existing_value(self):
        assert not should_fill("Someone")


class TestFillNativeFields:

    def test_fills_empty_classified_fields(self, handbook_map, interactive_handbook):
        doc = open_pdf(interactive_handbook)
        assert count_form_fields(doc) == 2
        assert fill_native_fields(doc, VALUES, handbook_map) is True
        assert field_values(doc) == {
            "employee_name": "Jordan Lee",
            "acknowledgment_date": "03/02/2024",
        }

    def test_keeps_prefilled_value(self, handbook_map):
        doc = open_pdf(build_form_pdf([
            ("employee_name", "Existing Name", 0),
            ("employee_initials", " ", 0),
        ]))
        assert fill_native_fields(doc, VALUES, handbook_map) is True
        values = field_values(doc)
        assert values["employee_name"] == "Existing Name"
        assert values["employee_initials"] == "JL"

    def test_refill_changes_nothing(self, handbook_map, interactive_handbook):
        doc = open_pdf(interactive_handbook)
        fill_native_fields(doc, VALUES, handbook_map)
        other = FillValues("Someone Else", "SE", "12/31/2030")
        assert fill_native_fields(doc, other, handbook_map) is False
        assert field_values(doc)["employee_name"] == "Jordan Lee"

    def test_unclassified_fields_untouched(self, handbook_map):
        doc = open_pdf(build_form_pdf([("employertitle", "", 0)]))
        assert fill_native_fields(doc, VALUES, handbook_map) is False
        assert not field_values(doc)["employertitle"]

    def test_empty_value_not_written(self, handbook_map):
        doc = open_pdf(build_form_pdf([("date3", "", 0)]))
        assert fill_native_fields(doc, FillValues("Jordan Lee", "JL", ""), handbook_map) is False

    def test_field_failure_is_skipped(self, handbook_map, interactive_handbook, monkeypatch, caplog):
        real_set_text = native_fill.set_text

        def flaky_set_text(widget, value):
            if widget.field_name == "employee_name":
                raise RuntimeError("broken widget")
            real_set_text(widget, value)

        monkeypatch.setattr(native_fill, "set_text", flaky_set_text)
        doc = open_pdf(interactive_handbook)
        with caplog.at_level(logging.WARNING):
            assert fill_native_fields(doc, VALUES, handbook_map) is True
        assert field_values(doc)["acknowledgment_date"] == "03/02/2024"
        assert "employee_name" in caplog.text

    def test_unencodable_value_left_empty(self, handbook_map, interactive_handbook):
        doc = open_pdf(interactive_handbook)
        values = FillValues("Łukasz Wójcik 李", "ŁW", "03/02/2024")
        assert fill_native_fields(doc, values, handbook_map) is True
        filled = field_values(doc)
        assert not filled["employee_name"]
        assert filled["acknowledgment_date"] == "03/02/2024"
