from pdf_forms import PDF_FORM_DISPLAY_NAMES, form_select_options, get_form_display_name


def test_known_names():
    assert get_form_display_name("employee-handbook") == "Employee Handbook"
    assert get_form_display_name("  FW4 ") == "Federal W-4"


def test_unknown_names_prettified():
    assert get_form_display_name("direct_deposit-form") == "Direct Deposit Form"


def test_empty():
    assert get_form_display_name(None) == ""
    assert get_form_display_name("") == ""


def test_select_options():
    options = form_select_options()
    assert len(options) == len(PDF_FORM_DISPLAY_NAMES)
    assert {"value": "i9", "label": "I-9 Employment Verification"} in options
