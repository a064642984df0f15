import re

PDF_FORM_DISPLAY_NAMES = {
    "ca-de4": "CA DE-4 State Tax Form",
    "fw4": "Federal W-4",
    "i9": "I-9 Employment Verification",
    "adp-deposit": "ADP Direct Deposit",
    "ui-guide": "UI Guide",
    "disability-insurance": "Disability Insurance",
    "paid-family-leave": "Paid Family Leave",
    "sexual-harassment": "Sexual Harassment",
    "survivors-rights": "Survivors Rights",
    "transgender-rights": "Transgender Rights",
    "health-insurance": "Health Insurance",
    "time-of-hire": "Time of Hire Notice",
    "discrimination-law": "Discrimination Law",
    "immigration-rights": "Immigration Rights",
    "military-rights": "Military Rights",
    "lgbtq-rights": "LGBTQ Rights",
    "notice-to-employee": "Notice to Employee",
    "meal-waiver-6hour": "Meal Waiver (6 Hour)",
    "meal-waiver-10-12": "Meal Waiver (10/12 Hour)",
    "employee-information": "Employee Information",
    "employee-handbook": "Employee Handbook",
    "state-tax": "State Tax Form",
    "ny-state-tax": "NY State Tax Form",
    "wi-state-tax": "WI State Tax Form",
    "az-state-tax": "AZ State Tax Form",
}


def prettify_form_name(value: str) -> str:
    spaced = re.sub(r"[-_]+", " ", value)
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), spaced)


def get_form_display_name(form_name) -> str:
    if not form_name:
        return ""
    normalized = form_name.strip().lower()
    return PDF_FORM_DISPLAY_NAMES.get(normalized) or prettify_form_name(normalized)


def form_select_options():
    return [{"value": key, "label": get_form_display_name(key)} for key in PDF_FORM_DISPLAY_NAMES]
