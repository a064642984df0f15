"""Derive the name / initials / date values stamped onto packet forms.

Everything here is pure: no I/O, no PDF access. The same values feed both
the native form filler and the overlay fallback.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from field_map import FieldRole

BASE64_MARKER = "base64,"
# base-14 Helvetica is written with WinAnsi encoding
STANDARD_FONT_ENCODING = "cp1252"


@dataclass(frozen=True)
class FillValues:
    full_name: str
    initials: str
    date_string: str

    def for_role(self, role: FieldRole) -> str:
        if role is FieldRole.NAME:
            return self.full_name
        if role is FieldRole.INITIALS:
            return self.initials
        return self.date_string


def get_initials(name: str) -> str:
    parts = (name or "").split()
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0][:2].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def format_date(iso_timestamp: Optional[str]) -> str:
    """Render an ISO 8601 timestamp as ``MM/DD/YYYY``.

    Anything that does not parse renders as an empty string.
    """
    if not iso_timestamp:
        return ""
    text = iso_timestamp.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except (TypeError, ValueError):
        return ""
    return parsed.strftime("%m/%d/%Y")


def build_fill_values(
    full_name: str,
    primary_date: Optional[str] = None,
    fallback_date: Optional[str] = None,
) -> FillValues:
    date_source = primary_date or fallback_date or datetime.now(timezone.utc).isoformat()
    full_name = full_name or ""
    return FillValues(
        full_name=full_name.strip(),
        initials=get_initials(full_name),
        date_string=format_date(date_source),
    )


def normalize_base64(value: Optional[str]) -> Optional[str]:
    """Strip a ``data:...;base64,`` prefix and any whitespace from a blob."""
    if not value:
        return None
    normalized = value.strip()
    marker = normalized.find(BASE64_MARKER)
    if marker >= 0:
        normalized = normalized[marker + len(BASE64_MARKER):]
    return re.sub(r"\s+", "", normalized)


def is_encodable(text: str) -> bool:
    """True if every character of ``text`` exists in the standard font encoding."""
    try:
        text.encode(STANDARD_FONT_ENCODING)
    except UnicodeEncodeError:
        return False
    return True
