"""Field-name classification and overlay coordinates for a packet template.

The name/initials/date field sets and the overlay target table are data tied
to one template revision, so they live in a JSON resource rather than in
code. A template change only needs a new JSON file.

Overlay coordinates are PDF points with the origin at the bottom-left of the
page. ``page`` is 0-based; ``-1`` means "the last page", resolved when the
overlay is drawn.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

import config
from errors import FieldMapError

logger = logging.getLogger(__name__)

LAST_PAGE = -1


class FieldRole(str, Enum):
    NAME = "name"
    INITIALS = "initials"
    DATE = "date"


class OverlayTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    role: FieldRole
    page: int = Field(ge=LAST_PAGE, description="0-based page index, -1 for the last page")
    x: float
    y: float


class FieldMap(BaseModel):
    model_config = ConfigDict(frozen=True)

    name_fields: frozenset[str] = frozenset()
    initial_fields: frozenset[str] = frozenset()
    date_fields: frozenset[str] = frozenset()
    overlay_targets: tuple[OverlayTarget, ...] = ()

    @model_validator(mode="after")
    def warn_on_overlap(self):
        overlap = (
            (self.name_fields & self.initial_fields)
            | (self.name_fields & self.date_fields)
            | (self.initial_fields & self.date_fields)
        )
        if overlap:
            # name wins over initials, initials over date
            logger.warning("Fields listed under more than one role: %s", ", ".join(sorted(overlap)))
        return self

    def classify(self, field_name: str) -> Optional[FieldRole]:
        if field_name in self.name_fields:
            return FieldRole.NAME
        if field_name in self.initial_fields:
            return FieldRole.INITIALS
        if field_name in self.date_fields:
            return FieldRole.DATE
        return None

    def value_for(self, field_name: str, values) -> Optional[str]:
        """Return the value a field should receive, or None to leave it alone."""
        role = self.classify(field_name)
        if role is None:
            return None
        return values.for_role(role) or None


def load_field_map(path: Optional[Path] = None) -> FieldMap:
    path = Path(path or config.HANDBOOK_FIELD_MAP)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise FieldMapError(path, exc) from exc
    try:
        field_map = FieldMap.model_validate(raw)
    except ValidationError as exc:
        raise FieldMapError(path, exc) from exc
    logger.debug(
        "Loaded field map %s: %d name, %d initials, %d date fields, %d overlay targets",
        path,
        len(field_map.name_fields),
        len(field_map.initial_fields),
        len(field_map.date_fields),
        len(field_map.overlay_targets),
    )
    return field_map
