"""Per-user storage of in-progress packet forms.

One JSON file per (user_id, form_name) under the progress directory, holding
the base64 PDF and when it was last written. Saving the same key again
replaces the previous copy.
"""

import json
import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from errors import InvalidKeyError

logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class FormProgress(BaseModel):
    user_id: str
    form_name: str
    form_data: str
    updated_at: str


def _check_key(key_name: str, value: str) -> str:
    if not value or not KEY_PATTERN.fullmatch(value):
        raise InvalidKeyError(key_name, value)
    return value


class FormProgressStore:
    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, user_id: str, form_name: str) -> Path:
        _check_key("user_id", user_id)
        _check_key("form_name", form_name)
        return self.root / user_id / f"{form_name}.json"

    def save(self, user_id: str, form_name: str, form_data: str) -> FormProgress:
        path = self._path(user_id, form_name)
        record = FormProgress(
            user_id=user_id,
            form_name=form_name,
            form_data=form_data,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(f".{time.time_ns()}.tmp")
        tmp.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        tmp.replace(path)
        logger.info("Saved %s for user %s (%d base64 chars)", form_name, user_id, len(form_data))
        return record

    def get(self, user_id: str, form_name: str) -> Optional[FormProgress]:
        path = self._path(user_id, form_name)
        if not path.exists():
            return None
        return FormProgress.model_validate(json.loads(path.read_text(encoding="utf-8")))

    def list_forms(self, user_id: str) -> List[FormProgress]:
        _check_key("user_id", user_id)
        user_dir = self.root / user_id
        out = []
        for p in sorted(user_dir.glob("*.json")):
            out.append(FormProgress.model_validate(json.loads(p.read_text(encoding="utf-8"))))
        # newest first
        out.sort(key=lambda r: r.updated_at, reverse=True)
        return out

    def delete(self, user_id: str, form_name: str) -> bool:
        path = self._path(user_id, form_name)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Cleared %s for user %s", form_name, user_id)
        return True
