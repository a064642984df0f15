import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

DATA_DIR = Path(os.getenv("DATA_DIR", "/tmp/packet_fill")).resolve()
PROGRESS_DIR = DATA_DIR / "form_progress"

HANDBOOK_TEMPLATE_PATH = Path(
    os.getenv("HANDBOOK_TEMPLATE_PATH", str(Path.cwd() / "pds-employee-handbook-2026.pdf"))
)
HANDBOOK_FIELD_MAP = Path(
    os.getenv("HANDBOOK_FIELD_MAP", str(BASE_DIR / "resources" / "handbook_fields.json"))
)
HANDBOOK_FORM_NAME = "employee-handbook"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(level=None):
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
