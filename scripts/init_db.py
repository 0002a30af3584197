from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.qr_attendance.qr_attendance.database.bootstrap import apply_schema, list_tables
from src.qr_attendance.qr_attendance.database.connection import DBConfig
from src.qr_attendance.qr_attendance.main import SCHEMA_PATH

logger = logging.getLogger("init_db")


def main() -> int:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    settings = importlib.import_module(get_settings_module())
    if not getattr(settings, "BACKEND_URL", None):
        logger.error("BACKEND_URL is not set")
        return 1

    db_config = DBConfig.from_url(settings.BACKEND_URL, getattr(settings, "BACKEND_KEY", None) or "")
    apply_schema(db_config, schema_path=SCHEMA_PATH)
    tables = list_tables(db_config)
    logger.info(
        "applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        db_config.user,
        db_config.host,
        db_config.port,
        db_config.database,
        len(tables),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
