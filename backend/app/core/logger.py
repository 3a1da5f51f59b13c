# backend/app/core/logger.py

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dotenv import load_dotenv

# the logger is imported before Settings, so read .env here as well
load_dotenv()


LOG_DIR = Path(os.getenv("KOGO_LOG_DIR") or Path(__file__).resolve().parents[2] / "logs")
LOG_FILE = LOG_DIR / "kogo.log"
LOG_LEVEL = os.getenv("KOGO_LOG_LEVEL", "DEBUG").upper()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s"


def _build_handlers():
    formatter = logging.Formatter(LOG_FORMAT)

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    to_file = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8")
    to_file.setFormatter(formatter)
    to_file.setLevel(logging.INFO)

    to_console = logging.StreamHandler()
    to_console.setFormatter(formatter)
    to_console.setLevel(LOG_LEVEL)

    return [to_file, to_console]


logger = logging.getLogger("kogo")
logger.setLevel(logging.DEBUG)

# uvicorn --reload imports this module more than once
if not logger.handlers:
    for handler in _build_handlers():
        logger.addHandler(handler)

# requests -> urllib3 logs every pooled connection
logging.getLogger("urllib3").setLevel(logging.WARNING)

logger.debug("Logging to %s (console level %s)", LOG_FILE, LOG_LEVEL)
