"""Root logger setup from LOG_LEVEL / LOG_FILE."""
from __future__ import annotations

import logging
import os

from speechbox.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(settings: Settings) -> None:
    """Attach console (and optional file) handler to the root logger. Idempotent."""
    global _configured
    root = logging.getLogger()
    level = logging.getLevelName((settings.LOG_LEVEL or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO
    root.setLevel(level)
    if _configured:
        return

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.LOG_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE)
        try:
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
        except OSError as e:
            logging.getLogger(__name__).warning("Cannot open log file %s: %s", settings.LOG_FILE, e)
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
    _configured = True
