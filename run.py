#!/usr/bin/env python3
import logging
import os
from datetime import datetime

import uvicorn

from app.core.config import settings
# Importing the app installs the console logging configured in app.main
import app.main  # noqa: F401

logger = logging.getLogger(__name__)


def add_file_logging(log_dir: str = "logs") -> str:
    """Also write the root logger's records to a per-start log file"""
    os.makedirs(log_dir, exist_ok=True)
    log_filename = os.path.join(log_dir, f"app_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")
    file_handler = logging.FileHandler(log_filename, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    logging.getLogger().addHandler(file_handler)
    return log_filename


if __name__ == "__main__":
    log_filename = add_file_logging()
    logger.info("Starting web server on %s:%s", settings.HOST, settings.PORT)
    logger.info("Log file: %s", log_filename)
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)
