"""
Logging setup - console plus a rotating file under LOGS_PATH
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from .config import Settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(settings: Settings) -> None:
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    # Already configured (reload, second app instance in tests)
    if any(getattr(h, "_stockflow", False) for h in root.handlers):
        return

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
    console_handler._stockflow = True
    root.addHandler(console_handler)

    if settings.LOGS_PATH:
        try:
            os.makedirs(settings.LOGS_PATH, exist_ok=True)
            # 50MB per file, keep 7
            file_handler = RotatingFileHandler(
                os.path.join(settings.LOGS_PATH, "stockflow.log"),
                maxBytes=50 * 1024 * 1024,
                backupCount=7,
                encoding='utf-8'
            )
        except OSError as e:
            root.warning(f"File logging disabled: {e}")
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
            file_handler._stockflow = True
            root.addHandler(file_handler)

    # Reduce SQL noise unless debugging
    if not settings.DEBUG:
        logging.getLogger('sqlalchemy').setLevel(logging.WARNING)
        logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
