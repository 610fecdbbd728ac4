import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn installs its own handlers before the app factory runs
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Put the service and uvicorn on one format and level.

    - level falls back to the LOG_LEVEL env var, then INFO.
    - Root logger gets a console handler via logging.basicConfig.
    - uvicorn's existing handlers are reformatted; its loggers follow the level.
    """
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=level_value, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger().setLevel(level_value)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.setLevel(level_value)
        for handler in server_logger.handlers:
            handler.setFormatter(formatter)
