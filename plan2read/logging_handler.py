import logging
import os
from typing import Optional

from rich.logging import RichHandler

from plan2read.config import settings


def setup_logger(
    name: str = "plan2read",
    log_file: Optional[str] = None,
    level: Optional[str] = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the package logger once: a file handler plus a rich console handler."""
    log_file = log_file or settings.log_file
    level = (level or settings.log_level).upper()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        if log_file:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ))
            logger.addHandler(file_handler)

        if console:
            console_handler = RichHandler(show_path=False, rich_tracebacks=True)
            console_handler.setFormatter(logging.Formatter("%(message)s"))
            logger.addHandler(console_handler)

    return logger
