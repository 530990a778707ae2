"""Configuración de logging.

Reglas:
- La consola va a stderr (Rich) para que stdout quede limpio para `--raw`
  y para el bridge stdio.
- El fichero rotativo es opcional (`FJORDVIND_LOG_FILE`).
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

from core.config import AppSettings

LOGGER_NAME = "fjordvind"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(settings: AppSettings | None = None) -> logging.Logger:
    """Instala los handlers en el logger raíz de la aplicación (idempotente)."""

    settings = settings or AppSettings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
