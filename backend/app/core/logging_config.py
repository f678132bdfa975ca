# backend/app/core/logging_config.py
"""
Configuración del sistema de logging de la aplicación.
"""

import logging
from pathlib import Path

from app.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """
    Configura el logger raíz con salida por consola y, si LOG_FILE_PATH
    no está vacío, también a fichero.
    """
    handlers = [logging.StreamHandler()]

    if settings.LOG_FILE_PATH:
        log_file = Path(settings.LOG_FILE_PATH)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
        handlers=handlers,
    )
