# --------------------------------------------------------------
# File: logging_config.py
# Description: Configuración del logging raíz para la aplicación.
# --------------------------------------------------------------
"""Configuración ligera de logging para la aplicación."""

import logging
import sys

from core.config import LOG_LEVEL


def configure_logging(level: int | str = LOG_LEVEL) -> None:
    # Configura el logger raíz una sola vez; salida simple para terminal.
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
