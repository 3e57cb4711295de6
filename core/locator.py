# --------------------------------------------------------------
# File: locator.py
# Description: Nombre determinista del recurso cifrado de cada identidad.
# --------------------------------------------------------------
"""Resolución del nombre de fichero publicado a partir de (índice, id)."""

from __future__ import annotations

import re

from core.digest import digest_hex
from core.protocol import LOCATOR_DELIMITER, LOCATOR_EXTENSION

_LOCATOR_RE = re.compile(r"[0-9A-F]{64}" + re.escape(LOCATOR_EXTENSION))


def resolve(index: str, id: str) -> str:
    """Construye el nombre ``<HEX>.enc`` que el generador asignó al recurso.

    No se valida la entrada: el llamador debe aportar la identidad tal y como
    se registró. El delimitador no evita todas las colisiones entre pares que
    contengan ``"|"``; se mantiene igual que en el generador para no romper
    los nombres ya publicados.

    Args:
        index (str): Número de índice.
        id (str): Identificador.

    Returns:
        str: Nombre del fichero cifrado.

    """

    combined = index + LOCATOR_DELIMITER + id
    return digest_hex(combined) + LOCATOR_EXTENSION


def is_locator(name: str) -> bool:
    """Indica si ``name`` sigue la convención ``<64 hex mayúsculas>.enc``."""

    return _LOCATOR_RE.fullmatch(name) is not None
