# --------------------------------------------------------------
# File: digest.py
# Description: Huella SHA-256 de textos usada para nombrar recursos.
# --------------------------------------------------------------
"""Funciones de resumen deterministas sobre texto UTF-8."""

import hashlib

from core.protocol import TEXT_ENCODING


def digest(text: str) -> bytes:
    """Calcula el SHA-256 de ``text`` codificado en UTF-8.

    Args:
        text (str): Texto de entrada; la cadena vacía es válida.

    Returns:
        bytes: Huella de 32 bytes.

    """

    return hashlib.sha256(text.encode(TEXT_ENCODING)).digest()


def digest_hex(text: str) -> str:
    """Devuelve la huella de ``text`` en hexadecimal en mayúsculas."""

    return digest(text).hex().upper()
