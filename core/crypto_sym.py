# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para cifrado y descifrado de resultados.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico sobre el formato ``nonce || ciphertext || tag``."""

import logging
import os
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from core.errors import AuthenticationFailure, EncodingFailure, MalformedBlob
from core.models import DerivedKey
from core.protocol import GCM_NONCE_LENGTH, TEXT_ENCODING

logger = logging.getLogger(__name__)


def encrypt_blob(key: DerivedKey, plaintext: str, nonce: Optional[bytes] = None) -> bytes:
    """Cifra ``plaintext`` en el formato publicado por el generador.

    Args:
        key (DerivedKey): Clave derivada de la identidad destinataria.
        plaintext (str): Contenido a proteger; se codifica en UTF-8.
        nonce (Optional[bytes]): Nonce de 12 bytes; si falta se genera uno
            aleatorio. Nunca debe repetirse con la misma clave.

    Returns:
        bytes: ``nonce || ciphertext || tag``.

    """

    if nonce is None:
        nonce = os.urandom(GCM_NONCE_LENGTH)
    if len(nonce) != GCM_NONCE_LENGTH:
        raise ValueError(f"El nonce debe tener {GCM_NONCE_LENGTH} bytes.")
    aes = AESGCM(key.material.get_secret_value())
    return nonce + aes.encrypt(nonce, plaintext.encode(TEXT_ENCODING), None)


def decrypt_blob(key: DerivedKey, blob: bytes) -> str:
    """Verifica y descifra un blob ``nonce || ciphertext || tag``.

    Args:
        key (DerivedKey): Clave derivada de la identidad.
        blob (bytes): Contenido descargado tal cual.

    Returns:
        str: Claro decodificado como UTF-8.

    Raises:
        MalformedBlob: Si el blob no llega a contener el nonce.
        AuthenticationFailure: Si el tag no verifica (identidad errónea o
            datos alterados; ambos casos son indistinguibles a propósito).
        EncodingFailure: Si el claro autenticado no es UTF-8 válido.

    """

    if len(blob) < GCM_NONCE_LENGTH:
        raise MalformedBlob("El blob es demasiado corto para contener el nonce.")

    # El resto incluye el tag al final; AESGCM lo espera así.
    nonce = blob[:GCM_NONCE_LENGTH]
    ciphertext = blob[GCM_NONCE_LENGTH:]
    logger.debug("AES-GCM nonce=%d bytes ciphertext=%d bytes", len(nonce), len(ciphertext))

    aes = AESGCM(key.material.get_secret_value())
    try:
        raw = aes.decrypt(nonce, ciphertext, None)
    except InvalidTag as exc:
        raise AuthenticationFailure("La verificación del tag de autenticación ha fallado.") from exc

    try:
        return raw.decode(TEXT_ENCODING)
    except UnicodeDecodeError as exc:
        raise EncodingFailure("El contenido descifrado no es UTF-8 válido.") from exc
