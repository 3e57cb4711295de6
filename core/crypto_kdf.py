# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación de claves simétricas mediante PBKDF2-HMAC-SHA256.
# --------------------------------------------------------------
"""Funciones de derivación de claves a partir de la identidad del usuario."""

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from pydantic import SecretBytes

from core.models import DerivedKey
from core.protocol import KEY_LENGTH, PBKDF2_ITERATIONS, TEXT_ENCODING


def derive_key(id: str, index: str) -> DerivedKey:
    """Deriva la clave AES-256 de un recurso usando PBKDF2.

    La derivación es deliberadamente lenta (``PBKDF2_ITERATIONS``) para
    encarecer la búsqueda por fuerza bruta de identidades de baja entropía.
    El reparto de papeles (id como password, índice como salt) forma parte
    del contrato con el generador.

    Args:
        id (str): Identificador; se usa como password.
        index (str): Número de índice; se usa como salt.

    Returns:
        DerivedKey: Clave opaca de 256 bits válida solo para AES-GCM.

    """

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=index.encode(TEXT_ENCODING),
        iterations=PBKDF2_ITERATIONS,
    )
    material = kdf.derive(id.encode(TEXT_ENCODING))
    return DerivedKey(material=SecretBytes(material))
