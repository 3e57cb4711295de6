# --------------------------------------------------------------
# File: protocol.py
# Description: Constantes criptográficas compartidas con el generador externo.
# --------------------------------------------------------------
"""Parámetros fijos del formato de resultados cifrados.

Estos valores forman un contrato de compatibilidad con el generador que
cifra y publica cada recurso. No son opciones de configuración: modificar
cualquiera de ellos invalida todos los blobs publicados anteriormente.

- Derivación: PBKDF2-HMAC-SHA256, password = id, salt = index.
- Cifrado: AES-256-GCM, nonce de 96 bits, tag de 128 bits, sin AAD.
- Blob: ``nonce(12) || ciphertext || tag(16)``.
- Nombre: ``HEX(SHA-256(index + "|" + id)) + ".enc"``.
"""

PBKDF2_ITERATIONS = 100_000
KEY_LENGTH_BITS = 256
KEY_LENGTH = KEY_LENGTH_BITS // 8

GCM_NONCE_LENGTH = 12
GCM_TAG_LENGTH_BITS = 128
GCM_TAG_LENGTH = GCM_TAG_LENGTH_BITS // 8

TEXT_ENCODING = "utf-8"

LOCATOR_DELIMITER = "|"
LOCATOR_EXTENSION = ".enc"
