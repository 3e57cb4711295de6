# --------------------------------------------------------------
# File: publish.py
# Description: Sellado de resultados compatible con el generador externo.
# --------------------------------------------------------------
"""Reproduce la salida del generador: nombre de fichero y blob cifrado."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from core.crypto_kdf import derive_key
from core.crypto_sym import encrypt_blob
from core.locator import resolve
from core.models import Identity, SealedResource


def seal(identity: Identity, plaintext: str, nonce: Optional[bytes] = None) -> SealedResource:
    """Cifra ``plaintext`` para ``identity`` con los parámetros del protocolo.

    Args:
        identity (Identity): Identidad destinataria.
        plaintext (str): Contenido a publicar.
        nonce (Optional[bytes]): Nonce fijo para vectores de prueba.

    Returns:
        SealedResource: Nombre ``<HEX>.enc`` y blob cifrado.

    """

    key = derive_key(identity.id, identity.index)
    return SealedResource(
        locator=resolve(identity.index, identity.id),
        blob=encrypt_blob(key, plaintext, nonce=nonce),
    )


def write_sealed(resource: SealedResource, directory: Path | str) -> Path:
    """Escribe el recurso en ``directory`` con escritura atómica."""

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / resource.locator
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_bytes(resource.blob)
    tmp_path.replace(path)
    return path
