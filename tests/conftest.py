# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas: identidades, claves derivadas y recursos sellados.
# --------------------------------------------------------------

from typing import Dict

import pytest

from core.crypto_kdf import derive_key
from core.errors import FetchFailure
from core.models import DerivedKey, Identity
from core.publish import seal

INDEX = "2020123"
STUDENT_ID = "987654321"
PLAIN_RESULT = "plain result text"


class MemoryFetcher:
    """Fetcher en memoria que registra los nombres solicitados."""

    def __init__(self, blobs: Dict[str, bytes]):
        self.blobs = dict(blobs)
        self.requested = []

    async def __call__(self, locator: str) -> bytes:
        self.requested.append(locator)
        try:
            return self.blobs[locator]
        except KeyError:
            raise FetchFailure("No se pudo descargar el recurso: 404 Not Found", status=404) from None


@pytest.fixture(scope="session")
def identity() -> Identity:
    """Identidad del escenario de extremo a extremo."""
    return Identity(index=INDEX, id=STUDENT_ID)


@pytest.fixture(scope="session")
def key(identity) -> DerivedKey:
    """Clave derivada una sola vez por sesión; PBKDF2 es costoso a propósito.

    Args:
        identity (Identity): Identidad del escenario.

    Returns:
        DerivedKey: Clave AES-256 de la identidad.
    """
    return derive_key(identity.id, identity.index)


@pytest.fixture(scope="session")
def sealed(identity):
    """Recurso publicado para ``identity`` con un resultado en texto plano."""
    return seal(identity, PLAIN_RESULT)


@pytest.fixture
def memory_fetcher(sealed) -> MemoryFetcher:
    return MemoryFetcher({sealed.locator: sealed.blob})
