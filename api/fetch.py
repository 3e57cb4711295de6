# --------------------------------------------------------------
# File: fetch.py
# Description: Capacidades de descarga de blobs publicados (HTTP y directorio).
# --------------------------------------------------------------
"""Implementaciones del contrato ``fetch(locator) -> bytes`` usado por el pipeline."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional, Protocol

import httpx

from core import config
from core.errors import FetchFailure
from core.locator import is_locator

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def __call__(self, locator: str) -> bytes: ...


class HttpFetcher:
    """Descarga blobs desde un sitio estático mediante ``httpx.AsyncClient``.

    Se usa como context manager asíncrono para garantizar el cierre del
    cliente en cualquier salida. No inspecciona cabeceras; cualquier
    respuesta no satisfactoria se convierte en :class:`FetchFailure`.

    Attributes:
        base_url (str): Prefijo al que se añade el nombre del recurso.
        timeout (float): Timeout en segundos del cliente propio.

    """

    def __init__(
        self,
        base_url: str = config.RESULTS_BASE_URL,
        *,
        timeout: float = config.FETCH_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "HttpFetcher":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def url_for(self, locator: str) -> str:
        return self.base_url + locator

    async def __call__(self, locator: str) -> bytes:
        if self._client is None:
            raise RuntimeError("HttpFetcher debe usarse dentro de 'async with'.")

        url = self.url_for(locator)
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchFailure(
                f"No se pudo descargar el recurso: {status} {exc.response.reason_phrase}", status=status
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchFailure(f"No se pudo descargar el recurso: {exc.__class__.__name__}") from exc
        return response.content


class DirectoryFetcher:
    """Lee blobs de un directorio local con la misma estructura que el sitio publicado."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    async def __aenter__(self) -> "DirectoryFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def __call__(self, locator: str) -> bytes:
        # Solo nombres <HEX>.enc: impide salir del directorio con rutas relativas.
        if not is_locator(locator):
            raise FetchFailure(f"Nombre de recurso no válido: {locator!r}", status=400)
        path = self.root / locator
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as exc:
            raise FetchFailure(f"Recurso no encontrado: {locator}", status=404) from exc
        except OSError as exc:
            raise FetchFailure(f"No se pudo leer el recurso: {locator}") from exc


@asynccontextmanager
async def open_default_fetcher() -> AsyncIterator[Fetcher]:
    """Abre el fetcher configurado: ``RESULTS_DIR`` si existe, si no HTTP."""

    if config.RESULTS_DIR:
        async with DirectoryFetcher(config.RESULTS_DIR) as fetcher:
            yield fetcher
    else:
        async with HttpFetcher(config.RESULTS_BASE_URL, timeout=config.FETCH_TIMEOUT) as fetcher:
            yield fetcher
