# --------------------------------------------------------------
# File: pipeline.py
# Description: Orquestación localizar-descargar-derivar-descifrar-clasificar.
# --------------------------------------------------------------
"""Pipeline que recupera el resultado cifrado de una identidad.

``run`` no realiza ningún efecto de presentación: devuelve un
:class:`PipelineSuccess` o un :class:`PipelineFailure` que un adaptador
(Streamlit, CLI, tests) consume después. Los diagnósticos se emiten como
:class:`PipelineEvent` hacia un callback opcional y hacia ``logging``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Tuple

from api.fetch import Fetcher, open_default_fetcher
from core.classify import classify
from core.crypto_kdf import derive_key
from core.crypto_sym import decrypt_blob
from core.errors import ResultsError, public_message
from core.locator import resolve
from core.models import (
    ClassifiedContent,
    DerivedKey,
    Identity,
    PipelineEvent,
    PipelineFailure,
    PipelineOutcome,
    PipelineSuccess,
)
from core.protocol import PBKDF2_ITERATIONS

logger = logging.getLogger(__name__)

EventSink = Callable[[PipelineEvent], None]


class _Emitter:
    def __init__(self, sink: Optional[EventSink]) -> None:
        self._sink = sink

    def __call__(self, step: str, **detail: Any) -> None:
        logger.debug("%s %s", step, detail)
        if self._sink is not None:
            self._sink(PipelineEvent(step=step, detail=detail))


async def _fetch(fetch: Fetcher, locator: str, emit: _Emitter) -> bytes:
    emit("fetch_started", locator=locator)
    blob = await fetch(locator)
    emit("fetched", size=len(blob))
    return blob


async def _derive(identity: Identity, emit: _Emitter) -> DerivedKey:
    emit("derive_started", iterations=PBKDF2_ITERATIONS)
    # PBKDF2 es CPU intensivo; en un hilo aparte no bloquea el event loop.
    key = await asyncio.to_thread(derive_key, identity.id, identity.index)
    emit("key_derived")
    return key


async def _execute(identity: Identity, fetch: Fetcher, emit: _Emitter) -> Tuple[str, ClassifiedContent]:
    locator = resolve(identity.index, identity.id)
    emit("resolved", locator=locator)

    # Sin cancelación: ambas ramas terminan antes de propagar el primer fallo.
    blob, key = await asyncio.gather(
        _fetch(fetch, locator, emit),
        _derive(identity, emit),
        return_exceptions=True,
    )
    for outcome in (blob, key):
        if isinstance(outcome, BaseException):
            raise outcome

    plaintext = decrypt_blob(key, blob)
    emit("decrypted", length=len(plaintext))

    content = classify(plaintext)
    emit("classified", kind=content.kind.value)
    return locator, content


async def run(
    identity: Identity, fetch: Fetcher, *, on_event: Optional[EventSink] = None
) -> PipelineOutcome:
    """Ejecuta el pipeline completo para ``identity``.

    Args:
        identity (Identity): Par (índice, id) introducido por el usuario.
        fetch (Fetcher): Capacidad de descarga ``locator -> bytes``.
        on_event (Optional[EventSink]): Receptor de eventos de diagnóstico.

    Returns:
        PipelineOutcome: Contenido clasificado, o el tipo de fallo con un
        mensaje genérico. Nunca se devuelve contenido parcial.

    """

    emit = _Emitter(on_event)
    try:
        locator, content = await _execute(identity, fetch, emit)
    except ResultsError as exc:
        emit("failed", kind=exc.kind.value)
        logger.info("Pipeline abortado: %s", exc.kind.value)
        return PipelineFailure(
            kind=exc.kind,
            message=public_message(exc.kind),
            status=getattr(exc, "status", None),
        )
    return PipelineSuccess(locator=locator, content=content)


def run_sync(
    identity: Identity,
    fetch: Optional[Fetcher] = None,
    *,
    on_event: Optional[EventSink] = None,
) -> PipelineOutcome:
    """Versión síncrona de :func:`run` para adaptadores sin event loop.

    Si no se pasa ``fetch`` se usa el fetcher configurado en ``core.config``
    y se cierra al terminar.
    """

    async def _main() -> PipelineOutcome:
        if fetch is not None:
            return await run(identity, fetch, on_event=on_event)
        async with open_default_fetcher() as default_fetch:
            return await run(identity, default_fetch, on_event=on_event)

    return asyncio.run(_main())
