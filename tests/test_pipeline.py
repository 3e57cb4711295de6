# --------------------------------------------------------------
# File: test_pipeline.py
# Description: Pruebas de integración del pipeline localizar-derivar-descifrar.
# --------------------------------------------------------------

import asyncio
import hashlib
import threading

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

import api.pipeline as pipeline
from api.pipeline import run, run_sync
from core import config
from core.errors import ErrorKind
from core.locator import resolve
from core.models import ContentKind, Identity, PipelineFailure, PipelineSuccess
from core.publish import seal, write_sealed

from conftest import INDEX, PLAIN_RESULT, STUDENT_ID, MemoryFetcher

VECTOR_NONCE = bytes.fromhex("000102030405060708090a0b")
VECTOR_PLAINTEXT = "<!DOCTYPE html><html><body><h1>GPA 3.85</h1></body></html>"


def _reference_vector():
    """Construye el vector de prueba con primitivas independientes del paquete.

    Returns:
        tuple[str, bytes]: Nombre del recurso y blob tal como los publica el generador.
    """
    locator = hashlib.sha256(f"{INDEX}|{STUDENT_ID}".encode("utf-8")).hexdigest().upper() + ".enc"
    key = hashlib.pbkdf2_hmac("sha256", STUDENT_ID.encode(), INDEX.encode(), 100_000, dklen=32)
    blob = VECTOR_NONCE + AESGCM(key).encrypt(VECTOR_NONCE, VECTOR_PLAINTEXT.encode("utf-8"), None)
    return locator, blob


def test_seal_reproduces_reference_vector(identity):
    locator, blob = _reference_vector()
    sealed = seal(identity, VECTOR_PLAINTEXT, nonce=VECTOR_NONCE)
    assert sealed.locator == locator
    assert sealed.blob == blob


@pytest.mark.asyncio
async def test_end_to_end_reference_vector(identity):
    """Recorre el escenario completo contra el vector de referencia."""
    locator, blob = _reference_vector()
    fetcher = MemoryFetcher({locator: blob})

    outcome = await run(identity, fetcher)

    assert isinstance(outcome, PipelineSuccess)
    assert outcome.ok
    assert outcome.locator == locator
    assert outcome.content.text == VECTOR_PLAINTEXT
    assert outcome.content.kind is ContentKind.MARKUP
    assert fetcher.requested == [locator]


@pytest.mark.asyncio
async def test_plain_text_result(identity, memory_fetcher):
    outcome = await run(identity, memory_fetcher)
    assert outcome.ok
    assert outcome.content.kind is ContentKind.TEXT
    assert outcome.content.text == PLAIN_RESULT


@pytest.mark.asyncio
async def test_missing_resource_is_fetch_failure(identity):
    events = []
    outcome = await run(identity, MemoryFetcher({}), on_event=events.append)

    assert isinstance(outcome, PipelineFailure)
    assert outcome.kind is ErrorKind.FETCH_FAILURE
    assert outcome.status == 404
    assert not hasattr(outcome, "content")
    # La derivación concurrente termina antes de propagar el fallo.
    assert "key_derived" in [event.step for event in events]


@pytest.mark.asyncio
async def test_failures_are_indistinguishable(identity, sealed):
    """Id erróneo, índice erróneo y blob corrupto producen el mismo resultado visible."""
    corrupted = bytearray(sealed.blob)
    corrupted[-1] ^= 0x01

    wrong_id = Identity(index=INDEX, id="987654320")
    wrong_index = Identity(index="2020124", id=STUDENT_ID)
    # Se publica el blob bajo los nombres que resolverían las identidades erróneas.
    blobs = {
        resolve(wrong_id.index, wrong_id.id): sealed.blob,
        resolve(wrong_index.index, wrong_index.id): sealed.blob,
        sealed.locator: bytes(corrupted),
    }
    fetcher = MemoryFetcher(blobs)

    outcomes = [await run(who, fetcher) for who in (wrong_id, wrong_index, identity)]

    assert all(o.kind is ErrorKind.AUTHENTICATION_FAILURE for o in outcomes)
    assert len({o.message for o in outcomes}) == 1
    assert len({o.model_dump_json(exclude={"status"}) for o in outcomes}) == 1


@pytest.mark.asyncio
async def test_short_blob_is_malformed(identity, sealed):
    outcome = await run(identity, MemoryFetcher({sealed.locator: b"\x00" * 11}))
    assert outcome.kind is ErrorKind.MALFORMED_BLOB


@pytest.mark.asyncio
async def test_events_never_carry_secrets(identity, key, memory_fetcher):
    events = []
    outcome = await run(identity, memory_fetcher, on_event=events.append)
    assert outcome.ok

    steps = [event.step for event in events]
    assert steps[0] == "resolved"
    assert steps.index("decrypted") > steps.index("fetched")
    assert steps.index("decrypted") > steps.index("key_derived")
    assert steps[-1] == "classified"

    dumped = " ".join(event.model_dump_json() for event in events)
    assert key.material.get_secret_value().hex() not in dumped
    assert PLAIN_RESULT not in dumped
    assert STUDENT_ID not in dumped


@pytest.mark.asyncio
async def test_unexpected_errors_propagate(identity):
    async def broken_fetch(locator: str) -> bytes:
        raise RuntimeError("fallo inesperado")

    with pytest.raises(RuntimeError):
        await run(identity, broken_fetch)


def test_run_sync_uses_results_dir(identity, sealed, tmp_path, monkeypatch):
    """El adaptador síncrono lee del directorio configurado en ``RESULTS_DIR``."""
    write_sealed(sealed, tmp_path)
    monkeypatch.setattr(config, "RESULTS_DIR", str(tmp_path))

    outcome = run_sync(identity)

    assert outcome.ok
    assert outcome.content.text == PLAIN_RESULT


def test_write_sealed_leaves_no_temp_files(sealed, tmp_path):
    path = write_sealed(sealed, tmp_path)
    assert path.name == sealed.locator
    assert path.read_bytes() == sealed.blob
    assert [p.name for p in tmp_path.iterdir()] == [sealed.locator]


@pytest.mark.asyncio
async def test_fetch_completes_while_derivation_runs_in_thread(identity, sealed, monkeypatch):
    """La descarga avanza en el event loop mientras PBKDF2 sigue en su hilo.

    La derivación queda bloqueada hasta que la descarga termina; la descarga, a
    su vez, espera un ``asyncio.Event`` que activa otra tarea del mismo loop.
    Si la derivación ocupara el loop, ninguna de las dos podría progresar.
    """
    fetched = threading.Event()
    derive_threads = []
    real_derive = pipeline.derive_key

    def blocking_derive(id, index):
        derive_threads.append(threading.current_thread())
        if not fetched.wait(timeout=10):
            raise AssertionError("la descarga no avanzó durante la derivación")
        return real_derive(id, index)

    monkeypatch.setattr(pipeline, "derive_key", blocking_derive)

    released = asyncio.Event()

    async def release():
        await asyncio.sleep(0)
        released.set()

    async def fetch(locator):
        helper = asyncio.create_task(release())
        await released.wait()
        await helper
        fetched.set()
        return sealed.blob

    outcome = await run(identity, fetch)

    assert outcome.ok
    assert outcome.content.text == PLAIN_RESULT
    assert derive_threads[0] is not threading.main_thread()
