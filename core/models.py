# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan las estructuras del pipeline de resultados."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, SecretBytes, field_validator

from core.errors import ErrorKind
from core.protocol import KEY_LENGTH


class Identity(BaseModel):
    """Par (índice, id) con el que el generador registró el recurso.

    Attributes:
        index (str): Número de índice; actúa como salt de la derivación.
        id (str): Identificador; actúa como password de la derivación.

    """

    model_config = ConfigDict(frozen=True)

    index: str
    id: str


class DerivedKey(BaseModel):
    """Clave AES-256 derivada de una identidad.

    El material se guarda como ``SecretBytes`` para que nunca aparezca en
    ``repr``, ``str`` ni en la serialización del modelo.

    Attributes:
        material (SecretBytes): 32 bytes de clave simétrica.

    """

    model_config = ConfigDict(frozen=True)

    material: SecretBytes

    @field_validator("material")
    @classmethod
    def _check_length(cls, value: SecretBytes) -> SecretBytes:
        # Solo AES-256.
        if len(value.get_secret_value()) != KEY_LENGTH:
            raise ValueError(f"La clave debe tener {KEY_LENGTH} bytes.")
        return value


class ContentKind(str, Enum):
    MARKUP = "markup"
    TEXT = "text"


class ClassifiedContent(BaseModel):
    """Claro recuperado junto con la forma en que debe presentarse.

    Attributes:
        kind (ContentKind): ``markup`` para documentos HTML, ``text`` en otro caso.
        text (str): Contenido descifrado.

    """

    model_config = ConfigDict(frozen=True)

    kind: ContentKind
    text: str


class PipelineSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    locator: str
    content: ClassifiedContent


class PipelineFailure(BaseModel):
    """Resultado de una ejecución abortada.

    Attributes:
        kind (ErrorKind): Clase de fallo detectada.
        message (str): Texto genérico apto para el usuario final.
        status (int | None): Código HTTP cuando el fallo fue de descarga.

    """

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    kind: ErrorKind
    message: str
    status: int | None = None


PipelineOutcome = Union[PipelineSuccess, PipelineFailure]


class PipelineEvent(BaseModel):
    """Evento de observabilidad emitido en cada paso del pipeline."""

    step: str
    detail: Dict[str, Any] = Field(default_factory=dict)


class SealedResource(BaseModel):
    """Recurso listo para publicar: nombre de fichero y blob cifrado."""

    model_config = ConfigDict(frozen=True)

    locator: str
    blob: bytes
