# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de errores del flujo localizar-derivar-descifrar.
# --------------------------------------------------------------
"""Errores tipados que se lanzan en el punto de detección y se propagan sin cambios."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Clases de fallo visibles para quien invoca el pipeline."""

    MALFORMED_BLOB = "malformed_blob"
    AUTHENTICATION_FAILURE = "authentication_failure"
    ENCODING_FAILURE = "encoding_failure"
    FETCH_FAILURE = "fetch_failure"


# Mensajes genéricos: no deben permitir distinguir id erróneo, índice erróneo
# o fichero corrupto.
_PUBLIC_MESSAGES = {
    ErrorKind.MALFORMED_BLOB: "No se ha podido recuperar el resultado.",
    ErrorKind.AUTHENTICATION_FAILURE: "No se ha podido recuperar el resultado.",
    ErrorKind.ENCODING_FAILURE: "No se ha podido recuperar el resultado.",
    ErrorKind.FETCH_FAILURE: "No se ha podido descargar el resultado. Inténtalo de nuevo más tarde.",
}


def public_message(kind: ErrorKind) -> str:
    """Devuelve el texto apto para mostrar al usuario final para ``kind``."""

    return _PUBLIC_MESSAGES[kind]


class ResultsError(Exception):
    """Base de todos los errores del dominio."""

    kind: ErrorKind


class MalformedBlob(ResultsError):
    # blob demasiado corto para contener el nonce
    kind = ErrorKind.MALFORMED_BLOB


class AuthenticationFailure(ResultsError):
    # tag inválido: credenciales erróneas o datos alterados, sin distinción
    kind = ErrorKind.AUTHENTICATION_FAILURE


class EncodingFailure(ResultsError):
    # el claro autenticado no es UTF-8 válido
    kind = ErrorKind.ENCODING_FAILURE


class FetchFailure(ResultsError):
    """Fallo del transporte o respuesta HTTP no satisfactoria.

    Attributes:
        status (Optional[int]): Código HTTP recibido, o ``None`` si el fallo
            fue de red y no hubo respuesta.
    """

    kind = ErrorKind.FETCH_FAILURE

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
