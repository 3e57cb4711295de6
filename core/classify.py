# --------------------------------------------------------------
# File: classify.py
# Description: Clasificación del claro descifrado para su presentación.
# --------------------------------------------------------------
"""Decide si el contenido recuperado es un documento HTML o texto plano."""

from core.models import ClassifiedContent, ContentKind

MARKUP_PREFIXES = ("<!doctype", "<html")


def classify(text: str) -> ClassifiedContent:
    """Etiqueta ``text`` como ``markup`` o ``text`` mediante una prueba de prefijo.

    Args:
        text (str): Claro descifrado.

    Returns:
        ClassifiedContent: Contenido original junto con su tipo.

    """

    head = text.lstrip().lower()
    kind = ContentKind.MARKUP if head.startswith(MARKUP_PREFIXES) else ContentKind.TEXT
    return ClassifiedContent(kind=kind, text=text)
