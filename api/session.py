# --------------------------------------------------------------
# File: session.py
# Description: Estado de una consulta en curso para el formulario de Streamlit.
# --------------------------------------------------------------
"""Ciclo de vida de una consulta sobre un estado tipo ``st.session_state``.

``start_query`` se registra como ``on_click`` del botón de envío: Streamlit
ejecuta el callback antes del rerun, de modo que ese rerun ya dibuja el botón
deshabilitado. ``finish_query`` ejecuta el pipeline y libera el estado en
cualquier salida.
"""

from __future__ import annotations

from typing import Callable, MutableMapping

from core.models import Identity, PipelineOutcome

BUSY_KEY = "busy"
PENDING_KEY = "pending_identity"
OUTCOME_KEY = "outcome"


def is_busy(state: MutableMapping) -> bool:
    return bool(state.get(BUSY_KEY, False))


def start_query(state: MutableMapping, index_key: str = "index_number", id_key: str = "student_id") -> None:
    """Captura la identidad del formulario y marca la consulta como en curso.

    Args:
        state (MutableMapping): Estado de la sesión.
        index_key (str): Clave del campo de índice.
        id_key (str): Clave del campo de id.

    """

    if is_busy(state):
        return
    state[PENDING_KEY] = Identity(
        index=str(state.get(index_key, "")).strip(),
        id=str(state.get(id_key, "")).strip(),
    )
    state.pop(OUTCOME_KEY, None)
    state[BUSY_KEY] = True


def finish_query(state: MutableMapping, runner: Callable[[Identity], PipelineOutcome]) -> None:
    """Ejecuta la consulta pendiente y guarda el resultado en ``state``.

    El indicador de ocupado y la identidad pendiente se eliminan siempre,
    también si ``runner`` lanza una excepción.
    """

    try:
        identity = state.pop(PENDING_KEY, None)
        if identity is not None:
            state[OUTCOME_KEY] = runner(identity)
    finally:
        state[BUSY_KEY] = False
