# --------------------------------------------------------------
# File: Home.py
# Description: Formulario de consulta y presentación del resultado descifrado.
# --------------------------------------------------------------

import streamlit as st
import streamlit.components.v1 as components

from api.pipeline import run_sync
from api.session import OUTCOME_KEY, finish_query, is_busy, start_query
from core.logging_config import configure_logging
from core.models import ContentKind

configure_logging()

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="Resultados", page_icon="🔐", layout="centered")

st.title("🔐 Consulta de resultados")
st.write("Introduce tu número de índice y tu ID para descifrar tu resultado.")

# El callback marca la sesión como ocupada antes de este rerun.
busy = is_busy(st.session_state)

with st.form("decrypt_form"):
    st.text_input("Número de índice", key="index_number")
    st.text_input("ID", type="password", key="student_id")
    st.form_submit_button(
        "Ver resultado",
        disabled=busy,
        on_click=start_query,
        args=(st.session_state,),
    )

if busy:
    with st.spinner("Descargando y descifrando..."):
        finish_query(st.session_state, run_sync)
    # Redibuja el formulario con el botón habilitado.
    st.rerun()

outcome = st.session_state.get(OUTCOME_KEY)
if outcome is not None:
    if outcome.ok:
        content = outcome.content
        if content.kind is ContentKind.MARKUP:
            # El HTML se muestra aislado en un iframe.
            components.html(content.text, height=800, scrolling=True)
        else:
            st.text(content.text)
    else:
        st.error(f"Error: {outcome.message}")
