"""
Módulo para carregamento da planilha no dashboard.
Envolve o núcleo de ingestão com cache e mensagens do Streamlit.
"""
import hashlib
from typing import Optional, Tuple

import streamlit as st

from ambiental.config import settings
from ambiental.services.dataset_store import DatasetSession
from ambiental.utils.data_loader import LoadError, LoadReport, load_report


SESSION_KEY = "dataset_session"


def get_dataset_session() -> DatasetSession:
    """Sessão de dataset guardada no session_state do Streamlit."""
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = DatasetSession(settings.DEFAULT_SESSION_ID)
    return st.session_state[SESSION_KEY]


@st.cache_data(show_spinner=True)
def load_cached(file_content: bytes) -> LoadReport:
    """Carrega e valida a planilha de forma cacheada."""
    return load_report(file_content)


def upload_key(uploaded) -> Tuple[str, str]:
    """Identifica o envio pelo nome e pelo conteúdo; mesmo tamanho não basta."""
    return uploaded.name, hashlib.sha256(uploaded.getvalue()).hexdigest()


def describe_error(error: LoadError) -> str:
    if error.detail:
        return f"{error.message} ({error.detail})"
    return error.message


def handle_upload(uploaded, session: Optional[DatasetSession] = None) -> Optional[LoadReport]:
    """
    Carrega o arquivo enviado e, se der certo, substitui o dataset da sessão.

    Em caso de erro mostra a mensagem e mantém o dataset anterior.
    Retorna o relatório do carregamento ou None.
    """
    session = session or get_dataset_session()

    if not settings.is_allowed_file(uploaded.name):
        st.error(settings.INVALID_EXTENSION_MESSAGE)
        return None

    generation = session.begin_load()
    try:
        report = load_cached(uploaded.getvalue())
    except LoadError as e:
        st.error(f"❌ {describe_error(e)}")
        return None

    if not session.commit(generation, report.samples, uploaded.name, report.total_descartadas):
        return None
    return report
