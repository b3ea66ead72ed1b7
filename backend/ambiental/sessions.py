"""
Identificação da sessão do usuário
"""
from fastapi import Depends, Header, HTTPException, status
from ambiental.config import settings
from ambiental.services.dataset_store import DatasetSession, dataset_store
from typing import Optional
import logging

logger = logging.getLogger(__name__)


async def get_session_id(x_session_id: Optional[str] = Header(None)) -> str:
    """
    Dependency para obter o id da sessão.
    Sem o header `X-Session-ID`, usa a sessão padrão.
    """
    session_id = (x_session_id or "").strip()
    return session_id or settings.DEFAULT_SESSION_ID


async def get_dataset_session(session_id: str = Depends(get_session_id)) -> DatasetSession:
    """Dependency que retorna a sessão (criada sob demanda)"""
    return dataset_store.get_session(session_id)


def require_dataset(session: DatasetSession = Depends(get_dataset_session)) -> DatasetSession:
    """
    Dependency que exige um dataset carregado na sessão.
    """
    if session.is_empty:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Nenhum dataset carregado nesta sessão"
        )
    return session
