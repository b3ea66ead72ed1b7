"""
Armazenamento em memória do dataset de cada sessão
"""
from ambiental.models.sample import Sample
from datetime import datetime
from typing import Dict, Iterable, Optional, Tuple
import logging
import threading

logger = logging.getLogger(__name__)


class DatasetSession:
    """
    Dataset atual de uma sessão.

    Cada carregamento recebe uma geração de `begin_load()`. O resultado só é
    instalado por `commit()` se aquela geração ainda for a mais recente;
    carregamentos antigos que terminam depois são descartados. Uma falha de
    carregamento simplesmente não chama `commit()`, e o dataset anterior
    continua valendo.
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        self._lock = threading.Lock()
        self._generation = 0
        self._samples: Tuple[Sample, ...] = ()
        self.nome_arquivo: Optional[str] = None
        self.carregado_em: Optional[datetime] = None
        self.linhas_descartadas: int = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return self._samples

    @property
    def is_empty(self) -> bool:
        return not self._samples

    def begin_load(self) -> int:
        """Inicia um carregamento e retorna sua geração"""
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def commit(
        self,
        generation: int,
        samples: Iterable[Sample],
        nome_arquivo: Optional[str] = None,
        linhas_descartadas: int = 0,
    ) -> bool:
        """
        Instala as amostras se a geração ainda for a atual.

        Returns:
            True se o dataset foi substituído, False se o carregamento foi superado
        """
        with self._lock:
            if generation != self._generation:
                logger.info(
                    f"Sessão {self.session_id}: descartando carregamento {generation} "
                    f"(atual: {self._generation})"
                )
                return False
            self._samples = tuple(samples)
            self.nome_arquivo = nome_arquivo
            self.carregado_em = datetime.now()
            self.linhas_descartadas = linhas_descartadas
            return True

    def clear(self):
        """Remove o dataset e invalida carregamentos em andamento"""
        with self._lock:
            self._generation += 1
            self._samples = ()
            self.nome_arquivo = None
            self.carregado_em = None
            self.linhas_descartadas = 0


class DatasetStore:
    """Sessões indexadas por id, apenas em memória"""

    def __init__(self):
        self._sessions: Dict[str, DatasetSession] = {}
        self._lock = threading.Lock()

    def get_session(self, session_id: str) -> DatasetSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = DatasetSession(session_id)
                self._sessions[session_id] = session
            return session

    def drop_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


dataset_store = DatasetStore()
