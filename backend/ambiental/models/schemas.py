"""
Schemas Pydantic para validação de dados
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Union
from datetime import date, datetime

from ambiental.models.sample import Parametro


class DatasetSummary(BaseModel):
    """Resumo do dataset carregado em uma sessão"""
    session_id: str
    filename: Optional[str] = None
    amostras: int
    linhas_descartadas: int = 0
    ambientes: List[str] = []
    data_inicial: Optional[date] = None
    data_final: Optional[date] = None
    carregado_em: Optional[datetime] = None


class UploadResponse(BaseModel):
    """Response de upload"""
    message: str
    dataset: DatasetSummary


class PivotRequest(BaseModel):
    """Request para montar os dados do gráfico"""
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    parametro: Parametro = Field(Parametro.TEMPERATURA, description="Temperatura, Umidade ou CO2")


class PivotResponse(BaseModel):
    """Linhas do gráfico: uma por dia, uma coluna por ambiente"""
    parametro: Parametro
    ambientes: List[str]
    linhas: List[Dict[str, Union[str, float]]]
