"""
Modelos de dados
"""
from ambiental.models.sample import Parametro, Sample, PivotRow, PivotResult
from ambiental.models.schemas import (
    DatasetSummary,
    UploadResponse,
    PivotRequest,
    PivotResponse,
)

__all__ = [
    'Parametro',
    'Sample',
    'PivotRow',
    'PivotResult',
    'DatasetSummary',
    'UploadResponse',
    'PivotRequest',
    'PivotResponse',
]
