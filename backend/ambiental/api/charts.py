"""
Endpoints para os dados do gráfico e exportação
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from ambiental.sessions import require_dataset
from ambiental.models.sample import record_key
from ambiental.models.schemas import PivotRequest, PivotResponse
from ambiental.services.data_processor import DataProcessor
from ambiental.services.dataset_store import DatasetSession
from ambiental.utils.export import export_filename
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/charts", tags=["charts"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _check_period(request: PivotRequest):
    if request.data_inicio and request.data_fim and request.data_inicio > request.data_fim:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A data inicial deve ser anterior ou igual à data final"
        )


@router.post("/pivot", response_model=PivotResponse)
async def get_pivot(
    request: PivotRequest,
    session: DatasetSession = Depends(require_dataset)
):
    """
    Linhas do gráfico para o período e parâmetro selecionados.
    Uma linha por dia; ambientes sem medição no dia ficam ausentes.
    """
    _check_period(request)
    resultado = DataProcessor.build_chart_data(
        session.samples,
        request.data_inicio,
        request.data_fim,
        request.parametro
    )
    return PivotResponse(
        parametro=resultado.parametro,
        ambientes=[record_key(amb) for amb in resultado.ambientes],
        linhas=resultado.records()
    )


@router.post("/export")
async def export_pivot(
    request: PivotRequest,
    session: DatasetSession = Depends(require_dataset)
):
    """Exporta as linhas do gráfico para .xlsx"""
    _check_period(request)
    resultado = DataProcessor.build_chart_data(
        session.samples,
        request.data_inicio,
        request.data_fim,
        request.parametro
    )

    try:
        content = DataProcessor.export_chart_data(resultado)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    filename = export_filename(resultado.parametro)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
