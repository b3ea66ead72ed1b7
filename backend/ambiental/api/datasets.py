"""
Endpoints para gerenciamento do dataset da sessão
"""
from fastapi import APIRouter, Depends, UploadFile, File, HTTPException, status
from ambiental.config import settings
from ambiental.sessions import get_dataset_session, require_dataset
from ambiental.services.data_processor import DataProcessor
from ambiental.services.dataset_store import DatasetSession
from ambiental.models.schemas import DatasetSummary, UploadResponse
from ambiental.utils.data_loader import FileReadError, LoadError
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/datasets", tags=["datasets"])


def build_summary(session: DatasetSession) -> DatasetSummary:
    resumo = DataProcessor.summarize(session.samples)
    return DatasetSummary(
        session_id=session.session_id,
        filename=session.nome_arquivo,
        linhas_descartadas=session.linhas_descartadas,
        carregado_em=session.carregado_em,
        **resumo
    )


@router.post("/upload", response_model=UploadResponse)
async def upload_dataset(
    file: UploadFile = File(...),
    session: DatasetSession = Depends(get_dataset_session)
):
    """
    Faz upload da planilha de amostras (.xlsx).

    O dataset da sessão só é substituído se o carregamento der certo e
    ainda for o mais recente; caso contrário o anterior é mantido.
    """
    # Validar tipo de arquivo
    if not settings.is_allowed_file(file.filename):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=settings.INVALID_EXTENSION_MESSAGE
        )

    generation = session.begin_load()

    try:
        # Ler conteúdo do arquivo
        try:
            content = await file.read()
        except OSError as e:
            raise FileReadError(detail=str(e)) from e

        if len(content) > settings.MAX_UPLOAD_SIZE:
            raise HTTPException(
                status_code=413,
                detail=f"Arquivo maior que o limite de {settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB"
            )

        report = DataProcessor.process_upload(content)

    except LoadError as e:
        raise HTTPException(
            status_code=422,
            detail=e.to_dict()
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Erro ao fazer upload: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erro ao processar arquivo"
        )

    if not session.commit(generation, report.samples, file.filename, report.total_descartadas):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Carregamento substituído por um envio mais recente"
        )

    logger.info(f"Sessão {session.session_id}: dataset '{file.filename}' com {len(report.samples)} amostras")
    return UploadResponse(
        message="Dataset carregado com sucesso",
        dataset=build_summary(session)
    )


@router.get("/current", response_model=DatasetSummary)
async def get_current_dataset(session: DatasetSession = Depends(require_dataset)):
    """Resumo do dataset atual da sessão"""
    return build_summary(session)


@router.delete("/current")
async def delete_current_dataset(session: DatasetSession = Depends(get_dataset_session)):
    """Remove o dataset da sessão"""
    session.clear()
    return {"message": "Dataset removido com sucesso"}
