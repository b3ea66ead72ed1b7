"""
Módulo para carregamento e validação da planilha de amostras.
Lê a primeira aba do Excel, valida linha a linha e devolve as amostras na
ordem da planilha.
"""
import io
import logging
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Union

import pandas as pd

from ambiental.models.sample import Sample
from ambiental.utils.normalizers import (
    is_absent,
    normalize_co2,
    normalize_date,
    normalize_number,
)

logger = logging.getLogger(__name__)


# Mapeamento posicional: o texto do cabeçalho nunca é lido
CAMPOS = ("Temperatura", "Umidade", "CO2", "Data", "Ambiente")
CAMPOS_NUMERICOS = ("Temperatura", "Umidade", "CO2")
HEADER_ROWS = 1

Source = Union[bytes, bytearray, memoryview, BinaryIO]


class LoadError(Exception):
    """Falha ao carregar a planilha. `kind` identifica o tipo de falha."""

    kind = "LoadError"
    default_message = "Ocorreu um erro ao processar o arquivo. Verifique o formato e o conteúdo."

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"kind": self.kind, "message": self.message, "detail": self.detail}


class UnreadableFileError(LoadError):
    """O conteúdo não pôde ser decodificado como planilha."""
    kind = "UnreadableFile"
    default_message = "Não foi possível interpretar o arquivo como uma planilha .xlsx."


class FileReadError(LoadError):
    """A leitura do arquivo em si falhou."""
    kind = "ReadError"
    default_message = "Falha ao ler o arquivo."


class EmptyWorkbookError(LoadError):
    kind = "EmptyWorkbook"
    default_message = "A planilha está vazia ou em formato incorreto."


class NoValidRowsError(LoadError):
    kind = "NoValidRows"
    default_message = "Nenhuma linha de dados válida foi encontrada na planilha."


@dataclass
class LoadReport:
    """Resultado do carregamento: amostras válidas e linhas descartadas."""

    samples: List[Sample]
    linhas_lidas: int
    linhas_descartadas: List[int] = field(default_factory=list)

    @property
    def total_descartadas(self) -> int:
        return len(self.linhas_descartadas)


def validate_row(raw: Mapping[str, Any], row_number: Optional[int] = None) -> Optional[Sample]:
    """
    Valida um registro bruto e monta a amostra.

    A linha é descartada (retorna None) se faltar o ambiente, qualquer uma
    das medições ou se a data não for reconhecida. Zero é um valor válido;
    célula vazia não é.

    Args:
        raw: Registro com as chaves de CAMPOS
        row_number: Número da linha na planilha (1 = cabeçalho), usado no log

    Returns:
        Sample ou None
    """
    ambiente = raw.get("Ambiente")
    categoria = "" if is_absent(ambiente) else str(ambiente).strip()
    data = normalize_date(raw.get("Data"))
    ausentes = [c for c in CAMPOS_NUMERICOS if is_absent(raw.get(c))]

    motivos = []
    if not categoria:
        motivos.append("ambiente vazio")
    if ausentes:
        motivos.append(f"campos ausentes: {', '.join(ausentes)}")
    if data is None:
        motivos.append("data inválida")

    if motivos:
        linha = f"linha {row_number}" if row_number is not None else "linha"
        logger.warning(f"Pulando {linha}: dados essenciais ausentes ({'; '.join(motivos)}).")
        return None

    return Sample(
        temperatura=normalize_number(raw["Temperatura"]),
        umidade=normalize_number(raw["Umidade"]),
        co2=normalize_co2(raw["CO2"]),
        data=data,
        ambiente=categoria,
    )


def _read_bytes(source: Source) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    try:
        content = source.read()
    except (OSError, EOFError) as e:
        raise FileReadError(detail=str(e)) from e
    if not isinstance(content, (bytes, bytearray)):
        raise FileReadError(detail="O arquivo deve ser lido em modo binário.")
    return bytes(content)


def read_first_sheet(content: bytes) -> pd.DataFrame:
    """
    Lê a primeira aba sem cabeçalho e sem conversão de tipos.
    Retorna as colunas renomeadas conforme CAMPOS, incluindo a linha de cabeçalho.
    """
    if not content:
        raise UnreadableFileError(detail="Arquivo vazio.")
    try:
        raw = pd.read_excel(
            io.BytesIO(content),
            sheet_name=0,
            header=None,
            dtype=object,
            keep_default_na=False,
            na_values=[""],
            engine="openpyxl",
        )
    except EOFError as e:
        raise FileReadError(detail=str(e)) from e
    except Exception as e:
        raise UnreadableFileError(detail=str(e)) from e

    raw = raw.reindex(columns=range(len(CAMPOS)))
    raw.columns = list(CAMPOS)
    return raw


def load_report(source: Source) -> LoadReport:
    """
    Carrega a planilha e devolve amostras válidas com o relatório de descartes.

    Raises:
        LoadError: UnreadableFile, ReadError, EmptyWorkbook ou NoValidRows
    """
    content = _read_bytes(source)
    sheet = read_first_sheet(content)

    rows = sheet.iloc[HEADER_ROWS:].dropna(how="all")
    if rows.empty:
        raise EmptyWorkbookError()

    samples: List[Sample] = []
    descartadas: List[int] = []
    for index, raw in zip(rows.index, rows.to_dict("records")):
        row_number = int(index) + 1
        sample = validate_row(raw, row_number)
        if sample is None:
            descartadas.append(row_number)
        else:
            samples.append(sample)

    if not samples:
        raise NoValidRowsError()

    logger.info(
        f"Planilha carregada: {len(samples)} amostras válidas, "
        f"{len(descartadas)} linhas descartadas"
    )
    return LoadReport(samples=samples, linhas_lidas=len(rows), linhas_descartadas=descartadas)


def load_samples(source: Source) -> List[Sample]:
    """Carrega a planilha e devolve apenas as amostras válidas, em ordem."""
    return load_report(source).samples
