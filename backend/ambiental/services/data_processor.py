"""
Serviço para processamento de dados
"""
from typing import Sequence, Union
from ambiental.models.sample import Parametro, PivotResult, Sample
from ambiental.utils.data_loader import LoadError, LoadReport, load_report
from ambiental.utils.export import export_pivot_to_excel
from ambiental.utils.pivot import DateBound, filter_and_pivot, samples_to_frame
import logging

logger = logging.getLogger(__name__)


class DataProcessor:
    """Serviço para processar planilhas de amostras ambientais"""

    @staticmethod
    def process_upload(file_content: bytes) -> LoadReport:
        """
        Processa upload de arquivo Excel.

        Args:
            file_content: Conteúdo do arquivo em bytes

        Returns:
            LoadReport com as amostras válidas e as linhas descartadas

        Raises:
            LoadError: se o arquivo não puder ser carregado
        """
        try:
            return load_report(file_content)
        except LoadError as e:
            logger.error(f"Erro ao processar arquivo ({e.kind}): {e.message} {e.detail or ''}".strip())
            raise

    @staticmethod
    def build_chart_data(
        samples: Sequence[Sample],
        data_inicio: DateBound = None,
        data_fim: DateBound = None,
        parametro: Union[Parametro, str] = Parametro.TEMPERATURA,
    ) -> PivotResult:
        """
        Filtra por período e monta as linhas do gráfico.

        Args:
            samples: Amostras do dataset atual
            data_inicio: Início do período
            data_fim: Fim do período
            parametro: Temperatura, Umidade ou CO2

        Returns:
            PivotResult
        """
        return filter_and_pivot(samples, data_inicio, data_fim, parametro)

    @staticmethod
    def export_chart_data(resultado: PivotResult) -> bytes:
        """Gera o .xlsx das linhas pivotadas"""
        return export_pivot_to_excel(resultado.linhas, resultado.parametro, resultado.ambientes)

    @staticmethod
    def summarize(samples: Sequence[Sample]) -> dict:
        """Resumo do dataset: quantidade, ambientes e período coberto"""
        if not samples:
            return {"amostras": 0, "ambientes": [], "data_inicial": None, "data_final": None}

        df = samples_to_frame(samples)
        return {
            "amostras": len(df),
            "ambientes": sorted(df["ambiente"].unique().tolist()),
            "data_inicial": min(df["data"]),
            "data_final": max(df["data"]),
        }
