"""
Filtro por período e pivot das amostras em uma linha por dia.

Todas as funções são puras: recalculam tudo a partir das amostras e não
alteram a coleção recebida.
"""
from dataclasses import asdict
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Union

import pandas as pd

from ambiental.models.sample import Parametro, PivotResult, PivotRow, Sample
from ambiental.utils.normalizers import MS_PER_DAY

DateBound = Union[date, datetime, str, None]

UNIX_EPOCH_DATE = date(1970, 1, 1)
DAY_FORMAT = "%d/%m/%y"
FRAME_COLUMNS = ["data", "ambiente", "temperatura", "umidade", "co2"]


def _to_day(value: DateBound) -> Optional[date]:
    """Converte um limite de período (date, datetime ou 'YYYY-MM-DD') em data."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as e:
        raise ValueError(f"Data inválida para o filtro: {value!r}") from e


def format_day(dia: date) -> str:
    return dia.strftime(DAY_FORMAT)


def day_sort_key(dia: date) -> int:
    """Meia-noite do dia em milissegundos desde a época Unix (UTC)."""
    return (dia - UNIX_EPOCH_DATE).days * MS_PER_DAY


def filter_samples(
    samples: Iterable[Sample],
    data_inicio: DateBound = None,
    data_fim: DateBound = None,
) -> List[Sample]:
    """
    Mantém as amostras dentro do período, com os dois limites inclusivos.

    O início vale a partir de 00:00:00 e o fim até 23:59:59; como as
    amostras não têm hora, isso equivale a comparar as datas.
    """
    inicio = _to_day(data_inicio)
    fim = _to_day(data_fim)
    return [
        s for s in samples
        if (inicio is None or s.data >= inicio) and (fim is None or s.data <= fim)
    ]


def category_set(samples: Iterable[Sample]) -> List[str]:
    """Ambientes distintos, em ordem alfabética."""
    return sorted({s.ambiente for s in samples})


def samples_to_frame(samples: Sequence[Sample]) -> pd.DataFrame:
    """Converte as amostras em DataFrame (uma linha por amostra)."""
    if not samples:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame([asdict(s) for s in samples])[FRAME_COLUMNS]


def pivot_by_day(samples: Sequence[Sample], parametro: Union[Parametro, str]) -> List[PivotRow]:
    """
    Agrupa as amostras por dia, com uma coluna por ambiente.

    Se houver mais de uma amostra para o mesmo (dia, ambiente), vale a
    última na ordem de entrada. Combinações sem amostra ficam ausentes da
    linha (nem zero, nem nulo).
    """
    parametro = Parametro.parse(parametro)
    if not samples:
        return []

    frame = samples_to_frame(samples)
    frame = frame.drop_duplicates(subset=["data", "ambiente"], keep="last")
    wide = frame.pivot(index="data", columns="ambiente", values=parametro.atributo).sort_index()

    linhas = []
    for dia, valores in wide.iterrows():
        linhas.append(PivotRow(
            dia=format_day(dia),
            sort_key=day_sort_key(dia),
            valores={str(amb): float(v) for amb, v in valores.items() if pd.notna(v)},
        ))
    return linhas


def filter_and_pivot(
    samples: Sequence[Sample],
    data_inicio: DateBound = None,
    data_fim: DateBound = None,
    parametro: Union[Parametro, str] = Parametro.TEMPERATURA,
) -> PivotResult:
    """
    Aplica o filtro de período e monta as linhas do gráfico.

    Args:
        samples: Amostras validadas
        data_inicio: Início do período (opcional)
        data_fim: Fim do período (opcional)
        parametro: Temperatura, Umidade ou CO2

    Returns:
        PivotResult com as linhas ordenadas por dia e os ambientes presentes
        no período filtrado
    """
    parametro = Parametro.parse(parametro)
    filtradas = filter_samples(samples, data_inicio, data_fim)
    return PivotResult(
        linhas=pivot_by_day(filtradas, parametro),
        ambientes=category_set(filtradas),
        parametro=parametro,
    )
