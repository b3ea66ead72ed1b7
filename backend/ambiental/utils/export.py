"""
Exportação das linhas pivotadas para Excel
"""
import io
from datetime import date
from typing import List, Optional, Sequence, Union

import pandas as pd

from ambiental.models.sample import DAY_COLUMN, Parametro, PivotRow, record_key


def pivot_to_frame(linhas: Sequence[PivotRow], ambientes: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Uma linha por dia: coluna `Data` seguida de uma coluna por ambiente.
    O `sort_key` interno não é exportado.
    """
    if ambientes is None:
        ambientes = sorted({amb for linha in linhas for amb in linha.valores})
    frame = pd.DataFrame([linha.to_record() for linha in linhas])
    return frame.reindex(columns=[DAY_COLUMN, *(record_key(amb) for amb in ambientes)])


def export_pivot_to_excel(
    linhas: Sequence[PivotRow],
    parametro: Union[Parametro, str],
    ambientes: Optional[List[str]] = None,
) -> bytes:
    """Gera o .xlsx com uma aba nomeada pelo parâmetro."""
    if not linhas:
        raise ValueError("Não há dados para exportar.")

    parametro = Parametro.parse(parametro)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pivot_to_frame(linhas, ambientes).to_excel(writer, sheet_name=parametro.value, index=False)
    return buffer.getvalue()


def export_filename(parametro: Union[Parametro, str], hoje: Optional[date] = None) -> str:
    parametro = Parametro.parse(parametro)
    hoje = hoje or date.today()
    return f"dados_{parametro.value}_{hoje.isoformat()}.xlsx"
