"""
Tipos canônicos do domínio: amostras validadas e linhas pivotadas
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Union


# Coluna do rótulo do dia nos registros achatados e na exportação
DAY_COLUMN = "Data"


class Parametro(str, Enum):
    """Grandezas medidas que podem ser plotadas."""
    TEMPERATURA = "Temperatura"
    UMIDADE = "Umidade"
    CO2 = "CO2"

    @property
    def atributo(self) -> str:
        """Nome do atributo correspondente em `Sample`."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: Union["Parametro", str]) -> "Parametro":
        if isinstance(value, cls):
            return value
        for parametro in cls:
            if str(value).strip().lower() in (parametro.value.lower(), parametro.atributo):
                return parametro
        raise ValueError(f"Parâmetro desconhecido: {value!r}")


def record_key(ambiente: str) -> str:
    """Chave do ambiente no registro achatado; não colide com a coluna do dia."""
    if ambiente == DAY_COLUMN:
        return f"{ambiente} (ambiente)"
    return ambiente


@dataclass(frozen=True)
class Sample:
    """Uma medição ambiental validada."""

    temperatura: float
    umidade: float
    co2: float
    data: date
    ambiente: str

    def valor(self, parametro: Union[Parametro, str]) -> float:
        return getattr(self, Parametro.parse(parametro).atributo)


@dataclass(frozen=True)
class PivotRow:
    """
    Uma linha do gráfico: um dia e o valor do parâmetro por ambiente.

    `sort_key` é a meia-noite do dia em milissegundos (UTC) e serve apenas
    para ordenação; não é exibido nem exportado.
    """

    dia: str
    sort_key: int
    valores: Dict[str, float] = field(default_factory=dict)

    def to_record(self) -> Dict[str, Union[str, float]]:
        """Achata a linha no formato consumido pelo gráfico e pela exportação."""
        record: Dict[str, Union[str, float]] = {DAY_COLUMN: self.dia}
        record.update((record_key(amb), v) for amb, v in self.valores.items())
        return record


@dataclass(frozen=True)
class PivotResult:
    """Resultado de filtro + pivot: linhas ordenadas e ambientes filtrados."""

    linhas: List[PivotRow]
    ambientes: List[str]
    parametro: Parametro

    def records(self) -> List[Dict[str, Union[str, float]]]:
        return [linha.to_record() for linha in self.linhas]
