"""
Normalização de células de planilha.

Camada tolerante: as funções numéricas nunca falham, células malformadas
viram 0. A decisão de descartar uma linha inteira fica com o validador
(`ambiental.utils.data_loader.validate_row`).
"""
import math
import numbers
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

import pandas as pd


# Inteiros acima deste módulo chegam sem a vírgula decimal (ex.: 3435168 -> 34.35168)
SCALE_THRESHOLD = 1000
SCALE_DIVISOR = 100000

# Serial 25569 = 1970-01-01 no calendário de planilhas
EXCEL_UNIX_EPOCH_SERIAL = 25569
MS_PER_DAY = 86_400_000
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_absent(value: Any) -> bool:
    """Célula ausente: None, NaN, NaT ou pd.NA."""
    if value is None:
        return True
    if isinstance(value, str):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def parse_leading_float(text: str) -> Optional[float]:
    """
    Lê o literal decimal do início do texto, ignorando o que vier depois
    (ex.: "25.5 °C" -> 25.5). Retorna None se não houver número.
    """
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return float(match.group(1))


def _rescale(number: float) -> float:
    if number.is_integer() and abs(number) > SCALE_THRESHOLD:
        return number / SCALE_DIVISOR
    return number


def normalize_number(value: Any) -> float:
    """
    Converte temperatura/umidade para float.

    Aceita números e textos em formato pt-BR ("1.234,56") ou com pontos de
    milhar ("1.234.567"). Inteiros com módulo maior que 1000 são tratados
    como valores digitados sem a vírgula decimal e divididos por 100000.
    Textos só com pontos de milhar ("1.234.567") já declaram a magnitude e
    não passam pela heurística.

    Args:
        value: Conteúdo bruto da célula

    Returns:
        Valor normalizado; 0.0 quando não for possível interpretar
    """
    if is_absent(value):
        return 0.0

    if _is_number(value):
        return _rescale(float(value))

    if isinstance(value, str):
        thousands_only = "," not in value and value.count(".") > 1
        if "," in value:
            cleaned = value.replace(".", "").replace(",", ".", 1)
        elif thousands_only:
            cleaned = value.replace(".", "")
        else:
            cleaned = value

        number = parse_leading_float(cleaned)
        if number is None:
            return 0.0
        return number if thousands_only else _rescale(number)

    return 0.0


def normalize_co2(value: Any) -> float:
    """CO2: apenas troca a vírgula decimal por ponto, sem heurística de escala."""
    if is_absent(value):
        return 0.0
    if _is_number(value):
        number = float(value)
        return number if not math.isnan(number) else 0.0
    if isinstance(value, str):
        number = parse_leading_float(value.replace(",", ".", 1))
        return number if number is not None else 0.0
    return 0.0


def serial_to_date(serial: float) -> Optional[date]:
    """
    Converte um serial de planilha em data.

    O serial vira um instante UTC e a data é montada a partir dos
    componentes UTC, sem passar pelo fuso local.
    """
    if not math.isfinite(serial):
        return None
    try:
        instant = UNIX_EPOCH + timedelta(milliseconds=(serial - EXCEL_UNIX_EPOCH_SERIAL) * MS_PER_DAY)
    except OverflowError:
        return None
    return date(instant.year, instant.month, instant.day)


def parse_br_date(text: str) -> Optional[date]:
    """Lê datas no formato DD/MM/YYYY."""
    parts = text.strip().split("/")
    if len(parts) != 3:
        return None

    # cada parte vale pelos dígitos iniciais: "2024 10:30" -> 2024
    matches = [_LEADING_INT.match(p) for p in parts]
    if not all(matches):
        return None

    dia, mes, ano = (m.group(1) for m in matches)
    if len(ano.lstrip("+-")) != 4:
        return None

    try:
        return date(int(ano), int(mes), int(dia))
    except ValueError:
        return None


def normalize_date(value: Any) -> Optional[date]:
    """
    Interpreta a célula de data.

    Aceita seriais numéricos, textos DD/MM/YYYY e datas já decodificadas
    pelo leitor de planilhas (datetime/Timestamp). Qualquer outra coisa
    retorna None.
    """
    if is_absent(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _is_number(value):
        return serial_to_date(float(value))
    if isinstance(value, str):
        return parse_br_date(value)
    return None
