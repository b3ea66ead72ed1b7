import io
from datetime import date

import pytest
from openpyxl import Workbook

from ambiental.models.sample import Sample


HEADER = ["Temperatura", "Umidade", "CO2", "Data", "Ambiente"]

SCENARIO_ROWS = [
    (30.0, 55, 500, "01/01/2024", "SalaA"),
    (31.0, 56, 510, "01/01/2024", "SalaB"),
    (32.0, 57, 520, "02/01/2024", "SalaA"),
]


def build_xlsx(rows, header=HEADER, extra_sheets=None):
    """Build an in-memory workbook; first sheet gets header + rows."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Amostras"
    if header is not None:
        ws.append(list(header))
    for row in rows:
        ws.append(list(row))
    for name, sheet_rows in (extra_sheets or {}).items():
        other = wb.create_sheet(name)
        for row in sheet_rows:
            other.append(list(row))
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_xlsx():
    return build_xlsx


@pytest.fixture
def scenario_xlsx():
    return build_xlsx(SCENARIO_ROWS)


@pytest.fixture
def scenario_samples():
    return [
        Sample(30.0, 55.0, 500.0, date(2024, 1, 1), "SalaA"),
        Sample(31.0, 56.0, 510.0, date(2024, 1, 1), "SalaB"),
        Sample(32.0, 57.0, 520.0, date(2024, 1, 2), "SalaA"),
    ]
