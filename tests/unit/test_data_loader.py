import io
import logging
from datetime import date, datetime

import pytest

from ambiental.utils.data_loader import (
    EmptyWorkbookError,
    FileReadError,
    LoadError,
    NoValidRowsError,
    UnreadableFileError,
    load_report,
    load_samples,
    validate_row,
)


def _raw(temperatura=22.0, umidade=50.0, co2=400.0, data="01/01/2024", ambiente="SalaA"):
    return {
        "Temperatura": temperatura,
        "Umidade": umidade,
        "CO2": co2,
        "Data": data,
        "Ambiente": ambiente,
    }


class _BrokenFile:
    def read(self):
        raise OSError("disco indisponível")


# ============================================
# validate_row
# ============================================

def test_validate_row_builds_sample():
    sample = validate_row(_raw(temperatura="22,5", co2="412,5"))
    assert sample.temperatura == pytest.approx(22.5)
    assert sample.co2 == pytest.approx(412.5)
    assert sample.data == date(2024, 1, 1)
    assert sample.ambiente == "SalaA"


def test_zero_measurements_are_valid():
    sample = validate_row(_raw(temperatura=0, umidade=0, co2=0))
    assert sample is not None
    assert (sample.temperatura, sample.umidade, sample.co2) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize("campo", ["Temperatura", "Umidade", "CO2"])
def test_missing_measurement_rejects_row(campo):
    raw = _raw()
    raw[campo] = None
    assert validate_row(raw) is None


@pytest.mark.parametrize("ambiente", [None, "", "   ", float("nan")])
def test_empty_category_rejects_row(ambiente):
    assert validate_row(_raw(ambiente=ambiente)) is None


@pytest.mark.parametrize("data", [None, "2024-01-01", "32/01/2024", "ontem"])
def test_unrecognized_date_rejects_row(data):
    assert validate_row(_raw(data=data)) is None


def test_category_is_trimmed_and_stringified():
    assert validate_row(_raw(ambiente="  Sala 1 ")).ambiente == "Sala 1"
    assert validate_row(_raw(ambiente=101)).ambiente == "101"


def test_malformed_measurement_degrades_to_zero():
    sample = validate_row(_raw(umidade="n/d"))
    assert sample is not None
    assert sample.umidade == 0.0


def test_rejected_row_is_logged_with_row_number(caplog):
    with caplog.at_level(logging.WARNING, logger="ambiental.utils.data_loader"):
        validate_row(_raw(ambiente=None), row_number=7)
    assert "linha 7" in caplog.text
    assert "ambiente vazio" in caplog.text


# ============================================
# load_report / load_samples
# ============================================

def test_scenario_loads_in_sheet_order(scenario_xlsx):
    samples = load_samples(scenario_xlsx)
    assert [(s.ambiente, s.data) for s in samples] == [
        ("SalaA", date(2024, 1, 1)),
        ("SalaB", date(2024, 1, 1)),
        ("SalaA", date(2024, 1, 2)),
    ]
    assert samples[0].temperatura == 30.0
    assert samples[2].co2 == 520.0


def test_accepts_file_like_source(scenario_xlsx):
    assert len(load_samples(io.BytesIO(scenario_xlsx))) == 3


def test_header_text_is_ignored(make_xlsx):
    content = make_xlsx(
        [(25.0, 60, 450, "10/02/2024", "Lab")],
        header=["a", "b", "c", "d", "e"],
    )
    sample = load_samples(content)[0]
    assert sample.temperatura == 25.0
    assert sample.ambiente == "Lab"


def test_first_row_is_always_header(make_xlsx):
    content = make_xlsx(
        [(25.0, 60, 450, "10/02/2024", "Lab")],
        header=[21.0, 40, 380, "09/02/2024", "Lab"],
    )
    samples = load_samples(content)
    assert len(samples) == 1
    assert samples[0].data == date(2024, 2, 10)


def test_excel_serial_and_native_dates(make_xlsx):
    content = make_xlsx([
        (25.0, 60, 450, 45292, "Lab"),
        (26.0, 61, 460, datetime(2024, 1, 2), "Lab"),
    ])
    assert [s.data for s in load_samples(content)] == [date(2024, 1, 1), date(2024, 1, 2)]


def test_large_integer_cells_are_rescaled(make_xlsx):
    content = make_xlsx([(3435168, 5512345, 3435168, "01/01/2024", "Lab")])
    sample = load_samples(content)[0]
    assert sample.temperatura == pytest.approx(34.35168)
    assert sample.umidade == pytest.approx(55.12345)
    assert sample.co2 == 3435168.0


def test_only_first_sheet_is_read(make_xlsx):
    content = make_xlsx(
        [(25.0, 60, 450, "10/02/2024", "Lab")],
        extra_sheets={"Outra": [("x",), (1.0, 2, 3, "01/01/2020", "Ignorada")]},
    )
    assert [s.ambiente for s in load_samples(content)] == ["Lab"]


def test_report_lists_discarded_rows(make_xlsx):
    content = make_xlsx([
        (25.0, 60, 450, "10/02/2024", "Lab"),
        (25.0, None, 450, "10/02/2024", "Lab"),
        (25.0, 60, 450, "sem data", "Lab"),
        (26.0, 61, 455, "11/02/2024", "Lab"),
    ])
    report = load_report(content)
    assert len(report.samples) == 2
    assert report.linhas_descartadas == [3, 4]
    assert report.total_descartadas == 2


def test_fully_blank_rows_are_skipped(make_xlsx):
    content = make_xlsx([
        (25.0, 60, 450, "10/02/2024", "Lab"),
        (None, None, None, None, None),
        (26.0, 61, 455, "11/02/2024", "Lab"),
    ])
    report = load_report(content)
    assert len(report.samples) == 2
    assert report.linhas_descartadas == []


def test_text_that_looks_like_na_is_not_absent(make_xlsx):
    content = make_xlsx([(25.0, 60, 450, "10/02/2024", "NA")])
    assert load_samples(content)[0].ambiente == "NA"


# ============================================
# Falhas
# ============================================

def test_header_only_is_empty_workbook(make_xlsx):
    with pytest.raises(EmptyWorkbookError) as exc:
        load_report(make_xlsx([]))
    assert exc.value.kind == "EmptyWorkbook"


def test_no_valid_rows(make_xlsx):
    content = make_xlsx([
        (25.0, 60, 450, "10/02/2024", None),
        (None, 60, 450, "10/02/2024", "Lab"),
    ])
    with pytest.raises(NoValidRowsError) as exc:
        load_report(content)
    assert exc.value.kind == "NoValidRows"


@pytest.mark.parametrize("content", [b"", b"isto nao e uma planilha", b"PK\x03\x04quebrado"])
def test_unreadable_content(content):
    with pytest.raises(UnreadableFileError) as exc:
        load_report(content)
    assert exc.value.kind == "UnreadableFile"


def test_read_failure_is_read_error():
    with pytest.raises(FileReadError) as exc:
        load_report(_BrokenFile())
    assert exc.value.kind == "ReadError"
    assert "disco indisponível" in exc.value.detail


def test_load_errors_share_base_and_serialize(make_xlsx):
    with pytest.raises(LoadError) as exc:
        load_report(make_xlsx([]))
    payload = exc.value.to_dict()
    assert payload["kind"] == "EmptyWorkbook"
    assert payload["message"] == "A planilha está vazia ou em formato incorreto."
