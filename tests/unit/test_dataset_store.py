from datetime import date

import pytest

from ambiental.models.sample import Sample
from ambiental.services.data_processor import DataProcessor
from ambiental.services.dataset_store import DatasetSession, DatasetStore
from ambiental.utils.data_loader import LoadError


@pytest.fixture
def session():
    return DatasetSession("teste")


def _sample(ambiente="SalaA", dia=1):
    return Sample(22.0, 50.0, 400.0, date(2024, 1, dia), ambiente)


def test_new_session_is_empty(session):
    assert session.is_empty
    assert session.samples == ()


def test_commit_installs_dataset(session):
    gen = session.begin_load()
    assert session.commit(gen, [_sample()], nome_arquivo="a.xlsx", linhas_descartadas=2)
    assert len(session.samples) == 1
    assert session.nome_arquivo == "a.xlsx"
    assert session.linhas_descartadas == 2
    assert session.carregado_em is not None


def test_last_load_wins_regardless_of_completion_order(session):
    primeiro = session.begin_load()
    segundo = session.begin_load()

    assert session.commit(segundo, [_sample("Nova")], nome_arquivo="novo.xlsx")
    # o carregamento antigo termina depois e é descartado
    assert not session.commit(primeiro, [_sample("Antiga")], nome_arquivo="antigo.xlsx")

    assert [s.ambiente for s in session.samples] == ["Nova"]
    assert session.nome_arquivo == "novo.xlsx"


def test_is_current(session):
    gen = session.begin_load()
    assert session.is_current(gen)
    session.begin_load()
    assert not session.is_current(gen)


def test_failed_load_keeps_previous_dataset(session, make_xlsx):
    gen = session.begin_load()
    session.commit(gen, [_sample()], nome_arquivo="bom.xlsx")

    session.begin_load()
    with pytest.raises(LoadError):
        DataProcessor.process_upload(make_xlsx([]))

    assert [s.ambiente for s in session.samples] == ["SalaA"]
    assert session.nome_arquivo == "bom.xlsx"


def test_clear_invalidates_pending_loads(session):
    gen = session.begin_load()
    session.clear()
    assert not session.commit(gen, [_sample()])
    assert session.is_empty


def test_samples_are_immutable_snapshot(session):
    origem = [_sample()]
    session.commit(session.begin_load(), origem)
    origem.append(_sample("Outra"))
    assert len(session.samples) == 1


def test_store_sessions_are_isolated():
    store = DatasetStore()
    a = store.get_session("a")
    b = store.get_session("b")
    a.commit(a.begin_load(), [_sample()])

    assert store.get_session("a") is a
    assert b.is_empty
    assert len(store) == 2


def test_store_drop_session():
    store = DatasetStore()
    store.get_session("a")
    assert store.drop_session("a")
    assert not store.drop_session("a")
    assert len(store) == 0


def test_summarize(scenario_samples):
    resumo = DataProcessor.summarize(scenario_samples)
    assert resumo == {
        "amostras": 3,
        "ambientes": ["SalaA", "SalaB"],
        "data_inicial": date(2024, 1, 1),
        "data_final": date(2024, 1, 2),
    }
    assert DataProcessor.summarize([])["amostras"] == 0
