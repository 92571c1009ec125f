import json
from pathlib import Path

import pytest

from comercios.stores.records import RecordStore, StoreCorrupt, StoreUnavailable
from conftest import make_record, write_records


def test_load_preserves_order_and_fields(data_file: Path, twelve_cities) -> None:
    records = RecordStore(data_file).load()

    assert [r.business_id for r in records] == [r.business_id for r in twelve_cities]
    assert records[0].financials.gross_annual_revenue == 1000.0
    assert records[0].location.city == "Cidade 1"
    assert records[0].activity.category == "Serviços"


def test_missing_file_is_unavailable(tmp_path: Path) -> None:
    store = RecordStore(tmp_path / "nope.json")
    assert not store.exists()
    with pytest.raises(StoreUnavailable):
        store.load()


def test_directory_path_is_unavailable(tmp_path: Path) -> None:
    with pytest.raises(StoreUnavailable):
        RecordStore(tmp_path).load()


@pytest.mark.parametrize(
    "content",
    [
        "",
        "{broken",
        '{"id_comercio": 1}',
        '[{"id_comercio": 1, "nome_fantasia": "x"}]',
        '[{"id_comercio": "abc"}]',
    ],
    ids=["empty", "syntax", "object-not-array", "missing-fields", "wrong-type"],
)
def test_malformed_content_is_corrupt(tmp_path: Path, content: str) -> None:
    path = tmp_path / "dados.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StoreCorrupt):
        RecordStore(path).load()


def test_one_bad_record_fails_the_whole_load(tmp_path: Path, twelve_cities) -> None:
    path = write_records(tmp_path / "dados.json", twelve_cities)
    payload = json.loads(path.read_text(encoding="utf-8"))
    payload[5]["dados_financeiros"]["faturamento_anual_bruto"] = "muito"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(StoreCorrupt):
        RecordStore(path).load()


def test_empty_array_loads(tmp_path: Path) -> None:
    path = tmp_path / "dados.json"
    path.write_text("[]", encoding="utf-8")
    assert RecordStore(path).load() == []


def test_save_writes_portuguese_keys(tmp_path: Path) -> None:
    store = RecordStore(tmp_path / "nested" / "dados.json")
    store.save([make_record(7, 123.0, city="Campinas")])

    payload = json.loads(store.path.read_text(encoding="utf-8"))
    assert payload[0]["id_comercio"] == 7
    assert payload[0]["localizacao"]["cidade"] == "Campinas"
    assert payload[0]["dados_financeiros"]["faturamento_anual_bruto"] == 123.0
    assert list(store.path.parent.glob("*.tmp")) == []


def test_save_replaces_whole_collection(data_file: Path) -> None:
    store = RecordStore(data_file)
    store.save([make_record(1, 5.0)])

    records = store.load()
    assert len(records) == 1
    assert records[0].revenue == 5.0
