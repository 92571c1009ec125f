"""Shared fixtures: record factories and on-disk record stores."""

import json
from pathlib import Path

import pytest

from comercios.schemas import BusinessRecord


def make_record(
    business_id: int,
    revenue: float,
    *,
    city: str = "Cidade 0",
    category: str = "Varejo",
) -> BusinessRecord:
    """Build a valid record with the given ranking-relevant fields."""
    return BusinessRecord.model_validate(
        {
            "id_comercio": business_id,
            "nome_fantasia": f"Comercio {business_id}",
            "ramo_atividade": {"id": "RET001", "categoria": category, "subcategoria": "Loja"},
            "dados_financeiros": {
                "faturamento_anual_bruto": revenue,
                "custos_operacionais_anual": revenue * 0.5,
                "imposto_total_pago_anual": revenue * 0.1,
                "margem_lucro_liquida": revenue * 0.4,
                "ano_fiscal": 2024,
            },
            "localizacao": {
                "endereco": f"Rua {business_id}, 1",
                "cidade": city,
                "estado": "SP",
                "cep": "01000-000",
                "coordenadas": {"latitude": -23.5, "longitude": -46.6},
                "regiao_geografica": "Sudeste",
            },
            "porte_empresa": "Pequena",
            "data_abertura": "2020-01-15",
            "status_operacional": "Ativo",
        }
    )


def write_records(path: Path, records: list[BusinessRecord]) -> Path:
    payload = [r.model_dump(mode="json", by_alias=True) for r in records]
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def twelve_cities() -> list[BusinessRecord]:
    """24 records over 12 cities and 3 categories; revenues 1000..24000."""
    categories = ["Varejo", "Serviços", "Saúde"]
    return [
        make_record(
            i,
            1000.0 * i,
            city=f"Cidade {i % 12}",
            category=categories[i % 3],
        )
        for i in range(1, 25)
    ]


@pytest.fixture
def data_file(tmp_path: Path, twelve_cities: list[BusinessRecord]) -> Path:
    return write_records(tmp_path / "dados_comercios.json", twelve_cities)
