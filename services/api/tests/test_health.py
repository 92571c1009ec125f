"""Tests for health and ranking endpoints."""

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from comercios.main import create_app
from comercios.services.ranking import SOURCE_CACHE, SOURCE_LIVE
from comercios.settings import Settings


def _settings(data_file: Path, **overrides) -> Settings:
    return Settings(data_file=data_file, bootstrap_on_startup=False, **overrides)


@pytest.fixture
async def client(data_file: Path):
    """Create test client over a 24-record store."""
    app = create_app(_settings(data_file, generator_batch_size=25))
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health endpoint returns ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_top_revenue_endpoint(client: AsyncClient):
    response = await client.get("/top10-faturamento")
    assert response.status_code == 200
    data = response.json()

    assert set(data) == {"top_10_comercios", "tempo_processamento", "fonte_dados"}
    assert data["fonte_dados"] == SOURCE_LIVE
    assert len(data["top_10_comercios"]) == 10

    first = data["top_10_comercios"][0]
    assert first["id_comercio"] == 24
    assert first["dados_financeiros"]["faturamento_anual_bruto"] == 24000.0
    assert first["localizacao"]["cidade"] == "Cidade 0"
    assert first["ramo_atividade"]["categoria"] == "Varejo"


@pytest.mark.asyncio
async def test_top_cities_endpoint(client: AsyncClient):
    response = await client.get("/top10-cidades")
    assert response.status_code == 200
    data = response.json()

    assert set(data) == {"top_10_cidades", "tempo_processamento", "fonte_dados"}
    cities = data["top_10_cidades"]
    assert len(cities) == 10
    # Cidade 0 holds records 12 and 24: 36 000.
    assert cities[0] == {"cidade": "Cidade 0", "faturamento": "R$ 36.000,00"}
    assert cities[1] == {"cidade": "Cidade 11", "faturamento": "R$ 34.000,00"}


@pytest.mark.asyncio
async def test_top_categories_endpoint_short_collection(client: AsyncClient):
    response = await client.get("/top10-categorias")
    assert response.status_code == 200
    data = response.json()

    assert set(data) == {"top_10_categorias", "tempo_processamento", "fonte_dados"}
    categories = data["top_10_categorias"]
    assert [c["categoria"] for c in categories] == ["Varejo", "Saúde", "Serviços"]
    assert categories[0]["faturamento"] == "R$ 108.000,00"


@pytest.mark.asyncio
async def test_second_request_served_from_cache(client: AsyncClient):
    first = await client.get("/top10-cidades")
    second = await client.get("/top10-cidades")

    assert first.json()["fonte_dados"] == SOURCE_LIVE
    assert second.json()["fonte_dados"] == SOURCE_CACHE
    assert second.json()["top_10_cidades"] == first.json()["top_10_cidades"]


@pytest.mark.asyncio
async def test_refresh_header_bypasses_cache(client: AsyncClient):
    await client.get("/top10-faturamento")

    refreshed = await client.get("/top10-faturamento", headers={"X-Cache-Refresh": "true"})
    assert refreshed.json()["fonte_dados"] == SOURCE_LIVE

    other_value = await client.get("/top10-faturamento", headers={"X-Cache-Refresh": "1"})
    assert other_value.json()["fonte_dados"] == SOURCE_CACHE


@pytest.mark.asyncio
async def test_missing_store_returns_plain_text_500(tmp_path: Path):
    app = create_app(_settings(tmp_path / "missing.json"))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/top10-categorias")

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert "missing.json" in response.text


@pytest.mark.asyncio
async def test_insufficient_data_returns_500(tmp_path: Path):
    path = tmp_path / "dados.json"
    path.write_text("[]", encoding="utf-8")
    app = create_app(_settings(path))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        revenue = await ac.get("/top10-faturamento")
        categories = await ac.get("/top10-categorias")

    assert revenue.status_code == 500
    assert categories.status_code == 200
    assert categories.json()["top_10_categorias"] == []


@pytest.mark.asyncio
async def test_generate_data_appends_batch(client: AsyncClient, data_file: Path):
    response = await client.post("/gerar-dados")
    assert response.status_code == 200
    data = response.json()

    assert data["mensagem"] == "25 novos registros adicionados com sucesso!"
    assert data["registros_gerados"] == 49
    assert data["tempo_processamento"]

    # The cached ranking survives until refresh; a refresh sees the new data.
    refreshed = await client.get("/top10-faturamento", headers={"X-Cache-Refresh": "true"})
    assert refreshed.status_code == 200


@pytest.mark.asyncio
async def test_unexpected_error_uses_structured_format(data_file: Path):
    app = create_app(_settings(data_file))

    async def boom():
        raise ValueError("boom")

    app.add_api_route("/boom", boom)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "error": {"code": "INTERNAL_ERROR", "message": "Internal server error", "detail": None}
    }
