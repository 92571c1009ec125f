"""Ranking endpoints.

GET /top10-faturamento - Top 10 businesses by gross annual revenue
GET /top10-cidades     - Top 10 cities by aggregate revenue (BRL text)
GET /top10-categorias  - Top categories by aggregate revenue (BRL text)

Header `X-Cache-Refresh: true` bypasses the cache read.
Routers are thin: call services for business logic.
"""

from fastapi import APIRouter, Depends, Header, Request

from comercios.schemas import (
    RankingKind,
    TopBusinessesResponse,
    TopCategoriesResponse,
    TopCitiesResponse,
)
from comercios.services.ranking import RankingService

router = APIRouter()


def get_ranking_service(request: Request) -> RankingService:
    """The process-wide RankingService built by create_app()."""
    return request.app.state.ranking_service


def wants_refresh(
    x_cache_refresh: str | None = Header(default=None, alias="X-Cache-Refresh"),
) -> bool:
    return x_cache_refresh == "true"


@router.get("/top10-faturamento", response_model=TopBusinessesResponse)
async def get_top_revenue(
    service: RankingService = Depends(get_ranking_service),
    refresh: bool = Depends(wants_refresh),
):
    """Top 10 businesses by gross annual revenue."""
    return await service.get_ranking(RankingKind.TOP_REVENUE, force_refresh=refresh)


@router.get("/top10-cidades", response_model=TopCitiesResponse)
async def get_top_cities(
    service: RankingService = Depends(get_ranking_service),
    refresh: bool = Depends(wants_refresh),
):
    """Top 10 cities by summed revenue."""
    return await service.get_ranking(RankingKind.TOP_CITIES, force_refresh=refresh)


@router.get("/top10-categorias", response_model=TopCategoriesResponse)
async def get_top_categories(
    service: RankingService = Depends(get_ranking_service),
    refresh: bool = Depends(wants_refresh),
):
    """Top activity categories by summed revenue (fewer than 10 if the data has fewer)."""
    return await service.get_ranking(RankingKind.TOP_CATEGORIES, force_refresh=refresh)
