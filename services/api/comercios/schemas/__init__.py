"""Pydantic schemas for API request/response validation."""

from comercios.schemas.business import (
    Activity,
    BusinessRecord,
    Coordinates,
    Financials,
    Location,
)
from comercios.schemas.rankings import (
    CategoryRevenue,
    CityRevenue,
    GenerateDataResponse,
    RankingKind,
    RankingResponse,
    TopBusinessesResponse,
    TopCategoriesResponse,
    TopCitiesResponse,
)

__all__ = [
    "Activity",
    "BusinessRecord",
    "Coordinates",
    "Financials",
    "Location",
    "CategoryRevenue",
    "CityRevenue",
    "GenerateDataResponse",
    "RankingKind",
    "RankingResponse",
    "TopBusinessesResponse",
    "TopCategoriesResponse",
    "TopCitiesResponse",
]
