"""Schemas for the ranking endpoints (/top10-*) and the data generator.

JSON field names are the public compatibility surface and must not change.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field

from comercios.schemas.business import BusinessRecord


class RankingKind(str, Enum):
    """The analytical views served by the API. Each one owns one cache slot."""

    TOP_REVENUE = "top10-faturamento"
    TOP_CITIES = "top10-cidades"
    TOP_CATEGORIES = "top10-categorias"


class CityRevenue(BaseModel):
    """Aggregate revenue of one city, rendered as BRL text."""

    city: str = Field(alias="cidade")
    revenue: str = Field(alias="faturamento")

    model_config = {"populate_by_name": True}


class CategoryRevenue(BaseModel):
    """Aggregate revenue of one activity category, rendered as BRL text."""

    category: str = Field(alias="categoria")
    revenue: str = Field(alias="faturamento")

    model_config = {"populate_by_name": True}


class _RankingResponse(BaseModel):
    processing_time: str = Field(alias="tempo_processamento", default="")
    data_source: str = Field(alias="fonte_dados", default="")

    model_config = {"populate_by_name": True}


class TopBusinessesResponse(_RankingResponse):
    """Response payload for GET /top10-faturamento."""

    businesses: list[BusinessRecord] = Field(alias="top_10_comercios", max_length=10)


class TopCitiesResponse(_RankingResponse):
    """Response payload for GET /top10-cidades."""

    cities: list[CityRevenue] = Field(alias="top_10_cidades", max_length=10)


class TopCategoriesResponse(_RankingResponse):
    """Response payload for GET /top10-categorias.

    May hold fewer than 10 entries when the dataset has fewer categories.
    """

    categories: list[CategoryRevenue] = Field(alias="top_10_categorias", max_length=10)


RankingResponse = Union[TopBusinessesResponse, TopCitiesResponse, TopCategoriesResponse]


class GenerateDataResponse(BaseModel):
    """Response payload for /gerar-dados."""

    message: str = Field(alias="mensagem")
    processing_time: str = Field(alias="tempo_processamento")
    total_records: int = Field(alias="registros_gerados", ge=0)

    model_config = {"populate_by_name": True}
