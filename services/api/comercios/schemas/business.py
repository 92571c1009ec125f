"""Business record schemas.

Field names are English; aliases are the Portuguese keys used by the
`dados_comercios.json` store and echoed back by `/top10-faturamento`.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Activity(_Record):
    """Line of business (ramo de atividade)."""

    id: str
    category: str = Field(alias="categoria")
    subcategory: str = Field(alias="subcategoria")


class Financials(_Record):
    """Yearly financial block. Fields are independent; nothing is derived here."""

    gross_annual_revenue: float = Field(alias="faturamento_anual_bruto")
    annual_operating_costs: float = Field(alias="custos_operacionais_anual")
    annual_taxes_paid: float = Field(alias="imposto_total_pago_anual")
    net_margin: float = Field(alias="margem_lucro_liquida")
    fiscal_year: int = Field(alias="ano_fiscal")


class Coordinates(_Record):
    latitude: float
    longitude: float


class Location(_Record):
    address: str = Field(alias="endereco")
    city: str = Field(alias="cidade")
    state: str = Field(alias="estado")
    postal_code: str = Field(alias="cep")
    coordinates: Coordinates = Field(alias="coordenadas")
    region: str = Field(alias="regiao_geografica")


class BusinessRecord(_Record):
    """A single business (comércio) as stored in the record file."""

    business_id: int = Field(alias="id_comercio")
    trade_name: str = Field(alias="nome_fantasia")
    activity: Activity = Field(alias="ramo_atividade")
    financials: Financials = Field(alias="dados_financeiros")
    location: Location = Field(alias="localizacao")
    company_size: str = Field(alias="porte_empresa")
    opened_on: str = Field(alias="data_abertura")
    operational_status: str = Field(alias="status_operacional")

    @property
    def revenue(self) -> float:
        """Gross annual revenue, the sort/aggregation key for every ranking."""
        return self.financials.gross_annual_revenue
