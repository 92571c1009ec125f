"""Synthetic business record generator.

Used to seed the record store on first start and to grow it on demand
(/gerar-dados). Revenue bands follow the company size tier; costs and taxes
are drawn as fractions of revenue and the net margin is what is left.

Writes go through RecordStore.save (atomic replace) and are serialized by a
process-wide lock, so ranking loads never observe a half-written file.
"""

from __future__ import annotations

from datetime import date, timedelta
import logging
import random
import threading

from comercios.schemas import (
    Activity,
    BusinessRecord,
    Coordinates,
    Financials,
    Location,
)
from comercios.stores.records import RecordStore

logger = logging.getLogger("uvicorn.error")


# ============================================================
# Reference data
# ============================================================

ACTIVITIES = [
    Activity(id="FOOD001", category="Alimentação", subcategory="Padaria/Confeitaria"),
    Activity(id="FOOD002", category="Alimentação", subcategory="Restaurante/Lanchonete"),
    Activity(id="RET001", category="Varejo", subcategory="Loja de Roupas"),
    Activity(id="RET002", category="Varejo", subcategory="Eletrônicos"),
    Activity(id="SERV001", category="Serviços", subcategory="Consultoria"),
    Activity(id="SERV002", category="Serviços", subcategory="Beleza/Estética"),
    Activity(id="AUTO001", category="Automotivo", subcategory="Oficina Mecânica"),
    Activity(id="HEAL001", category="Saúde", subcategory="Farmácia"),
]

# Company size tier -> gross annual revenue band (BRL)
REVENUE_BANDS: dict[str, tuple[float, float]] = {
    "MEI": (60_000, 81_000),
    "Pequena": (200_000, 4_800_000),
    "Média": (5_000_000, 35_000_000),
    "Grande": (10_000_000, 35_000_000),
}

# 9 in 10 businesses are active
OPERATIONAL_STATUSES = ["Ativo"] * 9 + ["Fechado"]

CITY_COUNT = 100
FISCAL_YEAR = 2024

# Bounding box roughly covering the state of São Paulo
LATITUDE_RANGE = (-23.8, -22.5)
LONGITUDE_RANGE = (-47.0, -43.0)

_write_lock = threading.Lock()


# ============================================================
# Generation
# ============================================================


def generate_business(
    business_id: int,
    *,
    rng: random.Random | None = None,
    today: date | None = None,
) -> BusinessRecord:
    """Generate one synthetic business record.

    Args:
        business_id: Value for `id_comercio`.
        rng: Random source (a fresh `random.Random()` when None).
        today: Reference date for `data_abertura` (today when None).
    """
    rng = rng or random.Random()
    today = today or date.today()

    activity = rng.choice(ACTIVITIES)
    size = rng.choice(list(REVENUE_BANDS))
    low, high = REVENUE_BANDS[size]

    revenue = rng.uniform(low, high)
    costs = revenue * rng.uniform(0.4, 0.6)
    taxes = revenue * rng.uniform(0.05, 0.15)

    return BusinessRecord(
        business_id=business_id,
        trade_name=f"Comercio {business_id}",
        activity=activity,
        financials=Financials(
            gross_annual_revenue=revenue,
            annual_operating_costs=costs,
            annual_taxes_paid=taxes,
            net_margin=revenue - costs - taxes,
            fiscal_year=FISCAL_YEAR,
        ),
        location=Location(
            address=f"Rua {business_id}, {rng.randrange(1000)}",
            city=f"Cidade {rng.randrange(CITY_COUNT)}",
            state="SP",
            postal_code=f"{rng.randrange(99999):05d}-000",
            coordinates=Coordinates(
                latitude=rng.uniform(*LATITUDE_RANGE),
                longitude=rng.uniform(*LONGITUDE_RANGE),
            ),
            region="Sudeste",
        ),
        company_size=size,
        opened_on=_opening_date(today, rng).isoformat(),
        operational_status=rng.choice(OPERATIONAL_STATUSES),
    )


def generate_businesses(
    start_id: int,
    count: int,
    *,
    rng: random.Random | None = None,
    today: date | None = None,
) -> list[BusinessRecord]:
    """Generate `count` records with consecutive ids starting at `start_id`."""
    rng = rng or random.Random()
    today = today or date.today()
    return [generate_business(start_id + i, rng=rng, today=today) for i in range(count)]


def _opening_date(today: date, rng: random.Random) -> date:
    """Up to ~10 years, 11 months and 27 days before `today`."""
    months_back = rng.randrange(10) * 12 + rng.randrange(12)
    month_index = today.year * 12 + (today.month - 1) - months_back
    year, month = divmod(month_index, 12)
    shifted = date(year, month + 1, min(today.day, 28))
    return shifted - timedelta(days=rng.randrange(28))


# ============================================================
# Store operations
# ============================================================


def append_generated(
    store: RecordStore,
    count: int,
    *,
    rng: random.Random | None = None,
) -> int:
    """Append `count` generated records to the store.

    New ids continue after the current collection size. A missing store is
    treated as empty; an unreadable or corrupt one is an error.

    Returns:
        Total number of records in the store after the append.

    Raises:
        StoreUnavailable: Store cannot be read or written.
        StoreCorrupt: Existing content does not decode.
    """
    with _write_lock:
        existing = store.load() if store.exists() else []
        new_records = generate_businesses(len(existing) + 1, count, rng=rng)
        records = existing + new_records
        store.save(records)

    logger.info(f"Generated {count} records, store now holds {len(records)}")
    return len(records)


def ensure_data_file(store: RecordStore, count: int) -> bool:
    """Create the store with `count` generated records if it does not exist.

    Returns:
        True if a new file was written, False if it already existed.
    """
    logger.info(f"Checking record store '{store.path}'...")
    with _write_lock:
        if store.exists():
            logger.info("Record store already exists. Nothing to do.")
            return False

        logger.info(f"Record store not found. Generating {count} records...")
        store.save(generate_businesses(1, count))

    logger.info(f"Record store created with {count} records")
    return True
