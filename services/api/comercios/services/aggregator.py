"""Ranking aggregations over the full business record collection.

Rankings:
1. Top businesses by gross annual revenue
2. Top cities by summed revenue
3. Top activity categories by summed revenue

All functions are pure: no shared state, input is never mutated.
Sorting is descending by revenue and stable, so ties keep input order
(records) or first-seen order (groups).

Short collections:
- Businesses and cities require at least RANKING_SIZE entries
  (InsufficientData otherwise).
- Categories return whatever exists when there are fewer than RANKING_SIZE.
  This asymmetry is intentional product behavior.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from comercios.schemas import BusinessRecord

RANKING_SIZE = 10


class InsufficientData(RuntimeError):
    pass


@dataclass(frozen=True)
class GroupRevenue:
    """Summed revenue of every record sharing `key`."""

    key: str
    total: float


def revenue_by(
    records: Iterable[BusinessRecord],
    key: Callable[[BusinessRecord], str],
) -> list[GroupRevenue]:
    """Sum revenue per group, sorted by total DESC.

    Args:
        records: Record collection.
        key: Grouping key extractor (exact string match).

    Returns:
        Every group, highest total first.
    """
    totals: dict[str, float] = {}
    for record in records:
        group = key(record)
        totals[group] = totals.get(group, 0.0) + record.revenue

    groups = [GroupRevenue(key=k, total=v) for k, v in totals.items()]
    groups.sort(key=lambda g: g.total, reverse=True)
    return groups


def top_businesses_by_revenue(records: list[BusinessRecord]) -> list[BusinessRecord]:
    """Top RANKING_SIZE records by gross annual revenue DESC.

    Raises:
        InsufficientData: Fewer than RANKING_SIZE records.
    """
    if len(records) < RANKING_SIZE:
        raise InsufficientData(
            f"top {RANKING_SIZE} faturamento requer ao menos {RANKING_SIZE} registros, "
            f"encontrados {len(records)}"
        )
    ranked = sorted(records, key=lambda r: r.revenue, reverse=True)
    return ranked[:RANKING_SIZE]


def top_cities_by_revenue(records: list[BusinessRecord]) -> list[GroupRevenue]:
    """Top RANKING_SIZE cities by summed revenue DESC.

    Raises:
        InsufficientData: Fewer than RANKING_SIZE distinct cities.
    """
    cities = revenue_by(records, lambda r: r.location.city)
    if len(cities) < RANKING_SIZE:
        raise InsufficientData(
            f"top {RANKING_SIZE} cidades requer ao menos {RANKING_SIZE} cidades distintas, "
            f"encontradas {len(cities)}"
        )
    return cities[:RANKING_SIZE]


def top_categories_by_revenue(records: list[BusinessRecord]) -> list[GroupRevenue]:
    """Top RANKING_SIZE activity categories by summed revenue DESC.

    Returns all categories when there are fewer than RANKING_SIZE.
    """
    categories = revenue_by(records, lambda r: r.activity.category)
    return categories[:RANKING_SIZE]
