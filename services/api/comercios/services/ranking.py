"""Ranking service for the Top-10 analytics views.

Flow per request:
1. Check the ranking cache (skipped when the caller forces a refresh)
2. On miss, join the in-flight recompute for that kind or start one
3. Load the record store and aggregate in a worker thread, bounded by a timeout
4. Write the cache, hand the result to every waiter
5. Stamp elapsed time and provenance ("Cache" / "Processamento ao Vivo")

Single-flight:
- At most one recompute per RankingKind runs at a time
- The recompute runs as its own task; every request for that kind (the one
  that started it included, forced refreshes too) awaits it through a shield,
  so a cancelled request never cancels or fails the shared run
- The task writes the cache before it completes, so a request arriving
  afterwards sees a cache hit
- Failures (store errors, short datasets, timeout) reach every waiter as
  ComputationFailed and leave the cache untouched
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import partial
import logging
import time

from comercios.schemas import (
    BusinessRecord,
    CategoryRevenue,
    CityRevenue,
    RankingKind,
    RankingResponse,
    TopBusinessesResponse,
    TopCategoriesResponse,
    TopCitiesResponse,
)
from comercios.services.aggregator import (
    top_businesses_by_revenue,
    top_categories_by_revenue,
    top_cities_by_revenue,
)
from comercios.services.formatting import format_brl, format_elapsed
from comercios.stores.cache import RankingCache

logger = logging.getLogger("uvicorn.error")

SOURCE_CACHE = "Cache"
SOURCE_LIVE = "Processamento ao Vivo"

DEFAULT_RECOMPUTE_TIMEOUT = 5.0


class ComputationFailed(RuntimeError):
    pass


# ============================================================
# Response builders (records -> typed payload per kind)
# ============================================================


def build_top_revenue(records: list[BusinessRecord]) -> TopBusinessesResponse:
    return TopBusinessesResponse(businesses=top_businesses_by_revenue(records))


def build_top_cities(records: list[BusinessRecord]) -> TopCitiesResponse:
    cities = [
        CityRevenue(city=g.key, revenue=format_brl(g.total))
        for g in top_cities_by_revenue(records)
    ]
    return TopCitiesResponse(cities=cities)


def build_top_categories(records: list[BusinessRecord]) -> TopCategoriesResponse:
    categories = [
        CategoryRevenue(category=g.key, revenue=format_brl(g.total))
        for g in top_categories_by_revenue(records)
    ]
    return TopCategoriesResponse(categories=categories)


BUILDERS: dict[RankingKind, Callable[[list[BusinessRecord]], RankingResponse]] = {
    RankingKind.TOP_REVENUE: build_top_revenue,
    RankingKind.TOP_CITIES: build_top_cities,
    RankingKind.TOP_CATEGORIES: build_top_categories,
}


# ============================================================
# Orchestrator
# ============================================================


class RankingService:
    """Serves rankings from cache or from a single-flight recompute.

    Args:
        cache: Ranking cache shared by every request of the process.
        load_records: Blocking loader returning the full record collection.
        timeout_seconds: Upper bound for one load + aggregate run.
        clock: Monotonic clock used for cache expiry.
    """

    def __init__(
        self,
        cache: RankingCache,
        load_records: Callable[[], list[BusinessRecord]],
        *,
        timeout_seconds: float = DEFAULT_RECOMPUTE_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cache = cache
        self.timeout_seconds = timeout_seconds
        self._load_records = load_records
        self._clock = clock
        self._in_flight: dict[RankingKind, asyncio.Task[RankingResponse]] = {}

    async def get_ranking(self, kind: RankingKind, *, force_refresh: bool = False) -> RankingResponse:
        """Get the ranking for `kind`, stamped with elapsed time and provenance.

        Args:
            kind: Which ranking to serve.
            force_refresh: Skip the cache read and recompute.

        Returns:
            The typed response payload for `kind`.

        Raises:
            ComputationFailed: Load or aggregation failed or timed out.
        """
        started = time.perf_counter()

        if not force_refresh:
            cached = self.cache.try_read(kind, self._clock())
            if cached is not None:
                logger.info(f"Serving from cache: /{kind.value}")
                return _stamp(cached, started, SOURCE_CACHE)
            logger.info(f"Cache miss: /{kind.value}, computing...")
        else:
            logger.info(f"Refresh requested: /{kind.value}, computing...")

        result = await self._recompute(kind)
        return _stamp(result, started, SOURCE_LIVE)

    async def _recompute(self, kind: RankingKind) -> RankingResponse:
        task = self._in_flight.get(kind)
        if task is None or task.done():
            task = asyncio.ensure_future(self._run(kind))
            self._in_flight[kind] = task
            task.add_done_callback(partial(self._clear_in_flight, kind))
        else:
            logger.info(f"Joining in-flight recompute: /{kind.value}")

        try:
            # Shield so a cancelled caller does not cancel the shared run.
            return await asyncio.shield(task)
        except ComputationFailed as e:
            raise ComputationFailed(str(e)) from e

    async def _run(self, kind: RankingKind) -> RankingResponse:
        """Load + aggregate off the loop, bounded by the timeout, then write the cache."""
        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(self._compute, kind),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Recompute timed out: /{kind.value} after {self.timeout_seconds:g}s")
            raise ComputationFailed(
                f"tempo limite de {self.timeout_seconds:g}s excedido ao calcular /{kind.value}"
            ) from e
        except Exception as e:
            logger.error(f"Recompute failed: /{kind.value}: {e}")
            raise ComputationFailed(f"erro ao calcular /{kind.value}: {e}") from e

        self.cache.write(kind, result, self._clock())
        return result

    def _clear_in_flight(self, kind: RankingKind, task: asyncio.Task[RankingResponse]) -> None:
        if self._in_flight.get(kind) is task:
            del self._in_flight[kind]

    def _compute(self, kind: RankingKind) -> RankingResponse:
        """Load + aggregate. Runs in a worker thread."""
        started = time.perf_counter()
        records = self._load_records()
        result = BUILDERS[kind](records)
        logger.info(
            f"Computed /{kind.value} from {len(records)} records "
            f"in {format_elapsed(time.perf_counter() - started)}"
        )
        return result


def _stamp(result: RankingResponse, started: float, source: str) -> RankingResponse:
    return result.model_copy(
        update={
            "processing_time": format_elapsed(time.perf_counter() - started),
            "data_source": source,
        }
    )
