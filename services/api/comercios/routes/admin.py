"""Admin endpoints for dataset management.

GET|POST /gerar-dados - Append a batch of synthetic records to the store.

In production, consider adding authentication (API key or admin token).
"""

import asyncio
import logging
import time

from fastapi import APIRouter, Depends, Request

from comercios.schemas import GenerateDataResponse
from comercios.services.formatting import format_elapsed
from comercios.services.generator import append_generated
from comercios.settings import Settings
from comercios.stores.records import RecordStore

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.api_route("/gerar-dados", methods=["GET", "POST"], response_model=GenerateDataResponse)
async def generate_data(
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_app_settings),
) -> GenerateDataResponse:
    """Append `generator_batch_size` synthetic records to the record store.

    Returns:
        Confirmation message, elapsed time and the new total record count.
    """
    logger.info("Endpoint /gerar-dados called")
    started = time.perf_counter()

    count = settings.generator_batch_size
    total = await asyncio.to_thread(append_generated, store, count)

    return GenerateDataResponse(
        message=f"{count} novos registros adicionados com sucesso!",
        processing_time=format_elapsed(time.perf_counter() - started),
        total_records=total,
    )
