"""Streaq worker retrying media deletion for deleted sessions."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from loguru import logger
from streaq import Worker

from app.app_config import get_app_environ_config
from app.services.app_services import get_media_cleanup_service
from app.workers.base import QUEUE_KEY, base_lifespan, queue_url

QUEUE_KEY_MEDIA_CLEANUP = f"{QUEUE_KEY}:media-cleanup"


@asynccontextmanager
async def media_cleanup_lifespan() -> AsyncIterator[None]:
    async with base_lifespan("media cleanup"):
        yield


worker: Worker[None] = Worker(
    redis_url=queue_url,
    lifespan=media_cleanup_lifespan,  # type: ignore[arg-type]
    queue_name=QUEUE_KEY_MEDIA_CLEANUP,
)


async def run_cleanup_pass() -> dict[str, Any]:
    """Retry one batch of pending cleanup records."""
    batch_size = get_app_environ_config().MEDIA_CLEANUP_BATCH_SIZE
    result = await get_media_cleanup_service().retry_pending(batch_size)
    if result.failed:
        logger.warning("media cleanup pass left {} record(s) failing", result.failed)
    return result.model_dump()


@worker.cron("*/5 * * * *")
async def retry_media_cleanup() -> dict[str, Any]:
    return await run_cleanup_pass()
