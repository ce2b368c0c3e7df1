from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loguru import logger

from app.schemas.init_schemas import init_schema
from app.shared.api.utils import init_logger
from app.shared.config import config, custom_config
from app.shared.storage.mongo import get_mongo_manager

SVC_KEY = custom_config.get_service_code()

QUEUE_KEY = f"{SVC_KEY}:streaq"

queue_url = config.get_redis_url(custom_config.get_redis_queue_label())


@asynccontextmanager
async def base_lifespan(name: str) -> AsyncIterator[None]:
    """Shared worker lifespan: logging and Beanie on the catalog database."""
    init_logger()
    logger.info("Starting {} worker", name)
    await init_schema()
    logger.info("{} worker initialized", name)

    try:
        yield
    finally:
        logger.info("{} worker stopped", name)
        get_mongo_manager().close_all()
