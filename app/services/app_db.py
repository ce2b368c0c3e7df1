"""Database client helpers for application services."""

from motor.motor_asyncio import AsyncIOMotorClient

from app.shared.config import custom_config
from app.shared.storage.mongo import get_mongo_client


def get_flc_mongo_client() -> AsyncIOMotorClient:
    """Get the MongoDB client for the catalog database (label `flc_primary`)."""
    return get_mongo_client(custom_config.get_mongo_label())
