"""Beanie initialization for ODM."""

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .admin_claim import AdminClaim
from .category import Category
from .favorite import Favorite
from .live_state import LiveState
from .media_cleanup import MediaCleanupTask
from .profile import Profile
from .session import Session
from .subscription import Subscription
from .theme import Theme
from .watch_history import WatchHistory

DOCUMENT_MODELS = [
    Session,
    Category,
    Theme,
    Favorite,
    WatchHistory,
    Profile,
    Subscription,
    AdminClaim,
    LiveState,
    MediaCleanupTask,
]


async def init_beanie_odm(
    mongo_client: AsyncIOMotorClient | AsyncIOMotorDatabase,
    database_name: str | None = None,
) -> None:
    """
    Initialize Beanie ODM with all document models.

    Args:
        mongo_client: Motor client or database instance
        database_name: Database name (only needed if passing client)
    """
    if isinstance(mongo_client, AsyncIOMotorClient):
        if not database_name:
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg="database_name required when passing AsyncIOMotorClient",
                status_code=HttpStatusCode.BAD_REQUEST,
            )
        database = mongo_client[database_name]
    else:
        database = mongo_client

    await init_beanie(
        database=database,  # type: ignore[arg-type]
        document_models=DOCUMENT_MODELS,  # type: ignore[arg-type]
    )


__all__ = ["DOCUMENT_MODELS", "init_beanie_odm"]
