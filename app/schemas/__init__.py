"""Beanie ODM schemas for MongoDB collections."""

from .admin_claim import AdminClaim
from .category import Category
from .favorite import Favorite
from .init import init_beanie_odm
from .live_state import LiveState
from .media_cleanup import CleanupStatus, MediaCleanupTask
from .profile import Profile
from .session import Difficulty, Session
from .subscription import Subscription, SubscriptionStatus
from .theme import Theme
from .watch_history import WatchHistory

__all__ = [
    "AdminClaim",
    "Category",
    "CleanupStatus",
    "Difficulty",
    "Favorite",
    "LiveState",
    "MediaCleanupTask",
    "Profile",
    "Session",
    "Subscription",
    "SubscriptionStatus",
    "Theme",
    "WatchHistory",
    "init_beanie_odm",
]
