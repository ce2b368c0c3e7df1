"""Process-wide domain service instances built from AppEnvironConfig.

Shared by the API routers and the workers.
"""

from functools import lru_cache

from app.app_config import get_app_environ_config
from app.domain.auth.admin_domain import AdminService
from app.domain.billing.subscription_domain import SubscriptionService
from app.domain.catalog.session.session_domain import SessionService
from app.domain.media._cleanup import MediaCleanupService
from app.domain.media.upload_domain import UploadService
from app.services.integrations.identity_service import get_identity_service
from app.services.integrations.s3_storage import get_s3_service


@lru_cache
def get_upload_service() -> UploadService:
    cfg = get_app_environ_config()
    return UploadService(
        get_s3_service(),
        videos_bucket=cfg.VIDEOS_BUCKET,
        thumbnails_bucket=cfg.THUMBNAILS_BUCKET,
        thumbnail_max_bytes=cfg.THUMBNAIL_MAX_BYTES,
        video_max_bytes=cfg.VIDEO_MAX_BYTES,
        min_folder_slug_length=cfg.MEDIA_FOLDER_MIN_SLUG_LENGTH,
    )


@lru_cache
def get_media_cleanup_service() -> MediaCleanupService:
    return MediaCleanupService(
        get_upload_service(), max_attempts=get_app_environ_config().MEDIA_CLEANUP_MAX_ATTEMPTS
    )


@lru_cache
def get_session_service() -> SessionService:
    return SessionService(
        cleanup=get_media_cleanup_service(),
        live_state_max_retries=get_app_environ_config().LIVE_STATE_MAX_RETRIES,
    )


@lru_cache
def get_admin_service() -> AdminService:
    return AdminService(
        get_identity_service(),
        bootstrap_grace_seconds=get_app_environ_config().ADMIN_BOOTSTRAP_GRACE_SECONDS,
    )


@lru_cache
def get_subscription_service() -> SubscriptionService:
    cfg = get_app_environ_config()
    return SubscriptionService(
        price_ids={"monthly": cfg.PRICE_ID_MONTHLY, "yearly": cfg.PRICE_ID_YEARLY},
        checkout_base_url=cfg.CHECKOUT_BASE_URL,
    )
