from pydantic import BaseModel

from app.shared.config import config


class AppEnvironConfig(BaseModel):
    DEBUG: bool = config.get_bool("DEBUG", False)

    API_HOST: str = config.get("API_HOST", "0.0.0.0").strip()  # type: ignore
    API_PORT: int = int((config.get("API_PORT") or "").strip() or 8000)
    API_WORKERS: int = int((config.get("API_WORKERS") or "").strip() or 1)
    API_CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in (config.get("API_CORS_ORIGINS") or "*").split(",")
        if origin.strip()
    ]
    INTERNAL_API_KEY: str | None = (config.get("INTERNAL_API_KEY") or "").strip() or None

    # Rate limits (slowapi syntax)
    ADMIN_CLAIM_RATE_LIMIT: str = config.get("ADMIN_CLAIM_RATE_LIMIT", "5/minute").strip()  # type: ignore

    # Identity provider (GoTrue-style auth API)
    IDENTITY_URL: str = config.get("IDENTITY_URL", "http://localhost:9999").strip()  # type: ignore
    IDENTITY_ANON_KEY: str | None = (config.get("IDENTITY_ANON_KEY") or "").strip() or None
    IDENTITY_SERVICE_KEY: str | None = (config.get("IDENTITY_SERVICE_KEY") or "").strip() or None
    # When set, access tokens are verified locally (fast path) instead of per-request lookups
    IDENTITY_JWT_SECRET: str | None = (config.get("IDENTITY_JWT_SECRET") or "").strip() or None
    IDENTITY_JWT_AUDIENCE: str = config.get("IDENTITY_JWT_AUDIENCE", "authenticated").strip()  # type: ignore
    IDENTITY_TIMEOUT_SECONDS: float = float(
        (config.get("IDENTITY_TIMEOUT_SECONDS") or "").strip() or 10
    )
    IDENTITY_PAGE_SIZE: int = int((config.get("IDENTITY_PAGE_SIZE") or "").strip() or 200)
    # An is_admin claim older than this is re-checked against the identity provider
    ADMIN_CLAIM_MAX_AGE_SECONDS: int = int(
        (config.get("ADMIN_CLAIM_MAX_AGE_SECONDS") or "").strip() or 300
    )
    # A bootstrap claim whose holder never became admin can be taken over after this
    ADMIN_BOOTSTRAP_GRACE_SECONDS: int = int(
        (config.get("ADMIN_BOOTSTRAP_GRACE_SECONDS") or "").strip() or 120
    )

    # Object store (S3-compatible)
    STORAGE_ENDPOINT_URL: str | None = (config.get("STORAGE_ENDPOINT_URL") or "").strip() or None
    STORAGE_ACCESS_KEY_ID: str | None = (config.get("STORAGE_ACCESS_KEY_ID") or "").strip() or None
    STORAGE_SECRET_ACCESS_KEY: str | None = (
        config.get("STORAGE_SECRET_ACCESS_KEY") or ""
    ).strip() or None
    STORAGE_REGION: str = config.get("STORAGE_REGION", "auto").strip()  # type: ignore
    STORAGE_TIMEOUT_SECONDS: int = int((config.get("STORAGE_TIMEOUT_SECONDS") or "").strip() or 15)
    VIDEOS_BUCKET: str = config.get("VIDEOS_BUCKET", "yoga-videos").strip()  # type: ignore
    THUMBNAILS_BUCKET: str = config.get("THUMBNAILS_BUCKET", "yoga-thumbnails").strip()  # type: ignore
    VIDEOS_PUBLIC_URL: str = config.get("VIDEOS_PUBLIC_URL", "").strip()  # type: ignore
    THUMBNAILS_PUBLIC_URL: str = config.get("THUMBNAILS_PUBLIC_URL", "").strip()  # type: ignore

    # Upload ceilings in bytes
    THUMBNAIL_MAX_BYTES: int = int(
        (config.get("THUMBNAIL_MAX_BYTES") or "").strip() or 5 * 1024 * 1024
    )
    VIDEO_MAX_BYTES: int = int(
        (config.get("VIDEO_MAX_BYTES") or "").strip() or 2 * 1024 * 1024 * 1024
    )
    MEDIA_FOLDER_MIN_SLUG_LENGTH: int = int(
        (config.get("MEDIA_FOLDER_MIN_SLUG_LENGTH") or "").strip() or 3
    )

    # Media cleanup retries (worker)
    MEDIA_CLEANUP_MAX_ATTEMPTS: int = int(
        (config.get("MEDIA_CLEANUP_MAX_ATTEMPTS") or "").strip() or 10
    )
    MEDIA_CLEANUP_BATCH_SIZE: int = int((config.get("MEDIA_CLEANUP_BATCH_SIZE") or "").strip() or 50)

    # Subscription checkout (placeholder, no settlement)
    PRICE_ID_MONTHLY: str = config.get("PRICE_ID_MONTHLY", "price_monthly").strip()  # type: ignore
    PRICE_ID_YEARLY: str = config.get("PRICE_ID_YEARLY", "price_yearly").strip()  # type: ignore
    CHECKOUT_BASE_URL: str = config.get(
        "CHECKOUT_BASE_URL", "https://checkout.stripe.com/mock"
    ).strip()  # type: ignore

    # Live-state compare-and-swap retries
    LIVE_STATE_MAX_RETRIES: int = int((config.get("LIVE_STATE_MAX_RETRIES") or "").strip() or 3)


_app_environ_config = AppEnvironConfig()


def get_app_environ_config() -> AppEnvironConfig:
    return _app_environ_config
