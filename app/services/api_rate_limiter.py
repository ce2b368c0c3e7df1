from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.app_config import get_app_environ_config
from app.shared.api.errors import E_RATE_LIMITED
from app.shared.api.utils import api_failure, make_response
from app.shared.config import config

# memory:// by default; a redis:// URI shares counters across API workers
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=config.get("RATE_LIMIT_STORAGE_URI", "memory://"),
)


def admin_claim_rate_limit():
    return limiter.limit(get_app_environ_config().ADMIN_CLAIM_RATE_LIMIT)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    failure = api_failure(E_RATE_LIMITED, f"Rate limit exceeded: {exc.detail}")
    return make_response(failure, status_code=429)
