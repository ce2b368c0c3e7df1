"""Application error types shared by domain services and API handlers."""

import inspect
from enum import Enum, IntEnum
from uuid import uuid4


class AppErrorCode(str, Enum):
    """Stable error codes surfaced in the API failure envelope."""

    # Unauthorized
    E_BAD_TOKEN = "E_BAD_TOKEN"
    # Forbidden
    E_ADMIN_REQUIRED = "E_ADMIN_REQUIRED"
    E_ADMIN_EXISTS = "E_ADMIN_EXISTS"
    E_FORBIDDEN = "E_FORBIDDEN"
    # Validation
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_INVALID_PARAMS = "E_INVALID_PARAMS"
    # Not found
    E_SESSION_NOT_FOUND = "E_SESSION_NOT_FOUND"
    E_CATEGORY_NOT_FOUND = "E_CATEGORY_NOT_FOUND"
    E_THEME_NOT_FOUND = "E_THEME_NOT_FOUND"
    E_USER_NOT_FOUND = "E_USER_NOT_FOUND"
    # Conflict
    E_CONFLICT = "E_CONFLICT"
    E_LIVE_STATE_CONFLICT = "E_LIVE_STATE_CONFLICT"
    # Upstream platform failures
    E_UPSTREAM_ERROR = "E_UPSTREAM_ERROR"
    E_UPSTREAM_TIMEOUT = "E_UPSTREAM_TIMEOUT"
    E_INTERNAL_ERROR = "E_INTERNAL_ERROR"

    def __str__(self) -> str:
        return self.value


class HttpStatusCode(IntEnum):
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    GATEWAY_TIMEOUT = 504


class AppError(Exception):
    """Domain error carrying an API error code, message and HTTP status.

    The raising call site is recorded so the exception handler can log where
    the error originated rather than where it was caught.
    """

    def __init__(
        self,
        errcode: AppErrorCode | str,
        errmesg: str,
        status_code: HttpStatusCode | int = HttpStatusCode.BAD_REQUEST,
    ):
        self.errcode = str(errcode)
        self.errmesg = errmesg
        self.status_code = int(status_code)
        self.erresid = uuid4().hex[:10]
        self.caller_info = _caller_info()
        super().__init__(f"{self.errcode}: {errmesg}")


def _caller_info() -> str:
    frame = inspect.currentframe()
    caller = frame.f_back if frame else None
    # Skip frames inside this module (AppError.__init__ and the helper constructors)
    while caller is not None and (
        caller.f_globals.get("__name__") == __name__ or caller.f_code.co_name == "__init__"
    ):
        caller = caller.f_back
    if caller is None:
        return "unknown"
    module = caller.f_globals.get("__name__", caller.f_code.co_filename)
    return f"{module}:{caller.f_code.co_name}:{caller.f_lineno}"


def unauthorized(errmesg: str = "Invalid token") -> AppError:
    return AppError(AppErrorCode.E_BAD_TOKEN, errmesg, HttpStatusCode.UNAUTHORIZED)


def forbidden(
    errmesg: str = "Access denied", errcode: AppErrorCode = AppErrorCode.E_FORBIDDEN
) -> AppError:
    return AppError(errcode, errmesg, HttpStatusCode.FORBIDDEN)


def invalid_request(errmesg: str) -> AppError:
    return AppError(AppErrorCode.E_INVALID_REQUEST, errmesg, HttpStatusCode.BAD_REQUEST)


def upstream_error(errmesg: str, *, timeout: bool = False) -> AppError:
    if timeout:
        return AppError(AppErrorCode.E_UPSTREAM_TIMEOUT, errmesg, HttpStatusCode.GATEWAY_TIMEOUT)
    return AppError(AppErrorCode.E_UPSTREAM_ERROR, errmesg, HttpStatusCode.BAD_GATEWAY)


def not_found(errcode: AppErrorCode, errmesg: str) -> AppError:
    return AppError(errcode, errmesg, HttpStatusCode.NOT_FOUND)


def conflict(errmesg: str, errcode: AppErrorCode = AppErrorCode.E_CONFLICT) -> AppError:
    return AppError(errcode, errmesg, HttpStatusCode.CONFLICT)
