import time
import traceback
import uuid
from contextlib import asynccontextmanager
from os import environ

import logfire
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from granian import Granian
from loguru import logger
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.v1.errors import app_error_handler
from app.app_config import get_app_environ_config
from app.schemas.init_schemas import init_schema
from app.services.api_rate_limiter import limiter, rate_limit_exceeded_handler
from app.shared.api.errors import E_INTERNAL
from app.shared.api.utils import (
    api_failure,
    init_logger,
    load_routes,
    validation_exception_handler,
)
from app.shared.config import config
from app.shared.storage.mongo import get_mongo_manager
from app.utils.app_errors import AppError

app_config = get_app_environ_config()


class HTTPLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore
        start_time = time.time()
        request_id = str(uuid.uuid4())[:8]

        logger.info(f"[{request_id}] {request.method} {request.url.path}")

        try:
            response = await call_next(request)

            process_time = (time.time() - start_time) * 1000

            logger.info(
                f"[{request_id}] {request.method} {request.url.path} - "
                f"Status: {response.status_code} - "
                f"Duration: {process_time:.2f}ms"
            )

            return response

        except Exception as exc:
            process_time = (time.time() - start_time) * 1000

            logger.error(
                f"[{request_id}] Unhandled exception in {request.method} {request.url.path} - "
                f"Duration: {process_time:.2f}ms - "
                f"Error: {type(exc).__name__}: {exc}\n"
                f"Traceback:\n{traceback.format_exc()}"
            )

            failure = api_failure(
                errcode=E_INTERNAL,
                errmesg=f"Internal server error (request_id: {request_id})",
            )
            return ORJSONResponse(
                status_code=500,
                content=failure.model_dump(),
            )


@asynccontextmanager
async def lifespan(server: FastAPI):
    init_logger()

    logger.info("Application startup...")

    # Initialize MongoDB schemas and Beanie ODM
    await init_schema()

    load_routes(server, "/api/v1")

    if config.get_bool("LOGFIRE_ENABLE"):
        logger.info("Logfire initializing")

        logfire.configure(
            token=config.get("LOGFIRE_TOKEN"),
            service_name="flowcast-be",
            service_version=environ.get("BUILD_COMMIT") or "dev",
        )

        logger.info("Logfire instrument fastapi")
        logfire.instrument_fastapi(server, capture_headers=False)

        logger.info("Logfire instrument mongo")
        logfire.instrument_pymongo(capture_statement=app_config.DEBUG)

        logger.info("Logfire instrument httpx")
        logfire.instrument_httpx()

    yield

    logger.info("Application shutdown...")

    get_mongo_manager().close_all()


app = FastAPI(
    version="1.0",
    title="FlowCast API",
    docs_url="/docs" if app_config.DEBUG else None,
    redoc_url=None,
    openapi_url="/openapi.json" if app_config.DEBUG else None,
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

app.state.limiter = limiter

app.add_middleware(HTTPLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,  # type: ignore
    allow_origins=app_config.API_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
app.add_exception_handler(AppError, app_error_handler)  # type: ignore
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore


def build_granian_kwargs():
    kwargs = {
        "interface": "asgi",
        "address": app_config.API_HOST,
        "port": app_config.API_PORT,
        "workers": app_config.API_WORKERS,
        "reload": app_config.DEBUG,
    }

    return kwargs


if __name__ == "__main__":
    granian_kwargs = build_granian_kwargs()
    Granian("app.main:app", **granian_kwargs).serve()
