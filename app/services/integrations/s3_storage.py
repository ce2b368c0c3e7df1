"""S3-compatible object store service (R2, MinIO, AWS).

Media for a session lives under a folder-style prefix named after its slug:

    <slug>/thumbnail.<ext>   (thumbnails bucket)
    <slug>/video.<ext>       (videos bucket)

Usage:
    from app.services.integrations.s3_storage import get_s3_service

    s3 = get_s3_service()
    url = await s3.put_object(bucket, "my-class-1712/thumbnail.jpg", fileobj, "image/jpeg")
    removed = await s3.delete_prefix(bucket, "my-class-1712/")
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import BinaryIO

import aioboto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    ReadTimeoutError,
)
from loguru import logger

from app.app_config import get_app_environ_config
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode, upstream_error

# S3 DeleteObjects accepts at most 1000 keys per call
DELETE_BATCH_SIZE = 1000


class S3Service:
    """Async wrapper around the handful of S3 calls the media pipeline needs."""

    def __init__(
        self,
        endpoint_url: str | None,
        access_key_id: str | None,
        secret_access_key: str | None,
        region: str = "auto",
        timeout: int = 15,
        public_urls: dict[str, str] | None = None,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._region = region
        self._timeout = timeout
        self._public_urls = {k: v.rstrip("/") for k, v in (public_urls or {}).items() if v}
        self._session: aioboto3.Session | None = None

    def _get_session(self) -> aioboto3.Session:
        """Get or create aioboto3 session."""
        if self._session is None:
            if not self._access_key_id or not self._secret_access_key:
                raise AppError(
                    errcode=AppErrorCode.E_INTERNAL_ERROR,
                    errmesg="Object store credentials not configured",
                    status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
                )

            self._session = aioboto3.Session(
                aws_access_key_id=self._access_key_id,
                aws_secret_access_key=self._secret_access_key,
                region_name=self._region,
            )
            logger.info("S3 session created endpoint={} region={}", self._endpoint_url, self._region)

        return self._session

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator:  # type: ignore[misc]
        """Get async S3 client context manager, translating store failures to AppError."""
        session = self._get_session()
        boto_config = BotoConfig(
            connect_timeout=self._timeout,
            read_timeout=self._timeout,
            retries={"max_attempts": 1},
        )
        try:
            async with session.client(  # type: ignore[attr-defined]
                "s3", endpoint_url=self._endpoint_url, config=boto_config
            ) as client:
                yield client
        except (ConnectTimeoutError, ReadTimeoutError) as e:
            logger.warning("object store timed out: {}", e)
            raise upstream_error(f"Object store timed out: {e}", timeout=True) from e
        except (ClientError, BotoCoreError) as e:
            logger.warning("object store call failed: {}", e)
            raise upstream_error(f"Object store error: {e}") from e

    def public_url(self, bucket: str, key: str) -> str:
        base = self._public_urls.get(bucket)
        if base:
            return f"{base}/{key}"
        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{bucket}/{key}"
        return f"https://{bucket}.s3.{self._region}.amazonaws.com/{key}"

    async def put_object(
        self,
        bucket: str,
        key: str,
        body: bytes | BinaryIO,
        content_type: str,
    ) -> str:
        """Store an object (overwriting any existing one) and return its public URL."""
        extra_args = {"ContentType": content_type}

        async with self._get_client() as client:
            if isinstance(body, bytes):
                await client.put_object(Bucket=bucket, Key=key, Body=body, **extra_args)
            else:
                await client.upload_fileobj(body, bucket, key, ExtraArgs=extra_args)

        url = self.public_url(bucket, key)
        logger.info("Uploaded object {}/{} -> {}", bucket, key, url)
        return url

    async def delete_object(self, bucket: str, key: str) -> None:
        async with self._get_client() as client:
            await client.delete_object(Bucket=bucket, Key=key)
        logger.info("Deleted object {}/{}", bucket, key)

    async def list_keys(self, bucket: str, prefix: str) -> list[str]:
        keys: list[str] = []
        async with self._get_client() as client:
            paginator = client.get_paginator("list_objects_v2")
            async for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
                keys.extend(obj["Key"] for obj in page.get("Contents", []))
        return keys

    async def delete_prefix(self, bucket: str, prefix: str) -> int:
        """Delete every object whose key starts with `prefix`. Returns the count removed."""
        keys = await self.list_keys(bucket, prefix)
        if not keys:
            logger.debug("No objects under {}/{}", bucket, prefix)
            return 0

        async with self._get_client() as client:
            for start in range(0, len(keys), DELETE_BATCH_SIZE):
                batch = keys[start : start + DELETE_BATCH_SIZE]
                resp = await client.delete_objects(
                    Bucket=bucket,
                    Delete={"Objects": [{"Key": k} for k in batch], "Quiet": True},
                )
                errors = resp.get("Errors") or []
                if errors:
                    first = errors[0]
                    raise upstream_error(
                        f"Failed to delete {len(errors)} objects under {bucket}/{prefix}: "
                        f"{first.get('Key')} {first.get('Code')} {first.get('Message')}"
                    )

        logger.info("Deleted {} objects under {}/{}", len(keys), bucket, prefix)
        return len(keys)


@lru_cache
def get_s3_service() -> S3Service:
    cfg = get_app_environ_config()
    return S3Service(
        endpoint_url=cfg.STORAGE_ENDPOINT_URL,
        access_key_id=cfg.STORAGE_ACCESS_KEY_ID,
        secret_access_key=cfg.STORAGE_SECRET_ACCESS_KEY,
        region=cfg.STORAGE_REGION,
        timeout=cfg.STORAGE_TIMEOUT_SECONDS,
        public_urls={
            cfg.VIDEOS_BUCKET: cfg.VIDEOS_PUBLIC_URL,
            cfg.THUMBNAILS_BUCKET: cfg.THUMBNAILS_PUBLIC_URL,
        },
    )
