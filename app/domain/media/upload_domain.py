"""Upload validation and media folder deletion.

Objects for a session live at `<slug>/thumbnail.<ext>` and `<slug>/video.<ext>`,
so re-uploading overwrites instead of accumulating.
"""

import os
import re
from typing import BinaryIO

from loguru import logger

from app.services.integrations.s3_storage import S3Service
from app.utils.app_errors import invalid_request

from .upload_models import (
    ALLOWED_CONTENT_TYPES,
    ALLOWED_LABELS,
    DeleteFolderResult,
    MediaKind,
    UploadResult,
)

# No path separators or dots: a slug names exactly one top-level folder
_SLUG_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


def _size_of(fileobj: BinaryIO) -> int:
    fileobj.seek(0, os.SEEK_END)
    size = fileobj.tell()
    fileobj.seek(0)
    return size


def _format_bytes(size: int) -> str:
    mib = size / (1024 * 1024)
    if mib >= 1024:
        return f"{mib / 1024:g}GB"
    return f"{mib:g}MB"


def validate_slug(slug: str | None) -> str:
    slug = (slug or "").strip()
    if not slug:
        raise invalid_request("No slug provided")
    if not _SLUG_PATTERN.match(slug):
        raise invalid_request(f"Invalid slug: {slug!r}")
    return slug


def folder_prefix(slug: str) -> str:
    """Trailing slash so `test` never matches `test-video/...`."""
    return f"{slug}/"


class UploadService:
    def __init__(
        self,
        s3: S3Service,
        *,
        videos_bucket: str,
        thumbnails_bucket: str,
        thumbnail_max_bytes: int,
        video_max_bytes: int,
        min_folder_slug_length: int = 3,
    ):
        self.s3 = s3
        self.buckets = {MediaKind.THUMBNAIL: thumbnails_bucket, MediaKind.VIDEO: videos_bucket}
        self.max_bytes = {MediaKind.THUMBNAIL: thumbnail_max_bytes, MediaKind.VIDEO: video_max_bytes}
        self.min_folder_slug_length = min_folder_slug_length

    def object_key(self, kind: MediaKind, slug: str, content_type: str) -> str:
        ext = ALLOWED_CONTENT_TYPES[kind][content_type]
        return f"{folder_prefix(slug)}{kind.value}.{ext}"

    def validate(
        self,
        kind: MediaKind,
        slug: str | None,
        fileobj: BinaryIO | None,
        content_type: str | None,
    ) -> tuple[str, str, int]:
        """Check an upload before any byte is sent. Returns (slug, content_type, size)."""
        if fileobj is None:
            raise invalid_request("No file provided")
        slug = validate_slug(slug)

        content_type = (content_type or "").split(";")[0].strip().lower()
        if content_type not in ALLOWED_CONTENT_TYPES[kind]:
            raise invalid_request(f"Invalid file type. Allowed: {ALLOWED_LABELS[kind]}")

        size = _size_of(fileobj)
        if size > self.max_bytes[kind]:
            raise invalid_request(f"File too large. Max {_format_bytes(self.max_bytes[kind])}")

        return slug, content_type, size

    async def upload(
        self,
        kind: MediaKind,
        slug: str | None,
        fileobj: BinaryIO | None,
        content_type: str | None,
    ) -> UploadResult:
        slug, content_type, size = self.validate(kind, slug, fileobj, content_type)

        bucket = self.buckets[kind]
        key = self.object_key(kind, slug, content_type)
        url = await self.s3.put_object(bucket, key, fileobj, content_type)  # type: ignore[arg-type]

        logger.info("Uploaded {} for {} ({} bytes) -> {}", kind, slug, size, key)
        return UploadResult(bucket=bucket, key=key, url=url, content_type=content_type, size=size)

    async def delete_folder(self, slug: str | None) -> DeleteFolderResult:
        slug = (slug or "").strip()
        if not slug:
            raise invalid_request("No slug provided")
        if len(slug) < self.min_folder_slug_length:
            raise invalid_request("Invalid slug - too short")
        slug = validate_slug(slug)

        prefix = folder_prefix(slug)
        videos = await self.s3.delete_prefix(self.buckets[MediaKind.VIDEO], prefix)
        thumbnails = await self.s3.delete_prefix(self.buckets[MediaKind.THUMBNAIL], prefix)

        logger.info("Deleted {} video(s) and {} thumbnail(s) for slug {}", videos, thumbnails, slug)
        return DeleteFolderResult(slug=slug, videos_deleted=videos, thumbnails_deleted=thumbnails)
