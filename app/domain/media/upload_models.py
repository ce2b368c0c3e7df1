"""Upload domain models."""

from enum import Enum

from pydantic import BaseModel


class MediaKind(str, Enum):
    THUMBNAIL = "thumbnail"
    VIDEO = "video"

    def __str__(self) -> str:
        return self.value


# Declared content type -> stored file extension
ALLOWED_CONTENT_TYPES: dict[MediaKind, dict[str, str]] = {
    MediaKind.THUMBNAIL: {
        "image/jpeg": "jpg",
        "image/png": "png",
        "image/webp": "webp",
    },
    MediaKind.VIDEO: {
        "video/mp4": "mp4",
        "video/webm": "webm",
        "video/quicktime": "mov",
    },
}

ALLOWED_LABELS: dict[MediaKind, str] = {
    MediaKind.THUMBNAIL: "JPEG, PNG, WebP",
    MediaKind.VIDEO: "MP4, WebM, QuickTime",
}


class UploadResult(BaseModel):
    bucket: str
    key: str
    url: str
    content_type: str
    size: int


class DeleteFolderResult(BaseModel):
    slug: str
    videos_deleted: int
    thumbnails_deleted: int


class CleanupRunResult(BaseModel):
    processed: int = 0
    cleaned: int = 0
    failed: int = 0
