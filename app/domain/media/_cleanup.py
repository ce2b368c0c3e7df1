"""Durable media cleanup for deleted sessions.

A `media_cleanup` record is written before the session row goes away. The
folder delete is tried inline; a failure leaves the record pending for the
worker to retry, up to `max_attempts`.
"""

from loguru import logger

from app.schemas import CleanupStatus, MediaCleanupTask
from app.schemas.schema_utils import utc_now
from app.utils.app_errors import AppError, HttpStatusCode

from ..utils.idgen import new_cleanup_task_id
from .upload_domain import UploadService
from .upload_models import CleanupRunResult


class MediaCleanupService:
    def __init__(self, uploads: UploadService, max_attempts: int = 10):
        self.uploads = uploads
        self.max_attempts = max_attempts

    async def create_task(self, slug: str, session_id: str | None = None) -> MediaCleanupTask:
        task = MediaCleanupTask(task_id=new_cleanup_task_id(), slug=slug, session_id=session_id)
        await task.insert()
        return task

    async def run_task(self, task: MediaCleanupTask) -> bool:
        """Try the folder delete once. True when the media is gone and the record removed."""
        try:
            await self.uploads.delete_folder(task.slug)
        except AppError as e:
            task.attempts += 1
            task.last_error = e.errmesg
            task.updated_at = utc_now()
            # Validation failures will not get better on retry
            if e.status_code < HttpStatusCode.INTERNAL_SERVER_ERROR or (
                task.attempts >= self.max_attempts
            ):
                task.status = CleanupStatus.FAILED
            await task.save()
            logger.warning(
                "media cleanup {} for slug {} failed (attempt {}, status {}): {}",
                task.task_id,
                task.slug,
                task.attempts,
                task.status,
                e.errmesg,
            )
            return False

        await task.delete()
        logger.info("media cleanup {} done for slug {}", task.task_id, task.slug)
        return True

    async def retry_pending(self, batch_size: int = 50) -> CleanupRunResult:
        tasks = (
            await MediaCleanupTask.find(MediaCleanupTask.status == CleanupStatus.PENDING)
            .sort("+created_at")
            .limit(batch_size)
            .to_list()
        )

        result = CleanupRunResult()
        for task in tasks:
            result.processed += 1
            if await self.run_task(task):
                result.cleaned += 1
            else:
                result.failed += 1

        if tasks:
            logger.info("media cleanup pass: {}", result.model_dump())
        return result
