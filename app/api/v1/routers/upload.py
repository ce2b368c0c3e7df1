from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.api.v1.dependency import AdminPrincipal
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.upload import DeleteFolderIn, DeleteFolderOut, UploadOut
from app.domain.media.upload_domain import UploadService
from app.domain.media.upload_models import MediaKind
from app.services.app_services import get_upload_service as _build_upload_service

router = APIRouter(prefix="/upload", tags=["Admin"])

# Singleton instance
_upload_service = _build_upload_service()


def get_upload_service() -> UploadService:
    """Get the singleton UploadService instance."""
    return _upload_service


async def _upload(
    kind: MediaKind, service: UploadService, file: UploadFile | None, slug: str | None
) -> UploadOut:
    result = await service.upload(
        kind,
        slug,
        file.file if file else None,
        file.content_type if file else None,
    )
    return UploadOut.model_validate(result.model_dump())


@router.post("/upload_thumbnail")
async def upload_thumbnail(
    admin: AdminPrincipal,
    file: UploadFile | None = File(None, description="JPEG, PNG or WebP, at most 5MB"),
    slug: str | None = Form(None, description="Session slug (folder name)"),
    service: UploadService = Depends(get_upload_service),
) -> ApiOut[UploadOut]:
    return ApiOut[UploadOut](results=await _upload(MediaKind.THUMBNAIL, service, file, slug))


@router.post("/upload_video")
async def upload_video(
    admin: AdminPrincipal,
    file: UploadFile | None = File(None, description="MP4, WebM or QuickTime"),
    slug: str | None = Form(None, description="Session slug (folder name)"),
    service: UploadService = Depends(get_upload_service),
) -> ApiOut[UploadOut]:
    return ApiOut[UploadOut](results=await _upload(MediaKind.VIDEO, service, file, slug))


@router.post("/delete_folder")
async def delete_folder(
    body: DeleteFolderIn,
    admin: AdminPrincipal,
    service: UploadService = Depends(get_upload_service),
) -> ApiOut[DeleteFolderOut]:
    """Delete every object under `<slug>/` in both media buckets."""
    result = await service.delete_folder(body.slug)
    return ApiOut[DeleteFolderOut](results=DeleteFolderOut.model_validate(result.model_dump()))
