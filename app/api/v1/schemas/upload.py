from pydantic import BaseModel, Field


class UploadOut(BaseModel):
    url: str = Field(description="Public URL of the stored object")
    key: str
    content_type: str
    size: int


class DeleteFolderIn(BaseModel):
    slug: str | None = None


class DeleteFolderOut(BaseModel):
    slug: str
    videos_deleted: int
    thumbnails_deleted: int
