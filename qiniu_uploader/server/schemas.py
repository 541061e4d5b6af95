"""Response schemas of the HTTP API."""
from typing import List, Optional

from pydantic import BaseModel, Field

from ..core.upload.models import UploadOutcome, RemoteFile


class UploadData(BaseModel):
    key: str
    hash: str
    url: str
    file_size: int
    mime_type: str

    @classmethod
    def from_outcome(cls, outcome: UploadOutcome, mime_type: str) -> "UploadData":
        return cls(
            key=outcome.remote_key,
            hash=outcome.hash,
            url=outcome.url,
            file_size=outcome.size_bytes,
            mime_type=mime_type,
        )


class UploadResponse(BaseModel):
    success: bool
    message: str
    data: Optional[UploadData] = None


class ImageInfo(BaseModel):
    id: str
    key: str
    url: str
    file_size: int
    mime_type: str
    uploaded: str

    @classmethod
    def from_remote(cls, item: RemoteFile) -> "ImageInfo":
        return cls(
            id=item.hash,
            key=item.key,
            url=item.url,
            file_size=item.size,
            mime_type=item.mime_type,
            uploaded=item.uploaded.astimezone().isoformat(timespec="seconds"),
        )


class ImageListResponse(BaseModel):
    success: bool
    data: List[ImageInfo] = Field(default_factory=list)
    total: int = 0
