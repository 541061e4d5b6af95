"""HTTP routes: image upload and listing."""
import mimetypes
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse

from ..core.exceptions import NotConfiguredError, PolicyRejectedError, UploaderError
from ..core.logging import get_logger
from ..core.upload import UploadCoordinator
from ..core.upload.services import MAX_FILE_SIZE
from .schemas import ImageInfo, ImageListResponse, UploadData, UploadResponse

logger = get_logger("qiniu_uploader.server")

IMAGE_LIST_LIMIT = 50

router = APIRouter(prefix="/api", tags=["upload"])


def get_coordinator(request: Request) -> UploadCoordinator:
    return request.app.state.coordinator


def _upload_error(status_code: int, message: str) -> JSONResponse:
    body = UploadResponse(success=False, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post("/upload", response_model=UploadResponse)
def upload_image(
    coordinator: Annotated[UploadCoordinator, Depends(get_coordinator)],
    file: Annotated[Optional[UploadFile], File()] = None,
):
    if file is None or not file.filename:
        return _upload_error(400, "No file provided, use the multipart field 'file'")

    # one byte past the limit is enough for the size check to reject it
    data = file.file.read(MAX_FILE_SIZE + 1)

    try:
        outcome = coordinator.upload_bytes(data, file.filename)
    except PolicyRejectedError as e:
        return _upload_error(400, e.message)
    except NotConfiguredError as e:
        return _upload_error(503, e.message)
    except UploaderError as e:
        logger.error(f"Upload of {file.filename} failed: {e}")
        return _upload_error(500, e.message)

    mime_type = (
        file.content_type
        or mimetypes.guess_type(file.filename)[0]
        or "application/octet-stream"
    )
    logger.info(f"Uploaded {file.filename} as {outcome.remote_key}")
    return UploadResponse(
        success=True,
        message=outcome.message,
        data=UploadData.from_outcome(outcome, mime_type),
    )


@router.get("/images", response_model=ImageListResponse)
def list_images(
    coordinator: Annotated[UploadCoordinator, Depends(get_coordinator)],
    prefix: str = "",
):
    try:
        files = coordinator.list_files(prefix=prefix, limit=IMAGE_LIST_LIMIT)
    except UploaderError as e:
        logger.error(f"Listing images failed: {e}")
        return JSONResponse(status_code=500, content=ImageListResponse(success=False).model_dump())

    images = [ImageInfo.from_remote(item) for item in files]
    return ImageListResponse(success=True, data=images, total=len(images))
