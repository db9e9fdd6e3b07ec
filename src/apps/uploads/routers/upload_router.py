"""Upload router."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from src.core import exceptions
from src.core.logger import get_logger
from src.core.response.handlers import success_response
from src.core.security.dependencies import require_requester
from src.core.storage import FileStorage

logger = get_logger("uploads")

router = APIRouter(tags=["Uploads"])


def get_storage(request: Request) -> FileStorage:
    return request.app.state.storage


@router.post(
    "/upload",
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image for a post",
    responses={
        201: {"description": "File saved"},
        400: {"description": "Missing, unsupported or oversized file"},
        401: {"description": "Authentication required"},
    },
)
async def upload_image(
    request: Request,
    file: Optional[UploadFile] = File(None),
    requester: uuid.UUID = Depends(require_requester),
    storage: FileStorage = Depends(get_storage),
):
    settings = request.app.state.settings
    if file is None or not file.filename:
        raise exceptions.ValidationException("No file provided.")

    if file.content_type not in settings.allowed_image_types:
        raise exceptions.ValidationException(f"Unsupported file type: {file.content_type}")

    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    data = await file.read(max_bytes + 1)
    if not data:
        raise exceptions.ValidationException("Uploaded file is empty.")
    if len(data) > max_bytes:
        raise exceptions.ValidationException(
            f"File too large (max {settings.MAX_UPLOAD_SIZE_MB} MB)."
        )

    try:
        url = storage.save(file.filename, data)
    except OSError as e:
        logger.error("Error saving file %s: %s", file.filename, e)
        raise exceptions.ServiceException("Error saving file.") from e

    logger.info("User %s uploaded %s", requester, url)
    return success_response(
        data={"url": url}, message="File uploaded", status_code=status.HTTP_201_CREATED
    )
