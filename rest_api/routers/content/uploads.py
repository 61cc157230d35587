"""
Image upload endpoint.
"""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import Principal, require_staff
from shared.utils.schemas import UploadResponse
from rest_api.services.domain import UploadService


router = APIRouter(tags=["uploads"])


@router.post("/upload", response_model=UploadResponse)
def upload_image(
    image: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> UploadResponse:
    """
    Store an image sent as multipart field `image`.

    Accepts jpeg/jpg/png/gif/webp up to the configured size limit and
    returns the relative URL it is served from.
    """
    service = UploadService(db)
    if image is None:
        service.validate(None, None)

    try:
        upload = service.save_image(image.file, image.filename, image.content_type, actor=principal)
    finally:
        image.file.close()

    return UploadResponse(image_url=upload.url)
