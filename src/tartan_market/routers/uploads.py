"""Upload route: listing images to blob storage."""
from pathlib import PurePosixPath

from fastapi import APIRouter, File, UploadFile

from tartan_market.dependencies import CallerID, UploadsServiceDep
from tartan_market.schemas import UploadResponse
from tartan_market.services import ImageUpload

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/images", response_model=UploadResponse)
async def upload_images(
    clerk_id: CallerID,
    service: UploadsServiceDep,
    images: list[UploadFile] | None = File(default=None),
) -> UploadResponse:
    """Store 1-5 images (jpeg/png/webp, 5MB each) from multipart field `images`."""
    uploads = [
        ImageUpload(
            filename=PurePosixPath(image.filename or "image").name,
            content_type=image.content_type or "",
            size=image.size or 0,
            read=image.read,
        )
        for image in images or []
    ]
    urls = await service.upload_images(clerk_id, uploads)
    return UploadResponse(urls=urls)
