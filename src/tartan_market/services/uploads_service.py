"""Uploads service: validates listing images and stores them concurrently."""
import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from tartan_market.errors import BadRequestError
from tartan_market.ids import ClerkID
from tartan_market.providers import (PROVIDER_EXCEPTIONS, ProviderErrorMapper,
                                     StorageProviderABC)
from tartan_market.services.users_service import require_profile
from tartan_market.stores import UserDirectory
from tartan_market.utils import now_ms

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})


@dataclass(frozen=True)
class ImageUpload:
    """One file from a multipart request.

    `size` is the length the request declared; the body is only read, through
    `read`, once the whole batch has passed validation.
    """

    filename: str
    content_type: str
    size: int
    read: Callable[[], Awaitable[bytes]]


class UploadsService:
    """Stores listing images for the authenticated caller.

    All files are validated before anything is stored. Uploads run
    concurrently; if any fails, the ones that succeeded are deleted and
    the request fails as a whole.
    """

    def __init__(
        self,
        users: UserDirectory,
        storage: StorageProviderABC,
        *,
        max_images: int = 5,
        max_bytes: int = 5 * 1024 * 1024,
        error_mapper: ProviderErrorMapper | None = None,
    ) -> None:
        self._users = users
        self._storage = storage
        self._max_images = max_images
        self._max_bytes = max_bytes
        self._error_mapper = error_mapper or ProviderErrorMapper(
            api_name="Storage", message="Image upload failed"
        )

    def validate(self, images: list[ImageUpload]) -> None:
        if not images:
            raise BadRequestError("No images provided")
        if len(images) > self._max_images:
            raise BadRequestError(f"Maximum {self._max_images} images allowed")
        for image in images:
            if image.content_type not in ALLOWED_IMAGE_TYPES:
                raise BadRequestError("Invalid file type")
            self._check_size(image.size)

    def _check_size(self, size: int) -> None:
        if size > self._max_bytes:
            limit_mb = self._max_bytes // (1024 * 1024)
            raise BadRequestError(f"File size exceeds {limit_mb}MB limit")

    async def upload_images(self, clerk_id: ClerkID, images: list[ImageUpload]) -> list[str]:
        """Store images under the caller's prefix; return URLs in request order."""
        profile = require_profile(self._users, clerk_id)
        self.validate(images)
        contents = [await image.read() for image in images]
        for data in contents:
            # Declared sizes can be missing or wrong
            self._check_size(len(data))

        stamp = now_ms()
        paths = [
            f"items/{profile.id}/{stamp}-{index}-{image.filename}"
            for index, image in enumerate(images)
        ]
        results = await asyncio.gather(
            *(
                self._storage.upload(path, data, image.content_type)
                for path, image, data in zip(paths, images, contents)
            ),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if not failures:
            return list(results)

        stored = [path for path, r in zip(paths, results) if not isinstance(r, BaseException)]
        await self._rollback(stored)
        first = failures[0]
        if isinstance(first, PROVIDER_EXCEPTIONS):
            self._error_mapper.raise_error(first)
        raise first

    async def _rollback(self, paths: list[str]) -> None:
        if not paths:
            return
        logger.warning("Upload failed; removing %d stored images", len(paths))
        try:
            await self._storage.delete(paths)
        except PROVIDER_EXCEPTIONS as exc:
            logger.error("Failed to remove images after upload failure: %r", exc)
