from __future__ import annotations

import logging
from collections.abc import Callable

from car_manager.domain.car import Image
from car_manager.domain.errors import UploadError
from car_manager.domain.photo_set import ImageFile
from car_manager.ports.image_upload_gateway import ImageUploadGateway

logger = logging.getLogger(__name__)


class DeferredImageUploadGateway(ImageUploadGateway):
    """
    Builds the real gateway on the first upload.

    Edit sessions that never upload (field edits, removals, submit) work
    without image host settings. A missing setting surfaces as UploadError
    on the upload that needed it.
    """

    def __init__(self, factory: Callable[[], ImageUploadGateway]) -> None:
        """
        Args:
            factory: Builds the gateway; raises RuntimeError when not configured
        """
        self._factory = factory
        self._gateway: ImageUploadGateway | None = None

    async def upload(self, file: ImageFile) -> Image:
        if self._gateway is None:
            try:
                self._gateway = self._factory()
            except RuntimeError as exc:
                logger.error(
                    "Image uploads are not configured",
                    extra={"image_filename": file.filename, "error": str(exc)},
                )
                raise UploadError(
                    "Image uploads are not configured", filename=file.filename
                ) from exc

        return await self._gateway.upload(file)
