"""Cloudinary implementation of ImageUploadGateway (unsigned uploads)."""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from car_manager.domain.car import Image
from car_manager.domain.errors import UploadError
from car_manager.domain.photo_set import ImageFile
from car_manager.ports.image_upload_gateway import ImageUploadGateway

logger = logging.getLogger(__name__)


class UploadResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    secure_url: str
    public_id: str


class CloudinaryImageUploadGateway(ImageUploadGateway):
    """
    Uploads images to Cloudinary with an unsigned upload preset.

    - POST {base}/{cloud_name}/image/upload with multipart ``file`` + ``upload_preset``
    - Reads ``secure_url`` and ``public_id`` from the reply
    - Any transport error, non-2xx status or malformed reply is UploadError
    """

    def __init__(self, client: httpx.AsyncClient, cloud_name: str, upload_preset: str) -> None:
        """
        Args:
            client: Client whose base_url points at the Cloudinary API root
            cloud_name: Cloudinary account name
            upload_preset: Name of an unsigned upload preset
        """
        self._client = client
        self._path = f"/{cloud_name}/image/upload"
        self._upload_preset = upload_preset

    async def upload(self, file: ImageFile) -> Image:
        try:
            response = await self._client.post(
                self._path,
                files={"file": (file.filename, file.content, file.content_type)},
                data={"upload_preset": self._upload_preset},
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "Image host unreachable",
                extra={"image_filename": file.filename, "error": str(exc)},
            )
            raise UploadError(filename=file.filename) from exc

        if not response.is_success:
            logger.warning(
                "Image host rejected upload",
                extra={"image_filename": file.filename, "status_code": response.status_code},
            )
            raise UploadError(filename=file.filename, status_code=response.status_code)

        try:
            result = UploadResult.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            logger.warning(
                "Malformed upload reply",
                extra={"image_filename": file.filename, "error": str(exc)},
            )
            raise UploadError(filename=file.filename) from exc

        logger.info("Image uploaded", extra={"image_filename": file.filename, "public_id": result.public_id})
        return Image(url=result.secure_url, public_id=result.public_id)
