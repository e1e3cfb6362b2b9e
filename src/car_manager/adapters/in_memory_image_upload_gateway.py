from __future__ import annotations

import hashlib

from car_manager.domain.car import Image
from car_manager.domain.errors import UploadError
from car_manager.domain.photo_set import ImageFile
from car_manager.ports.image_upload_gateway import ImageUploadGateway


class InMemoryImageUploadGateway(ImageUploadGateway):
    """
    Canonical contract implementation for tests.

    - Urls are content-addressed: the same bytes always yield the same url
    - Empty files are rejected with UploadError
    - Uploaded images are kept in ``uploaded`` in upload order
    """

    def __init__(self, base_url: str = "https://images.example.test") -> None:
        self._base_url = base_url.rstrip("/")
        self.uploaded: list[Image] = []

    async def upload(self, file: ImageFile) -> Image:
        if not file.content:
            raise UploadError("Empty image file", filename=file.filename)

        digest = hashlib.sha256(file.content).hexdigest()[:20]
        extension = file.filename.rsplit(".", 1)[-1] if "." in file.filename else "jpg"
        image = Image(url=f"{self._base_url}/{digest}.{extension}", public_id=digest)
        self.uploaded.append(image)
        return image
