from __future__ import annotations

from abc import ABC, abstractmethod

from car_manager.domain.car import Image
from car_manager.domain.photo_set import ImageFile


class ImageUploadGateway(ABC):
    """
    Port for the third-party image host.

    The host is a black box: any non-success, including a malformed reply,
    must surface as UploadError.
    """

    @abstractmethod
    async def upload(self, file: ImageFile) -> Image:
        """
        Store a file and return its stable url and management handle.

        Raises:
            UploadError: If the host rejected the file or could not be reached
        """
        ...
