from __future__ import annotations

import pytest

from car_manager.adapters.in_memory_image_upload_gateway import InMemoryImageUploadGateway
from car_manager.domain.errors import UploadError
from car_manager.domain.photo_set import ImageFile


@pytest.mark.asyncio
async def test_same_content_yields_same_url() -> None:
    gateway = InMemoryImageUploadGateway()

    first = await gateway.upload(ImageFile(filename="front.jpg", content=b"pixels"))
    again = await gateway.upload(ImageFile(filename="copy.jpg", content=b"pixels"))

    assert first == again
    assert first.url.startswith("https://images.example.test/")
    assert first.url.endswith(".jpg")
    assert gateway.uploaded == [first, again]


@pytest.mark.asyncio
async def test_different_content_yields_different_urls() -> None:
    gateway = InMemoryImageUploadGateway(base_url="https://cdn.test/")

    front = await gateway.upload(ImageFile(filename="front.png", content=b"front"))
    back = await gateway.upload(ImageFile(filename="back.png", content=b"back"))

    assert front.url != back.url
    assert front.url.startswith("https://cdn.test/")
    assert front.url.rsplit("/", 1)[-1] == f"{front.public_id}.png"


@pytest.mark.asyncio
async def test_empty_file_is_rejected() -> None:
    gateway = InMemoryImageUploadGateway()

    with pytest.raises(UploadError) as exc_info:
        await gateway.upload(ImageFile(filename="empty.jpg", content=b""))

    assert exc_info.value.context == {"filename": "empty.jpg"}
    assert gateway.uploaded == []
