from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from uuid import uuid4

from car_manager.domain.car import Car, CarDetails, CarUpdate, Image
from car_manager.domain.errors import DeleteError, UpdateError
from car_manager.ports.car_repository import CarRepository


class InMemoryCarRepository(CarRepository):
    """
    Canonical contract implementation for tests.

    - Stores cars in insertion order
    - Assigns uuid4 ids on create
    - Applies deleteImages first, then appends addImages in payload order
    - Records every update payload in ``updates`` for inspection
    """

    def __init__(self, cars: list[Car] | None = None) -> None:
        self._cars: dict[str, Car] = {car.id: car for car in cars or []}
        self._known_images: dict[str, Image] = {
            image.url: image for car in self._cars.values() for image in car.images
        }
        self.updates: list[tuple[str, CarUpdate]] = []

    def register_image(self, image: Image) -> None:
        """Make an uploaded image resolvable by url, as the real backend does."""
        self._known_images[image.url] = image

    async def get_by_id(self, car_id: str) -> Car | None:
        return self._cars.get(car_id)

    async def get_all(self) -> list[Car]:
        return list(self._cars.values())

    async def create(self, details: CarDetails, images: Sequence[Image]) -> Car:
        car = Car(
            id=str(uuid4()),
            title=details.title,
            description=details.description,
            tags=details.tags,
            images=tuple(images),
        )
        self._cars[car.id] = car
        for image in images:
            self.register_image(image)
        return car

    async def update(self, car_id: str, update: CarUpdate) -> Car | None:
        car = self._cars.get(car_id)
        if car is None:
            raise UpdateError("Car not found", car_id=car_id)

        self.updates.append((car_id, update))

        deleted = set(update.delete_images)
        kept = [image for image in car.images if image.url not in deleted]
        added = [self._resolve(url) for url in update.add_images]

        updated = replace(
            car,
            title=update.details.title,
            description=update.details.description,
            tags=update.details.tags,
            images=tuple(kept + added),
        )
        self._cars[car_id] = updated
        return updated

    async def delete(self, car_id: str) -> None:
        if self._cars.pop(car_id, None) is None:
            raise DeleteError(car_id=car_id)

    def _resolve(self, url: str) -> Image:
        known = self._known_images.get(url)
        if known is not None:
            return known
        # Fall back to the last path segment without extension, like Cloudinary ids
        public_id = url.rstrip("/").rsplit("/", 1)[-1].split(".", 1)[0]
        return Image(url=url, public_id=public_id)
