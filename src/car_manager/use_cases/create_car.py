from __future__ import annotations

import logging
from dataclasses import dataclass

from car_manager.domain.car import Car, CarDetails, Image
from car_manager.ports.car_repository import CarRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreateCarRequest:
    details: CarDetails
    images: tuple[Image, ...] = ()


@dataclass(frozen=True, slots=True)
class CreateCarResponse:
    car: Car


class CreateCar:
    """
    Create a car from details and images already stored on the image host.

    Validates details before delegating to the repository.
    """

    def __init__(self, car_repository: CarRepository) -> None:
        self._repository = car_repository

    async def execute(self, request: CreateCarRequest) -> CreateCarResponse:
        """
        Raises:
            ValidationError: If the details are invalid
            CreateError: If the backend rejected the car
        """
        request.details.validate()

        car = await self._repository.create(request.details, request.images)

        logger.info("Car created", extra={"car_id": car.id, "image_count": len(car.images)})
        return CreateCarResponse(car=car)
