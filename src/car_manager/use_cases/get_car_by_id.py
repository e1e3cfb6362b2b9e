"""Get car by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from car_manager.domain.car import Car
from car_manager.domain.errors import NotFoundError, ValidationError
from car_manager.ports.car_repository import CarRepository


@dataclass(frozen=True, slots=True)
class GetCarByIdRequest:
    """Request to get a car by ID."""

    car_id: str


@dataclass(frozen=True, slots=True)
class GetCarByIdResponse:
    """Response containing the requested car."""

    car: Car


class GetCarById:
    """
    Use case for retrieving a single car by ID.

    Responsibilities:
    - Reject blank car ids (ids are opaque, so nothing else is checked)
    - Delegate to repository for data access
    - Raise NotFoundError if car doesn't exist
    """

    def __init__(self, car_repository: CarRepository) -> None:
        """
        Initialize use case with dependencies.

        Args:
            car_repository: Repository for car data access
        """
        self._repository = car_repository

    async def execute(self, request: GetCarByIdRequest) -> GetCarByIdResponse:
        """
        Execute the get car by ID use case.

        Args:
            request: Request containing car_id

        Returns:
            GetCarByIdResponse with the car

        Raises:
            ValidationError: If car_id is blank
            NotFoundError: If car with given ID doesn't exist
            FetchError: If the backend call failed
        """
        if not request.car_id.strip():
            raise ValidationError(
                errors=[
                    {
                        "field": "car_id",
                        "message": "Must not be blank",
                        "code": "REQUIRED",
                    }
                ]
            )

        car = await self._repository.get_by_id(request.car_id)

        if car is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        return GetCarByIdResponse(car=car)
