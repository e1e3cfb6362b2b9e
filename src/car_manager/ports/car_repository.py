from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from car_manager.domain.car import Car, CarDetails, CarUpdate, Image


class CarRepository(ABC):
    """
    Port for the car backend.

    Implementations translate transport and backend failures into domain errors
    at the point of the call (FetchError, UpdateError, CreateError, DeleteError).
    Nothing is retried.

    Contract (Preconditions):
        - details are validated by the caller (UseCase / session)
        - Implementations trust inputs are valid and do not re-validate
    """

    @abstractmethod
    async def get_by_id(self, car_id: str) -> Car | None:
        """
        Fetch one car.

        Returns:
            The car, or None if the backend does not know it

        Raises:
            FetchError: If the backend call failed
        """
        ...

    @abstractmethod
    async def get_all(self) -> list[Car]:
        """
        Fetch the whole collection in server order.

        Raises:
            FetchError: If the backend call failed
        """
        ...

    @abstractmethod
    async def create(self, details: CarDetails, images: Sequence[Image]) -> Car:
        """
        Create a car from already-uploaded images.

        Raises:
            CreateError: If the backend rejected the car
        """
        ...

    @abstractmethod
    async def update(self, car_id: str, update: CarUpdate) -> Car | None:
        """
        Apply field values and the photo set diff in one call.

        Returns:
            The updated car when the backend echoes it, None otherwise

        Raises:
            UpdateError: If the backend rejected the update (message kept verbatim)
        """
        ...

    @abstractmethod
    async def delete(self, car_id: str) -> None:
        """
        Raises:
            DeleteError: If the backend did not confirm the deletion
        """
        ...
