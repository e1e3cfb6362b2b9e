from __future__ import annotations

import logging
from dataclasses import dataclass

from car_manager.ports.car_repository import CarRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeleteCarRequest:
    car_id: str


class DeleteCar:
    """
    Delete a whole car with a single repository call.

    On success the caller navigates away or drops the car from its inventory
    view. On failure DeleteError propagates and the record remains.
    """

    def __init__(self, car_repository: CarRepository) -> None:
        self._repository = car_repository

    async def execute(self, request: DeleteCarRequest) -> None:
        await self._repository.delete(request.car_id)
        logger.info("Car deleted", extra={"car_id": request.car_id})
