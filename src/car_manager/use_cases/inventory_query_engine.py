from __future__ import annotations

import logging

from car_manager.domain.car import Car
from car_manager.domain.errors import DomainError
from car_manager.domain.inventory import InventorySnapshot
from car_manager.ports.car_repository import CarRepository
from car_manager.use_cases.delete_car import DeleteCar, DeleteCarRequest

logger = logging.getLogger(__name__)


class InventoryQueryEngine:
    """
    Client-side inventory listing and search.

    The collection is fetched once by load(); search() only filters the last
    loaded snapshot and never goes back to the repository. Only the most
    recently issued load() may replace the snapshot.
    """

    def __init__(self, car_repository: CarRepository) -> None:
        self._repository = car_repository
        self._snapshot = InventorySnapshot()
        self._loaded = False
        self._load_generation = 0
        self.error: str | None = None

    @property
    def snapshot(self) -> InventorySnapshot:
        return self._snapshot

    @property
    def cars(self) -> tuple[Car, ...]:
        return self._snapshot.cars

    @property
    def filtered(self) -> tuple[Car, ...]:
        return self._snapshot.filtered

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    async def load(self) -> InventorySnapshot:
        """
        Fetch the whole collection and reset the filtered view to all of it.

        Raises:
            FetchError: If the backend call failed (previous snapshot is kept)
        """
        self._load_generation += 1
        generation = self._load_generation

        try:
            cars = await self._repository.get_all()
        except DomainError as exc:
            if generation == self._load_generation:
                self.error = exc.message
            logger.warning("Inventory load failed", extra={"error_code": exc.error_code})
            raise

        if generation != self._load_generation:
            logger.info("Discarding superseded inventory load", extra={"generation": generation})
            return self._snapshot

        self._snapshot = InventorySnapshot(cars=tuple(cars))
        self._loaded = True
        self.error = None
        logger.info("Inventory loaded", extra={"car_count": len(cars)})
        return self._snapshot

    def search(self, term: str) -> tuple[Car, ...]:
        """
        Case-insensitive substring search over title, description and tags.

        A term that is empty after trimming matches every car.
        """
        self._snapshot = self._snapshot.search(term)
        return self._snapshot.filtered

    def remove_locally(self, car_id: str) -> None:
        """Drop a car deleted elsewhere from both views without a re-fetch."""
        self._snapshot = self._snapshot.without(car_id)

    def replace_locally(self, car: Car) -> None:
        """Swap in a car updated elsewhere, keeping its position. Unknown ids are ignored."""
        self._snapshot = self._snapshot.replacing(car)

    async def delete_car(self, car_id: str) -> None:
        """
        Delete a car through the repository, then drop it locally.

        Raises:
            DeleteError: If the backend refused; the snapshot is unchanged
        """
        try:
            await DeleteCar(self._repository).execute(DeleteCarRequest(car_id=car_id))
        except DomainError as exc:
            self.error = exc.message
            raise

        self.remove_locally(car_id)
