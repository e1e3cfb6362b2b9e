from __future__ import annotations

from dataclasses import dataclass, field

from car_manager.domain.car import Car


def matches_term(car: Car, term: str) -> bool:
    """Case-insensitive substring match on title, description and any tag value.

    ``term`` must already be lower-cased. An empty term matches every car.
    """
    if term in car.title.lower():
        return True
    if term in car.description.lower():
        return True
    return any(term in value.lower() for value in car.tags.values())


@dataclass(frozen=True)
class InventorySnapshot:
    """
    The full car collection as last fetched, plus the view filtered by ``term``.

    - Cars keep server order
    - The filtered view is always recomputed from the full collection
    """

    cars: tuple[Car, ...] = ()
    term: str = ""
    filtered: tuple[Car, ...] = field(init=False)

    def __post_init__(self) -> None:
        needle = self.term.strip().lower()
        object.__setattr__(
            self,
            "filtered",
            tuple(car for car in self.cars if matches_term(car, needle)),
        )

    def search(self, term: str) -> InventorySnapshot:
        return InventorySnapshot(cars=self.cars, term=term)

    def replacing(self, car: Car) -> InventorySnapshot:
        return InventorySnapshot(
            cars=tuple(car if existing.id == car.id else existing for existing in self.cars),
            term=self.term,
        )

    def without(self, car_id: str) -> InventorySnapshot:
        return InventorySnapshot(
            cars=tuple(car for car in self.cars if car.id != car_id),
            term=self.term,
        )
