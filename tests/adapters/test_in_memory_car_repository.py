"""
Test suite for InMemoryCarRepository.

This suite pins the CarRepository contract the REST adapter follows:

- Reads: server order, unknown id is None
- Updates: deleteImages applied before addImages, added urls resolved to images
- Create/Delete: ids assigned by the store, deleting an unknown id fails
"""

from __future__ import annotations

import pytest

from car_manager.adapters.in_memory_car_repository import InMemoryCarRepository
from car_manager.domain.car import Car, CarDetails, CarTags, CarUpdate, Image
from car_manager.domain.errors import DeleteError, UpdateError

A = Image(url="https://img.test/a.jpg", public_id="a")
B = Image(url="https://img.test/b.jpg", public_id="b")
C = Image(url="https://img.test/c.jpg", public_id="c")


@pytest.fixture()
def cars() -> list[Car]:
    return [
        Car(id="1", title="Corolla", description="", tags=CarTags(company="Toyota"), images=(A, B)),
        Car(id="2", title="Civic", description="", tags=CarTags(company="Honda")),
    ]


# ==============================================================================
# Reads
# ==============================================================================


@pytest.mark.asyncio
async def test_get_all_preserves_insertion_order(cars: list[Car]) -> None:
    repo = InMemoryCarRepository(cars)

    assert [car.id for car in await repo.get_all()] == ["1", "2"]


@pytest.mark.asyncio
async def test_get_by_id_returns_none_for_unknown_id(cars: list[Car]) -> None:
    repo = InMemoryCarRepository(cars)

    assert await repo.get_by_id("1") == cars[0]
    assert await repo.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_empty_repository() -> None:
    assert await InMemoryCarRepository().get_all() == []


# ==============================================================================
# Updates
# ==============================================================================


@pytest.mark.asyncio
async def test_update_deletes_then_appends_in_payload_order(cars: list[Car]) -> None:
    repo = InMemoryCarRepository(cars)
    repo.register_image(C)
    update = CarUpdate(
        details=CarDetails(title="Corolla SE", tags=CarTags(company="Toyota")),
        add_images=(C.url,),
        delete_images=(A.url,),
    )

    updated = await repo.update("1", update)

    assert updated is not None
    assert updated.images == (B, C)
    assert updated.title == "Corolla SE"
    assert await repo.get_by_id("1") == updated
    assert repo.updates == [("1", update)]


@pytest.mark.asyncio
async def test_update_resolves_unregistered_url_by_path(cars: list[Car]) -> None:
    repo = InMemoryCarRepository(cars)

    updated = await repo.update(
        "2",
        CarUpdate(details=CarDetails(title="Civic"), add_images=("https://cdn.test/v1/xyz.png",)),
    )

    assert updated is not None
    assert updated.images == (Image(url="https://cdn.test/v1/xyz.png", public_id="xyz"),)


@pytest.mark.asyncio
async def test_update_unknown_car_fails(cars: list[Car]) -> None:
    repo = InMemoryCarRepository(cars)

    with pytest.raises(UpdateError) as exc_info:
        await repo.update("missing", CarUpdate(details=CarDetails(title="X")))

    assert exc_info.value.message == "Car not found"
    assert repo.updates == []


# ==============================================================================
# Create / Delete
# ==============================================================================


@pytest.mark.asyncio
async def test_create_assigns_fresh_ids() -> None:
    repo = InMemoryCarRepository()
    details = CarDetails(title="Model 3")

    first = await repo.create(details, [A])
    second = await repo.create(details, [])

    assert first.id != second.id
    assert first.images == (A,)
    assert [car.id for car in await repo.get_all()] == [first.id, second.id]


@pytest.mark.asyncio
async def test_delete_removes_car(cars: list[Car]) -> None:
    repo = InMemoryCarRepository(cars)

    await repo.delete("1")

    assert [car.id for car in await repo.get_all()] == ["2"]


@pytest.mark.asyncio
async def test_delete_unknown_car_fails(cars: list[Car]) -> None:
    repo = InMemoryCarRepository(cars)

    with pytest.raises(DeleteError):
        await repo.delete("missing")

    assert len(await repo.get_all()) == 2
