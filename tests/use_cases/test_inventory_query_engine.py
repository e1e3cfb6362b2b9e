"""Test suite for InventoryQueryEngine."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from car_manager.adapters.in_memory_car_repository import InMemoryCarRepository
from car_manager.domain.car import Car, CarTags
from car_manager.domain.errors import DeleteError, FetchError
from car_manager.ports.car_repository import CarRepository
from car_manager.use_cases.inventory_query_engine import InventoryQueryEngine


@pytest.fixture()
def cars() -> list[Car]:
    return [
        Car(
            id="1",
            title="Corolla 2018",
            description="Reliable commuter",
            tags=CarTags(car_type="Sedan", company="Toyota", dealer="AutoMax"),
        ),
        Car(
            id="2",
            title="Civic 2019",
            description="Sporty and frugal",
            tags=CarTags(car_type="Sedan", company="Honda", dealer="City Motors"),
        ),
        Car(
            id="3",
            title="RAV4",
            description="Compact SUV",
            tags=CarTags(car_type="SUV", company="Toyota", dealer="City Motors"),
        ),
    ]


@pytest.fixture()
def repository(cars: list[Car]) -> InMemoryCarRepository:
    return InMemoryCarRepository(cars)


@pytest_asyncio.fixture()
async def engine(repository: InMemoryCarRepository) -> InventoryQueryEngine:
    engine = InventoryQueryEngine(repository)
    await engine.load()
    return engine


def ids(cars: tuple[Car, ...]) -> list[str]:
    return [car.id for car in cars]


# ==============================================================================
# Loading
# ==============================================================================


@pytest.mark.asyncio
async def test_load_fills_both_views_in_server_order(repository: InMemoryCarRepository) -> None:
    engine = InventoryQueryEngine(repository)
    assert not engine.is_loaded

    snapshot = await engine.load()

    assert engine.is_loaded
    assert ids(snapshot.cars) == ["1", "2", "3"]
    assert engine.filtered == engine.cars
    assert engine.error is None


@pytest.mark.asyncio
async def test_load_resets_previous_search(engine: InventoryQueryEngine) -> None:
    engine.search("honda")

    await engine.load()

    assert ids(engine.filtered) == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_failed_load_keeps_previous_snapshot(cars: list[Car]) -> None:
    repository = Mock(spec=CarRepository)
    repository.get_all = AsyncMock(side_effect=[cars, FetchError()])
    engine = InventoryQueryEngine(repository)
    await engine.load()

    with pytest.raises(FetchError):
        await engine.load()

    assert ids(engine.cars) == ["1", "2", "3"]
    assert engine.error == "Failed to fetch car data"


@pytest.mark.asyncio
async def test_failed_first_load_leaves_inventory_empty() -> None:
    repository = Mock(spec=CarRepository)
    repository.get_all = AsyncMock(side_effect=FetchError())
    engine = InventoryQueryEngine(repository)

    with pytest.raises(FetchError):
        await engine.load()

    assert engine.cars == ()
    assert not engine.is_loaded


@pytest.mark.asyncio
async def test_superseded_load_does_not_replace_snapshot(cars: list[Car]) -> None:
    release_first = asyncio.Event()
    calls = 0

    async def get_all() -> list[Car]:
        nonlocal calls
        calls += 1
        if calls == 1:
            await release_first.wait()
            return cars[:1]
        return cars

    repository = Mock(spec=CarRepository)
    repository.get_all = AsyncMock(side_effect=get_all)
    engine = InventoryQueryEngine(repository)

    first = asyncio.create_task(engine.load())
    await asyncio.sleep(0)
    await engine.load()
    release_first.set()
    await first

    assert ids(engine.cars) == ["1", "2", "3"]


# ==============================================================================
# Search
# ==============================================================================


@pytest.mark.asyncio
async def test_empty_term_returns_everything_in_order(engine: InventoryQueryEngine) -> None:
    assert ids(engine.search("")) == ["1", "2", "3"]
    assert ids(engine.search("   ")) == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_search_is_case_insensitive_over_tags(engine: InventoryQueryEngine) -> None:
    assert ids(engine.search("toyota")) == ["1", "3"]
    assert ids(engine.search("TOYOTA")) == ["1", "3"]


@pytest.mark.asyncio
async def test_search_matches_title_and_description(engine: InventoryQueryEngine) -> None:
    assert ids(engine.search("civic")) == ["2"]
    assert ids(engine.search("commuter")) == ["1"]


@pytest.mark.asyncio
async def test_search_trims_surrounding_whitespace(engine: InventoryQueryEngine) -> None:
    assert ids(engine.search("  suv  ")) == ["3"]


@pytest.mark.asyncio
async def test_search_without_matches_is_empty(engine: InventoryQueryEngine) -> None:
    assert engine.search("ferrari") == ()
    assert ids(engine.cars) == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_search_never_refetches() -> None:
    repository = Mock(spec=CarRepository)
    repository.get_all = AsyncMock(return_value=[])
    engine = InventoryQueryEngine(repository)
    await engine.load()

    engine.search("a")
    engine.search("b")

    repository.get_all.assert_awaited_once()


@pytest.mark.asyncio
async def test_search_always_filters_full_collection(engine: InventoryQueryEngine) -> None:
    engine.search("honda")

    assert ids(engine.search("city motors")) == ["2", "3"]


# ==============================================================================
# Local updates and deletion
# ==============================================================================


@pytest.mark.asyncio
async def test_remove_locally_drops_car_from_both_views(engine: InventoryQueryEngine) -> None:
    engine.search("toyota")

    engine.remove_locally("1")

    assert ids(engine.cars) == ["2", "3"]
    assert ids(engine.filtered) == ["3"]


@pytest.mark.asyncio
async def test_replace_locally_reapplies_current_term(engine: InventoryQueryEngine) -> None:
    engine.search("toyota")
    rebadged = Car(id="3", title="RAV4", description="", tags=CarTags(company="Lexus"))

    engine.replace_locally(rebadged)

    assert engine.cars[2] is rebadged
    assert ids(engine.filtered) == ["1"]


@pytest.mark.asyncio
async def test_delete_car_deletes_remotely_and_locally(
    engine: InventoryQueryEngine, repository: InMemoryCarRepository
) -> None:
    await engine.delete_car("2")

    assert ids(engine.cars) == ["1", "3"]
    assert await repository.get_by_id("2") is None


@pytest.mark.asyncio
async def test_failed_delete_keeps_car(engine: InventoryQueryEngine) -> None:
    with pytest.raises(DeleteError):
        await engine.delete_car("missing")

    assert ids(engine.cars) == ["1", "2", "3"]
    assert engine.error == "Failed to delete car"
