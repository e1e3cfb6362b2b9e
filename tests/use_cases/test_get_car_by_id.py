"""Test suite for GetCarById use case."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from car_manager.domain.car import Car, CarTags
from car_manager.domain.errors import FetchError, NotFoundError, ValidationError
from car_manager.ports.car_repository import CarRepository
from car_manager.use_cases.get_car_by_id import (
    GetCarById,
    GetCarByIdRequest,
    GetCarByIdResponse,
)


@pytest.fixture()
def mock_repository() -> Mock:
    """Mock CarRepository."""
    return Mock(spec=CarRepository)


@pytest.fixture()
def sample_car() -> Car:
    """Sample car entity for testing."""
    return Car(
        id="64f1c2a9e4b0a1b2c3d4e5f6",
        title="Corolla 2020",
        description="One owner",
        tags=CarTags(car_type="Sedan", company="Toyota", dealer="AutoMax"),
    )


# ==============================================================================
# Happy Path Tests
# ==============================================================================


@pytest.mark.asyncio
async def test_execute_successful_get(mock_repository: Mock, sample_car: Car) -> None:
    """Use case returns car when found."""
    mock_repository.get_by_id.return_value = sample_car
    use_case = GetCarById(car_repository=mock_repository)

    result = await use_case.execute(GetCarByIdRequest(car_id="64f1c2a9e4b0a1b2c3d4e5f6"))

    assert isinstance(result, GetCarByIdResponse)
    assert result.car == sample_car
    assert result.car.title == "Corolla 2020"


@pytest.mark.asyncio
async def test_execute_calls_repository_with_car_id(mock_repository: Mock, sample_car: Car) -> None:
    """Use case delegates to repository with correct car_id."""
    mock_repository.get_by_id.return_value = sample_car
    use_case = GetCarById(car_repository=mock_repository)

    await use_case.execute(GetCarByIdRequest(car_id="64f1c2a9e4b0a1b2c3d4e5f6"))

    mock_repository.get_by_id.assert_awaited_once_with("64f1c2a9e4b0a1b2c3d4e5f6")


@pytest.mark.asyncio
async def test_execute_accepts_any_opaque_id(mock_repository: Mock, sample_car: Car) -> None:
    """Ids are opaque strings: no UUID or ObjectId format is enforced."""
    mock_repository.get_by_id.return_value = sample_car
    use_case = GetCarById(car_repository=mock_repository)

    await use_case.execute(GetCarByIdRequest(car_id="car-1"))

    mock_repository.get_by_id.assert_awaited_once_with("car-1")


# ==============================================================================
# Error Tests
# ==============================================================================


@pytest.mark.asyncio
async def test_execute_raises_not_found_when_car_not_exists(mock_repository: Mock) -> None:
    """Use case raises NotFoundError when repository returns None."""
    mock_repository.get_by_id.return_value = None
    use_case = GetCarById(car_repository=mock_repository)

    with pytest.raises(NotFoundError) as exc_info:
        await use_case.execute(GetCarByIdRequest(car_id="missing"))

    error = exc_info.value
    assert error.context["resource"] == "Car"
    assert error.context["identifier"] == "missing"
    assert "missing" in error.message


@pytest.mark.parametrize("car_id", ["", "   "])
@pytest.mark.asyncio
async def test_execute_rejects_blank_id(mock_repository: Mock, car_id: str) -> None:
    """Blank ids never reach the repository."""
    use_case = GetCarById(car_repository=mock_repository)

    with pytest.raises(ValidationError) as exc_info:
        await use_case.execute(GetCarByIdRequest(car_id=car_id))

    assert exc_info.value.errors[0]["field"] == "car_id"
    assert exc_info.value.errors[0]["code"] == "REQUIRED"
    mock_repository.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_execute_propagates_fetch_error(mock_repository: Mock) -> None:
    """Backend failures surface unchanged."""
    mock_repository.get_by_id.side_effect = FetchError(car_id="car-1")
    use_case = GetCarById(car_repository=mock_repository)

    with pytest.raises(FetchError):
        await use_case.execute(GetCarByIdRequest(car_id="car-1"))
