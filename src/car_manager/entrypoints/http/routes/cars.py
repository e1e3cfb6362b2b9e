from fastapi import APIRouter, Depends, Response, status

from car_manager.entrypoints.http.dependencies import (
    get_create_car_use_case,
    get_get_car_by_id_use_case,
    get_inventory,
)
from car_manager.entrypoints.http.dtos.cars import (
    CarCreateDTO,
    CarResponseDTO,
    InventoryQueryDTO,
    InventoryResponseDTO,
)
from car_manager.entrypoints.http.mappers.car_mapper import CarMapper
from car_manager.use_cases.create_car import CreateCar
from car_manager.use_cases.get_car_by_id import GetCarById, GetCarByIdRequest
from car_manager.use_cases.inventory_query_engine import InventoryQueryEngine


router = APIRouter(tags=["Cars"])


@router.get(
    "/cars",
    response_model=InventoryResponseDTO,
    summary="List and search the inventory",
    description="""
    List the car inventory, optionally filtered by a search term.

    ## Search
    - Case-insensitive substring match on title, description and tag values
    - An empty term returns every car
    - Results keep the backend's order

    ## Caching
    The collection is fetched from the backend on first use and kept in memory.
    Searches filter that snapshot. Pass `refresh=true` to re-fetch.

    ## Example
    ```
    GET /v1/cars?q=toyota
    ```
    """,
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "cars": [
                            {
                                "id": "65a1f0c2e4b0a1b2c3d4e5f6",
                                "title": "Corolla 2020",
                                "description": "One owner",
                                "tags": {
                                    "car_type": "Sedan",
                                    "company": "Toyota",
                                    "dealer": "AutoMax",
                                },
                                "images": [],
                            }
                        ],
                        "total": 1,
                        "term": "toyota",
                    }
                }
            },
        },
        502: {
            "description": "Car backend unavailable",
            "content": {
                "application/json": {
                    "example": {"detail": "Failed to fetch car data", "code": "FETCH_ERROR"}
                }
            },
        },
    },
)
async def list_cars(
    query: InventoryQueryDTO = Depends(),
    inventory: InventoryQueryEngine = Depends(get_inventory),
) -> InventoryResponseDTO:
    """List cars endpoint following load → search → map → return pattern."""
    # 1. Load once (or on demand)
    if query.refresh or not inventory.is_loaded:
        await inventory.load()

    # 2. Filter the snapshot
    cars = inventory.search(query.q)

    # 3. Map to response
    return CarMapper.to_inventory_response(cars, term=query.q)


@router.get(
    "/cars/{car_id}",
    response_model=CarResponseDTO,
    summary="Get car details",
    responses={
        404: {
            "description": "Car not found",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Car with identifier '65a1f0c2e4b0a1b2c3d4e5f6' not found",
                        "code": "NOT_FOUND",
                    }
                }
            },
        },
    },
)
async def get_car(
    car_id: str,
    use_case: GetCarById = Depends(get_get_car_by_id_use_case),
) -> CarResponseDTO:
    result = await use_case.execute(GetCarByIdRequest(car_id=car_id))
    return CarMapper.to_car_response(result.car)


@router.post(
    "/cars",
    response_model=CarResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a car",
)
async def create_car(
    payload: CarCreateDTO,
    use_case: CreateCar = Depends(get_create_car_use_case),
) -> CarResponseDTO:
    """
    Create car endpoint.

    Images must already be stored on the image host; only their urls and
    public ids are sent to the backend.
    """
    result = await use_case.execute(CarMapper.to_create_request(payload))
    return CarMapper.to_car_response(result.car)


@router.delete(
    "/cars/{car_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a car",
)
async def delete_car(
    car_id: str,
    inventory: InventoryQueryEngine = Depends(get_inventory),
) -> Response:
    """Deletes through the backend, then drops the car from the cached inventory."""
    await inventory.delete_car(car_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
