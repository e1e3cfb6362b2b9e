"""
Dependency injection for FastAPI routes.

Key principle: adapters are cheap per-request wrappers around the shared,
lazily created HTTP clients. Stateful objects (inventory snapshot, open edit
sessions) live on ``app.state`` for the application lifetime.
"""

from __future__ import annotations

from fastapi import Depends, Request

from car_manager.adapters.cloudinary_image_upload_gateway import CloudinaryImageUploadGateway
from car_manager.adapters.deferred_image_upload_gateway import DeferredImageUploadGateway
from car_manager.adapters.http_car_repository import HttpCarRepository
from car_manager.entrypoints.http.session_registry import EditSessionRegistry
from car_manager.infra.config import cloudinary_cloud_name, cloudinary_upload_preset
from car_manager.infra.http.clients import get_car_api_client, get_upload_client
from car_manager.ports.car_repository import CarRepository
from car_manager.ports.image_upload_gateway import ImageUploadGateway
from car_manager.use_cases.create_car import CreateCar
from car_manager.use_cases.get_car_by_id import GetCarById
from car_manager.use_cases.inventory_query_engine import InventoryQueryEngine


def get_car_repository() -> CarRepository:
    """
    Provides a car repository bound to the shared backend client.

    Returns:
        CarRepository: REST repository (per-request wrapper, shared connection pool)
    """
    return HttpCarRepository(client=get_car_api_client())


def build_image_upload_gateway() -> ImageUploadGateway:
    """
    Builds the Cloudinary gateway from the environment.

    Raises:
        RuntimeError: If CLOUDINARY_CLOUD_NAME or CLOUDINARY_UPLOAD_PRESET is not set
    """
    cloud_name = cloudinary_cloud_name()
    upload_preset = cloudinary_upload_preset()
    return CloudinaryImageUploadGateway(
        client=get_upload_client(),
        cloud_name=cloud_name,
        upload_preset=upload_preset,
    )


def get_image_upload_gateway() -> ImageUploadGateway:
    """
    Provides the image upload gateway.

    Settings are only read on the first upload, so sessions open without them.
    """
    return DeferredImageUploadGateway(factory=build_image_upload_gateway)


def get_inventory(
    request: Request,
    repository: CarRepository = Depends(get_car_repository),
) -> InventoryQueryEngine:
    """
    Returns the application-wide inventory engine, creating it on first use.

    The engine keeps the last fetched snapshot between requests so that
    searches never hit the backend.
    """
    engine: InventoryQueryEngine | None = getattr(request.app.state, "inventory", None)
    if engine is None:
        engine = InventoryQueryEngine(car_repository=repository)
        request.app.state.inventory = engine
    return engine


def get_edit_session_registry(request: Request) -> EditSessionRegistry:
    """Returns the application-wide registry of open edit sessions."""
    registry: EditSessionRegistry | None = getattr(request.app.state, "edit_sessions", None)
    if registry is None:
        registry = EditSessionRegistry()
        request.app.state.edit_sessions = registry
    return registry


def get_get_car_by_id_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> GetCarById:
    return GetCarById(car_repository=repository)


def get_create_car_use_case(
    repository: CarRepository = Depends(get_car_repository),
) -> CreateCar:
    return CreateCar(car_repository=repository)
