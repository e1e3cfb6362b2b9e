from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from car_manager.entrypoints.http.error_responses import ErrorResponse
from car_manager.entrypoints.http.exception_handlers import register_exception_handlers
from car_manager.entrypoints.http.routes.cars import router as cars_router
from car_manager.entrypoints.http.routes.edit_sessions import router as edit_sessions_router
from car_manager.entrypoints.http.routes.health import router as health_router
from car_manager.entrypoints.http.session_registry import EditSessionRegistry
from car_manager.infra.config import edit_session_ttl_seconds
from car_manager.infra.http.clients import close_clients


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await close_clients()


def build_app() -> FastAPI:
    app = FastAPI(
        title="Car Manager API",
        description="""
        Inventory manager for cars with hosted photo sets.

        ## Features
        - List and search the car inventory
        - Create and delete cars
        - Edit a car's fields and photos in a session, then save in one update

        ## Authentication
        Session cookies are carried by the backend client; no auth is done here.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        Failures of the car backend or the image host are reported as 502.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        lifespan=lifespan,
        responses={
            422: {"model": ErrorResponse, "description": "Validation error"},
            502: {"model": ErrorResponse, "description": "Upstream failure"},
        },
    )

    app.state.edit_sessions = EditSessionRegistry(ttl_seconds=edit_session_ttl_seconds())

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(cars_router, prefix="/v1")
    app.include_router(edit_sessions_router, prefix="/v1")

    return app


app = build_app()
