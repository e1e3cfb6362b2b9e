from __future__ import annotations

import httpx

from car_manager.infra.config import (
    car_api_base_url,
    cloudinary_api_base_url,
    http_timeout_seconds,
)

# Lazy initialization - only create clients when needed
_car_api_client: httpx.AsyncClient | None = None
_upload_client: httpx.AsyncClient | None = None


def get_car_api_client() -> httpx.AsyncClient:
    """
    Get or create the client for the car backend (lazy initialization).

    One client is shared for the process lifetime so the connection pool
    and the cookie jar carrying the user's session are reused across calls.
    Timeouts are left to the transport (HTTP_TIMEOUT_SECONDS).
    """
    global _car_api_client
    if _car_api_client is None:
        _car_api_client = httpx.AsyncClient(
            base_url=car_api_base_url(),
            timeout=http_timeout_seconds(),
            headers={"Accept": "application/json"},
        )
    return _car_api_client


def get_upload_client() -> httpx.AsyncClient:
    """Get or create the client for the image host (lazy initialization)."""
    global _upload_client
    if _upload_client is None:
        _upload_client = httpx.AsyncClient(
            base_url=cloudinary_api_base_url(),
            timeout=http_timeout_seconds(),
        )
    return _upload_client


async def close_clients() -> None:
    """Close whichever clients were created. Safe to call more than once."""
    global _car_api_client, _upload_client
    for client in (_car_api_client, _upload_client):
        if client is not None:
            await client.aclose()
    _car_api_client = None
    _upload_client = None
