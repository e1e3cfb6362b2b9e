from __future__ import annotations

import os

DEFAULT_CLOUDINARY_API_BASE_URL = "https://api.cloudinary.com/v1_1"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_EDIT_SESSION_TTL_SECONDS = 1800.0


def _required(name: str) -> str:
    value = os.getenv(name)

    if not value:
        raise RuntimeError(f"{name} environment variable is not set")

    return value


def car_api_base_url() -> str:
    return _required("CAR_API_BASE_URL")


def cloudinary_cloud_name() -> str:
    return _required("CLOUDINARY_CLOUD_NAME")


def cloudinary_upload_preset() -> str:
    return _required("CLOUDINARY_UPLOAD_PRESET")


def cloudinary_api_base_url() -> str:
    return os.getenv("CLOUDINARY_API_BASE_URL") or DEFAULT_CLOUDINARY_API_BASE_URL


def http_timeout_seconds() -> float:
    raw = os.getenv("HTTP_TIMEOUT_SECONDS")

    if not raw:
        return DEFAULT_HTTP_TIMEOUT_SECONDS

    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"HTTP_TIMEOUT_SECONDS must be a number, got {raw!r}")


def edit_session_ttl_seconds() -> float:
    raw = os.getenv("EDIT_SESSION_TTL_SECONDS")

    if not raw:
        return DEFAULT_EDIT_SESSION_TTL_SECONDS

    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"EDIT_SESSION_TTL_SECONDS must be a number, got {raw!r}")
