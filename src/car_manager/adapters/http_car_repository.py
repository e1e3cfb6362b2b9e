"""REST implementation of CarRepository."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from car_manager.domain.car import Car, CarDetails, CarTags, CarUpdate, Image
from car_manager.domain.errors import CreateError, DeleteError, FetchError, UpdateError
from car_manager.ports.car_repository import CarRepository

logger = logging.getLogger(__name__)


class ImagePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str
    public_id: str = ""


class TagsPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    car_type: str = ""
    company: str = ""
    dealer: str = ""

    @field_validator("car_type", "company", "dealer", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class CarPayload(BaseModel):
    """Car document as the backend serializes it (Mongo-style ``_id``)."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str = ""
    description: str = ""
    tags: TagsPayload = Field(default_factory=TagsPayload)
    images: list[ImagePayload] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _none_as_empty_tags(cls, value: Any) -> Any:
        return {} if value is None else value


_CAR_LIST = TypeAdapter(list[CarPayload])


class HttpCarRepository(CarRepository):
    """
    REST implementation of CarRepository.

    - Talks to the backend through a shared httpx.AsyncClient (cookies carry the session)
    - 404 on single-car fetch is "no such car", not a failure
    - Transport errors, non-2xx statuses and unparsable bodies become domain errors
    - Error bodies of the form {"message": ...} are surfaced verbatim
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        """
        Initialize repository with an HTTP client.

        Args:
            client: Client whose base_url points at the car backend
        """
        self._client = client

    async def get_by_id(self, car_id: str) -> Car | None:
        response = await self._send("GET", f"/car/get/{car_id}", FetchError, car_id=car_id)

        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        if not response.is_success:
            raise self._failure(response, FetchError, car_id=car_id)

        try:
            payload = CarPayload.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            logger.warning("Malformed car payload", extra={"car_id": car_id, "error": str(exc)})
            raise FetchError("Received malformed car data", car_id=car_id) from exc

        return self._to_domain(payload)

    async def get_all(self) -> list[Car]:
        response = await self._send("GET", "/cars/getall", FetchError)

        if not response.is_success:
            raise self._failure(response, FetchError)

        try:
            payloads = _CAR_LIST.validate_python(response.json())
        except (ValueError, PydanticValidationError) as exc:
            logger.warning("Malformed car collection payload", extra={"error": str(exc)})
            raise FetchError("Received malformed car data") from exc

        return [self._to_domain(payload) for payload in payloads]

    async def create(self, details: CarDetails, images: Sequence[Image]) -> Car:
        body = {
            **self._details_body(details),
            "images": [{"url": image.url, "public_id": image.public_id} for image in images],
        }
        response = await self._send("POST", "/car/create", CreateError, json=body)

        if not response.is_success:
            raise self._failure(response, CreateError, verbatim=True)

        try:
            payload = CarPayload.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            logger.warning("Malformed created car payload", extra={"error": str(exc)})
            raise CreateError("Car was created but the response was malformed") from exc

        return self._to_domain(payload)

    async def update(self, car_id: str, update: CarUpdate) -> Car | None:
        body = {
            **self._details_body(update.details),
            "addImages": list(update.add_images),
            "deleteImages": list(update.delete_images),
        }
        response = await self._send(
            "PUT", f"/car/update/{car_id}", UpdateError, json=body, car_id=car_id
        )

        if not response.is_success:
            raise self._failure(response, UpdateError, verbatim=True, car_id=car_id)

        # Some backends answer with the car, others with {"message": "..."}
        try:
            payload = CarPayload.model_validate(response.json())
        except (ValueError, PydanticValidationError):
            return None

        return self._to_domain(payload)

    async def delete(self, car_id: str) -> None:
        response = await self._send("DELETE", f"/car/delete/{car_id}", DeleteError, car_id=car_id)

        if not response.is_success:
            raise self._failure(response, DeleteError, verbatim=True, car_id=car_id)

    async def _send(
        self,
        method: str,
        path: str,
        error_type: type[FetchError | UpdateError | CreateError | DeleteError],
        json: dict[str, Any] | None = None,
        **context: Any,
    ) -> httpx.Response:
        try:
            return await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning(
                "Car backend unreachable",
                extra={"method": method, "path": path, "error": str(exc), **context},
            )
            raise error_type(**context) from exc

    def _failure(
        self,
        response: httpx.Response,
        error_type: type[FetchError | UpdateError | CreateError | DeleteError],
        verbatim: bool = False,
        **context: Any,
    ) -> FetchError | UpdateError | CreateError | DeleteError:
        message = self._error_message(response) if verbatim else None
        logger.warning(
            "Car backend rejected request",
            extra={
                "method": response.request.method,
                "path": response.request.url.path,
                "status_code": response.status_code,
                "server_message": message,
                **context,
            },
        )
        return error_type(message, status_code=response.status_code, **context)

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
            return body["message"]
        return None

    @staticmethod
    def _details_body(details: CarDetails) -> dict[str, Any]:
        return {
            "title": details.title,
            "description": details.description,
            "tags": details.tags.to_dict(),
        }

    @staticmethod
    def _to_domain(payload: CarPayload) -> Car:
        """
        Convert a backend payload to the domain entity.

        Args:
            payload: Validated car document

        Returns:
            Car domain entity
        """
        return Car(
            id=payload.id,
            title=payload.title,
            description=payload.description,
            tags=CarTags(
                car_type=payload.tags.car_type,
                company=payload.tags.company,
                dealer=payload.tags.dealer,
            ),
            images=tuple(Image(url=image.url, public_id=image.public_id) for image in payload.images),
        )
