from __future__ import annotations

import logging
from collections.abc import Callable

from car_manager.domain.car import Car, CarDetails, CarUpdate, EditableField, Image
from car_manager.domain.errors import DomainError, ValidationError
from car_manager.domain.photo_set import EditSessionState, ImageDiff, ImageFile
from car_manager.ports.car_repository import CarRepository
from car_manager.ports.image_upload_gateway import ImageUploadGateway
from car_manager.use_cases.delete_car import DeleteCar, DeleteCarRequest
from car_manager.use_cases.get_car_by_id import GetCarById, GetCarByIdRequest
from car_manager.use_cases.photo_set_reconciler import PhotoSetReconciler

logger = logging.getLogger(__name__)


class CarEditSession:
    """
    One open "edit car" view.

    Coordinates field edits and a PhotoSetReconciler into a single update
    request. Every failure is recorded in ``error`` (the message the user
    sees) and re-raised as a typed domain error; nothing is retried.

    Lifecycle:
        load() -> set_field / add_image / remove_image ... -> submit()
        A new load() replaces the reconciler; responses that arrive for the
        previous one never touch the new state.
    """

    def __init__(
        self,
        car_repository: CarRepository,
        image_upload_gateway: ImageUploadGateway,
        on_submitted: Callable[[Car], None] | None = None,
    ) -> None:
        """
        Args:
            car_repository: Backend holding the car records
            image_upload_gateway: Host that stores uploaded photos
            on_submitted: Called with the updated car after each successful submit
        """
        self._repository = car_repository
        self._gateway = image_upload_gateway
        self._on_submitted = on_submitted
        self._car_id: str | None = None
        self._details = CarDetails()
        self._reconciler: PhotoSetReconciler | None = None
        self.error: str | None = None

    @property
    def is_loaded(self) -> bool:
        return self._reconciler is not None

    @property
    def car_id(self) -> str | None:
        return self._car_id

    @property
    def details(self) -> CarDetails:
        return self._details

    @property
    def current_images(self) -> tuple[Image, ...]:
        return self._require_reconciler().current_images

    @property
    def state(self) -> EditSessionState:
        return self._require_reconciler().state

    @property
    def pending_uploads(self) -> tuple[int, ...]:
        return self._require_reconciler().pending_uploads

    async def load(self, car_id: str) -> Car:
        """
        Fetch the car and start editing it.

        Raises:
            NotFoundError: If the backend does not know the car
            FetchError: If the backend call failed
        """
        try:
            response = await GetCarById(self._repository).execute(GetCarByIdRequest(car_id=car_id))
        except DomainError as exc:
            self._fail(exc, "load", car_id=car_id)
            raise

        car = response.car
        self._car_id = car.id
        self._details = car.details
        self._reconciler = PhotoSetReconciler.for_car(self._gateway, car)
        self.error = None

        logger.info("Edit session loaded", extra={"car_id": car.id, "image_count": len(car.images)})
        return car

    def set_field(self, name: str, value: str) -> bool:
        """
        Bind a form input to the draft.

        Returns:
            True if ``name`` is a recognized field; unknown names are ignored
        """
        field = EditableField.parse(name)
        if field is None:
            logger.debug("Ignoring unknown field", extra={"field_name": name})
            return False

        self._details = self._details.with_field(field, value)
        return True

    def reserve_upload(self) -> int:
        return self._require_reconciler().reserve_upload()

    def discard_upload(self, ticket: int) -> None:
        self._require_reconciler().discard_upload(ticket)

    async def add_image(self, file: ImageFile, ticket: int | None = None) -> Image | None:
        """
        Upload a photo and add it to the set.

        Returns:
            The stored image, or None when the response arrived for a slot
            or a session load that has since been superseded

        Raises:
            UploadError: If the upload failed (photo set unchanged)
        """
        reconciler = self._require_reconciler()
        try:
            image = await reconciler.add_image(file, ticket)
        except DomainError as exc:
            if reconciler is self._reconciler:
                self._fail(exc, "upload", image_filename=file.filename)
            raise

        if reconciler is not self._reconciler:
            logger.info(
                "Dropping upload for a replaced session",
                extra={"car_id": reconciler.state.car_id},
            )
            return None
        return image

    def remove_image(self, index: int) -> Image:
        """
        Raises:
            ValidationError: If index is out of range
        """
        try:
            return self._require_reconciler().remove_image(index)
        except ValidationError as exc:
            self._fail(exc, "remove_image", index=index)
            raise

    def compute_diff(self) -> ImageDiff:
        return self._require_reconciler().compute_diff()

    async def submit(self) -> Car:
        """
        Send field values and the photo set diff as one update.

        On failure nothing changes, so the user can retry.

        Returns:
            The updated car

        Raises:
            ValidationError: If the details are invalid (nothing is sent)
            UpdateError: If the backend rejected the update
        """
        reconciler = self._require_reconciler()
        car_id = reconciler.state.car_id
        details = self._details

        try:
            details.validate()
        except ValidationError as exc:
            self._fail(exc, "submit", car_id=car_id)
            raise

        diff = reconciler.compute_diff()
        update = CarUpdate(details=details, add_images=diff.add_urls, delete_images=diff.delete_urls)

        try:
            echoed = await self._repository.update(car_id, update)
        except DomainError as exc:
            if reconciler is self._reconciler:
                self._fail(exc, "submit", car_id=car_id)
            raise

        reconciler.reset(diff)
        if reconciler is self._reconciler:
            self.error = None

        car = echoed or Car(
            id=car_id,
            title=details.title,
            description=details.description,
            tags=details.tags,
            images=reconciler.current_images,
        )

        logger.info(
            "Car updated",
            extra={
                "car_id": car_id,
                "added": len(diff.add_urls),
                "deleted": len(diff.delete_urls),
                "photos_changed": not diff.is_empty,
            },
        )
        if self._on_submitted is not None:
            self._on_submitted(car)
        return car

    async def delete_car(self, car_id: str | None = None) -> None:
        """
        Delete the whole car (the loaded one unless ``car_id`` is given).

        Raises:
            DeleteError: If the backend refused; the record remains
        """
        target = car_id or self._car_id
        if target is None:
            raise self._not_loaded()

        try:
            await DeleteCar(self._repository).execute(DeleteCarRequest(car_id=target))
        except DomainError as exc:
            self._fail(exc, "delete", car_id=target)
            raise

        self.error = None

    def _require_reconciler(self) -> PhotoSetReconciler:
        if self._reconciler is None:
            raise self._not_loaded()
        return self._reconciler

    @staticmethod
    def _not_loaded() -> ValidationError:
        return ValidationError(
            errors=[
                {
                    "field": "car_id",
                    "message": "No car loaded in this edit session",
                    "code": "SESSION_NOT_LOADED",
                }
            ]
        )

    def _fail(self, exc: DomainError, operation: str, **context: object) -> None:
        self.error = exc.message
        logger.info(
            "Edit session operation failed",
            extra={"operation": operation, "error_code": exc.error_code, **context},
        )
