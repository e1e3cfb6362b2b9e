from __future__ import annotations

import logging

from car_manager.domain.car import Car, Image
from car_manager.domain.errors import ValidationError
from car_manager.domain.photo_set import EditSessionState, ImageDiff, ImageFile
from car_manager.ports.image_upload_gateway import ImageUploadGateway

logger = logging.getLogger(__name__)


class PhotoSetReconciler:
    """
    Tracks a car's photo set across one edit session.

    Additions are uploaded immediately and remembered as pending. Removals are
    deferred: an image the backend already stores is recorded for deletion,
    an image added in this session is simply forgotten. The reconciler tracks
    intent and never diffs against the server a second time.

    Uploads may resolve out of order. Each one holds a ticket taken when it was
    issued; the image lands at its issuance position, and a response whose
    ticket was discarded meanwhile is dropped without touching state.
    """

    def __init__(self, image_upload_gateway: ImageUploadGateway, state: EditSessionState) -> None:
        self._gateway = image_upload_gateway
        self._state = state

    @classmethod
    def for_car(cls, image_upload_gateway: ImageUploadGateway, car: Car) -> PhotoSetReconciler:
        return cls(image_upload_gateway, EditSessionState.from_car(car))

    @property
    def state(self) -> EditSessionState:
        return self._state

    @property
    def current_images(self) -> tuple[Image, ...]:
        return tuple(self._state.current_images)

    @property
    def pending_uploads(self) -> tuple[int, ...]:
        """Tickets of uploads still in flight, in issuance order."""
        return tuple(sorted(self._state.in_flight_uploads))

    def reserve_upload(self) -> int:
        return self._state.issue_ticket()

    def discard_upload(self, ticket: int) -> None:
        """Forget a pending slot; its upload still completes but is ignored."""
        self._state.in_flight_uploads.discard(ticket)

    async def add_image(self, file: ImageFile, ticket: int | None = None) -> Image | None:
        """
        Upload ``file`` and add it to the photo set.

        Args:
            file: Raw image picked by the user
            ticket: Slot from reserve_upload(); one is reserved when omitted

        Returns:
            The stored image, or None if its slot was discarded while uploading

        Raises:
            UploadError: If the gateway failed; state is left unchanged
        """
        if ticket is None:
            ticket = self.reserve_upload()

        try:
            image = await self._gateway.upload(file)
        except Exception:
            self._state.in_flight_uploads.discard(ticket)
            raise

        state = self._state
        if ticket not in state.in_flight_uploads:
            logger.info(
                "Dropping upload for a discarded slot",
                extra={"car_id": state.car_id, "ticket": ticket, "url": image.url},
            )
            return None
        state.in_flight_uploads.discard(ticket)

        if image.url in state.pending_deletions:
            # Same content re-added: the backend still has it, so cancel the deletion
            state.pending_deletions.remove(image.url)
            state.current_images.insert(state.insertion_index(ticket), image)
            return image

        if image.url in state.pending_additions or any(
            current.url == image.url for current in state.current_images
        ):
            logger.debug(
                "Image already in photo set", extra={"car_id": state.car_id, "url": image.url}
            )
            return image

        state.current_images.insert(state.insertion_index(ticket), image)
        state.pending_additions[image.url] = ticket
        return image

    def remove_image(self, index: int) -> Image:
        """
        Remove the image shown at ``index``.

        Raises:
            ValidationError: If index is out of range (nothing changes)
        """
        state = self._state
        if not 0 <= index < len(state.current_images):
            raise ValidationError(
                errors=[
                    {
                        "field": "index",
                        "message": f"No image at position {index}",
                        "code": "INDEX_OUT_OF_RANGE",
                    }
                ]
            )

        image = state.current_images.pop(index)

        if image.url in state.pending_additions:
            # Never persisted, nothing to delete server-side
            del state.pending_additions[image.url]
        elif image.url not in state.pending_deletions:
            state.pending_deletions.append(image.url)

        return image

    def compute_diff(self) -> ImageDiff:
        additions = self._state.pending_additions
        return ImageDiff(
            add_urls=tuple(sorted(additions, key=additions.__getitem__)),
            delete_urls=tuple(self._state.pending_deletions),
        )

    def reset(self, submitted: ImageDiff | None = None) -> None:
        """
        Re-baseline after a confirmed submission.

        Args:
            submitted: The diff that was sent. Changes recorded after it was
                computed stay pending. None clears everything.
        """
        state = self._state
        if submitted is None:
            state.pending_additions.clear()
            state.pending_deletions.clear()
        else:
            shown = {image.url for image in state.current_images}
            for url in submitted.add_urls:
                if url in state.pending_additions:
                    del state.pending_additions[url]
                elif url not in shown and url not in state.pending_deletions:
                    # Removed while the update was in flight, but the backend stored it
                    state.pending_deletions.append(url)
            for url in submitted.delete_urls:
                if url in state.pending_deletions:
                    state.pending_deletions.remove(url)
                elif url in shown and url not in state.pending_additions:
                    # Re-added while the update was in flight, but the backend dropped it
                    state.pending_additions[url] = state.next_ticket
                    state.next_ticket += 1

        state.baseline = tuple(
            image for image in state.current_images if image.url not in state.pending_additions
        )
