from __future__ import annotations

from dataclasses import dataclass, field

from car_manager.domain.car import Car, Image


@dataclass(frozen=True, slots=True)
class ImageFile:
    """A raw image picked by the user, not yet uploaded."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class ImageDiff:
    """
    Photo set changes to send with an update.

    add_urls keeps upload issuance order. delete_urls has set semantics
    (each url once) and keeps removal order so the payload is deterministic.
    """

    add_urls: tuple[str, ...] = ()
    delete_urls: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.add_urls and not self.delete_urls


@dataclass(slots=True)
class EditSessionState:
    """
    Mutable photo set state of one edit session.

    Invariant: a url is never both in pending_additions and pending_deletions.
    """

    car_id: str
    baseline: tuple[Image, ...]
    current_images: list[Image]
    # url -> upload ticket; tickets order additions by issuance
    pending_additions: dict[str, int] = field(default_factory=dict)
    pending_deletions: list[str] = field(default_factory=list)
    in_flight_uploads: set[int] = field(default_factory=set)
    next_ticket: int = 0

    @classmethod
    def from_car(cls, car: Car) -> EditSessionState:
        return cls(
            car_id=car.id,
            baseline=tuple(car.images),
            current_images=list(car.images),
        )

    def issue_ticket(self) -> int:
        ticket = self.next_ticket
        self.next_ticket += 1
        self.in_flight_uploads.add(ticket)
        return ticket

    def insertion_index(self, ticket: int) -> int:
        """Position for an image uploaded under ``ticket``: before any later upload."""
        for index, image in enumerate(self.current_images):
            added_by = self.pending_additions.get(image.url)
            if added_by is not None and added_by > ticket:
                return index
        return len(self.current_images)
