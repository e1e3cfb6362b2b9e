from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from car_manager.domain.errors import ValidationError


TAG_KEYS = ("car_type", "company", "dealer")


class EditableField(str, Enum):
    """Field names an edit form may bind to."""

    TITLE = "title"
    DESCRIPTION = "description"
    CAR_TYPE = "car_type"
    COMPANY = "company"
    DEALER = "dealer"

    @classmethod
    def parse(cls, name: str) -> EditableField | None:
        """Return the matching field, or None for names the form does not know."""
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def is_tag(self) -> bool:
        return self.value in TAG_KEYS


@dataclass(frozen=True, slots=True)
class Image:
    url: str
    public_id: str


@dataclass(frozen=True, slots=True)
class CarTags:
    car_type: str = ""
    company: str = ""
    dealer: str = ""

    def values(self) -> tuple[str, str, str]:
        return (self.car_type, self.company, self.dealer)

    def to_dict(self) -> dict[str, str]:
        return {"car_type": self.car_type, "company": self.company, "dealer": self.dealer}


@dataclass(frozen=True, slots=True)
class CarDetails:
    """The editable part of a car: everything except its id and photos."""

    title: str = ""
    description: str = ""
    tags: CarTags = field(default_factory=CarTags)

    def with_field(self, name: EditableField, value: str) -> CarDetails:
        if name.is_tag:
            return replace(self, tags=replace(self.tags, **{name.value: value}))
        if name is EditableField.TITLE:
            return replace(self, title=value)
        return replace(self, description=value)

    def validate(self) -> None:
        """
        Validate details before they are sent to the backend.

        Raises:
            ValidationError: If the title is blank
        """
        if not self.title.strip():
            raise ValidationError(
                errors=[
                    {
                        "field": "title",
                        "message": "Must not be blank",
                        "code": "REQUIRED",
                    }
                ]
            )


@dataclass(frozen=True)
class Car:
    id: str
    title: str
    description: str
    tags: CarTags = field(default_factory=CarTags)
    images: tuple[Image, ...] = ()

    @property
    def details(self) -> CarDetails:
        return CarDetails(title=self.title, description=self.description, tags=self.tags)


@dataclass(frozen=True, slots=True)
class CarUpdate:
    """A single update request: new field values plus the photo set diff."""

    details: CarDetails
    add_images: tuple[str, ...] = ()
    delete_images: tuple[str, ...] = ()
