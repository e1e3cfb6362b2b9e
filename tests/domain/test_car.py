from __future__ import annotations

import pytest

from car_manager.domain.car import (
    Car,
    CarDetails,
    CarTags,
    EditableField,
    Image,
)
from car_manager.domain.errors import ValidationError


@pytest.fixture()
def details() -> CarDetails:
    return CarDetails(
        title="Corolla 2020",
        description="One owner",
        tags=CarTags(car_type="Sedan", company="Toyota", dealer="AutoMax"),
    )


# ==============================================================================
# EditableField
# ==============================================================================


@pytest.mark.parametrize("name", ["title", "description", "car_type", "company", "dealer"])
def test_parse_recognizes_form_fields(name: str) -> None:
    field = EditableField.parse(name)

    assert field is not None
    assert field.value == name


@pytest.mark.parametrize("name", ["", "images", "Title", "tags", "price"])
def test_parse_returns_none_for_unknown_names(name: str) -> None:
    assert EditableField.parse(name) is None


def test_only_tag_fields_are_tags() -> None:
    assert {field for field in EditableField if field.is_tag} == {
        EditableField.CAR_TYPE,
        EditableField.COMPANY,
        EditableField.DEALER,
    }


# ==============================================================================
# CarDetails
# ==============================================================================


def test_with_field_updates_title(details: CarDetails) -> None:
    updated = details.with_field(EditableField.TITLE, "Corolla 2021")

    assert updated.title == "Corolla 2021"
    assert updated.description == "One owner"
    assert details.title == "Corolla 2020"  # original untouched


def test_with_field_updates_description(details: CarDetails) -> None:
    assert details.with_field(EditableField.DESCRIPTION, "Two owners").description == "Two owners"


def test_with_field_updates_only_the_matching_tag(details: CarDetails) -> None:
    updated = details.with_field(EditableField.DEALER, "City Motors")

    assert updated.tags == CarTags(car_type="Sedan", company="Toyota", dealer="City Motors")


@pytest.mark.parametrize("field", [field for field in EditableField if field.is_tag])
def test_with_field_keeps_tag_values_out_of_text_fields(
    details: CarDetails, field: EditableField
) -> None:
    updated = details.with_field(field, "Changed")

    assert getattr(updated.tags, field.value) == "Changed"
    assert (updated.title, updated.description) == (details.title, details.description)


def test_validate_accepts_non_blank_title(details: CarDetails) -> None:
    details.validate()


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_validate_rejects_blank_title(title: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        CarDetails(title=title).validate()

    assert exc_info.value.errors == [
        {"field": "title", "message": "Must not be blank", "code": "REQUIRED"}
    ]


# ==============================================================================
# Car
# ==============================================================================


def test_tags_default_to_empty_strings() -> None:
    car = Car(id="1", title="Civic", description="")

    assert car.tags.to_dict() == {"car_type": "", "company": "", "dealer": ""}
    assert car.images == ()


def test_details_exposes_editable_part(details: CarDetails) -> None:
    car = Car(
        id="1",
        title=details.title,
        description=details.description,
        tags=details.tags,
        images=(Image(url="https://img/a.jpg", public_id="a"),),
    )

    assert car.details == details


def test_tag_values_in_fixed_order() -> None:
    tags = CarTags(car_type="SUV", company="Honda", dealer="DriveNow")

    assert tags.values() == ("SUV", "Honda", "DriveNow")
