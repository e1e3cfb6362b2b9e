from __future__ import annotations

from collections.abc import Sequence

from car_manager.domain.car import Car, CarDetails, CarTags, Image
from car_manager.entrypoints.http.dtos.cars import (
    CarCreateDTO,
    CarResponseDTO,
    ImageDTO,
    InventoryResponseDTO,
    TagsDTO,
)
from car_manager.use_cases.create_car import CreateCarRequest


class CarMapper:
    """Maps between REST DTOs and domain models for cars and the inventory."""

    @staticmethod
    def to_image_dto(image: Image) -> ImageDTO:
        return ImageDTO(url=image.url, public_id=image.public_id)

    @staticmethod
    def to_tags_dto(tags: CarTags) -> TagsDTO:
        return TagsDTO(car_type=tags.car_type, company=tags.company, dealer=tags.dealer)

    @staticmethod
    def to_domain_tags(dto: TagsDTO) -> CarTags:
        return CarTags(car_type=dto.car_type, company=dto.company, dealer=dto.dealer)

    @staticmethod
    def to_car_response(car: Car) -> CarResponseDTO:
        """
        Converts domain Car entity to REST response DTO.

        Args:
            car: Domain Car entity

        Returns:
            CarResponseDTO: REST response DTO with images in display order
        """
        return CarResponseDTO(
            id=car.id,
            title=car.title,
            description=car.description,
            tags=CarMapper.to_tags_dto(car.tags),
            images=[CarMapper.to_image_dto(image) for image in car.images],
        )

    @staticmethod
    def to_inventory_response(cars: Sequence[Car], term: str) -> InventoryResponseDTO:
        return InventoryResponseDTO(
            cars=[CarMapper.to_car_response(car) for car in cars],
            total=len(cars),
            term=term,
        )

    @staticmethod
    def to_create_request(dto: CarCreateDTO) -> CreateCarRequest:
        """
        Builds the domain create request. Title validation is left to the domain.

        Args:
            dto: Create payload

        Returns:
            CreateCarRequest with domain details and images
        """
        return CreateCarRequest(
            details=CarDetails(
                title=dto.title,
                description=dto.description,
                tags=CarMapper.to_domain_tags(dto.tags),
            ),
            images=tuple(Image(url=image.url, public_id=image.public_id) for image in dto.images),
        )
