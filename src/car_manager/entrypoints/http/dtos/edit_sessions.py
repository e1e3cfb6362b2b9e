from pydantic import BaseModel, ConfigDict, Field

from car_manager.entrypoints.http.dtos.cars import CarResponseDTO, ImageDTO, TagsDTO


class OpenEditSessionDTO(BaseModel):
    car_id: str = Field(description="Id of the car to edit", min_length=1)


class FieldsUpdateDTO(BaseModel):
    """Form values to bind. Unknown field names are ignored."""

    fields: dict[str, str]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"fields": {"title": "Corolla 2020 SE", "company": "Toyota"}}
        }
    )


class ImageDiffDTO(BaseModel):
    add_urls: list[str]
    delete_urls: list[str]


class EditSessionResponseDTO(BaseModel):
    session_id: str
    car_id: str
    title: str
    description: str
    tags: TagsDTO
    images: list[ImageDTO]
    pending: ImageDiffDTO
    error: str | None = None


class SubmitResponseDTO(BaseModel):
    car: CarResponseDTO
    session: EditSessionResponseDTO
