from pydantic import BaseModel, ConfigDict, Field


class ImageDTO(BaseModel):
    url: str
    public_id: str = ""


class TagsDTO(BaseModel):
    car_type: str = ""
    company: str = ""
    dealer: str = ""


class CarResponseDTO(BaseModel):
    id: str
    title: str
    description: str
    tags: TagsDTO
    images: list[ImageDTO]


class InventoryQueryDTO(BaseModel):
    """Query parameters for listing and searching the inventory."""

    q: str = Field(
        default="",
        description="Case-insensitive substring matched against title, description and tags. "
        "Empty matches every car.",
        examples=["toyota"],
    )
    refresh: bool = Field(
        default=False,
        description="Re-fetch the collection from the backend before searching",
    )


class InventoryResponseDTO(BaseModel):
    cars: list[CarResponseDTO]
    total: int
    term: str


class CarCreateDTO(BaseModel):
    """Request payload for creating a car from already-uploaded images."""

    title: str = Field(description="Car title (must not be blank)", examples=["Corolla 2020"])
    description: str = Field(default="", examples=["One owner, full service history"])
    tags: TagsDTO = Field(default_factory=TagsDTO)
    images: list[ImageDTO] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Corolla 2020",
                "description": "One owner, full service history",
                "tags": {"car_type": "Sedan", "company": "Toyota", "dealer": "AutoMax"},
                "images": [
                    {
                        "url": "https://res.cloudinary.com/demo/image/upload/v1/corolla.jpg",
                        "public_id": "corolla",
                    }
                ],
            }
        }
    )
