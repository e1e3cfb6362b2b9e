"""Error body models for the car manager API.

Every error answer, from a blank title to an unreachable image host, uses the
same `{detail, code, errors?}` shape.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One rejected field, such as a blank title or an image index past the end.
    """

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "title",
                "message": "Must not be blank",
                "code": "REQUIRED",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Supports:
    - Simple errors (just detail and code)
    - Multi-field validation errors (detail + errors array)
    - Upstream failures, where detail is the backend's own message when it sent one

    Examples:
        Simple error:
            {
                "detail": "Car with identifier '42' not found",
                "code": "NOT_FOUND"
            }

        Validation error:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "index",
                        "message": "No image at position 7",
                        "code": "INDEX_OUT_OF_RANGE"
                    }
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Car with identifier '42' not found", "code": "NOT_FOUND"},
                {"detail": "Failed to update car details", "code": "UPDATE_ERROR"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "title",
                            "message": "Must not be blank",
                            "code": "REQUIRED",
                        },
                    ],
                },
            ]
        }
    )
