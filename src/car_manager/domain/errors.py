"""Domain error classes.

Protocol-agnostic errors that represent business failures and failures of the
external collaborators (car backend, image upload service).
These errors are translated to HTTP responses by the entrypoint layer.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains error information that can be translated
    to HTTP responses or shown to the user verbatim.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Business rule validation error.

    Examples:
        - Blank car title
        - Image index out of range
        - Edit session used before a car was loaded

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "title", "message": "Must not be blank"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """Resource not found.

    Examples:
        - Car with ID not found
        - Edit session expired or never opened

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Car", "EditSession")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class UpstreamError(DomainError):
    """An external collaborator rejected a call or could not be reached.

    Subclasses carry a default, user-facing message. A message reported by
    the collaborator itself takes precedence and is kept verbatim.

    Protocol mappings:
        - REST: 502 Bad Gateway
    """

    error_code: str = "UPSTREAM_ERROR"
    default_message: str = "Upstream request failed"

    def __init__(self, message: str | None = None, **context: Any) -> None:
        super().__init__(message or self.default_message, **context)


class FetchError(UpstreamError):
    """Retrieving a single car or the whole collection failed."""

    error_code: str = "FETCH_ERROR"
    default_message: str = "Failed to fetch car data"


class UploadError(UpstreamError):
    """The image upload service rejected the file or was unreachable."""

    error_code: str = "UPLOAD_ERROR"
    default_message: str = "Failed to upload image"


class UpdateError(UpstreamError):
    """The backend rejected a car update."""

    error_code: str = "UPDATE_ERROR"
    default_message: str = "Failed to update car details"


class CreateError(UpstreamError):
    """The backend rejected a new car."""

    error_code: str = "CREATE_ERROR"
    default_message: str = "Failed to create car"


class DeleteError(UpstreamError):
    """The backend refused to delete a car."""

    error_code: str = "DELETE_ERROR"
    default_message: str = "Failed to delete car"
