"""
Failure classification for the deck-building service.

Every failure a caller can observe is one of:
- a returned outcome (NoDeckFound, FieldDefault, unrecognized names), or
- a KnownError subclass raised at a collaborator boundary
  (catalog store, text-generation service, session busy flag).

Anything else is an unknown failure and is reported through the
ApiResponse envelope with a fixed message, never as a raw 500.
"""

from enum import Enum

from fastapi import status
from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INVALID_COLOR = "invalid_color"

    # Resource failures
    CATALOG_UNAVAILABLE = "catalog_unavailable"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"
    EXTERNAL_API_ERROR = "external_api_error"
    SESSION_BUSY = "session_busy"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


UNKNOWN_FAILURE_MESSAGE = "I failed and I don't know why. Try simplifying the request or retrying."


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel):
    """
    Response envelope for failures that escape an endpoint.

    Successful endpoint responses use their own response models; this
    envelope carries the classification when something goes wrong.
    """

    outcome: OutcomeType
    failure: FailureDetail

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
        """Create a known failure response."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def unknown_failure(cls, exception: Exception) -> "ApiResponse":
        """
        Create an unknown failure response.

        The message is fixed; only the exception type is exposed.
        """
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message=UNKNOWN_FAILURE_MESSAGE,
                detail=type(exception).__name__,
                suggestion="If this persists, please report the issue.",
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class CatalogLoadError(KnownError):
    """
    The card catalog could not be loaded.

    Fatal to deck building: nothing that needs the catalog may proceed.
    """

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.CATALOG_UNAVAILABLE,
            message="Failed to load the card database.",
            detail=detail,
            suggestion="Run `python -m deckoracle.jobs.build_catalog` and restart the service.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )


class TextGenerationError(KnownError):
    """The text-generation service call failed (network or non-2xx status)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.upstream_status = status_code
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=message,
            detail=f"Upstream status: {status_code}" if status_code is not None else None,
            suggestion="Retry the request in a moment.",
            status_code=status.HTTP_502_BAD_GATEWAY,
        )


class ServiceUnavailableError(KnownError):
    """A collaborator the request needs is not configured."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message=message,
            suggestion=suggestion,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )


class SessionBusyError(KnownError):
    """A second request was sent while one is still in flight."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.SESSION_BUSY,
            message="A deck request is already in progress.",
            suggestion="Wait for the current reply before sending another message.",
            status_code=status.HTTP_409_CONFLICT,
        )


class InvalidColorError(KnownError):
    """A color selection contained a symbol outside W/U/B/R/G/C."""

    def __init__(self, symbols: set[str]):
        self.symbols = symbols
        super().__init__(
            kind=FailureKind.INVALID_COLOR,
            message=f"Unknown color symbols: {', '.join(sorted(symbols))}",
            suggestion="Use W, U, B, R, G, or C for colorless.",
            status_code=422,
        )
