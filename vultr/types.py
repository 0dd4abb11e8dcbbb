"""Request and outcome types shared by the engine and the catalog."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from vultr.exceptions import (
    ClassifiedApiError,
    MalformedResponseError,
    TransportError,
    UnclassifiedApiError,
    VultrError,
)


class Verb(str, Enum):
    """HTTP methods the API documents."""

    GET = "GET"
    POST = "POST"


class ErrorKind(str, Enum):
    """Closed set of failure classifications."""

    INVALID_LOCATION = "invalid_location"
    UNAUTHORIZED = "unauthorized"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    PRECONDITION_FAILED = "precondition_failed"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    RATE_LIMITED = "rate_limited"
    UNCLASSIFIED = "unclassified"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_status_classified(self) -> bool:
        """True for the six kinds keyed by a documented status code."""
        return self in STATUS_CLASSIFICATION.values()


_DESCRIPTIONS = {
    ErrorKind.INVALID_LOCATION: "Invalid API location. Check the URL that you are using.",
    ErrorKind.UNAUTHORIZED: (
        "Invalid or missing API key. Check that your API key is present "
        "and matches your assigned key."
    ),
    ErrorKind.METHOD_NOT_ALLOWED: (
        "Invalid HTTP method. Check that the method (POST|GET) matches "
        "what the documentation indicates."
    ),
    ErrorKind.PRECONDITION_FAILED: (
        "Request failed. Check the response body for a more detailed description."
    ),
    ErrorKind.INTERNAL_SERVER_ERROR: "Internal server error. Try again at a later time.",
    ErrorKind.RATE_LIMITED: (
        "Rate limit hit. API requests are limited to an average of 2/s. "
        "Try your request again later."
    ),
    ErrorKind.UNCLASSIFIED: "Unexpected HTTP status code.",
    ErrorKind.TRANSPORT: "Request failed before a response was received.",
    ErrorKind.MALFORMED_RESPONSE: "Response body is not valid JSON.",
}

# Literal status codes documented by the API
STATUS_CLASSIFICATION = {
    400: ErrorKind.INVALID_LOCATION,
    403: ErrorKind.UNAUTHORIZED,
    405: ErrorKind.METHOD_NOT_ALLOWED,
    412: ErrorKind.PRECONDITION_FAILED,
    500: ErrorKind.INTERNAL_SERVER_ERROR,
    503: ErrorKind.RATE_LIMITED,
}


class RequestDescriptor(BaseModel):
    """One outgoing request. Built fresh per call, never reused."""

    verb: Verb
    path: str = Field(..., description="Path below the base URL, query string included")
    form: dict[str, str] | None = None
    api_key: str = Field("", description="Credential captured when the request was built")

    model_config = {"frozen": True}


@dataclass(frozen=True)
class RequestError:
    """Tagged failure value delivered in place of a payload."""

    kind: ErrorKind
    message: str
    status_code: int | None = None
    body: str | None = None
    cause: BaseException | None = None

    def to_exception(self) -> VultrError:
        """Build the matching exception for callers who prefer raising."""
        if self.kind is ErrorKind.TRANSPORT:
            return TransportError(self.message, cause=self.cause)
        if self.kind is ErrorKind.MALFORMED_RESPONSE:
            return MalformedResponseError(self.message, body=self.body)
        if self.kind is ErrorKind.UNCLASSIFIED:
            return UnclassifiedApiError(self.status_code, self.message, body=self.body)
        return ClassifiedApiError(self.kind, self.status_code, self.message, body=self.body)


@dataclass(frozen=True)
class Result:
    """
    Terminal outcome of one request.

    Exactly one of `value` or `error` is meaningful: a failed result never
    carries a payload, and a successful result may carry None (empty body).
    """

    value: Any = None
    error: RequestError | None = None

    @classmethod
    def success(cls, value: Any) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: RequestError) -> "Result":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def body(self) -> str | None:
        """Raw body text kept for diagnostics on failure."""
        return self.error.body if self.error else None

    def unwrap(self) -> Any:
        """
        Return the payload or raise the classified exception.

        Raises:
            VultrError: Subclass matching the error kind.
        """
        if self.error is None:
            return self.value
        raise self.error.to_exception() from self.error.cause
