"""Typed exceptions for Vultr API failures."""


class VultrError(Exception):
    """Base class for all request failures."""

    def __init__(self, message: str, body: str | None = None):
        self.body = body
        super().__init__(message)


class TransportError(VultrError):
    """
    Request never produced a response.

    DNS failure, connection refused, timeout, TLS error. The underlying
    exception is kept as `cause` (and as __cause__ when raised via unwrap).
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class ClassifiedApiError(VultrError):
    """Server answered with one of the documented error status codes."""

    def __init__(self, kind, status_code: int, message: str, body: str | None = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(message, body)


class UnclassifiedApiError(VultrError):
    """Server answered with an undocumented non-2xx status code."""

    def __init__(self, status_code: int, message: str, body: str | None = None):
        self.status_code = status_code
        super().__init__(message, body)


class MalformedResponseError(VultrError):
    """2xx response with a non-empty body that is not valid JSON."""
