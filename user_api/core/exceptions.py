"""Typed exceptions raised by the user API clients."""
from __future__ import annotations
from typing import Optional


class UserApiError(Exception):
    """Base exception for all user API operations."""
    pass


class MalformedUri(UserApiError):
    """Configuration or input produced a URI that cannot be built."""
    pass


class TransportFailure(UserApiError):
    """The HTTP call could not complete (connection error, timeout).

    Attributes:
        url: Request URL that failed
    """

    def __init__(self, message: str, url: str = ""):
        self.url = url
        super().__init__(message)


class DecodeError(UserApiError):
    """Response body does not match the user wire schema."""
    pass


class UserCannotBeParsed(UserApiError):
    """A successful response carried a user that could not be decoded."""
    pass


class BadGateway(UserApiError):
    """Upstream service failed or returned an unexpected status.

    Attributes:
        status_code: Upstream HTTP status, None when no response was received
        body: Raw upstream response body
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.message = message
        super().__init__(message)


class SecretError(UserApiError):
    """Credential could not be resolved from the secret store."""
    pass
