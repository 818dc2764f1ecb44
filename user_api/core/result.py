"""Response classification and Ok/Failure result values.

Each client stage (URI build, send, classify, decode) returns either
``Ok(value)`` or a ``Failure``. ``bind`` chains stages and stops at the first
failure, so each client applies its own error policy to a single outcome.

Usage:
    outcome = attempt(build_uri, scheme, host, path).bind(send).bind(decode)
    if isinstance(outcome, Failure):
        ...
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from .exceptions import (
    BadGateway,
    DecodeError,
    MalformedUri,
    SecretError,
    TransportFailure,
    UserApiError,
    UserCannotBeParsed,
)
from .models import User

T = TypeVar("T")

HTTP_OK = 200
HTTP_NOT_FOUND = 404


class Classification(Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    UNEXPECTED_FAILURE = "unexpected_failure"


def classify(status_code: int, allow_not_found: bool = True) -> Classification:
    """Map an HTTP status to a classification.

    200 is success. 404 is not-found for lookups only; creation passes
    ``allow_not_found=False`` so 404 becomes an unexpected failure.
    """
    if status_code == HTTP_OK:
        return Classification.SUCCESS
    if status_code == HTTP_NOT_FOUND and allow_not_found:
        return Classification.NOT_FOUND
    return Classification.UNEXPECTED_FAILURE


class FailureKind(Enum):
    MALFORMED_URI = "malformed_uri"
    TRANSPORT_FAILURE = "transport_failure"
    DECODE_ERROR = "decode_error"
    UNEXPECTED_STATUS = "unexpected_status"
    SECRET_ERROR = "secret_error"


_KIND_BY_EXCEPTION = (
    (MalformedUri, FailureKind.MALFORMED_URI),
    (TransportFailure, FailureKind.TRANSPORT_FAILURE),
    (DecodeError, FailureKind.DECODE_ERROR),
    (SecretError, FailureKind.SECRET_ERROR),
    (UserCannotBeParsed, FailureKind.DECODE_ERROR),
    (BadGateway, FailureKind.UNEXPECTED_STATUS),
    (UserApiError, FailureKind.UNEXPECTED_STATUS),
)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def bind(self, fn: Callable[[T], "Result[Any]"]) -> "Result[Any]":
        return fn(self.value)


@dataclass(frozen=True)
class Failure:
    """A failed stage.

    Attributes:
        kind: Which stage failed and how
        message: Human readable description
        cause: Exception that triggered the failure, if any
        status_code: Upstream status for UNEXPECTED_STATUS failures
        body: Upstream body for UNEXPECTED_STATUS failures
    """
    kind: FailureKind
    message: str
    cause: Optional[BaseException] = None
    status_code: Optional[int] = None
    body: Optional[str] = None

    def bind(self, fn: Callable[[Any], "Result[Any]"]) -> "Failure":
        return self

    @classmethod
    def from_exception(cls, exc: UserApiError) -> "Failure":
        kind = next(k for exc_type, k in _KIND_BY_EXCEPTION if isinstance(exc, exc_type))
        return cls(
            kind=kind,
            message=str(exc),
            cause=exc,
            status_code=getattr(exc, "status_code", None),
            body=getattr(exc, "body", None),
        )


Result = Union[Ok[T], Failure]


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Run ``fn`` and wrap its return value, or its UserApiError, as a Result.

    Exceptions outside the UserApiError hierarchy propagate unchanged.
    """
    try:
        return Ok(fn(*args, **kwargs))
    except UserApiError as exc:
        return Failure.from_exception(exc)


# ─────────────────────────────────────────────────────────────────────────────
# Request outcomes
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Found:
    user: User


@dataclass(frozen=True)
class NotFound:
    pass


Outcome = Union[Found, NotFound, Failure]
