"""Capabilities and helpers shared by the lookup and management clients."""
from __future__ import annotations
import time
from typing import Any, Dict, Optional, Protocol

from ..codec import decode_user
from ..exceptions import TransportFailure
from ..models import User
from ..result import (
    Classification,
    Failure,
    FailureKind,
    Found,
    NotFound,
    Outcome,
    Result,
    attempt,
    classify,
)
from .transport import TransportResponse

AUTHORIZATION = "Authorization"
CONTENT_TYPE = "Content-Type"
JSON_CONTENT_TYPE = "application/json"

ERROR_PARSING_USER_INFORMATION = "Error parsing user information"
ERROR_FETCHING_USER_INFORMATION = "Error fetching user information"
USER_CANNOT_BE_PARSED_ERROR = "User cannot be parsed"
COULD_NOT_FETCH_USER_ERROR_MESSAGE = "Could not fetch user: "
COULD_NOT_CREATE_USER_ERROR_MESSAGE = "Could not create user: "
ERROR_MESSAGE_TEMPLATE = "{prefix}\nStatus Code:{status}\n:Response message:{body}"


class UserLookup(Protocol):
    """Read capability shared by both clients."""

    def get_user(self, username: str) -> Optional[User]:
        ...


class UserProvisioning(UserLookup, Protocol):
    """Read and create capability of the management client."""

    def create_user(self, user: User) -> User:
        ...


def elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def send_request(
    transport: Any,
    method: str,
    uri: str,
    headers: Optional[Dict[str, str]] = None,
    body: Optional[bytes] = None,
) -> Result[TransportResponse]:
    """Send one request through ``transport`` and wrap the result.

    Socket-level errors (OSError, ConnectionError) from transports that do
    not raise TransportFailure themselves become TRANSPORT_FAILURE failures.
    """
    try:
        return attempt(transport.send, method, uri, headers=headers, body=body)
    except OSError as exc:
        error = TransportFailure(f"{method} {uri} failed: {exc}", url=uri)
        error.__cause__ = exc
        return Failure.from_exception(error)


def unexpected_status(response: TransportResponse, prefix: str) -> Failure:
    """Describe a response whose status is neither success nor a handled not-found."""
    return Failure(
        kind=FailureKind.UNEXPECTED_STATUS,
        message=ERROR_MESSAGE_TEMPLATE.format(prefix=prefix, status=response.status_code, body=response.body),
        status_code=response.status_code,
        body=response.body,
    )


def to_outcome(response: TransportResponse, prefix: str, allow_not_found: bool = True) -> Outcome:
    """Classify a response and decode its body into a request outcome.

    Args:
        response: Response received from the transport
        prefix: Error message prefix for unexpected statuses
        allow_not_found: Treat 404 as NotFound (lookups) rather than a failure

    Returns:
        Found(user), NotFound(), or a Failure of kind UNEXPECTED_STATUS or DECODE_ERROR
    """
    classification = classify(response.status_code, allow_not_found=allow_not_found)
    if classification is Classification.NOT_FOUND:
        return NotFound()
    if classification is Classification.UNEXPECTED_FAILURE:
        return unexpected_status(response, prefix)

    decoded = attempt(decode_user, response.body)
    if isinstance(decoded, Failure):
        return decoded
    return Found(decoded.value)
