"""Read-only user client used for best-effort profile enrichment.

Every failure degrades to "no user found"; nothing is raised to the caller.
"""
from __future__ import annotations
import logging
import time
from typing import Optional

from ...config.settings import UserApiSettings
from ..models import User
from ..result import Failure, FailureKind, Found, NotFound, Result, attempt
from ..uri import USERS_PATH, build_uri
from .base import (
    ERROR_FETCHING_USER_INFORMATION,
    ERROR_PARSING_USER_INFORMATION,
    COULD_NOT_FETCH_USER_ERROR_MESSAGE,
    elapsed_ms,
    send_request,
    to_outcome,
)
from .transport import HttpTransport, TransportResponse

logger = logging.getLogger(__name__)


class UserLookupClient:
    """Look up users by username at ``{scheme}://{host}/users/{username}``.

    Usage:
        client = UserLookupClient("https", "api.example.org")
        user = client.get_user("alice")  # None when missing or on any error
    """

    PATH = USERS_PATH

    def __init__(self, scheme: str, host: str, transport: Optional[HttpTransport] = None):
        """Initialize lookup client.

        Args:
            scheme: User API scheme
            host: User API host
            transport: HTTP transport (default HttpTransport)
        """
        self.scheme = scheme
        self.host = host
        self.transport = transport or HttpTransport()

    @classmethod
    def from_settings(cls, settings: UserApiSettings, transport: Optional[HttpTransport] = None) -> "UserLookupClient":
        return cls(
            settings.user_api_scheme,
            settings.user_api_host,
            transport or HttpTransport(timeout=settings.request_timeout),
        )

    def get_user(self, username: str) -> Optional[User]:
        """Return the user with the given username, or None.

        None covers not-found, unexpected statuses, transport failures and
        undecodable bodies; each failure is logged at error level.
        """
        start = time.monotonic()
        logger.info(f"Requesting user information for username: {username}")

        response = self._fetch_user_information(username)
        if isinstance(response, Failure):
            logger.info(f"getUser failure took {elapsed_ms(start)} ms")
            logger.error(f"{ERROR_FETCHING_USER_INFORMATION}: {response.message}", exc_info=response.cause)
            return None

        # A received response counts as success for timing, whatever its status
        logger.info(f"getUser success took {elapsed_ms(start)} ms")
        return self._user_or_none(response.value)

    def create_user(self, user: User) -> None:
        """No-op; this client cannot create users."""
        return None

    def _fetch_user_information(self, username: str) -> Result[TransportResponse]:
        return (
            attempt(build_uri, self.scheme, self.host, self.PATH, username)
            .bind(lambda uri: send_request(self.transport, "GET", uri))
        )

    def _user_or_none(self, response: TransportResponse) -> Optional[User]:
        outcome = to_outcome(response, COULD_NOT_FETCH_USER_ERROR_MESSAGE)
        if isinstance(outcome, Found):
            return outcome.user
        if isinstance(outcome, NotFound):
            return None

        if outcome.kind is FailureKind.DECODE_ERROR:
            logger.error(ERROR_PARSING_USER_INFORMATION, exc_info=outcome.cause)
        else:
            logger.error(outcome.message)
        return None
