"""Read+write user client for the internal user service.

Anything other than a clean 200 (or a 404 on lookup) is raised as a typed
error so callers see creation succeed or fail explicitly.
"""
from __future__ import annotations
import logging
import time
from typing import Any, Optional

from ...config.settings import UserApiSettings
from ..codec import encode_user
from ..exceptions import BadGateway, UserApiError, UserCannotBeParsed
from ..models import User
from ..result import Failure, FailureKind, NotFound, Outcome, Result, attempt
from ..secrets import AwsSecretsReader, CredentialProvider, FileSecretsReader
from ..uri import SERVICE_USERS_PATH, build_uri
from .base import (
    AUTHORIZATION,
    CONTENT_TYPE,
    COULD_NOT_CREATE_USER_ERROR_MESSAGE,
    COULD_NOT_FETCH_USER_ERROR_MESSAGE,
    ERROR_PARSING_USER_INFORMATION,
    JSON_CONTENT_TYPE,
    USER_CANNOT_BE_PARSED_ERROR,
    elapsed_ms,
    send_request,
    to_outcome,
)
from .transport import HttpTransport, TransportResponse

logger = logging.getLogger(__name__)


class UserManagementClient:
    """Look up and create users at ``{scheme}://{host}/users-roles-internal/service/users``.

    Features:
    - GET lookup: 200 -> User, 404 -> None, anything else -> BadGateway
    - POST creation authorized with a credential fetched per request
    - UserCannotBeParsed when a 200 body does not decode

    Usage:
        credentials = CredentialProvider(FileSecretsReader(), "user-service", "apiKey")
        client = UserManagementClient("https", "api.example.org", credentials)
        user = client.get_user("alice") or client.create_user(new_user)
    """

    PATH = SERVICE_USERS_PATH

    def __init__(
        self,
        scheme: str,
        host: str,
        credentials: CredentialProvider,
        transport: Optional[HttpTransport] = None,
    ):
        """Initialize management client.

        Args:
            scheme: User API scheme
            host: User API host
            credentials: Provider of the Authorization header value for creation
            transport: HTTP transport (default HttpTransport)
        """
        self.scheme = scheme
        self.host = host
        self.credentials = credentials
        self.transport = transport or HttpTransport()

    @classmethod
    def from_settings(
        cls,
        settings: UserApiSettings,
        transport: Optional[HttpTransport] = None,
        secrets_reader: Any = None,
    ) -> "UserManagementClient":
        """Build a client from settings, picking the secret reader by secrets_backend.

        Raises:
            RuntimeError: If the secret name or key is not configured
        """
        if not settings.has_secret_coordinates:
            raise RuntimeError(
                "USER_SERVICE_SECRET_NAME and USER_SERVICE_SECRET_KEY are required for the management client."
            )
        if secrets_reader is None:
            if settings.secrets_backend == "aws":
                secrets_reader = AwsSecretsReader(region_name=settings.aws_region)
            else:
                secrets_reader = FileSecretsReader(settings.secrets_dir)
        credentials = CredentialProvider(
            secrets_reader,
            settings.user_service_secret_name,
            settings.user_service_secret_key,
        )
        return cls(
            settings.user_api_scheme,
            settings.user_api_host,
            credentials,
            transport or HttpTransport(timeout=settings.request_timeout),
        )

    def get_user(self, username: str) -> Optional[User]:
        """Return the user with the given username, or None if it does not exist.

        Raises:
            BadGateway: On transport failure or unexpected upstream status
            UserCannotBeParsed: If a 200 body cannot be decoded
            MalformedUri: If scheme or host is empty
        """
        start = time.monotonic()
        logger.info(f"Requesting user information for username: {username}")

        response = (
            attempt(build_uri, self.scheme, self.host, self.PATH, username)
            .bind(lambda uri: send_request(self.transport, "GET", uri))
        )
        if isinstance(response, Failure):
            logger.info(f"getUser failure took {elapsed_ms(start)} ms")
            raise self._escalate(response, COULD_NOT_FETCH_USER_ERROR_MESSAGE)

        outcome = to_outcome(response.value, COULD_NOT_FETCH_USER_ERROR_MESSAGE)
        return self._user_from_outcome(outcome, "getUser", start, COULD_NOT_FETCH_USER_ERROR_MESSAGE)

    def create_user(self, user: User) -> User:
        """Create a user and return the stored representation.

        The credential is fetched before the request is built; if that fails
        no request is sent.

        Raises:
            SecretError: If the credential cannot be resolved
            BadGateway: On transport failure or any non-200 status
            UserCannotBeParsed: If the 200 body cannot be decoded
            MalformedUri: If scheme or host is empty
        """
        start = time.monotonic()
        logger.info(f"Requesting user creation for username: {user.username}")

        response = (
            attempt(self.credentials.fetch_credential)
            .bind(lambda credential: attempt(build_uri, self.scheme, self.host, self.PATH)
                  .bind(lambda uri: self._send_create_request(uri, credential, user)))
        )
        if isinstance(response, Failure):
            logger.info(f"createUser failure took {elapsed_ms(start)} ms")
            raise self._escalate(response, COULD_NOT_CREATE_USER_ERROR_MESSAGE)

        # Creation has no not-found case, so the outcome is Found or a Failure
        outcome = to_outcome(response.value, COULD_NOT_CREATE_USER_ERROR_MESSAGE, allow_not_found=False)
        return self._user_from_outcome(outcome, "createUser", start, COULD_NOT_CREATE_USER_ERROR_MESSAGE)

    def _send_create_request(self, uri: str, credential: str, user: User) -> Result[TransportResponse]:
        headers = {AUTHORIZATION: credential, CONTENT_TYPE: JSON_CONTENT_TYPE}
        return send_request(self.transport, "POST", uri, headers=headers, body=encode_user(user))

    def _user_from_outcome(self, outcome: Outcome, operation: str, start: float, prefix: str) -> Optional[User]:
        """Log completion timing and apply the raise-on-failure policy.

        Decode failures are timed as success since a 200 was received.
        """
        if isinstance(outcome, Failure) and outcome.kind is FailureKind.UNEXPECTED_STATUS:
            logger.info(f"{operation} failure took {elapsed_ms(start)} ms")
            raise self._escalate(outcome, prefix)

        logger.info(f"{operation} success took {elapsed_ms(start)} ms")
        if isinstance(outcome, Failure):
            raise self._escalate(outcome, prefix)
        if isinstance(outcome, NotFound):
            return None
        return outcome.user

    def _escalate(self, failure: Failure, prefix: str) -> UserApiError:
        """Log a failure at error level and turn it into the exception to raise.

        Secret and URI errors surface as-is; transport failures and unexpected
        statuses become BadGateway; decode errors become UserCannotBeParsed.
        """
        if failure.kind is FailureKind.DECODE_ERROR:
            logger.error(ERROR_PARSING_USER_INFORMATION, exc_info=failure.cause)
            error: UserApiError = UserCannotBeParsed(USER_CANNOT_BE_PARSED_ERROR)
        elif failure.kind is FailureKind.UNEXPECTED_STATUS:
            logger.error(failure.message)
            error = BadGateway(failure.message, status_code=failure.status_code, body=failure.body)
        elif failure.kind is FailureKind.TRANSPORT_FAILURE:
            logger.error(prefix, exc_info=failure.cause)
            error = BadGateway(prefix)
        elif isinstance(failure.cause, UserApiError):
            logger.error(f"{prefix}{failure.message}", exc_info=failure.cause)
            return failure.cause
        else:
            logger.error(f"{prefix}{failure.message}")
            error = BadGateway(f"{prefix}{failure.message}")
        error.__cause__ = failure.cause
        return error
