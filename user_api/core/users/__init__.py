"""User API client library.

Architecture:
- transport.py: Single-request HTTP transport over a requests session
- base.py: Shared capabilities, message constants and response helpers
- lookup.py: UserLookupClient (read-only, never raises)
- management.py: UserManagementClient (read+write, typed errors)

Usage:
    from user_api.config import load_settings
    from user_api.core.users import UserLookupClient, UserManagementClient

    lookup = UserLookupClient.from_settings(load_settings())
    user = lookup.get_user("alice")

    management = UserManagementClient.from_settings(load_settings(require_secret=True))
    user = management.get_user("alice") or management.create_user(new_user)
"""
from ..exceptions import (
    UserApiError,
    MalformedUri,
    TransportFailure,
    DecodeError,
    UserCannotBeParsed,
    BadGateway,
    SecretError,
)
from .base import UserLookup, UserProvisioning
from .lookup import UserLookupClient
from .management import UserManagementClient
from .transport import HttpTransport, TransportResponse, REQUEST_TIMEOUT

__all__ = [
    # Clients
    "UserLookupClient",
    "UserManagementClient",
    "UserLookup",
    "UserProvisioning",

    # Transport
    "HttpTransport",
    "TransportResponse",
    "REQUEST_TIMEOUT",

    # Exceptions
    "UserApiError",
    "MalformedUri",
    "TransportFailure",
    "DecodeError",
    "UserCannotBeParsed",
    "BadGateway",
    "SecretError",
]
