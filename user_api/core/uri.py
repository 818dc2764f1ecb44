"""Request URI construction for the user-management service."""
from __future__ import annotations
from typing import Optional
from urllib.parse import urlunsplit

from .exceptions import MalformedUri

USERS_PATH = "/users"
SERVICE_USERS_PATH = "/users-roles-internal/service/users"
DELIMITER = "/"


def build_uri(scheme: str, host: str, path_prefix: str, segment: Optional[str] = None) -> str:
    """Build an absolute request URI.

    The path is ``path_prefix`` joined to ``segment`` with a single ``/``.
    No encoding or trailing-slash normalization is applied.

    Args:
        scheme: URI scheme (e.g., "https")
        host: Host name, optionally with port
        path_prefix: Fixed path prefix (USERS_PATH or SERVICE_USERS_PATH)
        segment: Optional trailing path segment, usually a username

    Returns:
        URI string

    Raises:
        MalformedUri: If scheme or host is empty
    """
    if not scheme or not scheme.strip():
        raise MalformedUri("URI scheme must not be empty")
    if not host or not host.strip():
        raise MalformedUri("URI host must not be empty")

    path = path_prefix if segment is None else DELIMITER.join((path_prefix, segment))
    return urlunsplit((scheme, host, path, "", ""))
