"""Settings loader for the user API clients (environment variables)."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

USER_API_SCHEME = "USER_API_SCHEME"
USER_API_HOST = "USER_API_HOST"
USER_SERVICE_SECRET_NAME = "USER_SERVICE_SECRET_NAME"
USER_SERVICE_SECRET_KEY = "USER_SERVICE_SECRET_KEY"
USER_API_TIMEOUT = "USER_API_TIMEOUT"
SECRETS_BACKEND = "SECRETS_BACKEND"
SECRETS_DIR = "SECRETS_DIR"
AWS_REGION = "AWS_REGION"

SECRETS_BACKENDS = ("file", "aws")
DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True)
class UserApiSettings:
    """User API client configuration, read once at construction."""
    user_api_scheme: str
    user_api_host: str

    # Management client only
    user_service_secret_name: str = ""
    user_service_secret_key: str = ""

    # Transport
    request_timeout: float = DEFAULT_TIMEOUT

    # Secret store
    secrets_backend: str = "file"
    secrets_dir: str = "/run/secrets"
    aws_region: Optional[str] = None

    @property
    def has_secret_coordinates(self) -> bool:
        return bool(self.user_service_secret_name and self.user_service_secret_key)


def _require(var_name: str) -> str:
    """Get a required environment variable."""
    value = os.environ.get(var_name, "").strip()
    if not value:
        raise RuntimeError(f"Environment variable {var_name} is required.")
    return value


def _parse_timeout(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"{USER_API_TIMEOUT} must be a number, got {raw!r}") from None
    if timeout <= 0:
        raise RuntimeError(f"{USER_API_TIMEOUT} must be positive, got {raw!r}")
    return timeout


def load_settings(require_secret: bool = False) -> UserApiSettings:
    """Load client settings from the environment.

    Args:
        require_secret: Also require the secret coordinates (management client)

    Returns:
        Immutable settings

    Raises:
        RuntimeError: If a required variable is missing or a value is invalid
    """
    if require_secret:
        secret_name = _require(USER_SERVICE_SECRET_NAME)
        secret_key = _require(USER_SERVICE_SECRET_KEY)
    else:
        secret_name = os.environ.get(USER_SERVICE_SECRET_NAME, "")
        secret_key = os.environ.get(USER_SERVICE_SECRET_KEY, "")

    secrets_backend = os.environ.get(SECRETS_BACKEND, "file").strip().lower()
    if secrets_backend not in SECRETS_BACKENDS:
        raise RuntimeError(f"{SECRETS_BACKEND} must be one of {', '.join(SECRETS_BACKENDS)}, got {secrets_backend!r}")

    settings = UserApiSettings(
        user_api_scheme=_require(USER_API_SCHEME),
        user_api_host=_require(USER_API_HOST),
        user_service_secret_name=secret_name,
        user_service_secret_key=secret_key,
        request_timeout=_parse_timeout(os.environ.get(USER_API_TIMEOUT)),
        secrets_backend=secrets_backend,
        secrets_dir=os.environ.get(SECRETS_DIR, "/run/secrets"),
        aws_region=os.environ.get(AWS_REGION) or None,
    )
    logger.info(f"[settings] User API at {settings.user_api_scheme}://{settings.user_api_host}, "
                f"secrets backend: {settings.secrets_backend}")
    return settings
