"""Secret readers and the credential provider used for write requests.

Readers expose a single capability, ``fetch_secret(name, key) -> str``:
    - FileSecretsReader: Docker secrets mounted under /run/secrets (default)
    - AwsSecretsReader: AWS Secrets Manager

Each secret holds a JSON object; ``key`` selects the value inside it.
"""
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import SecretError

logger = logging.getLogger(__name__)

DEFAULT_SECRETS_DIR = "/run/secrets"


def _value_from_secret_string(secret_string: str, secret_name: str, secret_key: str) -> str:
    try:
        secret = json.loads(secret_string)
    except ValueError as exc:
        raise SecretError(f"Secret '{secret_name}' is not a JSON object") from exc

    if not isinstance(secret, dict) or secret_key not in secret:
        raise SecretError(f"Key '{secret_key}' not found in secret '{secret_name}'")
    return secret[secret_key]


def _env_var_name(secret_name: str, secret_key: str) -> str:
    return f"{secret_name}_{secret_key}".replace("-", "_").upper()


class FileSecretsReader:
    """Read secrets from files, falling back to environment variables.

    Priority:
    1. <secrets_dir>/<secret_name> (JSON object, value under secret_key)
    2. Environment variable SECRETNAME_SECRETKEY
    """

    def __init__(self, secrets_dir: str = DEFAULT_SECRETS_DIR):
        self.secrets_dir = Path(secrets_dir)

    def fetch_secret(self, secret_name: str, secret_key: str) -> str:
        """Return the value stored under secret_key in secret_name.

        Raises:
            SecretError: If the secret or key cannot be resolved
        """
        secret_file = self.secrets_dir / secret_name
        if secret_file.is_file():
            try:
                content = secret_file.read_text().strip()
            except OSError as exc:
                raise SecretError(f"Failed to read {secret_file}") from exc
            return _value_from_secret_string(content, secret_name, secret_key)

        env_var = _env_var_name(secret_name, secret_key)
        value = os.getenv(env_var)
        if value:
            logger.debug(f"Loaded secret '{secret_name}' from environment variable {env_var}")
            return value

        raise SecretError(f"Secret '{secret_name}' not found in {self.secrets_dir} or environment")


class AwsSecretsReader:
    """Read secrets from AWS Secrets Manager."""

    def __init__(self, client: Any = None, region_name: Optional[str] = None):
        """Initialize reader.

        Args:
            client: Preconfigured secretsmanager client (built with boto3 when omitted)
            region_name: AWS region for the default client
        """
        if client is None:
            config = {"region_name": region_name} if region_name else {}
            client = boto3.client("secretsmanager", **config)
        self._client = client

    def fetch_secret(self, secret_name: str, secret_key: str) -> str:
        try:
            response = self._client.get_secret_value(SecretId=secret_name)
        except (ClientError, BotoCoreError) as exc:
            raise SecretError(f"Could not read secret '{secret_name}' from Secrets Manager") from exc

        secret_string = response.get("SecretString")
        if secret_string is None:
            raise SecretError(f"Secret '{secret_name}' has no string value")
        return _value_from_secret_string(secret_string, secret_name, secret_key)


class CredentialProvider:
    """Resolve the bearer credential for write requests.

    The reader is called on every fetch_credential(); nothing is cached.
    """

    def __init__(self, reader: Any, secret_name: str, secret_key: str):
        self.reader = reader
        self.secret_name = secret_name
        self.secret_key = secret_key

    def fetch_credential(self) -> str:
        """Return the credential placed verbatim in the Authorization header.

        Raises:
            SecretError: If the reader fails or returns an empty value
        """
        try:
            credential = self.reader.fetch_secret(self.secret_name, self.secret_key)
        except SecretError:
            raise
        except Exception as exc:
            raise SecretError(f"Could not fetch secret '{self.secret_name}'") from exc

        if not isinstance(credential, str) or not credential:
            raise SecretError(f"Secret '{self.secret_name}' has an empty value for '{self.secret_key}'")
        return credential
