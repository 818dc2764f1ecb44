"""User <-> JSON wire format.

Wire schema:
    {"username": "alice", "institution": "inst-1", "roles": [{"name": "Creator"}]}

``institutionId`` and ``orgNumber`` are accepted as alternative keys for the
institution when decoding. Unknown keys are ignored.
"""
from __future__ import annotations
import json
from typing import Any, Dict, List, Tuple, Union

from .exceptions import DecodeError
from .models import Role, User

INSTITUTION_KEYS = ("institution", "institutionId", "orgNumber")


def decode_user(body: Union[bytes, str]) -> User:
    """Decode a response body into a User.

    Args:
        body: Raw JSON body

    Returns:
        Decoded User

    Raises:
        DecodeError: If the body is not JSON or does not match the schema
    """
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DecodeError("User payload must be a JSON object")

    username = payload.get("username")
    if not isinstance(username, str) or not username:
        raise DecodeError("User payload is missing 'username'")

    institution = next((payload[key] for key in INSTITUTION_KEYS if payload.get(key) is not None), None)
    if not isinstance(institution, str) or not institution:
        raise DecodeError("User payload is missing 'institution'")

    return User(username=username, institution=institution, roles=_decode_roles(payload.get("roles")))


def _decode_roles(raw: Any) -> Tuple[Role, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise DecodeError("'roles' must be a list")

    roles: List[Role] = []
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise DecodeError(f"Invalid role entry: {entry!r}")
        roles.append(Role(name=entry["name"]))
    return tuple(roles)


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "username": user.username,
        "institution": user.institution,
        "roles": [{"name": role.name} for role in user.roles],
    }


def encode_user(user: User) -> bytes:
    """Encode a User as a UTF-8 JSON request body."""
    return json.dumps(user_to_dict(user)).encode("utf-8")
