"""Records exchanged with the user-management service."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Role:
    """A named role granted to a user."""
    name: str


@dataclass(frozen=True)
class User:
    """Canonical user profile as stored by the user-management service.

    Attributes:
        username: Unique identifier of the user
        institution: Identifier of the user's institution
        roles: Ordered role grants (may be empty)
    """
    username: str
    institution: str
    roles: Tuple[Role, ...] = field(default_factory=tuple)


# Identity-provider attribute names
FEIDE_ID = "custom:feideId"
ORG_NUMBER = "custom:orgNumber"
AFFILIATION = "custom:affiliation"
GIVEN_NAME = "given_name"
FAMILY_NAME = "family_name"


@dataclass(frozen=True)
class UserAttributes:
    """Identity-provider supplied fields of the user being authenticated.

    Input context only; the clients never produce this record.
    """
    feide_id: Optional[str] = None
    org_number: Optional[str] = None
    affiliation: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None

    @classmethod
    def from_cognito(cls, attributes: Mapping[str, Any]) -> "UserAttributes":
        """Build from the ``userAttributes`` map of a trigger event.

        Args:
            attributes: Attribute map keyed by identity-provider names

        Returns:
            UserAttributes with missing keys left as None
        """
        return cls(
            feide_id=attributes.get(FEIDE_ID),
            org_number=attributes.get(ORG_NUMBER),
            affiliation=attributes.get(AFFILIATION),
            given_name=attributes.get(GIVEN_NAME),
            family_name=attributes.get(FAMILY_NAME),
        )

    def to_cognito(self) -> Dict[str, str]:
        """Inverse of from_cognito; unset fields are omitted."""
        pairs = (
            (FEIDE_ID, self.feide_id),
            (ORG_NUMBER, self.org_number),
            (AFFILIATION, self.affiliation),
            (GIVEN_NAME, self.given_name),
            (FAMILY_NAME, self.family_name),
        )
        return {key: value for key, value in pairs if value is not None}
