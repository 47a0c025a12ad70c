"""Identity and session-claim values.

Learn: store rows are turned into frozen dataclasses at the edge of the
credential store. Nothing downstream holds a live row or an ORM object for
a user, and the password hash only ever lives on Identity, never on the
claim or the public view.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SessionClaim:
    """The minimal identity projection embedded in a token."""

    id: int
    username: Optional[str]
    email: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username, "email": self.email}


@dataclass(frozen=True)
class Identity:
    """A persisted user record."""

    id: int
    username: Optional[str] = None
    email: Optional[str] = None
    password_hash: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Identity":
        return cls(
            id=row["id"],
            username=row.get("username"),
            email=row.get("email"),
            password_hash=row.get("password_hash"),
        )

    @property
    def can_password_login(self) -> bool:
        # Username-only placeholders have no hash to check against.
        return bool(self.password_hash)

    def claim(self) -> SessionClaim:
        return SessionClaim(id=self.id, username=self.username, email=self.email)


def public_view(identity: Identity) -> dict[str, Any]:
    """What callers outside the core get to see of an identity."""
    return identity.claim().to_dict()
