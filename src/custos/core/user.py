"""User aggregate and the documents and value objects that travel with it"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class UserLoginInfo:
    """An external login: the provider's name and the user's key at that provider"""

    login_provider: str
    provider_key: str


@dataclass(frozen=True)
class Claim:
    """A claim as exchanged with the identity framework"""

    type: str
    value: str


@dataclass
class IdentityUserClaim:
    """Storage form of a claim, embedded in the user document"""

    claim_type: str
    claim_value: str

    def to_claim(self) -> Claim:
        return Claim(self.claim_type, self.claim_value)


@dataclass(eq=False)
class IdentityUser:
    """The durable record of one identity.

    `roles`, `claims` and `logins` never hold duplicates under their
    respective equality rules; `UserStore` maintains that on every mutation.
    """

    user_name: Optional[str] = None
    id: Optional[str] = None
    password_hash: Optional[str] = None
    security_stamp: Optional[str] = None
    roles: list[str] = field(default_factory=list)
    claims: list[IdentityUserClaim] = field(default_factory=list)
    logins: list[UserLoginInfo] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.id or self.user_name}>"


@dataclass(eq=False)
class IdentityUserLogin:
    """Login index document.

    One per external login, keyed by a hash of the login pair, pointing back
    to the user that owns it. Lives and dies with the matching entry in
    `IdentityUser.logins`.
    """

    id: Optional[str] = None
    user_id: Optional[str] = None
    login_provider: Optional[str] = None
    provider_key: Optional[str] = None
