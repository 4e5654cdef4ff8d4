"""Capability interfaces of a user store.

Identity frameworks check for each capability separately, so each family of
operations has its own narrow interface. A concrete store subclasses the
ones it supports.
"""

from abc import ABCMeta, abstractmethod
from typing import Generic, Optional, TypeVar

from custos.core.user import Claim, IdentityUser, UserLoginInfo

U = TypeVar("U", bound=IdentityUser)


class BaseUserStore(Generic[U], metaclass=ABCMeta):
    @abstractmethod
    def create(self, user: U) -> None:
        """Assign the user's key and register it for insertion"""

    @abstractmethod
    def delete(self, user: U) -> None:
        """Register the user for deletion"""

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[U]:
        """Return the user stored under `user_id`, or `None`"""

    @abstractmethod
    def find_by_name(self, user_name: str) -> Optional[U]:
        """Return the user created with `user_name`, or `None`"""

    @abstractmethod
    def update(self, user: U) -> None:
        """Mark the user's changes for the next commit"""

    @abstractmethod
    def dispose(self) -> None:
        """Release the store. Every later call fails."""


class BaseUserLoginStore(BaseUserStore[U]):
    @abstractmethod
    def add_login(self, user: U, login: UserLoginInfo) -> None: ...

    @abstractmethod
    def remove_login(self, user: U, login: UserLoginInfo) -> None: ...

    @abstractmethod
    def get_logins(self, user: U) -> list[UserLoginInfo]: ...

    @abstractmethod
    def find_by_login(self, login: UserLoginInfo) -> Optional[U]: ...


class BaseUserClaimStore(BaseUserStore[U]):
    @abstractmethod
    def get_claims(self, user: U) -> list[Claim]: ...

    @abstractmethod
    def add_claim(self, user: U, claim: Claim) -> None: ...

    @abstractmethod
    def remove_claim(self, user: U, claim: Claim) -> None: ...


class BaseUserRoleStore(BaseUserStore[U]):
    @abstractmethod
    def add_to_role(self, user: U, role: str) -> None: ...

    @abstractmethod
    def remove_from_role(self, user: U, role: str) -> None: ...

    @abstractmethod
    def get_roles(self, user: U) -> list[str]: ...

    @abstractmethod
    def is_in_role(self, user: U, role: str) -> bool: ...


class BaseUserPasswordStore(BaseUserStore[U]):
    @abstractmethod
    def set_password_hash(self, user: U, password_hash: Optional[str]) -> None: ...

    @abstractmethod
    def get_password_hash(self, user: U) -> Optional[str]: ...

    @abstractmethod
    def has_password(self, user: U) -> bool: ...


class BaseUserSecurityStampStore(BaseUserStore[U]):
    @abstractmethod
    def set_security_stamp(self, user: U, stamp: Optional[str]) -> None: ...

    @abstractmethod
    def get_security_stamp(self, user: U) -> Optional[str]: ...
