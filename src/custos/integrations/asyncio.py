"""Awaitable facade over `UserStore` for asynchronous identity frameworks.

No operation of the wrapped store blocks: each one either works on the
in-memory aggregate or registers a write with the session. The coroutines
here only give the results the shape an async caller expects. There is no
suspension point, so cancellation has nothing to interrupt.
"""

from typing import Generic, Optional, TypeVar

from custos.core.user import Claim, IdentityUser, UserLoginInfo
from custos.core.user_store import UserStore

U = TypeVar("U", bound=IdentityUser)


class AsyncUserStore(Generic[U]):
    def __init__(self, store: UserStore[U]) -> None:
        self.store = store

    def dispose(self) -> None:
        self.store.dispose()

    async def __aenter__(self):
        self.store.__enter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return self.store.__exit__(exc_type, exc_val, exc_tb)

    # Users
    async def create(self, user: U) -> None:
        self.store.create(user)

    async def delete(self, user: U) -> None:
        self.store.delete(user)

    async def find_by_id(self, user_id: str) -> Optional[U]:
        return self.store.find_by_id(user_id)

    async def find_by_name(self, user_name: str) -> Optional[U]:
        return self.store.find_by_name(user_name)

    async def update(self, user: U) -> None:
        self.store.update(user)

    # Logins
    async def add_login(self, user: U, login: UserLoginInfo) -> None:
        self.store.add_login(user, login)

    async def remove_login(self, user: U, login: UserLoginInfo) -> None:
        self.store.remove_login(user, login)

    async def get_logins(self, user: U) -> list[UserLoginInfo]:
        return self.store.get_logins(user)

    async def find_by_login(self, login: UserLoginInfo) -> Optional[U]:
        return self.store.find_by_login(login)

    # Claims
    async def add_claim(self, user: U, claim: Claim) -> None:
        self.store.add_claim(user, claim)

    async def get_claims(self, user: U) -> list[Claim]:
        return self.store.get_claims(user)

    async def remove_claim(self, user: U, claim: Claim) -> None:
        self.store.remove_claim(user, claim)

    # Roles
    async def add_to_role(self, user: U, role: str) -> None:
        self.store.add_to_role(user, role)

    async def remove_from_role(self, user: U, role: str) -> None:
        self.store.remove_from_role(user, role)

    async def get_roles(self, user: U) -> list[str]:
        return self.store.get_roles(user)

    async def is_in_role(self, user: U, role: str) -> bool:
        return self.store.is_in_role(user, role)

    # Password and security stamp
    async def get_password_hash(self, user: U) -> Optional[str]:
        return self.store.get_password_hash(user)

    async def set_password_hash(self, user: U, password_hash: Optional[str]) -> None:
        self.store.set_password_hash(user, password_hash)

    async def has_password(self, user: U) -> bool:
        return self.store.has_password(user)

    async def get_security_stamp(self, user: U) -> Optional[str]:
        return self.store.get_security_stamp(user)

    async def set_security_stamp(self, user: U, stamp: Optional[str]) -> None:
        self.store.set_security_stamp(user, stamp)
