"""User store backed by a document session"""

import logging
from typing import Callable, Optional, TypeVar

from custos.core.user import (
    Claim,
    IdentityUser,
    IdentityUserClaim,
    IdentityUserLogin,
    UserLoginInfo,
)
from custos.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    ObjectDisposedError,
)
from custos.port.session import BaseDocumentSession, BaseDocumentStore
from custos.port.stores import (
    BaseUserClaimStore,
    BaseUserLoginStore,
    BaseUserPasswordStore,
    BaseUserRoleStore,
    BaseUserSecurityStampStore,
)
from custos.utils import casefold_equals, contains, remove_all

logger = logging.getLogger(__name__)

U = TypeVar("U", bound=IdentityUser)


def _same_login(left: UserLoginInfo, right: UserLoginInfo) -> bool:
    return (
        left.login_provider == right.login_provider
        and left.provider_key == right.provider_key
    )


def _same_claim(left: IdentityUserClaim, right: IdentityUserClaim) -> bool:
    return left.claim_type == right.claim_type and left.claim_value == right.claim_value


class UserStore(
    BaseUserLoginStore[U],
    BaseUserClaimStore[U],
    BaseUserRoleStore[U],
    BaseUserPasswordStore[U],
    BaseUserSecurityStampStore[U],
):
    """Persists `IdentityUser` aggregates, and the login index that resolves
    external logins to them, through a document session.

    The store only registers work with the session. Committing, with
    `session.save_changes()`, is left to the caller, who may batch several
    store calls into one commit.

    The session is either handed over directly or fetched from `get_session`
    the first time an operation needs it. The store never closes it.
    """

    def __init__(
        self,
        session: Optional[BaseDocumentSession] = None,
        get_session: Optional[Callable[[], BaseDocumentSession]] = None,
        user_cls: type[U] = IdentityUser,
        cascade_login_delete: bool = True,
    ) -> None:
        if (session is None) == (get_session is None):
            raise ConfigurationError(
                "UserStore needs exactly one of `session` or `get_session`"
            )

        self._session = session
        self._get_session = get_session
        self._disposed = False

        self.user_cls = user_cls
        self.login_cls = IdentityUserLogin
        self.cascade_login_delete = cascade_login_delete

    @classmethod
    def from_document_store(
        cls, document_store: BaseDocumentStore, user_cls: type[U] = IdentityUser
    ) -> "UserStore[U]":
        """Build a store that opens its session on `document_store` lazily"""
        return cls(
            get_session=document_store.open_session,
            user_cls=user_cls,
            cascade_login_delete=document_store.config.get(
                "cascade_login_delete", True
            ),
        )

    @property
    def session(self) -> BaseDocumentSession:
        self._throw_if_disposed()

        if self._session is None:
            self._session = self._get_session()
        return self._session

    ###########
    # Helpers #
    ###########
    def _throw_if_disposed(self) -> None:
        if self._disposed:
            raise ObjectDisposedError(self.__class__.__name__)

    def _guard(self, user) -> None:
        self._throw_if_disposed()
        if user is None:
            raise InvalidArgumentError("user")

    def _require(self, value, name: str) -> None:
        if value is None:
            raise InvalidArgumentError(name)

    def _user_key(self, user_name: str) -> str:
        return self.session.conventions.user_key(self.user_cls, user_name)

    def _login_key(self, login: UserLoginInfo) -> str:
        return self.session.conventions.login_key(self.login_cls, login)

    #############
    # Lifecycle #
    #############
    def dispose(self) -> None:
        self._disposed = True

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def __enter__(self):
        self._throw_if_disposed()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()
        return False

    ########
    # CRUD #
    ########
    def create(self, user: U) -> None:
        self._guard(user)
        self._require(user.user_name, "user_name")

        user.id = self._user_key(user.user_name)
        self.session.store(user)
        logger.debug(f"User {user.id} registered for creation")

    def delete(self, user: U) -> None:
        self._guard(user)

        self.session.delete(user)

        if self.cascade_login_delete:
            for login in user.logins:
                self._delete_login_index(login)

        logger.debug(f"User {user.id} registered for deletion")

    def find_by_id(self, user_id: str) -> Optional[U]:
        self._throw_if_disposed()
        self._require(user_id, "user_id")

        return self.session.load(self.user_cls, user_id)

    def find_by_name(self, user_name: str) -> Optional[U]:
        self._throw_if_disposed()
        self._require(user_name, "user_name")

        return self.find_by_id(self._user_key(user_name))

    def update(self, user: U) -> None:
        # Loaded and created users are tracked by the session, so their
        #   changes are written on commit without further work here.
        self._guard(user)

    ##########
    # Logins #
    ##########
    def add_login(self, user: U, login: UserLoginInfo) -> None:
        self._guard(user)
        self._require(login, "login")

        if contains(user.logins, login, _same_login):
            return

        user.logins.append(login)
        self.session.store(
            self.login_cls(
                id=self._login_key(login),
                user_id=user.id,
                login_provider=login.login_provider,
                provider_key=login.provider_key,
            )
        )
        logger.debug(f"Login {login.login_provider} added to user {user.id}")

    def find_by_login(self, login: UserLoginInfo) -> Optional[U]:
        self._throw_if_disposed()
        self._require(login, "login")

        login_document = self.session.load_including(
            self.login_cls, self._login_key(login), include="user_id"
        )
        if login_document is None:
            return None

        return self.session.load(self.user_cls, login_document.user_id)

    def get_logins(self, user: U) -> list[UserLoginInfo]:
        self._guard(user)

        return list(user.logins)

    def remove_login(self, user: U, login: UserLoginInfo) -> None:
        self._guard(user)
        self._require(login, "login")

        self._delete_login_index(login)
        remove_all(user.logins, login, _same_login)
        logger.debug(f"Login {login.login_provider} removed from user {user.id}")

    def _delete_login_index(self, login: UserLoginInfo) -> None:
        login_document = self.session.load(self.login_cls, self._login_key(login))
        if login_document is not None:
            self.session.delete(login_document)

    ##########
    # Claims #
    ##########
    def add_claim(self, user: U, claim: Claim) -> None:
        self._guard(user)
        self._require(claim, "claim")

        user_claim = IdentityUserClaim(claim_type=claim.type, claim_value=claim.value)
        if not contains(user.claims, user_claim, _same_claim):
            user.claims.append(user_claim)

    def get_claims(self, user: U) -> list[Claim]:
        self._guard(user)

        return [user_claim.to_claim() for user_claim in user.claims]

    def remove_claim(self, user: U, claim: Claim) -> None:
        self._guard(user)
        self._require(claim, "claim")

        remove_all(
            user.claims,
            IdentityUserClaim(claim_type=claim.type, claim_value=claim.value),
            _same_claim,
        )

    #########
    # Roles #
    #########
    def add_to_role(self, user: U, role: str) -> None:
        self._guard(user)
        self._require(role, "role")

        if not contains(user.roles, role, casefold_equals):
            user.roles.append(role)

    def get_roles(self, user: U) -> list[str]:
        self._guard(user)

        return list(user.roles)

    def is_in_role(self, user: U, role: str) -> bool:
        self._guard(user)
        self._require(role, "role")

        return contains(user.roles, role, casefold_equals)

    def remove_from_role(self, user: U, role: str) -> None:
        self._guard(user)
        self._require(role, "role")

        remove_all(user.roles, role, casefold_equals)

    #############################
    # Password & Security Stamp #
    #############################
    def get_password_hash(self, user: U) -> Optional[str]:
        self._guard(user)
        return user.password_hash

    def set_password_hash(self, user: U, password_hash: Optional[str]) -> None:
        self._guard(user)
        user.password_hash = password_hash

    def has_password(self, user: U) -> bool:
        self._guard(user)
        return user.password_hash is not None

    def get_security_stamp(self, user: U) -> Optional[str]:
        self._guard(user)
        return user.security_stamp

    def set_security_stamp(self, user: U, stamp: Optional[str]) -> None:
        self._guard(user)
        user.security_stamp = stamp

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"<{self.__class__.__name__}: {self.user_cls.__name__} ({state})>"
