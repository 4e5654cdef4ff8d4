from .session import BaseDocumentSession, BaseDocumentStore
from .stores import (
    BaseUserClaimStore,
    BaseUserLoginStore,
    BaseUserPasswordStore,
    BaseUserRoleStore,
    BaseUserSecurityStampStore,
    BaseUserStore,
)

__all__ = [
    "BaseDocumentSession",
    "BaseDocumentStore",
    "BaseUserStore",
    "BaseUserLoginStore",
    "BaseUserClaimStore",
    "BaseUserRoleStore",
    "BaseUserPasswordStore",
    "BaseUserSecurityStampStore",
]
