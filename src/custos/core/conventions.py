"""Naming conventions that turn document classes into key prefixes"""

import hashlib
import logging

import inflection

from custos.core.keys import derive_login_key, derive_user_key
from custos.core.user import UserLoginInfo
from custos.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Conventions:
    """Per-document-store naming rules.

    A document class maps to a *type tag* (its pluralized class name, unless
    overridden in `type_tags`), and the type tag maps to the key prefix
    that, joined with `identity_parts_separator`, starts every key of that
    class: `IdentityUser` -> `IdentityUsers` -> `IdentityUsers/alice`.
    """

    def __init__(
        self,
        identity_parts_separator: str = "/",
        type_tags: dict[str, str] | None = None,
        login_key_hash: str = "sha1",
    ) -> None:
        if not identity_parts_separator:
            raise ConfigurationError("`identity_parts_separator` cannot be empty")

        if login_key_hash not in hashlib.algorithms_available:
            raise ConfigurationError(
                f"Unknown hash algorithm `{login_key_hash}` for login keys"
            )

        self.identity_parts_separator = identity_parts_separator
        self.type_tags = dict(type_tags or {})
        self.login_key_hash = login_key_hash

    @classmethod
    def from_config(cls, config: dict | None) -> "Conventions":
        config = config or {}
        return cls(
            identity_parts_separator=config.get("identity_parts_separator", "/"),
            type_tags=config.get("type_tags"),
            login_key_hash=config.get("login_key_hash", "sha1"),
        )

    def get_type_tag_name(self, document_cls: type) -> str:
        name = document_cls.__name__
        if name in self.type_tags:
            return self.type_tags[name]

        return inflection.pluralize(name)

    def transform_type_tag_name_to_document_key_prefix(self, type_tag_name: str) -> str:
        # Single-word tags ("Users") become lowercase, compound tags
        #   ("IdentityUsers") are kept as they are.
        if sum(1 for char in type_tag_name if char.isupper()) <= 1:
            return type_tag_name.lower()

        return type_tag_name

    def document_key_prefix(self, document_cls: type) -> str:
        return self.transform_type_tag_name_to_document_key_prefix(
            self.get_type_tag_name(document_cls)
        )

    def user_key(self, user_cls: type, user_name: str) -> str:
        return derive_user_key(
            user_name,
            self.document_key_prefix(user_cls),
            self.identity_parts_separator,
        )

    def login_key(self, login_cls: type, login: UserLoginInfo) -> str:
        return derive_login_key(
            login.login_provider,
            login.provider_key,
            self.document_key_prefix(login_cls),
            self.identity_parts_separator,
            self.login_key_hash,
        )

    def __repr__(self) -> str:
        return (
            f"<Conventions: separator={self.identity_parts_separator!r}, "
            f"login_key_hash={self.login_key_hash!r}>"
        )
