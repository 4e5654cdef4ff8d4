"""Mapping between document objects and their stored, JSON-compatible form"""

import logging

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load

from custos.core.user import (
    IdentityUser,
    IdentityUserClaim,
    IdentityUserLogin,
    UserLoginInfo,
)
from custos.exceptions import ConfigurationError, DocumentMappingError
from custos.utils import fully_qualified_name

logger = logging.getLogger(__name__)


class DocumentSchema(Schema):
    class Meta:
        unknown = EXCLUDE


class UserLoginInfoSchema(DocumentSchema):
    login_provider = fields.String(data_key="loginProvider", required=True)
    provider_key = fields.String(data_key="providerKey", required=True)

    @post_load
    def make_login(self, data, **kwargs):
        return UserLoginInfo(**data)


class IdentityUserClaimSchema(DocumentSchema):
    claim_type = fields.String(data_key="claimType", required=True)
    claim_value = fields.String(data_key="claimValue", required=True)

    @post_load
    def make_claim(self, data, **kwargs):
        return IdentityUserClaim(**data)


class IdentityUserSchema(DocumentSchema):
    """Schema for `IdentityUser` documents.

    Subclasses of `IdentityUser` that add fields should subclass this schema
    and register the pair with `register_schema`.
    """

    id = fields.String(allow_none=True)
    user_name = fields.String(data_key="userName", allow_none=True)
    password_hash = fields.String(data_key="passwordHash", allow_none=True)
    security_stamp = fields.String(data_key="securityStamp", allow_none=True)
    roles = fields.List(fields.String(), load_default=list)
    claims = fields.List(fields.Nested(IdentityUserClaimSchema), load_default=list)
    logins = fields.List(fields.Nested(UserLoginInfoSchema), load_default=list)


class IdentityUserLoginSchema(DocumentSchema):
    id = fields.String(allow_none=True)
    user_id = fields.String(data_key="userId", allow_none=True)
    login_provider = fields.String(data_key="loginProvider", allow_none=True)
    provider_key = fields.String(data_key="providerKey", allow_none=True)


_schemas: dict[type, type[Schema]] = {}


def register_schema(document_cls: type, schema_cls: type[Schema]) -> None:
    """Associate a document class with the schema that maps it"""
    logger.debug(
        f"Registering schema {schema_cls.__name__} "
        f"for {fully_qualified_name(document_cls)}"
    )
    _schemas[document_cls] = schema_cls


def schema_for(document_cls: type) -> Schema:
    """Return a schema instance for `document_cls`.

    Falls back along the class hierarchy, so a subclass without a schema of
    its own is mapped by its closest registered ancestor.
    """
    for klass in document_cls.__mro__:
        if klass in _schemas:
            return _schemas[klass]()

    raise ConfigurationError(
        f"No schema registered for document class {fully_qualified_name(document_cls)}"
    )


def to_document(obj) -> dict:
    """Dump a document object to its stored form"""
    try:
        return schema_for(obj.__class__).dump(obj)
    except ValidationError as exc:
        raise DocumentMappingError(exc.messages) from exc


def from_document(document_cls: type, data: dict):
    """Load a stored document into a new instance of `document_cls`"""
    try:
        attributes = schema_for(document_cls).load(data)
    except ValidationError as exc:
        raise DocumentMappingError(exc.messages) from exc

    return document_cls(**attributes)


register_schema(IdentityUser, IdentityUserSchema)
register_schema(IdentityUserLogin, IdentityUserLoginSchema)
