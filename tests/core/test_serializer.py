from dataclasses import dataclass
from typing import Optional

import pytest
from marshmallow import fields

from custos.core.serializer import (
    IdentityUserSchema,
    from_document,
    register_schema,
    schema_for,
    to_document,
)
from custos.core.user import (
    IdentityUser,
    IdentityUserClaim,
    IdentityUserLogin,
    UserLoginInfo,
)
from custos.exceptions import ConfigurationError, DocumentMappingError


@dataclass(eq=False)
class Member(IdentityUser):
    email: Optional[str] = None


class MemberSchema(IdentityUserSchema):
    email = fields.String(allow_none=True)


@dataclass(eq=False)
class Guest(IdentityUser):
    pass


class Unmapped:
    pass


@pytest.fixture
def user():
    return IdentityUser(
        user_name="alice",
        id="IdentityUsers/alice",
        password_hash="hash",
        security_stamp="stamp",
        roles=["Admin"],
        claims=[IdentityUserClaim("email", "alice@example.com")],
        logins=[UserLoginInfo("google", "g123")],
    )


class TestUserDocuments:
    def test_user_is_dumped_with_camel_case_fields(self, user):
        document = to_document(user)

        assert document == {
            "id": "IdentityUsers/alice",
            "userName": "alice",
            "passwordHash": "hash",
            "securityStamp": "stamp",
            "roles": ["Admin"],
            "claims": [{"claimType": "email", "claimValue": "alice@example.com"}],
            "logins": [{"loginProvider": "google", "providerKey": "g123"}],
        }

    def test_user_is_loaded_with_embedded_value_objects(self, user):
        loaded = from_document(IdentityUser, to_document(user))

        assert isinstance(loaded, IdentityUser)
        assert loaded.user_name == "alice"
        assert loaded.claims == [IdentityUserClaim("email", "alice@example.com")]
        assert loaded.logins == [UserLoginInfo("google", "g123")]

    def test_missing_collections_load_as_empty(self):
        loaded = from_document(IdentityUser, {"id": "IdentityUsers/bob", "userName": "bob"})

        assert loaded.roles == []
        assert loaded.claims == []
        assert loaded.logins == []
        assert loaded.password_hash is None

    def test_unknown_fields_are_ignored(self):
        loaded = from_document(
            IdentityUser, {"id": "IdentityUsers/bob", "userName": "bob", "legacy": 1}
        )

        assert loaded.user_name == "bob"

    def test_invalid_document_raises_mapping_error(self):
        with pytest.raises(DocumentMappingError) as exc:
            from_document(IdentityUser, {"userName": 42, "logins": [{}]})

        assert "userName" in exc.value.messages


class TestLoginDocuments:
    def test_login_index_entry_round_trip(self):
        entry = IdentityUserLogin(
            id="IdentityUserLogins/abc",
            user_id="IdentityUsers/alice",
            login_provider="google",
            provider_key="g123",
        )

        document = to_document(entry)
        assert document["userId"] == "IdentityUsers/alice"

        loaded = from_document(IdentityUserLogin, document)
        assert loaded.user_id == entry.user_id
        assert loaded.provider_key == "g123"


class TestSchemaRegistry:
    def test_subclass_falls_back_to_ancestor_schema(self):
        assert isinstance(schema_for(Guest), IdentityUserSchema)

    def test_registered_subclass_schema_maps_extra_fields(self):
        register_schema(Member, MemberSchema)

        member = Member(user_name="carol", id="members/carol", email="c@example.com")
        loaded = from_document(Member, to_document(member))

        assert isinstance(loaded, Member)
        assert loaded.email == "c@example.com"

    def test_unregistered_class_raises_configuration_error(self):
        with pytest.raises(ConfigurationError):
            schema_for(Unmapped)
