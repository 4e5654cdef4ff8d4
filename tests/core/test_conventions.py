import pytest

from custos.core.conventions import Conventions
from custos.core.user import IdentityUser, IdentityUserLogin, UserLoginInfo
from custos.exceptions import ConfigurationError


class User(IdentityUser):
    pass


class TestTypeTags:
    def test_type_tag_is_pluralized_class_name(self):
        conventions = Conventions()

        assert conventions.get_type_tag_name(IdentityUser) == "IdentityUsers"
        assert conventions.get_type_tag_name(IdentityUserLogin) == "IdentityUserLogins"

    def test_type_tag_can_be_overridden(self):
        conventions = Conventions(type_tags={"IdentityUser": "Accounts"})

        assert conventions.get_type_tag_name(IdentityUser) == "Accounts"
        assert conventions.document_key_prefix(IdentityUser) == "accounts"


class TestKeyPrefixes:
    def test_compound_tag_is_kept_verbatim(self):
        assert Conventions().document_key_prefix(IdentityUser) == "IdentityUsers"

    def test_single_word_tag_is_lowercased(self):
        assert Conventions().document_key_prefix(User) == "users"

    def test_user_key_uses_separator(self):
        conventions = Conventions(identity_parts_separator="-")

        assert conventions.user_key(IdentityUser, "alice") == "IdentityUsers-alice"

    def test_login_key_uses_login_document_prefix(self):
        key = Conventions().login_key(IdentityUserLogin, UserLoginInfo("google", "g123"))

        assert key.startswith("IdentityUserLogins/")


class TestConstruction:
    def test_from_config(self):
        conventions = Conventions.from_config(
            {
                "identity_parts_separator": ":",
                "type_tags": {"User": "People"},
                "login_key_hash": "sha256",
            }
        )

        assert conventions.identity_parts_separator == ":"
        assert conventions.get_type_tag_name(User) == "People"
        assert conventions.login_key_hash == "sha256"

    def test_from_empty_config_uses_defaults(self):
        conventions = Conventions.from_config(None)

        assert conventions.identity_parts_separator == "/"
        assert conventions.login_key_hash == "sha1"

    def test_unknown_hash_algorithm_is_rejected(self):
        with pytest.raises(ConfigurationError):
            Conventions(login_key_hash="not-a-hash")

    def test_empty_separator_is_rejected(self):
        with pytest.raises(ConfigurationError):
            Conventions(identity_parts_separator="")
