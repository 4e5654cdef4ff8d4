import random
import string

import pytest

from custos.core.keys import derive_login_key, derive_user_key
from custos.exceptions import InvalidArgumentError


class TestDeriveUserKey:
    def test_joins_prefix_separator_and_user_name(self):
        assert derive_user_key("alice", "IdentityUsers", "/") == "IdentityUsers/alice"

    def test_is_deterministic(self):
        assert derive_user_key("bob", "users", "-") == derive_user_key(
            "bob", "users", "-"
        )

    def test_preserves_case_of_user_name(self):
        assert derive_user_key("Alice", "IdentityUsers", "/") == "IdentityUsers/Alice"
        assert derive_user_key("Alice", "IdentityUsers", "/") != derive_user_key(
            "alice", "IdentityUsers", "/"
        )

    def test_missing_user_name_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            derive_user_key(None, "IdentityUsers", "/")


class TestDeriveLoginKey:
    def test_key_is_prefixed_hex_sha1_by_default(self):
        key = derive_login_key("google", "g123", "IdentityUserLogins", "/")

        prefix, digest = key.split("/")
        assert prefix == "IdentityUserLogins"
        assert len(digest) == 40
        assert all(char in string.hexdigits for char in digest)

    def test_equal_pairs_derive_equal_keys(self):
        assert derive_login_key("google", "g123", "logins", "/") == derive_login_key(
            "google", "g123", "logins", "/"
        )

    def test_swapped_pair_derives_a_different_key(self):
        assert derive_login_key("google", "g123", "logins", "/") != derive_login_key(
            "g123", "google", "logins", "/"
        )

    def test_delimiter_inside_values_does_not_collide(self):
        assert derive_login_key("a|b", "c", "logins", "/") != derive_login_key(
            "a", "b|c", "logins", "/"
        )

    def test_hash_algorithm_can_be_changed(self):
        key = derive_login_key("google", "g123", "logins", "/", algorithm="sha256")
        assert len(key.split("/")[1]) == 64

    def test_missing_parts_are_rejected(self):
        with pytest.raises(InvalidArgumentError):
            derive_login_key(None, "g123", "logins", "/")

        with pytest.raises(InvalidArgumentError):
            derive_login_key("google", None, "logins", "/")

    def test_distinct_pairs_derive_distinct_keys(self):
        rng = random.Random(42)
        alphabet = string.ascii_letters + string.digits + "|:/"

        pairs = {
            (
                "".join(rng.choices(alphabet, k=rng.randint(1, 8))),
                "".join(rng.choices(alphabet, k=rng.randint(1, 8))),
            )
            for _ in range(2000)
        }
        keys = {derive_login_key(p, k, "logins", "/") for p, k in pairs}

        assert len(keys) == len(pairs)

    @pytest.mark.slow
    def test_distinct_pairs_derive_distinct_keys_over_large_sample(self):
        rng = random.Random(7)
        alphabet = string.printable

        pairs = {
            (
                "".join(rng.choices(alphabet, k=rng.randint(0, 16))),
                "".join(rng.choices(alphabet, k=rng.randint(0, 32))),
            )
            for _ in range(200_000)
        }
        keys = {derive_login_key(p, k, "logins", "/") for p, k in pairs}

        assert len(keys) == len(pairs)
