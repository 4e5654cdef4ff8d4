"""Document key derivation.

Keys are derived from the values callers already hold (a user name, a login
pair) so that lookups go through the store's load-by-key path instead of a
query.
"""

import hashlib

from custos.exceptions import InvalidArgumentError
from custos.utils.hex import to_hex


def derive_user_key(user_name: str, type_tag_prefix: str, separator: str) -> str:
    """Return the document key of the user named `user_name`.

    `user_name` is used verbatim. Callers that need case-insensitive lookup
    must normalize the name themselves, both at creation and at lookup.
    """
    if user_name is None:
        raise InvalidArgumentError("user_name")

    return f"{type_tag_prefix}{separator}{user_name}"


def _encode_login(login_provider: str, provider_key: str) -> bytes:
    # The provider is length-prefixed, so ("a|b", "c") and ("a", "b|c")
    #   never share an encoding.
    return f"{len(login_provider)}:{login_provider}|{provider_key}".encode("utf-8")


def derive_login_key(
    login_provider: str,
    provider_key: str,
    prefix: str,
    separator: str,
    algorithm: str = "sha1",
) -> str:
    """Return the document key of the login index entry for a login pair"""
    if login_provider is None:
        raise InvalidArgumentError("login_provider")
    if provider_key is None:
        raise InvalidArgumentError("provider_key")

    digest = hashlib.new(algorithm, _encode_login(login_provider, provider_key))
    return f"{prefix}{separator}{to_hex(digest.digest())}"
