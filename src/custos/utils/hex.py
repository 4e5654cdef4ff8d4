"""Hexadecimal encoding helpers used in document keys"""

import binascii

from custos.exceptions import InvalidArgumentError


def to_hex(data: bytes) -> str:
    """Encode bytes as a lowercase hexadecimal string, two characters per byte"""
    return data.hex()


def from_hex(text: str) -> bytes:
    """Decode a hexadecimal string. Upper and lower case digits are both accepted."""
    if text is None:
        raise InvalidArgumentError("text")

    if len(text) % 2 != 0:
        raise InvalidArgumentError(
            f"Hex string must have an even length, got {len(text)}"
        )

    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid hex string: {text!r}") from exc
