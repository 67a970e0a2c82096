"""RFC 4648 Base32 decoding of shared secrets."""

import base64
import binascii
import re

from minimal_otp.errors import DecodeError


_SYMBOLS = re.compile(r"[A-Za-z2-7]*")

# Symbol counts whose trailing bits never complete a byte
_PARTIAL_SYMBOLS = {1: 1, 3: 1, 6: 1}


def decode(secret_text: str) -> bytes:
    """
    Decode a Base32 secret into raw key bytes.

    The alphabet is case-insensitive and trailing ``=`` padding is optional,
    so ``"ONSWG4TFOQ======"`` and ``"onswg4tfoq"`` decode to the same key.

    Args:
        secret_text: The Base32 encoded secret.

    Returns:
        ``floor(5 * n / 8)`` bytes, where n is the number of non-padding symbols.

    Raises:
        DecodeError: If the text contains characters outside the alphabet or
            padding anywhere but at the end.
    """
    if not isinstance(secret_text, str):
        raise DecodeError(
            f"Base32 secret must be a string, not {type(secret_text).__name__}"
        )

    symbols = secret_text.rstrip("=")
    if not _SYMBOLS.fullmatch(symbols):
        raise DecodeError(f"Invalid Base32 secret: {secret_text!r}")

    # Drop a symbol that only carries bits of an incomplete byte
    usable = len(symbols) - _PARTIAL_SYMBOLS.get(len(symbols) % 8, 0)
    symbols = symbols[:usable]
    padded = symbols + "=" * (-len(symbols) % 8)

    try:
        return base64.b32decode(padded, casefold=True)
    except binascii.Error as e:
        raise DecodeError(f"Invalid Base32 secret: {e}") from e
