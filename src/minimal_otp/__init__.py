"""HOTP (RFC 4226) and TOTP (RFC 6238) one-time passwords."""

from minimal_otp.base32 import decode
from minimal_otp.errors import (
    DecodeError,
    HashComputationError,
    OtpError,
    UnsupportedAlgorithmError,
)
from minimal_otp.hashing import HashAlgorithmKind, compute_digest
from minimal_otp.otp import (
    generate_hotp,
    generate_totp,
    truncate,
    validate_hotp,
    validate_totp,
)

__all__ = [
    "DecodeError",
    "HashAlgorithmKind",
    "HashComputationError",
    "OtpError",
    "UnsupportedAlgorithmError",
    "compute_digest",
    "decode",
    "generate_hotp",
    "generate_totp",
    "truncate",
    "validate_hotp",
    "validate_totp",
]
