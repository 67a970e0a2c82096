"""RFC 4226 HOTP and RFC 6238 TOTP generation and validation."""

import time

from cryptography.hazmat.primitives import constant_time

from minimal_otp.base32 import decode
from minimal_otp.hashing import HashAlgorithmKind, compute_digest


DEFAULT_TIME_STEP = 30
DEFAULT_ALGORITHM = HashAlgorithmKind.SHA1
DEFAULT_OTP_LENGTH = 6

# Codes carry six digits of the truncated value whatever the requested length
MODULUS = 1_000_000


def truncate(digest: bytes) -> int:
    """
    Dynamic truncation (RFC 4226, Section 5.3).

    Args:
        digest: HMAC output, at least 20 bytes for every supported algorithm.

    Returns:
        The low 31 bits of the 4 bytes selected by the last nibble, modulo 10^6.

    Raises:
        ValueError: If the digest is too short for the selected offset.
    """
    if not digest:
        raise ValueError("Cannot truncate an empty digest")

    offset = digest[-1] & 0x0F
    if offset + 4 > len(digest):
        raise ValueError(
            f"Digest of {len(digest)} bytes too short for offset {offset}"
        )

    binary = int.from_bytes(digest[offset : offset + 4], byteorder="big") & 0x7FFFFFFF
    return binary % MODULUS


def generate_hotp(
    secret: str,
    counter: int,
    algorithm: HashAlgorithmKind = DEFAULT_ALGORITHM,
    otp_length: int = DEFAULT_OTP_LENGTH,
) -> str:
    """
    Generate an HOTP code using RFC 4226.

    Args:
        secret: The shared secret, Base32 encoded.
        counter: The moving counter value.
        algorithm: Hash function for the HMAC (default: SHA1).
        otp_length: Width of the code; shorter values are left-padded with zeros.

    Returns:
        A zero-padded code string.

    Raises:
        DecodeError: If the secret is not valid Base32.
        UnsupportedAlgorithmError: If the algorithm is not supported.
        HashComputationError: If the HMAC could not be computed.
    """
    key = decode(secret)
    digest = compute_digest(algorithm, key, counter)
    return str(truncate(digest)).rjust(otp_length, "0")


def _reference_time(unix_time: int) -> int:
    # 0 is "now", so the epoch itself cannot be requested
    if unix_time == 0:
        return int(time.time())
    return unix_time


def time_counter(time_step: int = DEFAULT_TIME_STEP, unix_time: int = 0) -> int:
    """
    Derive the TOTP counter for a point in time.

    Args:
        time_step: Period in seconds during which the counter stays constant.
        unix_time: Seconds since the epoch; 0 means the current time.

    Returns:
        ``unix_time // time_step``.

    Raises:
        ValueError: If time_step is not positive.
    """
    if time_step <= 0:
        raise ValueError(f"Time step must be positive, got {time_step}")

    return _reference_time(unix_time) // time_step


def seconds_remaining(time_step: int = DEFAULT_TIME_STEP, unix_time: int = 0) -> int:
    """Seconds until the counter for ``unix_time`` (0 for now) rolls over."""
    if time_step <= 0:
        raise ValueError(f"Time step must be positive, got {time_step}")
    return time_step - _reference_time(unix_time) % time_step


def generate_totp(
    secret: str,
    time_step: int = DEFAULT_TIME_STEP,
    algorithm: HashAlgorithmKind = DEFAULT_ALGORITHM,
    unix_time: int = 0,
    otp_length: int = DEFAULT_OTP_LENGTH,
) -> str:
    """
    Generate a TOTP code using RFC 6238.

    Args:
        secret: The shared secret, Base32 encoded.
        time_step: Period in seconds (default: 30).
        algorithm: Hash function for the HMAC (default: SHA1).
        unix_time: Seconds since the epoch; 0 (the default) uses the current time.
        otp_length: Width of the code (default: 6).

    Returns:
        A zero-padded code string.
    """
    counter = time_counter(time_step, unix_time)
    return generate_hotp(secret, counter, algorithm, otp_length)


def _codes_match(candidate: str, expected: str) -> bool:
    if not isinstance(candidate, str):
        return False
    return constant_time.bytes_eq(candidate.encode("utf-8"), expected.encode("utf-8"))


def validate_hotp(
    secret: str,
    otp: str,
    counter: int,
    algorithm: HashAlgorithmKind = DEFAULT_ALGORITHM,
    otp_length: int = DEFAULT_OTP_LENGTH,
) -> bool:
    """Check ``otp`` against the HOTP code for ``counter``."""
    expected = generate_hotp(secret, counter, algorithm, otp_length)
    return _codes_match(otp, expected)


def validate_totp(
    secret: str,
    otp: str,
    time_step: int = DEFAULT_TIME_STEP,
    algorithm: HashAlgorithmKind = DEFAULT_ALGORITHM,
    unix_time: int = 0,
    otp_length: int = DEFAULT_OTP_LENGTH,
) -> bool:
    """Check ``otp`` against the TOTP code for ``unix_time`` (0 for now)."""
    expected = generate_totp(secret, time_step, algorithm, unix_time, otp_length)
    return _codes_match(otp, expected)
