"""HMAC computation over an 8-byte big-endian counter."""

import enum

from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac

from minimal_otp.errors import HashComputationError, UnsupportedAlgorithmError


COUNTER_SIZE = 8


class HashAlgorithmKind(enum.Enum):
    """The hash functions an OTP can be keyed with."""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def digest_size(self) -> int:
        """Native output size of the hash in bytes."""
        return _HASHES[self].digest_size

    @classmethod
    def from_name(cls, name: str) -> "HashAlgorithmKind":
        """
        Look up a kind by name, ignoring case and dashes ("SHA-256", "sha256").

        Raises:
            UnsupportedAlgorithmError: If the name is not a supported kind.
        """
        if isinstance(name, cls):
            return name
        normalized = str(name).lower().replace("-", "").replace("_", "")
        try:
            return cls(normalized)
        except ValueError as e:
            raise UnsupportedAlgorithmError(
                f"Unsupported hash algorithm: {name!r}"
            ) from e


_HASHES = {
    HashAlgorithmKind.SHA1: hashes.SHA1(),
    HashAlgorithmKind.SHA256: hashes.SHA256(),
    HashAlgorithmKind.SHA512: hashes.SHA512(),
}


def encode_counter(counter: int) -> bytes:
    """
    Encode a counter as 8 bytes, most significant byte first.

    Negative counters are encoded in two's complement.

    Raises:
        ValueError: If the counter does not fit in a signed 64-bit integer.
    """
    try:
        return int(counter).to_bytes(COUNTER_SIZE, byteorder="big", signed=True)
    except OverflowError as e:
        raise ValueError(f"Counter out of 64-bit range: {counter}") from e


def compute_digest(kind: HashAlgorithmKind, key: bytes, counter: int) -> bytes:
    """
    Compute the HMAC of the big-endian counter keyed with ``key``.

    Args:
        kind: Hash function selecting HMAC-SHA1, HMAC-SHA256 or HMAC-SHA512.
        key: Raw key bytes.
        counter: Moving factor, a signed 64-bit integer.

    Returns:
        The digest, 20, 32 or 64 bytes long depending on ``kind``.

    Raises:
        UnsupportedAlgorithmError: If ``kind`` is not a HashAlgorithmKind.
        HashComputationError: If the crypto backend fails to compute the HMAC.
    """
    if not isinstance(kind, HashAlgorithmKind):
        raise UnsupportedAlgorithmError(f"Unsupported hash algorithm: {kind!r}")

    message = encode_counter(counter)

    try:
        h = hmac.HMAC(key, _HASHES[kind])
        h.update(message)
        digest = h.finalize()
    except (UnsupportedAlgorithm, InternalError) as e:
        raise HashComputationError(
            f"HMAC-{kind.name} computation failed: {e}"
        ) from e

    if len(digest) != kind.digest_size:
        raise HashComputationError(
            f"HMAC-{kind.name} returned {len(digest)} bytes, "
            f"expected {kind.digest_size}"
        )
    return digest
