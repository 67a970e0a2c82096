"""Exceptions raised by minimal-otp."""


class OtpError(Exception):
    """Base class for all errors raised by this package."""


class DecodeError(OtpError, ValueError):
    """The secret text is not valid Base32."""


class UnsupportedAlgorithmError(OtpError, ValueError):
    """The requested hash algorithm is not one of the supported kinds."""


class HashComputationError(OtpError, RuntimeError):
    """The HMAC primitive failed to produce a digest."""
