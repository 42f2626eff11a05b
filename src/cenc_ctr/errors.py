"""Custom exceptions for cenc-ctr."""


class CencCtrError(Exception):
    """Base exception for cenc-ctr."""


class InvalidKeySizeError(CencCtrError, ValueError):
    """Key is not an AES-128 key."""


class InvalidIvSizeError(CencCtrError, ValueError):
    """IV is neither 8 nor 16 bytes long."""


class EncryptorNotInitializedError(CencCtrError):
    """Encryptor was used before a key and IV were set."""


class SubsampleLayoutError(CencCtrError, ValueError):
    """Subsample map does not cover the sample exactly."""
