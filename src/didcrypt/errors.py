"""Error taxonomy shared by every didcrypt component.

Everything raised deliberately by the component layer derives from `CryptoError`. Several classes also derive from a
builtin so that callers already catching `ValueError` or `TypeError` keep working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class CryptoError(RuntimeError):
    """Base class for all didcrypt failures."""


class MalformedEncoding(CryptoError, ValueError):
    """Text is not a canonical standard base-64 encoding."""


class MalformedSignature(MalformedEncoding):
    """Signature text cannot be decoded into bytes."""


class MalformedKey(CryptoError, ValueError):
    """Decoded key bytes are not a supported RSA SubjectPublicKeyInfo or PKCS#8 structure."""


class KeyUsageError(CryptoError, TypeError):
    """A key of the wrong scheme or kind was handed to an operation."""


class KeyGenerationFailure(CryptoError):
    """Key pair generation failed."""


class PlaintextTooLarge(CryptoError, ValueError):
    """Plaintext exceeds the single-block capacity of the recipient key."""


class DecryptionFailure(CryptoError):
    """Opaque decryption failure.

    Raised for a mismatched key, corrupted or truncated ciphertext and padding defects alike, always with the same
    message.
    """

    def __init__(self) -> None:
        super().__init__("Decryption error.")
