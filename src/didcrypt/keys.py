"""Key pair generation, plus the import side shared by the cipher and the signer.

Encryption and signing key pairs share the same physical format (SubjectPublicKeyInfo / PKCS#8, `rsaEncryption`)
but carry distinct wrapper types, and every operation checks the type it is given.

Typical usage example:

    enc = generate_encryption_key_pair()
    sig = generate_signing_key_pair()
    str(enc.public_key)  # base-64 SubjectPublicKeyInfo
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import typing

from pyasn1.error import PyAsn1Error

from didcrypt import config
from didcrypt.encoding import EncodedKey
from didcrypt.encoding import EncryptionPrivateKey
from didcrypt.encoding import EncryptionPublicKey
from didcrypt.encoding import SigningPrivateKey
from didcrypt.encoding import SigningPublicKey
from didcrypt.errors import KeyGenerationFailure
from didcrypt.errors import KeyUsageError
from didcrypt.errors import MalformedKey
from didcrypt.provider import default_provider
from didcrypt.provider import RSAProvider
from didcrypt.rsa import RSAPrivKey
from didcrypt.rsa import RSAPubKey

logger = logging.getLogger(__name__)


class EncryptionKeyPair(typing.NamedTuple):
    public_key: EncryptionPublicKey
    private_key: EncryptionPrivateKey


class SigningKeyPair(typing.NamedTuple):
    public_key: SigningPublicKey
    private_key: SigningPrivateKey


def _expect(key: EncodedKey, expected: type[EncodedKey]) -> None:
    if not isinstance(key, expected):
        raise KeyUsageError(f"Expected {expected.__name__}, got {type(key).__name__}.")


def import_public_key(key: EncodedKey, expected: type[EncodedKey]) -> RSAPubKey:
    """Checks the key's tag and parses its SubjectPublicKeyInfo.

    Args:
        key: The tagged public key.
        expected: The wrapper type the calling operation requires.

    Returns:
        The parsed public key.

    Raises:
        KeyUsageError: If `key` is not an instance of `expected`.
        MalformedKey: If the bytes are not an RSA SubjectPublicKeyInfo.
    """
    _expect(key, expected)
    try:
        return RSAPubKey.import_der(key.raw)
    except (PyAsn1Error, IOError, ValueError) as err:
        raise MalformedKey(f"Cannot import {expected.__name__}: {err}") from err


def import_private_key(key: EncodedKey, expected: type[EncodedKey]) -> RSAPrivKey:
    """Checks the key's tag and parses its PKCS#8 PrivateKeyInfo.

    Raises:
        KeyUsageError: If `key` is not an instance of `expected`.
        MalformedKey: If the bytes are not a two-prime RSA PKCS#8 key.
    """
    _expect(key, expected)
    try:
        return RSAPrivKey.import_der(key.raw)
    except (PyAsn1Error, IOError, ValueError) as err:
        raise MalformedKey(f"Cannot import {expected.__name__}: {err}") from err


class KeyManager:
    """Produces fresh, independent key pairs.

    Attributes:
        provider: The cryptography capability used for generation.
        size: Modulus size in bits.
        pub_exp: Public exponent.
    """

    def __init__(self,
                 provider: RSAProvider | None = None,
                 size: int = config.KEY_SIZE,
                 pub_exp: int = config.PUBLIC_EXPONENT) -> None:
        self.provider = provider or default_provider()
        self.size = size
        self.pub_exp = pub_exp

    def _generate(self, scheme: str) -> tuple[bytes, bytes]:
        try:
            key = self.provider.generate_private_key(self.size, self.pub_exp)
            public, private = key.pub.export_der(), key.export_der()
        except (ValueError, RuntimeError, NotImplementedError, OSError) as err:
            raise KeyGenerationFailure(f"Could not generate {scheme} key pair: {err}") from err
        logger.debug("Generated %s key pair (%d bits)", scheme, key.mod.bit_length())
        return public, private

    def generate_encryption_key_pair(self) -> EncryptionKeyPair:
        """Generates an RSAES-OAEP key pair.

        Returns:
            The encoded SubjectPublicKeyInfo and PKCS#8 keys.

        Raises:
            KeyGenerationFailure: On invalid parameters or a failing randomness source.
        """
        public, private = self._generate("encryption")
        return EncryptionKeyPair(EncryptionPublicKey(public), EncryptionPrivateKey(private))

    def generate_signing_key_pair(self) -> SigningKeyPair:
        """Generates an RSASSA-PKCS1-v1_5 key pair.

        Raises:
            KeyGenerationFailure: On invalid parameters or a failing randomness source.
        """
        public, private = self._generate("signing")
        return SigningKeyPair(SigningPublicKey(public), SigningPrivateKey(private))


def generate_encryption_key_pair() -> EncryptionKeyPair:
    """Generates a 2048-bit, e = 65537 encryption key pair with the default provider."""
    return KeyManager().generate_encryption_key_pair()


def generate_signing_key_pair() -> SigningKeyPair:
    """Generates a 2048-bit, e = 65537 signing key pair with the default provider."""
    return KeyManager().generate_signing_key_pair()
