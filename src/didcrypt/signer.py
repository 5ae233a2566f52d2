"""RSASSA-PKCS1-v1_5 signatures over SHA-256.

Verification answers with a boolean for anything that decodes into bytes, so trust decisions can branch on it.
Only a signature that is not base-64 at all raises.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from didcrypt import config
from didcrypt.encoding import Signature
from didcrypt.encoding import SigningPrivateKey
from didcrypt.encoding import SigningPublicKey
from didcrypt.keys import import_private_key
from didcrypt.keys import import_public_key

logger = logging.getLogger(__name__)


class MessageSigner:
    """Signs with a private signing key and verifies with the matching public key.

    Needs no provider: PKCS#1 v1.5 signing consumes no randomness.
    """

    def __init__(self, hashf: str = config.HASH) -> None:
        self.hashf = hashf

    def sign(self, message: str, signer_private_key: SigningPrivateKey) -> Signature:
        """Signs the UTF-8 bytes of `message`. Deterministic for a fixed key and message.

        Raises:
            KeyUsageError: If the key is not a `SigningPrivateKey`.
            MalformedKey: If the key bytes cannot be imported.
        """
        priv = import_private_key(signer_private_key, SigningPrivateKey)
        data = message.encode("utf-8")
        logger.debug("Signing %d bytes with a %d-byte modulus", len(data), priv.bsize)
        return Signature(priv.sign_pkcs1v15(data, self.hashf))

    def verify(self, message: str, signature: Signature | str, signer_public_key: SigningPublicKey) -> bool:
        """Checks `signature` over the UTF-8 bytes of `message`.

        Args:
            message: The message that was supposedly signed.
            signature: The signature, wrapped or in its base-64 form.
            signer_public_key: The signer's public key.

        Returns:
            True only for a valid signature. Tampered messages, other keys and wrong-length signatures give False.

        Raises:
            MalformedSignature: If a text signature is not valid base-64.
            KeyUsageError: If the key is not a `SigningPublicKey`.
            MalformedKey: If the key bytes cannot be imported.
        """
        signature = Signature.coerce(signature)
        pub = import_public_key(signer_public_key, SigningPublicKey)
        valid = pub.verify_pkcs1v15(message.encode("utf-8"), signature.raw, self.hashf)
        logger.debug("Signature check over %d-byte modulus: %s", pub.bsize, valid)
        return valid


def sign(message: str, signer_private_key: SigningPrivateKey) -> Signature:
    """Signs `message` with `signer_private_key`."""
    return MessageSigner().sign(message, signer_private_key)


def verify(message: str, signature: Signature | str, signer_public_key: SigningPublicKey) -> bool:
    """Verifies `signature` over `message` against `signer_public_key`."""
    return MessageSigner().verify(message, signature, signer_public_key)
