"""Single-block RSAES-OAEP encryption of short text payloads.

SHA-256 serves as both the OAEP hash and the MGF1 hash, and the label is empty, matching WebCrypto `RSA-OAEP`
with `hash: "SHA-256"`. A 2048-bit key therefore carries at most 190 bytes of UTF-8 text.

Typical usage example:

    pair = generate_encryption_key_pair()
    c = encrypt("Hi Bob, this is Alice!", pair.public_key)
    decrypt(c, pair.private_key)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from didcrypt import config
from didcrypt.encoding import Ciphertext
from didcrypt.encoding import EncryptionPrivateKey
from didcrypt.encoding import EncryptionPublicKey
from didcrypt.errors import DecryptionFailure
from didcrypt.errors import PlaintextTooLarge
from didcrypt.keys import import_private_key
from didcrypt.keys import import_public_key
from didcrypt.provider import default_provider
from didcrypt.provider import RSAProvider
from didcrypt.rsa import HASH_TLL

logger = logging.getLogger(__name__)


class MessageCipher:
    """Encrypts for a recipient public key and decrypts with the holder's private key.

    Attributes:
        provider: Source of the OAEP seeds.
        hashf: OAEP and MGF1 hash name.
    """

    def __init__(self, provider: RSAProvider | None = None, hashf: str = config.HASH) -> None:
        self.provider = provider or default_provider()
        self.hashf = hashf

    def encrypt(self, plaintext: str, recipient_public_key: EncryptionPublicKey) -> Ciphertext:
        """Encrypts a UTF-8 text payload.

        Randomized: the same inputs give a different ciphertext on every call.

        Args:
            plaintext: The text to encrypt.
            recipient_public_key: The recipient's encryption public key.

        Returns:
            The ciphertext, one modulus-sized block.

        Raises:
            KeyUsageError: If the key is not an `EncryptionPublicKey`.
            MalformedKey: If the key bytes cannot be imported.
            PlaintextTooLarge: If the UTF-8 payload exceeds the key's OAEP capacity.
        """
        pub = import_public_key(recipient_public_key, EncryptionPublicKey)
        data = plaintext.encode("utf-8")
        limit = pub.max_oaep_payload(self.hashf)
        if len(data) > limit:
            raise PlaintextTooLarge(f"Plaintext is {len(data)} bytes, the key carries at most {limit}.")
        seed = self.provider.random_bytes(HASH_TLL[self.hashf][2])
        logger.debug("Encrypting %d bytes for a %d-byte modulus", len(data), pub.bsize)
        return Ciphertext(pub.enc_oaep(data, hashf=self.hashf, seed=seed))

    def decrypt(self, ciphertext: Ciphertext | str, holder_private_key: EncryptionPrivateKey) -> str:
        """Decrypts a ciphertext back into text.

        Args:
            ciphertext: The ciphertext, wrapped or in its base-64 form.
            holder_private_key: The holder's encryption private key.

        Returns:
            The original text.

        Raises:
            MalformedEncoding: If a text ciphertext is not valid base-64.
            KeyUsageError: If the key is not an `EncryptionPrivateKey`.
            MalformedKey: If the key bytes cannot be imported.
            DecryptionFailure: For a mismatched key, a corrupted ciphertext or any padding defect.
        """
        ciphertext = Ciphertext.coerce(ciphertext)
        priv = import_private_key(holder_private_key, EncryptionPrivateKey)
        try:
            data = priv.dec_oaep(ciphertext.raw, hashf=self.hashf)
            return data.decode("utf-8")
        except (RuntimeError, UnicodeDecodeError):
            raise DecryptionFailure() from None


def encrypt(plaintext: str, recipient_public_key: EncryptionPublicKey) -> Ciphertext:
    """Encrypts `plaintext` for `recipient_public_key` with the default provider."""
    return MessageCipher().encrypt(plaintext, recipient_public_key)


def decrypt(ciphertext: Ciphertext | str, holder_private_key: EncryptionPrivateKey) -> str:
    """Decrypts `ciphertext` with `holder_private_key`."""
    return MessageCipher().decrypt(ciphertext, holder_private_key)
