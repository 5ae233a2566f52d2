"""Asymmetric cryptography for decentralized-identity payloads.

Generates RSA encryption and signing key pairs, encrypts short text for a recipient with RSAES-OAEP (SHA-256) and
signs with RSASSA-PKCS1-v1_5 (SHA-256). Keys, ciphertexts and signatures travel as standard base-64 text.

Typical usage example:

    bob = generate_encryption_key_pair()
    c = encrypt("Hi Bob, this is Alice!", bob.public_key)
    r = decrypt(str(c), bob.private_key)

    alice = generate_signing_key_pair()
    s = sign("Authenticate this DID transaction", alice.private_key)
    verify("Authenticate this DID transaction", s, alice.public_key)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from didcrypt.cipher import decrypt
from didcrypt.cipher import encrypt
from didcrypt.cipher import MessageCipher
from didcrypt.encoding import Ciphertext
from didcrypt.encoding import decode
from didcrypt.encoding import encode
from didcrypt.encoding import EncodedKey
from didcrypt.encoding import EncryptionPrivateKey
from didcrypt.encoding import EncryptionPublicKey
from didcrypt.encoding import Signature
from didcrypt.encoding import SigningPrivateKey
from didcrypt.encoding import SigningPublicKey
from didcrypt.errors import CryptoError
from didcrypt.errors import DecryptionFailure
from didcrypt.errors import KeyGenerationFailure
from didcrypt.errors import KeyUsageError
from didcrypt.errors import MalformedEncoding
from didcrypt.errors import MalformedKey
from didcrypt.errors import MalformedSignature
from didcrypt.errors import PlaintextTooLarge
from didcrypt.keys import EncryptionKeyPair
from didcrypt.keys import generate_encryption_key_pair
from didcrypt.keys import generate_signing_key_pair
from didcrypt.keys import KeyManager
from didcrypt.keys import SigningKeyPair
from didcrypt.provider import RSAProvider
from didcrypt.signer import MessageSigner
from didcrypt.signer import sign
from didcrypt.signer import verify

__version__ = "0.1.0"
__all__ = [
    "encode",
    "decode",
    "EncodedKey",
    "EncryptionPublicKey",
    "EncryptionPrivateKey",
    "SigningPublicKey",
    "SigningPrivateKey",
    "Ciphertext",
    "Signature",
    "EncryptionKeyPair",
    "SigningKeyPair",
    "KeyManager",
    "generate_encryption_key_pair",
    "generate_signing_key_pair",
    "MessageCipher",
    "encrypt",
    "decrypt",
    "MessageSigner",
    "sign",
    "verify",
    "RSAProvider",
    "CryptoError",
    "MalformedEncoding",
    "MalformedSignature",
    "MalformedKey",
    "KeyUsageError",
    "KeyGenerationFailure",
    "PlaintextTooLarge",
    "DecryptionFailure",
]
