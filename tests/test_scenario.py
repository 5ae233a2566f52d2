# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

import didcrypt

pytestmark = pytest.mark.slow


def test_alice_writes_to_bob():
    bob = didcrypt.generate_encryption_key_pair()
    ciphertext = didcrypt.encrypt("Hi Bob, this is Alice!", bob.public_key)
    assert len(ciphertext) == 256
    assert didcrypt.decrypt(str(ciphertext), bob.private_key) == "Hi Bob, this is Alice!"


def test_alice_signs_a_transaction():
    alice = didcrypt.generate_signing_key_pair()
    mallory = didcrypt.generate_signing_key_pair()
    signature = didcrypt.sign("Authenticate this DID transaction", alice.private_key)
    assert didcrypt.verify("Authenticate this DID transaction", str(signature), alice.public_key)
    assert not didcrypt.verify("Authenticate this DID transaction", signature, mallory.public_key)
    assert not didcrypt.verify("Authenticate this DID transaction!", signature, alice.public_key)
