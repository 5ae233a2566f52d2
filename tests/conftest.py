# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

from didcrypt import KeyManager
from keyhelpers import E
from keyhelpers import FixedProvider


@pytest.fixture(scope="session")
def crypto_keys() -> list[rsa.RSAPrivateKey]:
    return [rsa.generate_private_key(public_exponent=E, key_size=2048) for _ in range(4)]


@pytest.fixture(scope="session")
def crypto_key_3072() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=E, key_size=3072)


@pytest.fixture
def fixed_provider(crypto_keys) -> FixedProvider:
    return FixedProvider(crypto_keys)


@pytest.fixture
def enc_pair(crypto_keys):
    return KeyManager(FixedProvider(crypto_keys[0:1])).generate_encryption_key_pair()


@pytest.fixture
def other_enc_pair(crypto_keys):
    return KeyManager(FixedProvider(crypto_keys[1:2])).generate_encryption_key_pair()


@pytest.fixture
def sig_pair(crypto_keys):
    return KeyManager(FixedProvider(crypto_keys[2:3])).generate_signing_key_pair()


@pytest.fixture
def other_sig_pair(crypto_keys):
    return KeyManager(FixedProvider(crypto_keys[3:4])).generate_signing_key_pair()
