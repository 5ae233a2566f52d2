"""Key helpers shared by the test modules."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from cryptography.hazmat.primitives.asymmetric import rsa

from didcrypt.provider import RSAProvider
from didcrypt.rsa import RSAPrivKey
from didcrypt.rsa import RSAPubKey

E = 65537


def localize_keys(pk: rsa.RSAPrivateKey, crt: bool = True) -> tuple[RSAPubKey, RSAPrivKey]:
    """Rebuilds a `cryptography` key as didcrypt primitives."""
    privs = pk.private_numbers()
    pubs = privs.public_numbers
    if crt:
        pkey = RSAPrivKey(pubs.n, pubs.e, privs.d, privs.p, privs.q, privs.dmp1, privs.dmq1, privs.iqmp)
    else:
        pkey = RSAPrivKey(pubs.n, pubs.e, privs.d)
    return RSAPubKey(pubs.n, pubs.e), pkey


class FixedProvider(RSAProvider):
    """Deterministic provider: hands out pre-built keys in order and a constant OAEP seed."""

    def __init__(self, keys: list[rsa.RSAPrivateKey], seed: bytes = b"\x5a") -> None:
        self.keys = list(keys)
        self.seed = seed
        self.generated: list[tuple[int, int]] = []

    def random_bytes(self, n: int) -> bytes:
        return (self.seed * n)[:n]

    def generate_private_key(self, size: int, pub_exp: int) -> RSAPrivKey:
        self.generated.append((size, pub_exp))
        return localize_keys(self.keys.pop(0))[1]
