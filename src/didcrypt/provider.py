"""The cryptography capability handed to every didcrypt component.

Components never reach for randomness or key generation on their own; they go through an `RSAProvider`. Swapping
the provider is how tests make key generation and OAEP seeds deterministic.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import secrets

from didcrypt.rsa import RSAPrivKey

logger = logging.getLogger(__name__)


class RSAProvider:
    """Default provider backed by the system CSPRNG through `secrets`."""

    def random_bytes(self, n: int) -> bytes:
        """Returns `n` fresh random bytes."""
        return secrets.token_bytes(n)

    def random_bits(self, k: int) -> int:
        """Returns a fresh random integer of at most `k` bits."""
        return secrets.randbits(k)

    def generate_private_key(self, size: int, pub_exp: int) -> RSAPrivKey:
        """Generates a fresh CRT private key.

        Args:
            size: Modulus size in bits.
            pub_exp: Public exponent.

        Returns:
            The private key; its public half is available as `.pub`.

        Raises:
            ValueError: On invalid parameters.
            RuntimeError: If the prime search gives up.
        """
        logger.debug("Generating %d-bit RSA key", size)
        return RSAPrivKey.generate(size, pub_exp, self.random_bits)


_default: RSAProvider | None = None


def default_provider() -> RSAProvider:
    """Returns the process-wide default provider, creating it on first use."""
    global _default
    if _default is None:
        _default = RSAProvider()
    return _default
