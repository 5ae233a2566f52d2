"""Probable-prime search and IFC key pair assembly, loosely following FIPS 186-5 Appendix A.1.3.

Candidates are filtered by trial division against a cached table of small primes before the Miller-Rabin rounds of
Appendix B.3. The randomness source is injectable so that a provider can route it.

Typical usage example:

    p, q = generate_primes(2048)
    (n, e), (n, d, p, q) = generate_key_pair(2048, expose_primes=True)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import secrets
import typing
from typing import Literal, overload

logger = logging.getLogger(__name__)

RandBits = typing.Callable[[int], int]

MIN_KEY_SIZE: int = 2048
_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0
# |p - q| must exceed 2**(nlen/2 - 100).
_MINIMUM_PRIME_SEPARATION: int = 100


def _sieve(n: int = 10000) -> list[int]:
    """Odd-only Sieve of Eratosthenes.

    Index `i` of the table stands for `2 * i + 3`; crossing out starts at the square of each surviving entry.

    Args:
        n: Inclusive upper bound. Must be >= 0.

    Returns:
        Every prime `<= n` in ascending order.
    """
    if n < 2:
        return []
    width = (n - 1) // 2
    alive = [True] * width
    for idx in range(int(n**0.5) // 2):
        if not alive[idx]:
            continue
        step = 2 * idx + 3
        for composite in range((step * step - 3) // 2, width, step):
            alive[composite] = False
    return [2] + [2 * idx + 3 for idx, flag in enumerate(alive) if flag]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Returns the cached small-prime table, sieving again when it is too short.

    Args:
        n: The table must cover every prime `<= n`. Must be >= 0.
        change: Force a fresh sieve to exactly `n`, even if the cache already covers it.

    Returns:
        Ascending list of primes covering at least `n`.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if change or not _SMALL_PRIMES or n > _SMALL_PRIMES_CAP:
        logger.debug("Sieving small primes up to %d", n)
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Cheap pre-filter: False if `no` has a small prime factor (or is below 2), True otherwise."""
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, iters: int) -> bool:
    """Miller-Rabin probabilistic primality test (FIPS 186-5 B.3.1).

    Args:
        w: Integer to test.
        iters: Number of random bases to try.

    Returns:
        True if `w` is probably prime, False if it is certainly composite.
    """
    if w <= 3:
        return w in (2, 3)
    if w % 2 == 0:
        return False
    w_1 = w - 1
    a = (w_1 & -w_1).bit_length() - 1
    m = w_1 >> a
    for _ in range(iters):
        b = secrets.randbelow(w - 3) + 2
        z = pow(b, m, w)
        if z in (1, w_1):
            continue
        for _ in range(a - 1):
            z = pow(z, 2, w)
            if z == w_1:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def _rounds_for(bits: int) -> int:
    """Miller-Rabin round counts from FIPS 186-5 Table B.1 (error probability 2**-100 or better)."""
    if bits <= 512:
        return 40
    if bits <= 1024:
        return 56
    if bits <= 1536:
        return 64
    if bits <= 2048:
        return 70
    return 74


def check_prime(candidate: int, iters: int | None = None, n: int = 10000) -> bool:
    """Composite primality test: trial division by the small-prime table, then Miller-Rabin.

    Args:
        candidate: The number to test.
        iters: Miller-Rabin rounds. Derived from the candidate size when omitted.
        n: Upper bound of the trial division table.

    Returns:
        True if `candidate` is probably prime.
    """
    if not _trial_division(candidate, n):
        return False
    if iters is None:
        iters = _rounds_for(candidate.bit_length())
    return _miller_rabin(candidate, iters)


def _generate_probable_prime(size: int,
                             pub: int = 65537,
                             prm_p: int | None = None,
                             randbits: RandBits | None = None) -> int:
    """Searches for one probable prime of exactly `size` bits.

    The two top bits are forced to 1 so that the product of two such primes has the full key length.

    Args:
        size: Bit length of the prime.
        pub: Public exponent; `gcd(prime - 1, pub)` must be 1.
        prm_p: The already chosen first prime, if this is the second one. Enforces the minimum separation.
        randbits: Source of random integers. Defaults to `secrets.randbits`.

    Returns:
        A probable prime.

    Raises:
        RuntimeError: If the loop cap is reached, which points at a broken randomness source.
    """
    randbits = randbits or secrets.randbits
    factor = 1 if prm_p is None else 2
    cap = size * 5 * factor
    top = (1 << size - 1) | (1 << size - 2)
    for _ in range(cap):
        candidate = randbits(size) | top | 1
        if prm_p is not None and abs(prm_p - candidate) <= (1 << (size - _MINIMUM_PRIME_SEPARATION)):
            continue
        if math.gcd(candidate - 1, pub) == 1 and check_prime(candidate):
            return candidate
    raise RuntimeError(f"No prime found in {cap} attempts. Check the system random number generator.")


def validate_parameters(size: int, pub: int) -> None:
    """Rejects key parameters this module will not generate.

    Raises:
        ValueError: If `size` is below 2048 or odd, or `pub` is even or outside `(2**16, 2**256)`.
    """
    if size < MIN_KEY_SIZE:
        raise ValueError(f"Size must be at least {MIN_KEY_SIZE}.")
    if size % 2 != 0:
        raise ValueError("Size must be an even number.")
    if pub % 2 == 0 or not 2**16 < pub < 2**256:
        raise ValueError("Public exponent does not meet requirements.")


def generate_primes(size: int, pub: int = 65537, randbits: RandBits | None = None) -> tuple[int, int]:
    """Generates the two distinct primes of an IFC key of `size` bits.

    Args:
        size: Modulus size in bits. Must be even and at least 2048.
        pub: Public exponent. Must be odd and in `(2**16, 2**256)`.
        randbits: Source of random integers. Defaults to `secrets.randbits`.

    Returns:
        `(p, q)`, each `size // 2` bits long.

    Raises:
        ValueError: On invalid parameters.
        RuntimeError: If the prime search gives up.
    """
    validate_parameters(size, pub)
    p = _generate_probable_prime(size // 2, pub, randbits=randbits)
    q = _generate_probable_prime(size // 2, pub, p, randbits=randbits)
    while p == q:
        q = _generate_probable_prime(size // 2, pub, p, randbits=randbits)
    return p, q


@overload
def generate_key_pair(size: int,
                      pub: int = 65537,
                      expose_primes: Literal[False] = False,
                      randbits: RandBits | None = None) -> tuple[tuple[int, int], tuple[int, int]]:
    ...


@overload
def generate_key_pair(size: int,
                      pub: int = 65537,
                      expose_primes: Literal[True] = True,
                      randbits: RandBits | None = None) -> tuple[tuple[int, int], tuple[int, int, int, int]]:
    ...


def generate_key_pair(
    size: int,
    pub: int = 65537,
    expose_primes: bool = False,
    randbits: RandBits | None = None,
) -> tuple[tuple[int, int], tuple[int, int]] | tuple[tuple[int, int], tuple[int, int, int, int]]:
    """Generates a complete RSA key pair as integers.

    The private exponent is taken modulo `lcm(p - 1, q - 1)`, as FIPS 186-5 requires.

    Args:
        size: Modulus size in bits.
        pub: Public exponent.
        expose_primes: Also return `p` and `q` so the caller can build a CRT key.
        randbits: Source of random integers. Defaults to `secrets.randbits`.

    Returns:
        `((n, e), (n, d))`, or `((n, e), (n, d, p, q))` when `expose_primes` is set.
    """
    p, q = generate_primes(size, pub, randbits)
    n = p * q
    d = pow(pub, -1, math.lcm(p - 1, q - 1))
    logger.debug("Generated %d-bit modulus", n.bit_length())
    if not expose_primes:
        return (n, pub), (n, d)
    return (n, pub), (n, d, p, q)
