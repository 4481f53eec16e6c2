"""Key pair generation from small random primes.

Primes and the public exponent are drawn uniformly from a fixed range, wide enough that the primes are well clear of
the totient's small factors, yet small enough that the modulus and every cipher block fit in 32 bits.

Typical usage example:

    keys = generate_key_pair()
    n, e = keys.public
    n, d = keys.private
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import secrets
import typing

from minirsa import numtheory

log = logging.getLogger(__name__)

KEY_RANGE_LOW: int = 4096
KEY_RANGE_HIGH: int = 65535


class KeyPair(typing.NamedTuple):
    """A generated key pair.

    Attributes:
        n: The shared modulus.
        e: The public exponent.
        d: The private exponent.
    """
    n: int
    e: int
    d: int

    @property
    def public(self) -> tuple[int, int]:
        return self.n, self.e

    @property
    def private(self) -> tuple[int, int]:
        return self.n, self.d


def _sample(low: int, high: int) -> int:
    """Uniformly random integer in `[low, high]` inclusive."""
    return low + secrets.randbelow(high - low + 1)


def _validate_range(low: int, high: int) -> None:
    if low > high:
        raise ValueError(f"Empty range [{low}, {high}].")
    if not any(numtheory.is_prime(i) for i in range(max(low, 2), high + 1)):
        raise ValueError(f"No primes in range [{low}, {high}].")


def random_prime(low: int = KEY_RANGE_LOW, high: int = KEY_RANGE_HIGH) -> int:
    """Draw random integers from the range until one is prime.

    Args:
        low: Lower bound, inclusive.
        high: Upper bound, inclusive.

    Returns:
        A prime in `[low, high]`.

    Raises:
        ValueError: If the range holds no prime at all.
    """
    _validate_range(low, high)
    while True:
        candidate = _sample(low, high)
        if numtheory.is_prime(candidate):
            return candidate


def generate_key_pair(low: int = KEY_RANGE_LOW, high: int = KEY_RANGE_HIGH) -> KeyPair:
    """Generates a key pair.

    Picks primes `p` and `q`, then a public exponent `e` from the same range that is coprime with the totient
    `(p - 1) * (q - 1)`, and inverts it to get the private exponent. The primes and the totient are discarded.

    Args:
        low: Lower bound for primes and public exponent, inclusive.
        high: Upper bound for primes and public exponent, inclusive.

    Returns:
        The key pair `(n, e, d)`.

    Raises:
        ValueError: If the range holds no prime at all.
    """
    _validate_range(low, high)
    p = random_prime(low, high)
    q = random_prime(low, high)
    n = p * q
    f = (p - 1) * (q - 1)
    e = _sample(low, high)
    while numtheory.gcd(e, f) != 1:
        e = _sample(low, high)
    d = numtheory.mod_inverse(e, f)
    del p, q, f
    log.debug("Generated key pair with %d bit modulus", n.bit_length())
    return KeyPair(n, e, d)
