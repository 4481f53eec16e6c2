"""Number theory primitives backing key generation and the block cipher.

All functions are pure and work on plain Python integers. They are written out by hand, rather than delegating to
`pow()` or `math`, so that the exact algorithms the cipher relies on stay visible and testable.

Typical usage example:

    is_prime(65521)
    d = mod_inverse(17, 3120)
    c = mod_exp(65, 17, 3233)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def is_prime(n: int) -> bool:
    """Deterministic primality test by trial division.

    Handles 2 and even numbers first, then tries every odd factor up to the square root of `n`.

    Args:
        n: The candidate to test.

    Returns:
        True if `n` is prime, False otherwise. Anything below 2 is not prime.
    """
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    factor = 3
    while factor * factor <= n:
        if n % factor == 0:
            return False
        factor += 2
    return True


def gcd(a: int, b: int) -> int:
    """Greatest common divisor via the Euclidean algorithm.

    Signs are ignored, so `gcd(-4, 6) == 2`, and `gcd(0, 0) == 0`.
    """
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def mod_inverse(a: int, n: int) -> int:
    """Compute the modular inverse of `a` modulo `n` with the Extended Euclidean Algorithm.

    Only the Bezout coefficient of `a` is tracked, it is normalized into `[0, n)` at the end.

    Args:
        a: The value to invert.
        n: The modulus. Must be positive.

    Returns:
        `t` such that `(a * t) % n == 1`.

    Raises:
        ValueError: If `n` is not positive or `a` and `n` are not coprime, in which case no inverse exists.
    """
    if n <= 0:
        raise ValueError("Modulus must be positive.")
    a %= n
    r, r_new = n, a
    t, t_new = 0, 1
    while r_new != 0:
        q = r // r_new
        r, r_new = r_new, r - q * r_new
        t, t_new = t_new, t - q * t_new
    if r > 1:
        raise ValueError(f"{a} has no inverse modulo {n}.")
    if t < 0:
        t += n
    return t


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """Modular exponentiation by repeated squaring.

    Walks the exponent bit by bit from the least significant end: the running result picks up the current power of
    `base` whenever the bit is set, and the base is squared every round.

    Args:
        base: Number to raise to a power.
        exponent: The power. Must be non-negative.
        modulus: The modulus. Must be positive.

    Returns:
        `(base ** exponent) % modulus`

    Raises:
        ValueError: If `modulus` is not positive or `exponent` is negative.
    """
    if modulus <= 0:
        raise ValueError("Modulus must be positive.")
    if exponent < 0:
        raise ValueError("Exponent must be non-negative.")
    result = 1
    base %= modulus
    while exponent != 0:
        if exponent % 2 == 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent //= 2
    return result
