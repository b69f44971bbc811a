"""
Extended Euclidean Algorithm

Computes gcd(a, b) together with Bezout coefficients s, t such that

    s*a + t*b = gcd(a, b)

The coefficient of `a` is the modular inverse of a (mod b) whenever the
gcd is 1, which is what residue division and RSA key derivation rely on.

The algorithm is iterative, so the number of steps is O(log min(|a|, |b|))
without any recursion depth.
"""

from typing import Tuple


def extended_euclid(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm (iterative).

    Maintains the invariants
        old_s*a + old_t*b == old_r
        s*a + t*b == r
    while (old_r, r) walks down the remainder sequence.

    Args:
        a: First integer
        b: Second integer

    Returns:
        Tuple (gcd, s, t) where s*a + t*b == gcd and gcd >= 0.
        For b == 0 and a >= 0 this is (a, 1, 0).
        Coefficient signs are not canonicalized.
    """
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1

    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s
        old_t, t = t, old_t - quotient * t

    # Negative inputs can leave a negative gcd; flip all three
    if old_r < 0:
        old_r, old_s, old_t = -old_r, -old_s, -old_t

    return old_r, old_s, old_t


def gcd(a: int, b: int) -> int:
    """
    Greatest common divisor of |a| and |b|.

    Args:
        a: First integer
        b: Second integer

    Returns:
        gcd(|a|, |b|)
    """
    return extended_euclid(a, b)[0]


def mod_inverse(a: int, m: int) -> int:
    """
    Modular multiplicative inverse.

    Finds x in [0, m) such that (a * x) mod m == 1.

    Args:
        a: The number to invert
        m: The modulus (must be positive)

    Returns:
        Modular inverse of a mod m

    Raises:
        ValueError: If m <= 0 or the inverse doesn't exist (gcd(a, m) != 1)
    """
    if m <= 0:
        raise ValueError("Modulus must be positive")

    g, x, _ = extended_euclid(a % m, m)

    if g != 1:
        raise ValueError(f"Modular inverse doesn't exist (gcd({a}, {m}) = {g})")

    return x % m
