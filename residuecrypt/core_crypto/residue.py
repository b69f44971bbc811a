"""
Residues and Safe Modular Arithmetic

A Residue is an integer reduced modulo a fixed positive modulus, paired
with that modulus. The value is always the canonical representative in
[0, modulus): it is normalized at construction and after every result.

Arithmetic between residues is partial:
- Operands under different moduli -> Failure(DOMAIN_MISMATCH)
- Division by a non-invertible residue -> Failure(NO_INVERSE)

None of the safe_* functions raise for these cases.

Example:
    >>> safe_div(Residue(6, 4), Residue(6, 5))
    Ok(value=Residue(modulus=6, value=2))
    >>> safe_add(Residue(7, 1), Residue(5, 3)).is_ok
    False
"""

from dataclasses import dataclass
from typing import Callable

from .euclid import extended_euclid
from .results import Ok, Result, domain_mismatch, no_inverse


@dataclass(frozen=True)
class Residue:
    """
    Immutable integer modulo `modulus`.

    Residues of differing modulus never compare equal.
    """
    modulus: int
    value: int

    def __post_init__(self):
        if isinstance(self.modulus, bool) or not isinstance(self.modulus, int):
            raise ValueError(f"Modulus must be an integer, got {type(self.modulus).__name__}")
        if self.modulus <= 0:
            raise ValueError(f"Modulus must be positive, got {self.modulus}")
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Value must be an integer, got {type(self.value).__name__}")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'value', self.value % self.modulus)

    def __str__(self) -> str:
        return f"{self.value} (mod {self.modulus})"


def make_residue(modulus: int, value: int) -> Residue:
    """
    Build a residue, normalizing value into [0, modulus).

    Args:
        modulus: Positive modulus
        value: Any integer

    Returns:
        The canonical Residue

    Raises:
        ValueError: If modulus is not a positive integer
    """
    return Residue(modulus, value)


def _same_modulus(a: Residue, b: Residue, op_name: str) -> Result:
    if a.modulus != b.modulus:
        return domain_mismatch(
            f"{op_name} of residues mod {a.modulus} and mod {b.modulus}"
        )
    return Ok(a.modulus)


def _combine(a: Residue, b: Residue, op_name: str,
             op: Callable[[int, int], int]) -> Result:
    return _same_modulus(a, b, op_name).map(
        lambda modulus: Residue(modulus, op(a.value, b.value))
    )


def safe_add(a: Residue, b: Residue) -> Result:
    """(a + b) mod n, or DOMAIN_MISMATCH."""
    return _combine(a, b, "addition", lambda x, y: x + y)


def safe_sub(a: Residue, b: Residue) -> Result:
    """(a - b) mod n, or DOMAIN_MISMATCH."""
    return _combine(a, b, "subtraction", lambda x, y: x - y)


def safe_mul(a: Residue, b: Residue) -> Result:
    """(a * b) mod n, or DOMAIN_MISMATCH."""
    return _combine(a, b, "multiplication", lambda x, y: x * y)


def safe_div(a: Residue, b: Residue) -> Result:
    """
    Divide a by b, i.e. multiply a by the modular inverse of b.

    The inverse is the Bezout coefficient s of
    extended_euclid(b.value, modulus) = (gcd, s, t), which exists only
    when gcd == 1.

    Args:
        a: Dividend
        b: Divisor

    Returns:
        Ok(a * b^-1) on success,
        DOMAIN_MISMATCH if the moduli differ,
        NO_INVERSE if gcd(b.value, modulus) != 1
    """
    same = _same_modulus(a, b, "division")
    if not same.is_ok:
        return same

    modulus = same.value
    g, s, _ = extended_euclid(b.value, modulus)
    if g != 1:
        return no_inverse(f"gcd({b.value}, {modulus}) = {g}")

    return Ok(Residue(modulus, a.value * s))


def safe_inverse(b: Residue) -> Result:
    """Modular inverse of b, or NO_INVERSE."""
    return safe_div(Residue(b.modulus, 1), b)


def safe_product(first: Residue, *rest: Residue) -> Result:
    """
    Multiply residues left to right.

    Returns:
        Ok(product), or the first DOMAIN_MISMATCH encountered
    """
    result: Result = Ok(first)
    for factor in rest:
        result = result.and_then(lambda acc, f=factor: safe_mul(acc, f))
    return result
