"""
Scalar Multiplication (double-and-add)

Computes [k]P for any addition law:

    [0]P = identity
    [1]P = P
    [k]P = P + ([k//2]P + [k//2]P)   if k is odd
           [k//2]P + [k//2]P         if k is even

The recursion is unrolled over the bits of k from the most significant
bit down, which issues the same add_law calls in the same order with no
recursion depth. O(log k) invocations of add_law.

Any failed addition aborts the computation and is returned as is.
"""

from .point_group import AddLaw, Point, identity, point_modulus
from .results import Ok, Result


def scalar_multiply(add_law: AddLaw, k: int, point: Point) -> Result:
    """
    Multiply a point by a non-negative integer.

    Args:
        add_law: Two-argument addition law (clock_add, edwards_law(d), ...)
        k: Scalar (must be >= 0)
        point: Base point

    Returns:
        Ok([k]P), or the first Failure raised by the addition law.
        For k == 0, DOMAIN_MISMATCH if the point's coordinates disagree
        on modulus.

    Raises:
        ValueError: If k is negative or not an integer
    """
    if isinstance(k, bool) or not isinstance(k, int):
        raise ValueError(f"Scalar must be an integer, got {type(k).__name__}")
    if k < 0:
        raise ValueError("Scalar must be non-negative")

    if k == 0:
        return point_modulus(point).map(identity)
    if k == 1:
        return Ok(point)

    result = point
    # Skip the leading 1 bit: it corresponds to the [1]P base case
    for bit in bin(k)[3:]:
        doubled = add_law(result, result)
        if not doubled.is_ok:
            return doubled
        result = doubled.value

        if bit == '1':
            added = add_law(point, result)
            if not added.is_ok:
                return added
            result = added.value

    return Ok(result)
