"""
Point Group Operations

Points are ordered pairs of residues. Two addition laws are provided:

ClockAdd (toy group):
    x3 = x1*y2 + y1*x2
    y3 = y1*y2 - x1*x2
  i.e. multiplication of (y + x*i) in the Gaussian integers modulo n.

EdwardsAdd (twisted-Edwards-style, curve constant d):
    x3 = (x1*y2 + y1*x2) / (1 + d*x1*y1*x2*y2)
    y3 = (y1*y2 - x1*x2) / (1 - d*x1*y1*x2*y2)

Both laws are partial: they return Failure(DOMAIN_MISMATCH) when the
moduli disagree, and EdwardsAdd returns Failure(NO_INVERSE) when a
denominator is not invertible. Curve membership is never checked.

The identity element of both laws is (0, 1).
"""

from dataclasses import dataclass
from functools import partial
from typing import Callable, Tuple

from .residue import Residue, safe_add, safe_div, safe_mul, safe_product, safe_sub
from .results import Ok, Result, collect, domain_mismatch


@dataclass(frozen=True)
class Point:
    """Immutable pair of residues (x, y)."""
    x: Residue
    y: Residue

    def as_tuple(self) -> Tuple[int, int]:
        """Coordinate values without their modulus."""
        return self.x.value, self.y.value

    def __str__(self) -> str:
        return f"({self.x.value}, {self.y.value}) mod {self.x.modulus}"


# Addition law: (P1, P2) -> Result[Point]
AddLaw = Callable[[Point, Point], Result]


def make_point(modulus: int, x: int, y: int) -> Point:
    """
    Build a point from plain integers under a single modulus.

    Raises:
        ValueError: If modulus is not a positive integer
    """
    return Point(Residue(modulus, x), Residue(modulus, y))


def identity(modulus: int) -> Point:
    """Identity element (0, 1) for both addition laws."""
    return make_point(modulus, 0, 1)


def point_modulus(point: Point) -> Result:
    """
    Modulus shared by both coordinates.

    Returns:
        Ok(modulus), or DOMAIN_MISMATCH if x and y disagree
    """
    if point.x.modulus != point.y.modulus:
        return domain_mismatch(
            f"point coordinates mod {point.x.modulus} and mod {point.y.modulus}"
        )
    return Ok(point.x.modulus)


def _shared_modulus(p1: Point, p2: Point) -> Result:
    moduli = collect([point_modulus(p1), point_modulus(p2)])
    if not moduli.is_ok:
        return moduli
    n1, n2 = moduli.value
    if n1 != n2:
        return domain_mismatch(f"points mod {n1} and mod {n2}")
    return Ok(n1)


def _cross_terms(p1: Point, p2: Point) -> Result:
    """(x1*y2, y1*x2, y1*y2, x1*x2), shared by both laws."""
    return collect([
        safe_mul(p1.x, p2.y),
        safe_mul(p1.y, p2.x),
        safe_mul(p1.y, p2.y),
        safe_mul(p1.x, p2.x),
    ])


def clock_add(p1: Point, p2: Point) -> Result:
    """
    Add two points under the clock law.

    Args:
        p1: First point
        p2: Second point

    Returns:
        Ok(Point) or DOMAIN_MISMATCH
    """
    shared = _shared_modulus(p1, p2)
    if not shared.is_ok:
        return shared

    terms = _cross_terms(p1, p2)
    if not terms.is_ok:
        return terms
    x1y2, y1x2, y1y2, x1x2 = terms.value

    coords = collect([safe_add(x1y2, y1x2), safe_sub(y1y2, x1x2)])
    return coords.map(lambda xy: Point(*xy))


def edwards_add(d: Residue, p1: Point, p2: Point) -> Result:
    """
    Add two points under the Edwards-style law with curve constant d.

    Args:
        d: Curve constant, under the same modulus as the points
        p1: First point
        p2: Second point

    Returns:
        Ok(Point),
        DOMAIN_MISMATCH if the points or d disagree on modulus,
        NO_INVERSE if 1 + d*x1*y1*x2*y2 or 1 - d*x1*y1*x2*y2 is not invertible
    """
    shared = _shared_modulus(p1, p2)
    if not shared.is_ok:
        return shared
    if d.modulus != shared.value:
        return domain_mismatch(
            f"curve constant mod {d.modulus}, points mod {shared.value}"
        )

    terms = _cross_terms(p1, p2)
    if not terms.is_ok:
        return terms
    x1y2, y1x2, y1y2, x1x2 = terms.value

    one = Residue(shared.value, 1)
    # d*x1*y1*x2*y2 == d * (x1*y2) * (y1*x2)
    twist = safe_product(d, x1y2, y1x2)
    if not twist.is_ok:
        return twist

    parts = collect([
        safe_add(x1y2, y1x2),
        safe_add(one, twist.value),
        safe_sub(y1y2, x1x2),
        safe_sub(one, twist.value),
    ])
    if not parts.is_ok:
        return parts
    num_x, den_x, num_y, den_y = parts.value

    coords = collect([safe_div(num_x, den_x), safe_div(num_y, den_y)])
    return coords.map(lambda xy: Point(*xy))


def edwards_law(d: Residue) -> AddLaw:
    """Bind the curve constant, giving a two-argument addition law."""
    return partial(edwards_add, d)
