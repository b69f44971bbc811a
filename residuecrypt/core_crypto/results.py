"""
Tagged Results for Partial Arithmetic

Modular arithmetic is partial: two residues may live under different
moduli, and a divisor may have no inverse. Instead of raising, the
arithmetic layer returns one of two values:

- Ok(value): the operation succeeded
- Failure(kind): the operation is undefined, with the reason attached

Failures compose: `and_then` and `map` skip the function on a Failure,
so a failure deep inside a scalar multiplication surfaces unchanged as
the overall result.

Example:
    >>> Ok(3).map(lambda v: v + 1)
    Ok(value=4)
    >>> domain_mismatch("7 vs 5").map(lambda v: v + 1).kind
    <ErrorKind.DOMAIN_MISMATCH: 'domain_mismatch'>
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, TypeVar, Union


T = TypeVar('T')
U = TypeVar('U')


class ErrorKind(Enum):
    """Reasons an arithmetic result can be absent."""

    DOMAIN_MISMATCH = "domain_mismatch"  # operands under different moduli
    NO_INVERSE = "no_inverse"            # gcd(value, modulus) != 1


class UnwrapError(ValueError):
    """Raised when unwrapping a Failure."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result holding a value."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> 'Ok[U]':
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], 'Result']) -> 'Result':
        return fn(self.value)

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """
    Absent result.

    Two failures are equal when their kinds match; `detail` is only a
    human-readable hint for diagnostics.
    """
    kind: ErrorKind
    detail: str = field(default="", compare=False)

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        message = self.kind.value
        if self.detail:
            message = f"{message}: {self.detail}"
        raise UnwrapError(f"Called unwrap() on a failed result ({message})")

    def unwrap_or(self, default: Any) -> Any:
        return default

    def map(self, fn: Callable) -> 'Failure':
        return self

    def and_then(self, fn: Callable) -> 'Failure':
        return self

    def __bool__(self) -> bool:
        return False


Result = Union[Ok[T], Failure]


def domain_mismatch(detail: str = "") -> Failure:
    """Failure for operands that reference different moduli."""
    return Failure(ErrorKind.DOMAIN_MISMATCH, detail)


def no_inverse(detail: str = "") -> Failure:
    """Failure for a divisor without a modular inverse."""
    return Failure(ErrorKind.NO_INVERSE, detail)


def collect(results: Iterable[Result]) -> Result:
    """
    Combine several results into one.

    Args:
        results: Results to combine, in order

    Returns:
        Ok(tuple of values) if every result is Ok, otherwise the first Failure
    """
    values = []
    for result in results:
        if not result.is_ok:
            return result
        values.append(result.value)
    return Ok(tuple(values))
