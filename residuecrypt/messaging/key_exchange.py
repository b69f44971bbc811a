"""
Diffie-Hellman Key Exchange over Point Groups

Both parties agree on public DomainParams (a base point P and an
addition law). Each picks a private scalar and publishes [secret]P.
On receiving the peer's public point each computes

    shared = [own_secret](peer_public)

Agreement follows from [a]([b]P) == [b]([a]P) for the group law.
The shared point can be turned into symmetric key material with HKDF.

Toy moduli offer no real security; this module demonstrates the
protocol structure on top of the generic scalar multiplier.
"""

import secrets
from dataclasses import dataclass, field
from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ..core_crypto.point_group import (
    AddLaw, Point, clock_add, edwards_law, make_point, point_modulus,
)
from ..core_crypto.residue import Residue
from ..core_crypto.results import Result, domain_mismatch
from ..core_crypto.scalar_mult import scalar_multiply


# Constants
SESSION_KEY_SIZE = 32          # 256 bits
HKDF_INFO = b"residuecrypt-dh"
MIN_SECRET = 2                 # 0 and 1 would publish the identity / base point


@dataclass(frozen=True)
class DomainParams:
    """
    Public parameters of an exchange.

    The modulus is taken from the base point, whose coordinates must
    share it.
    """
    base_point: Point
    add_law: AddLaw = field(compare=False)
    name: str = "custom"

    def __post_init__(self):
        shared = point_modulus(self.base_point)
        if not shared.is_ok:
            raise ValueError(f"Base point coordinates disagree: {shared.detail}")

    @property
    def modulus(self) -> int:
        return self.base_point.x.modulus

    @classmethod
    def clock(cls, modulus: int, x: int, y: int) -> 'DomainParams':
        """Clock-group parameters with base point (x, y)."""
        return cls(make_point(modulus, x, y), clock_add, name="clock")

    @classmethod
    def edwards(cls, modulus: int, d: int, x: int, y: int) -> 'DomainParams':
        """Edwards-law parameters with curve constant d and base point (x, y)."""
        law = edwards_law(Residue(modulus, d))
        return cls(make_point(modulus, x, y), law, name="edwards")


def _check_secret(secret: int) -> None:
    if isinstance(secret, bool) or not isinstance(secret, int):
        raise ValueError(f"Secret must be an integer, got {type(secret).__name__}")
    if secret < 0:
        raise ValueError("Secret must be non-negative")


def generate_secret(params: DomainParams) -> int:
    """
    Random private scalar in [MIN_SECRET, modulus).

    Raises:
        ValueError: If the modulus is too small to pick from
    """
    if params.modulus <= MIN_SECRET:
        raise ValueError(f"Modulus {params.modulus} too small for secret generation")
    return secrets.randbelow(params.modulus - MIN_SECRET) + MIN_SECRET


def generate_public_key(params: DomainParams, secret: int) -> Result:
    """
    Public key [secret]P.

    Returns:
        Ok(Point) or the failure from the addition law

    Raises:
        ValueError: If secret is negative or not an integer
    """
    _check_secret(secret)
    return scalar_multiply(params.add_law, secret, params.base_point)


def derive_shared_secret(params: DomainParams, secret: int,
                         peer_public: Point) -> Result:
    """
    Shared point [secret](peer_public).

    Args:
        params: Public parameters both parties agreed on
        secret: Own private scalar
        peer_public: The other party's public point

    Returns:
        Ok(Point),
        DOMAIN_MISMATCH if peer_public is not under the parameters' modulus,
        or the failure from the addition law

    Raises:
        ValueError: If secret is negative or not an integer
    """
    _check_secret(secret)

    peer_modulus = point_modulus(peer_public)
    if not peer_modulus.is_ok:
        return peer_modulus
    if peer_modulus.value != params.modulus:
        return domain_mismatch(
            f"peer key mod {peer_modulus.value}, parameters mod {params.modulus}"
        )

    return scalar_multiply(params.add_law, secret, peer_public)


def point_to_bytes(point: Point) -> bytes:
    """
    Fixed-width big-endian encoding x || y.

    Each coordinate takes as many bytes as the modulus needs, so equal
    points always encode identically.
    """
    width = max(1, (point.x.modulus.bit_length() + 7) // 8)
    return (
        point.x.value.to_bytes(width, byteorder='big') +
        point.y.value.to_bytes(width, byteorder='big')
    )


def hkdf_derive_key(shared_secret: bytes,
                    salt: Optional[bytes] = None,
                    info: bytes = HKDF_INFO,
                    length: int = SESSION_KEY_SIZE) -> bytes:
    """
    Derive a symmetric key from shared secret bytes using HKDF-SHA256.

    Args:
        shared_secret: Input key material (e.g. an encoded shared point)
        salt: Optional salt
        info: Context/application info
        length: Output key length in bytes

    Returns:
        Derived key bytes
    """
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=length,
        salt=salt,
        info=info,
    )
    return hkdf.derive(shared_secret)


class DiffieHellmanParty:
    """
    One side of an exchange.

    Holds the private scalar and caches the public key.

    Example:
        >>> params = DomainParams.clock(1000003, 1000, 2)
        >>> alice = DiffieHellmanParty(params, secret=397)
        >>> bob = DiffieHellmanParty(params, secret=479)
        >>> shared_a = alice.derive_shared_secret(bob.public_key.unwrap())
        >>> shared_b = bob.derive_shared_secret(alice.public_key.unwrap())
        >>> shared_a == shared_b
        True
    """

    def __init__(self, params: DomainParams, secret: Optional[int] = None):
        """
        Args:
            params: Public domain parameters
            secret: Private scalar, or a random one if None
        """
        if secret is None:
            secret = generate_secret(params)
        _check_secret(secret)
        self._params = params
        self._secret = secret
        self._public_key: Optional[Result] = None

    @property
    def params(self) -> DomainParams:
        return self._params

    @property
    def public_key(self) -> Result:
        """[secret]P, computed once."""
        if self._public_key is None:
            self._public_key = generate_public_key(self._params, self._secret)
        return self._public_key

    def derive_shared_secret(self, peer_public: Point) -> Result:
        """Shared point with a peer."""
        return derive_shared_secret(self._params, self._secret, peer_public)

    def derive_session_key(self, peer_public: Point,
                           salt: Optional[bytes] = None,
                           info: bytes = HKDF_INFO,
                           length: int = SESSION_KEY_SIZE) -> Result:
        """
        Symmetric key from the shared point.

        Returns:
            Ok(key bytes), or the failure from the shared-point derivation
        """
        return self.derive_shared_secret(peer_public).map(
            lambda shared: hkdf_derive_key(point_to_bytes(shared), salt, info, length)
        )

    def __repr__(self) -> str:
        return f"DiffieHellmanParty(params={self._params.name}, modulus={self._params.modulus})"
