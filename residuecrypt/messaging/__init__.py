# Messaging Module
"""
Key agreement implementations including:
- Diffie-Hellman over clock and Edwards point groups
- HKDF-SHA256 session key derivation from the shared point

Shared-secret failures (mismatched moduli, missing inverses) are
returned as Failure values, never raised.
"""

from .key_exchange import (
    DomainParams,
    DiffieHellmanParty,
    generate_secret,
    generate_public_key,
    derive_shared_secret,
    point_to_bytes,
    hkdf_derive_key,
    SESSION_KEY_SIZE,
)

__all__ = [
    'DomainParams',
    'DiffieHellmanParty',
    'generate_secret',
    'generate_public_key',
    'derive_shared_secret',
    'point_to_bytes',
    'hkdf_derive_key',
    'SESSION_KEY_SIZE',
]
