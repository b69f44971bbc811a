# Core Crypto Module
"""
Core number-theoretic implementations including:
- Tagged results for partial arithmetic (results.py)
- Extended Euclidean Algorithm (euclid.py)
- Residues and safe modular arithmetic (residue.py)
- Clock and Edwards point addition laws (point_group.py)
- Double-and-add scalar multiplication (scalar_mult.py)
- RSA key derivation and cipher (rsa_math.py)

Arithmetic on residues and points never raises for domain mismatches or
missing inverses; it returns Failure values instead.
"""

from .results import (
    ErrorKind,
    Ok,
    Failure,
    Result,
    UnwrapError,
    collect,
    domain_mismatch,
    no_inverse,
)

from .euclid import (
    extended_euclid,
    gcd,
    mod_inverse,
)

from .residue import (
    Residue,
    make_residue,
    safe_add,
    safe_sub,
    safe_mul,
    safe_div,
    safe_inverse,
    safe_product,
)

from .point_group import (
    Point,
    AddLaw,
    make_point,
    identity,
    point_modulus,
    clock_add,
    edwards_add,
    edwards_law,
)

from .scalar_mult import scalar_multiply

from .rsa_math import (
    RSAKeyPair,
    InvalidExponentError,
    DEFAULT_PUBLIC_EXPONENT,
    mod_exp,
    compute_totient,
    derive_rsa_keys,
    cipher,
    encrypt,
    decrypt,
    encrypt_text,
    decrypt_text,
    text_to_codes,
    codes_to_text,
    rsa_sign,
    rsa_verify,
    is_probably_prime,
    generate_prime,
    generate_rsa_keypair,
)

__all__ = [
    # Results
    'ErrorKind',
    'Ok',
    'Failure',
    'Result',
    'UnwrapError',
    'collect',
    'domain_mismatch',
    'no_inverse',
    # Euclid
    'extended_euclid',
    'gcd',
    'mod_inverse',
    # Residues
    'Residue',
    'make_residue',
    'safe_add',
    'safe_sub',
    'safe_mul',
    'safe_div',
    'safe_inverse',
    'safe_product',
    # Points
    'Point',
    'AddLaw',
    'make_point',
    'identity',
    'point_modulus',
    'clock_add',
    'edwards_add',
    'edwards_law',
    'scalar_multiply',
    # RSA
    'RSAKeyPair',
    'InvalidExponentError',
    'DEFAULT_PUBLIC_EXPONENT',
    'mod_exp',
    'compute_totient',
    'derive_rsa_keys',
    'cipher',
    'encrypt',
    'decrypt',
    'encrypt_text',
    'decrypt_text',
    'text_to_codes',
    'codes_to_text',
    'rsa_sign',
    'rsa_verify',
    'is_probably_prime',
    'generate_prime',
    'generate_rsa_keypair',
]
