# residuecrypt
"""
Correctness-first modular arithmetic and the algorithms built on it:

- core_crypto: residues, Extended Euclid, clock/Edwards point laws,
  scalar multiplication, RSA key derivation and cipher
- messaging: Diffie-Hellman key agreement over point groups
- integration: hash-chained audit log and audited service facade
"""

__version__ = "0.1.0"
