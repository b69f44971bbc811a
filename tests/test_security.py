"""
Security tests for residuecrypt.

Tests specifically for misuse scenarios:
- Invalid inputs
- Wrong keys
- Mixed domains
"""

import pytest

from residuecrypt.core_crypto.results import ErrorKind, UnwrapError
from residuecrypt.core_crypto.residue import Residue, safe_add, safe_div
from residuecrypt.core_crypto.point_group import Point, make_point, clock_add
from residuecrypt.core_crypto.scalar_mult import scalar_multiply
from residuecrypt.core_crypto.rsa_math import (
    derive_rsa_keys, encrypt, decrypt, cipher, rsa_sign
)
from residuecrypt.messaging.key_exchange import DomainParams, DiffieHellmanParty


class TestResidueInputs:
    """Invalid residue construction."""

    def test_zero_modulus_rejected(self):
        """Modulus 0 is invalid."""
        with pytest.raises(ValueError):
            Residue(0, 1)

    def test_negative_modulus_rejected(self):
        """Negative moduli are invalid."""
        with pytest.raises(ValueError):
            Residue(-5, 1)

    def test_non_integer_modulus_rejected(self):
        """Floats and bools are not moduli."""
        with pytest.raises(ValueError):
            Residue(7.0, 1)
        with pytest.raises(ValueError):
            Residue(True, 0)

    def test_non_integer_value_rejected(self):
        """Floats are not residue values."""
        with pytest.raises(ValueError):
            Residue(7, 1.5)

    def test_residues_immutable(self):
        """Residues cannot be modified after creation."""
        r = Residue(7, 3)
        with pytest.raises(AttributeError):
            r.value = 4


class TestPartialityNeverRaises:
    """Arithmetic partiality is reported, not raised."""

    def test_mismatch_returns_failure(self):
        """Mixed moduli give a failure value."""
        assert safe_add(Residue(7, 1), Residue(5, 3)).kind == ErrorKind.DOMAIN_MISMATCH

    def test_unwrap_of_failure_raises(self):
        """Forcing a failed result is an explicit error."""
        with pytest.raises(UnwrapError):
            safe_div(Residue(6, 1), Residue(6, 2)).unwrap()

    def test_mixed_point_scalar_multiply(self):
        """Mixed-modulus points fail instead of crashing."""
        mixed = Point(Residue(7, 1), Residue(11, 1))
        assert scalar_multiply(clock_add, 100, mixed).kind == ErrorKind.DOMAIN_MISMATCH


class TestRSAMisuse:
    """RSA with wrong keys or bad messages."""

    def test_wrong_key_does_not_decrypt(self):
        """Decrypting with another key pair does not recover the message."""
        alice = derive_rsa_keys(997, 1097, 397)
        eve = derive_rsa_keys(997, 1097, 401)
        message = [72, 101, 108, 108, 111]
        assert decrypt(eve, encrypt(alice, message)) != message

    def test_message_element_too_large(self):
        """Elements must be smaller than n."""
        keys = derive_rsa_keys(997, 1097, 397)
        with pytest.raises(ValueError):
            encrypt(keys, [keys.n])

    def test_negative_message_element(self):
        """Negative elements are rejected."""
        with pytest.raises(ValueError):
            cipher(3, 33, [-1])

    def test_sign_out_of_range(self):
        """Messages to sign must be in [0, n)."""
        keys = derive_rsa_keys(997, 1097, 397)
        with pytest.raises(ValueError):
            rsa_sign(keys, keys.n + 1)

    def test_keypair_immutable(self):
        """Key pairs cannot be modified after creation."""
        keys = derive_rsa_keys(997, 1097, 397)
        with pytest.raises(AttributeError):
            keys.d = 1


class TestKeyExchangeMisuse:
    """Diffie-Hellman with invalid inputs."""

    def test_non_integer_secret(self):
        """Secrets must be integers."""
        params = DomainParams.clock(1000003, 1000, 2)
        with pytest.raises(ValueError):
            DiffieHellmanParty(params, secret=3.5)

    def test_foreign_peer_key(self):
        """A peer key from another group is rejected."""
        params = DomainParams.clock(1000003, 1000, 2)
        alice = DiffieHellmanParty(params, secret=397)
        result = alice.derive_shared_secret(make_point(1009, 7, 415))
        assert result.kind == ErrorKind.DOMAIN_MISMATCH

    def test_mixed_peer_key(self):
        """A peer key with mixed coordinate moduli is rejected."""
        params = DomainParams.clock(1000003, 1000, 2)
        alice = DiffieHellmanParty(params, secret=397)
        mixed = Point(Residue(1000003, 1), Residue(1009, 1))
        assert not alice.derive_shared_secret(mixed).is_ok

    def test_mixed_base_point_rejected(self):
        """Domain parameters need a base point under a single modulus."""
        mixed = Point(Residue(1000003, 1000), Residue(1009, 2))
        with pytest.raises(ValueError):
            DomainParams(mixed, clock_add)
