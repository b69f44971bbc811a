"""
Unit tests for RSA key derivation and cipher.

Tests:
- Modular exponentiation
- Key derivation vector and Bezout check
- Element-wise cipher round trips
- Primality testing and key generation
- Textbook signatures
"""

import pytest

from residuecrypt.core_crypto.rsa_math import (
    InvalidExponentError, mod_exp, compute_totient, derive_rsa_keys,
    cipher, encrypt, decrypt, encrypt_text, decrypt_text, text_to_codes,
    codes_to_text, rsa_sign, rsa_verify, is_probably_prime, generate_prime,
    generate_rsa_keypair
)


P, Q, E = 997, 1097, 397


@pytest.fixture(scope="module")
def keypair():
    return derive_rsa_keys(P, Q, E)


class TestModExp:
    """Tests for square-and-multiply."""

    def test_mod_exp_basic(self):
        """2^10 mod 1000 = 24."""
        assert mod_exp(2, 10, 1000) == 24

    def test_fermat(self):
        """a^(p-1) == 1 (mod p) for prime p."""
        assert mod_exp(2, 100, 101) == 1

    def test_edge_cases(self):
        """Zero exponent, zero base and modulus 1."""
        assert mod_exp(7, 0, 13) == 1
        assert mod_exp(0, 5, 13) == 0
        assert mod_exp(5, 3, 1) == 0

    def test_matches_builtin(self):
        """Agrees with pow() on large operands."""
        base, exponent, modulus = 3 ** 200, 2 ** 300 + 17, 10 ** 50 + 151
        assert mod_exp(base, exponent, modulus) == pow(base, exponent, modulus)

    def test_negative_exponent_rejected(self):
        """Negative exponents are not supported."""
        with pytest.raises(ValueError):
            mod_exp(2, -1, 7)


class TestKeyDerivation:
    """Tests for derive_rsa_keys."""

    def test_vector(self, keypair):
        """p=997, q=1097, e=397 gives the expected key."""
        assert keypair.n == 1093709
        assert keypair.phi == 1091616
        assert keypair.d == 219973
        assert keypair.bezout_k == -80

    def test_bezout_check(self, keypair):
        """d*e + k*phi == 1."""
        assert keypair.d * keypair.e + keypair.bezout_k * keypair.phi == 1

    def test_bad_coefficient_raises(self, monkeypatch):
        """A wrong inverse is rejected with ValueError."""
        from residuecrypt.core_crypto import rsa_math
        monkeypatch.setattr(rsa_math, "extended_euclid", lambda a, b: (1, 2, 0))
        with pytest.raises(ValueError):
            derive_rsa_keys(P, Q, E)

    def test_totient(self):
        """p*q - p - q + 1 == (p-1)(q-1)."""
        assert compute_totient(P, Q) == (P - 1) * (Q - 1)

    def test_d_is_canonical(self):
        """d lands in [0, phi) even when the Bezout coefficient is negative."""
        # extended_euclid(7, 40) yields s = -17; d must be 23
        keys = derive_rsa_keys(5, 11, 7)
        assert keys.d == 23
        assert 0 <= keys.d < keys.phi

    def test_key_tuples(self, keypair):
        """public_key and private_key tuples."""
        assert keypair.public_key == (397, 1093709)
        assert keypair.private_key == (219973, 1093709)

    def test_repr_hides_private_values(self, keypair):
        """repr shows public values only."""
        assert "219973" not in repr(keypair)

    def test_exponent_not_coprime(self):
        """e sharing a factor with phi is rejected."""
        with pytest.raises(InvalidExponentError) as excinfo:
            derive_rsa_keys(P, Q, 2)
        assert excinfo.value.gcd == 2
        assert excinfo.value.phi == 1091616

    def test_non_positive_exponent(self):
        """e must be positive."""
        with pytest.raises(InvalidExponentError):
            derive_rsa_keys(P, Q, 0)
        with pytest.raises(InvalidExponentError):
            derive_rsa_keys(P, Q, -1)

    def test_invalid_exponent_is_value_error(self):
        """InvalidExponentError can be caught as ValueError."""
        with pytest.raises(ValueError):
            derive_rsa_keys(P, Q, 4)

    def test_tiny_primes_rejected(self):
        """p and q must be at least 2."""
        with pytest.raises(ValueError):
            derive_rsa_keys(1, Q, E)


class TestCipher:
    """Tests for the element-wise cipher."""

    def test_text_round_trip(self, keypair):
        """decrypt(encrypt(m)) == m for an ASCII string."""
        message = "Attack at dawn! 0123456789 ~{}[]"
        assert decrypt_text(keypair, encrypt_text(keypair, message)) == message

    def test_integer_round_trip(self, keypair):
        """Round trip over raw integers, including 0 and n-1."""
        message = [0, 1, 2, 65, 1093708]
        assert decrypt(keypair, encrypt(keypair, message)) == message

    def test_unicode_round_trip(self, keypair):
        """Code points below n survive the round trip."""
        message = "héllo ✓"
        assert decrypt_text(keypair, encrypt_text(keypair, message)) == message

    def test_elementwise(self, keypair):
        """Each element is enciphered independently."""
        single = encrypt(keypair, [72])
        assert encrypt(keypair, [72, 72, 72]) == single * 3

    def test_ciphertext_differs(self, keypair):
        """Encryption changes the message."""
        codes = text_to_codes("Hello")
        assert encrypt(keypair, codes) != codes

    def test_cipher_function(self):
        """cipher raises every element to the exponent."""
        assert cipher(3, 33, [2, 4]) == [8, 31]

    def test_euler_theorem(self, keypair):
        """x^(e*d) == x (mod n) for x coprime to n."""
        for x in (2, 3, 1000, 123456):
            assert mod_exp(x, keypair.e * keypair.d, keypair.n) == x

    def test_empty_message(self, keypair):
        """An empty message stays empty."""
        assert encrypt(keypair, []) == []

    def test_codes(self):
        """text_to_codes and codes_to_text are inverses."""
        assert text_to_codes("AB") == [65, 66]
        assert codes_to_text([65, 66]) == "AB"


class TestPrimes:
    """Tests for Miller-Rabin and prime generation."""

    def test_miller_rabin_primes(self):
        """Miller-Rabin should identify primes."""
        for p in [2, 3, 5, 7, 11, 13, 97, 101, 997, 1009, 1097, 1000003, 104729]:
            assert is_probably_prime(p), f"{p} should be prime"

    def test_miller_rabin_composites(self):
        """Miller-Rabin should reject composites, including Carmichael numbers."""
        for c in [0, 1, 4, 9, 15, 100, 561, 1105, 1093709, 104730]:
            assert not is_probably_prime(c), f"{c} should not be prime"

    def test_generate_prime(self):
        """Generated primes have the requested size."""
        p = generate_prime(32)
        assert p.bit_length() == 32
        assert is_probably_prime(p)

    def test_generate_prime_too_small(self):
        """Bit length must be at least 2."""
        with pytest.raises(ValueError):
            generate_prime(1)

    def test_generate_keypair_round_trip(self):
        """Generated keys encrypt and decrypt."""
        keys = generate_rsa_keypair(bits=64)
        assert keys.e == 65537
        message = [42, 4242, 424242]
        assert decrypt(keys, encrypt(keys, message)) == message

    def test_generate_keypair_rejects_bad_exponent(self):
        """Even or oversized exponents are rejected up front."""
        with pytest.raises(ValueError):
            generate_rsa_keypair(bits=64, e=4)
        with pytest.raises(ValueError):
            generate_rsa_keypair(bits=16, e=65537)

    def test_generate_keypair_gives_up_without_usable_primes(self):
        """Exhausting the retries raises instead of looping forever."""
        # 4-bit primes are only 11 and 13, so phi is always 120
        with pytest.raises(ValueError):
            generate_rsa_keypair(bits=8, e=3)
        with pytest.raises(ValueError):
            generate_rsa_keypair(bits=8, e=5)

    def test_generate_smallest_keypair(self):
        """An 8-bit key works when e is coprime to 120."""
        keys = generate_rsa_keypair(bits=8, e=7)
        assert keys.n == 143
        assert decrypt(keys, encrypt(keys, [2, 100])) == [2, 100]


class TestSignatures:
    """Tests for textbook signatures."""

    def test_sign_verify(self, keypair):
        """A signature verifies under the public key."""
        signature = rsa_sign(keypair, 12345)
        assert rsa_verify(keypair, 12345, signature)

    def test_tampered_rejected(self, keypair):
        """Changed message or signature fails."""
        signature = rsa_sign(keypair, 12345)
        assert not rsa_verify(keypair, 12346, signature)
        assert not rsa_verify(keypair, 12345, (signature + 1) % keypair.n)

    def test_out_of_range_signature_rejected(self, keypair):
        """Signatures outside [0, n) never verify."""
        assert not rsa_verify(keypair, 0, keypair.n)
