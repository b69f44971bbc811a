"""
RSA Key Derivation and Cipher

Implements textbook RSA on top of the Extended Euclidean Algorithm:
- Modular exponentiation (square-and-multiply algorithm)
- Key derivation from caller-supplied primes p, q and exponent e
- Element-wise cipher over integer messages (character code points)
- Miller-Rabin primality testing and prime generation
- Textbook signatures

Key derivation:
    n   = p*q
    phi = p*q - p - q + 1            (== (p-1)(q-1))
    (g, s, t) = extended_euclid(e, phi), g must be 1
    d   = s mod phi                  (canonical exponent in [0, phi))

Correctness rests on Euler's theorem: for x coprime to n,
x^(e*d) == x (mod n) because e*d == 1 (mod phi).

Note: p and q are not checked for primality. Composite inputs give
meaningless but well-defined output.
All modular exponentiation uses square-and-multiply, so intermediate
values stay below n^2.
"""

import secrets
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .euclid import extended_euclid


# ============================================================================
# Constants
# ============================================================================

DEFAULT_PUBLIC_EXPONENT = 65537  # 2^16 + 1, prime
MILLER_RABIN_ROUNDS = 40
SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)
MAX_KEYGEN_ATTEMPTS = 1000     # prime pairs tried before giving up


class InvalidExponentError(ValueError):
    """
    Public exponent unusable for the given primes.

    Raised when e is not positive or gcd(e, phi) != 1. This is a
    configuration mistake, so it is reported explicitly rather than as
    an absent result.
    """

    def __init__(self, e: int, phi: int, g: int):
        self.e = e
        self.phi = phi
        self.gcd = g
        if e < 1:
            reason = "must be positive"
        else:
            reason = f"is not coprime to phi ({phi}), gcd = {g}"
        super().__init__(f"Invalid public exponent {e}: {reason}")


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Modular exponentiation using square-and-multiply algorithm.

    Right-to-left binary method: walk the bits of the exponent from the
    least significant, multiplying the result by the running square
    whenever the bit is set.

    Time complexity: O(log exponent) multiplications

    Args:
        base: The base number
        exponent: The exponent (must be non-negative)
        modulus: The modulus (must be positive)

    Returns:
        (base^exponent) mod modulus

    Raises:
        ValueError: If exponent < 0 or modulus <= 0
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    if modulus <= 0:
        raise ValueError("Modulus must be positive")
    if modulus == 1:
        return 0

    base %= modulus
    result = 1

    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1

    return result


def compute_totient(p: int, q: int) -> int:
    """Euler's totient of p*q for distinct primes: p*q - p - q + 1."""
    return p * q - p - q + 1


@dataclass(frozen=True)
class RSAKeyPair:
    """
    Derived RSA key material.

    Invariants (checked by derive_rsa_keys):
        n == p*q, phi == p*q - p - q + 1
        0 <= d < phi
        d*e + bezout_k*phi == 1
    """
    p: int
    q: int
    e: int
    d: int
    n: int
    phi: int
    bezout_k: int

    @property
    def public_key(self) -> Tuple[int, int]:
        """Public key (e, n)."""
        return self.e, self.n

    @property
    def private_key(self) -> Tuple[int, int]:
        """Private key (d, n)."""
        return self.d, self.n

    @property
    def key_size(self) -> int:
        """Key size in bits."""
        return self.n.bit_length()

    def __repr__(self) -> str:
        # d, p and q stay out of reprs and tracebacks
        return f"RSAKeyPair(bits={self.key_size}, e={self.e}, n={self.n})"


def derive_rsa_keys(p: int, q: int, e: int) -> RSAKeyPair:
    """
    Derive an RSA key pair from two primes and a public exponent.

    Args:
        p: First prime (not validated)
        q: Second prime (not validated)
        e: Public exponent, coprime to phi

    Returns:
        RSAKeyPair with d reduced into [0, phi)

    Raises:
        ValueError: If p or q is less than 2
        InvalidExponentError: If e < 1 or gcd(e, phi) != 1
    """
    if p < 2 or q < 2:
        raise ValueError(f"Primes must be at least 2, got p={p}, q={q}")

    n = p * q
    phi = compute_totient(p, q)

    g, s, _ = extended_euclid(e, phi)
    if e < 1 or g != 1:
        raise InvalidExponentError(e, phi, g)

    # The Bezout coefficient can be negative; the exponent must not be
    d = s % phi
    bezout_k = (1 - d * e) // phi
    if d * e + bezout_k * phi != 1:
        raise ValueError(f"Bezout identity violated for e={e}, phi={phi}")

    return RSAKeyPair(p=p, q=q, e=e, d=d, n=n, phi=phi, bezout_k=bezout_k)


def cipher(exponent: int, n: int, message: Sequence[int]) -> List[int]:
    """
    Raise every element of a message to `exponent` modulo n.

    Elements are independent: no chunking, no padding.

    Args:
        exponent: e to encrypt, d to decrypt
        n: RSA modulus
        message: Integers in [0, n)

    Returns:
        List of x^exponent mod n, in message order

    Raises:
        ValueError: If an element is outside [0, n)
    """
    for x in message:
        if not 0 <= x < n:
            raise ValueError(f"Message element {x} must be in [0, {n})")
    return [mod_exp(x, exponent, n) for x in message]


def encrypt(keypair: RSAKeyPair, message: Sequence[int]) -> List[int]:
    """Encrypt with the public exponent."""
    return cipher(keypair.e, keypair.n, message)


def decrypt(keypair: RSAKeyPair, ciphertext: Sequence[int]) -> List[int]:
    """Decrypt with the private exponent."""
    return cipher(keypair.d, keypair.n, ciphertext)


def text_to_codes(text: str) -> List[int]:
    """Encode a string as its code points."""
    return [ord(ch) for ch in text]


def codes_to_text(codes: Sequence[int]) -> str:
    """Decode code points back into a string."""
    return ''.join(chr(code) for code in codes)


def encrypt_text(keypair: RSAKeyPair, text: str) -> List[int]:
    """Encrypt each character of a string."""
    return encrypt(keypair, text_to_codes(text))


def decrypt_text(keypair: RSAKeyPair, ciphertext: Sequence[int]) -> str:
    """
    Decrypt a ciphertext produced by encrypt_text.

    Raises:
        ValueError: If a decrypted value is not a valid code point
            (wrong key, or n too small for the alphabet)
    """
    return codes_to_text(decrypt(keypair, ciphertext))


def rsa_sign(keypair: RSAKeyPair, message: int) -> int:
    """
    Textbook RSA signature: message^d mod n.

    Raises:
        ValueError: If message is outside [0, n)
    """
    return cipher(keypair.d, keypair.n, [message])[0]


def rsa_verify(keypair: RSAKeyPair, message: int, signature: int) -> bool:
    """Check signature^e mod n == message."""
    if not 0 <= signature < keypair.n:
        return False
    return mod_exp(signature, keypair.e, keypair.n) == message


# ============================================================================
# Prime Generation
# ============================================================================

def is_probably_prime(n: int, rounds: int = MILLER_RABIN_ROUNDS) -> bool:
    """
    Miller-Rabin primality test.

    Writes n-1 = 2^r * m with m odd, then for random witnesses a checks
    that a^m == 1 or that some a^(m*2^j) == n-1. Probability of a false
    positive is at most (1/4)^rounds.

    Args:
        n: Number to test
        rounds: Number of random witnesses

    Returns:
        True if n is probably prime, False if definitely composite
    """
    if n < 2:
        return False
    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    r, m = 0, n - 1
    while m % 2 == 0:
        r += 1
        m //= 2

    for _ in range(rounds):
        a = secrets.randbelow(n - 3) + 2
        x = mod_exp(a, m, n)
        if x in (1, n - 1):
            continue
        for _ in range(r - 1):
            x = (x * x) % n
            if x == n - 1:
                break
        else:
            return False

    return True


def generate_prime(bits: int, rounds: int = MILLER_RABIN_ROUNDS) -> int:
    """
    Generate a random prime of exactly `bits` bits.

    Raises:
        ValueError: If bits < 2
    """
    if bits < 2:
        raise ValueError("Bit length must be at least 2")

    while True:
        # Force the top bit (exact length) and the bottom bit (odd)
        candidate = secrets.randbits(bits) | (1 << (bits - 1)) | 1
        if is_probably_prime(candidate, rounds):
            return candidate


def generate_rsa_keypair(bits: int = 1024,
                         e: int = DEFAULT_PUBLIC_EXPONENT) -> RSAKeyPair:
    """
    Generate random primes and derive a key pair from them.

    Primes for which e is not coprime to phi are discarded and redrawn,
    up to MAX_KEYGEN_ATTEMPTS times.

    Args:
        bits: Approximate bit length of n (at least 8)
        e: Public exponent

    Returns:
        New RSAKeyPair

    Raises:
        ValueError: If bits < 8, e is even or too large for the key size,
            or no usable prime pair was found
    """
    if bits < 8:
        raise ValueError("Key size must be at least 8 bits")
    if e < 3 or e % 2 == 0:
        raise ValueError(f"Public exponent must be odd and at least 3, got {e}")
    # phi >= 2^(bits-2) for primes of the generated sizes
    if e.bit_length() > bits - 2:
        raise ValueError(f"Public exponent {e} too large for {bits}-bit keys")

    prime_bits = bits // 2
    for _ in range(MAX_KEYGEN_ATTEMPTS):
        p = generate_prime(prime_bits)
        q = generate_prime(bits - prime_bits)
        if p == q:
            continue
        try:
            return derive_rsa_keys(p, q, e)
        except InvalidExponentError:
            continue

    raise ValueError(f"No {bits}-bit key pair found for e={e} "
                     f"after {MAX_KEYGEN_ATTEMPTS} attempts")
