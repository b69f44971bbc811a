#!/usr/bin/env python
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                        RESIDUECRYPT LIVE DEMO                                 ║
╚══════════════════════════════════════════════════════════════════════════════╝

Walkthrough of residuecrypt's algorithms:
- Safe residue arithmetic and its failure values
- Clock and Edwards point addition, scalar multiplication
- Diffie-Hellman key agreement with HKDF session keys
- RSA key derivation and the element-wise cipher
- Hash-chained audit logging

Pass --no-pause to run without waiting for ENTER.
"""

import sys

from residuecrypt.core_crypto import (
    Residue, safe_add, safe_mul, safe_div, extended_euclid,
    make_point, clock_add, edwards_law, scalar_multiply,
    InvalidExponentError,
)
from residuecrypt.messaging import DomainParams, DiffieHellmanParty
from residuecrypt.integration.crypto_service import CryptoService


# Demonstration parameters
CLOCK_MODULUS = 1000003
CLOCK_BASE = (1000, 2)
EDWARDS_MODULUS = 1009
EDWARDS_D = -11
RSA_P, RSA_Q, RSA_E = 997, 1097, 397
ALICE_SECRET, BOB_SECRET = 397, 479

INTERACTIVE = "--no-pause" not in sys.argv


def print_header(title):
    """Print a formatted section header"""
    print("\n" + "═" * 70)
    print(f"  {title}")
    print("═" * 70)


def print_step(step_num, description):
    """Print a numbered step"""
    print(f"\n  [{step_num}] {description}")


def pause(message="Press ENTER to continue..."):
    """Pause for presenter to explain"""
    if INTERACTIVE:
        print(f"\n  [PAUSE] {message}")
        input()


def show(label, result):
    """Print a Result as either its value or its failure kind"""
    if result.is_ok:
        print(f"  {label}: {result.value}")
    else:
        print(f"  {label}: [X] {result.kind.name} ({result.detail})")


def main():

    print("\n" * 2)
    print("╔" + "═" * 68 + "╗")
    print("║" + "RESIDUECRYPT - MODULAR ARITHMETIC WALKTHROUGH".center(68) + "║")
    print("╚" + "═" * 68 + "╝")

    service = CryptoService()

    pause("Press ENTER to begin the demonstration...")

    print_header("PART 1: SAFE RESIDUE ARITHMETIC")

    print_step("1.1", "Division via the Extended Euclidean Algorithm")
    g, s, t = extended_euclid(5, 6)
    print(f"\n  extended_euclid(5, 6) = (gcd={g}, s={s}, t={t})")
    show("4 / 5 (mod 6)", safe_div(Residue(6, 4), Residue(6, 5)))
    show("5 * 2 (mod 6)", safe_mul(Residue(6, 5), Residue(6, 2)))

    print_step("1.2", "Partial operations return failures, not exceptions")
    show("1 (mod 7) + 3 (mod 5)", safe_add(Residue(7, 1), Residue(5, 3)))
    show("1 / 3 (mod 6)", safe_div(Residue(6, 1), Residue(6, 3)))

    pause()

    print_header("PART 2: POINT GROUPS")

    base = make_point(CLOCK_MODULUS, *CLOCK_BASE)
    print_step("2.1", f"Clock group, P = {base}")
    show("[6]P", scalar_multiply(clock_add, 6, base))

    law = edwards_law(Residue(EDWARDS_MODULUS, EDWARDS_D))
    p1 = make_point(EDWARDS_MODULUS, 7, 415)
    p2 = make_point(EDWARDS_MODULUS, 23, 487)
    print_step("2.2", f"Edwards law, d = {EDWARDS_D} (mod {EDWARDS_MODULUS})")
    show(f"{p2} + {p1}", law(p2, p1))

    pause()

    print_header("PART 3: DIFFIE-HELLMAN")

    params = DomainParams.clock(CLOCK_MODULUS, *CLOCK_BASE)
    transcript = service.exchange(params, "alice", ALICE_SECRET, "bob", BOB_SECRET)
    print_step("3.1", "Public keys")
    show("Alice", transcript.public_a)
    show("Bob", transcript.public_b)
    print_step("3.2", "Shared points")
    show("Alice computes", transcript.shared_a)
    show("Bob computes", transcript.shared_b)
    print(f"\n  [OK] Agreement: {transcript.agreed}")

    alice = DiffieHellmanParty(params, ALICE_SECRET)
    session_key = alice.derive_session_key(transcript.public_b.unwrap())
    print_step("3.3", "HKDF-SHA256 session key")
    print(f"  {session_key.unwrap().hex()}")

    pause()

    print_header("PART 4: RSA")

    print_step("4.1", f"Key derivation from p={RSA_P}, q={RSA_Q}, e={RSA_E}")
    keys = service.derive_rsa_keys("alice", RSA_P, RSA_Q, RSA_E)
    print(f"  n = {keys.n}, phi = {keys.phi}")
    print(f"  d = {keys.d}  (d*e + ({keys.bezout_k})*phi == 1)")

    message = "Meet me at the clock tower."
    ciphertext = service.encrypt_text("alice", keys, message)
    print_step("4.2", f"Encrypting: {message!r}")
    print(f"  {ciphertext[:8]}...")
    print(f"  Decrypted: {service.decrypt_text('alice', keys, ciphertext)!r}")

    print_step("4.3", "Rejected exponent")
    try:
        service.derive_rsa_keys("mallory", RSA_P, RSA_Q, 4)
    except InvalidExponentError as exc:
        print(f"  [X] {exc}")

    pause()

    print_header("PART 5: AUDIT TRAIL")

    event_logger = service.event_logger
    for i, event in enumerate(event_logger.get_all_events(), 1):
        print(f"  {i}. {event}")
    print(f"\n  Chain Integrity Check: "
          f"{'[OK] VALID' if event_logger.verify_chain() else '[X] TAMPERED'}")

    print("\n\n" + "═" * 70)
    print("  DEMONSTRATION COMPLETE!")
    print("═" * 70)


if __name__ == "__main__":
    main()
