"""
residuecrypt - Main Entry Point
Modular arithmetic, point groups, Diffie-Hellman and RSA.
"""

from . import __version__


def main():
    """Main entry point for residuecrypt."""
    print("=" * 50)
    print(f"residuecrypt {__version__}")
    print("=" * 50)
    print("\nAvailable modules:")
    print("  - Core Crypto (Residues, Extended Euclid, Point Groups,")
    print("    Scalar Multiplication, RSA)")
    print("  - Key Agreement (Diffie-Hellman, HKDF session keys)")
    print("  - Audit Logging (hash-chained event log)")
    print("\nRun live_demo.py for a walkthrough.\n")


if __name__ == "__main__":
    main()
