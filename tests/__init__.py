# residuecrypt Test Suite
"""
Test suite including:
- Unit tests (residues, Euclid, point groups, RSA, key exchange)
- Randomized property checks over many moduli
- Integration tests (audit log, service facade)
- Security tests (invalid inputs)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
