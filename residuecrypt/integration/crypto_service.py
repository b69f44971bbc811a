"""
Audited Crypto Service

Thin facade over the pure core that records every operation in an
EventLogger. The core functions stay side-effect free; callers that
want an audit trail go through CryptoService instead.

Example:
    >>> service = CryptoService()
    >>> keys = service.derive_rsa_keys("alice", 997, 1097, 397)
    >>> service.decrypt_text("alice", keys, service.encrypt_text("alice", keys, "hi"))
    'hi'
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core_crypto import rsa_math
from ..core_crypto.point_group import Point
from ..core_crypto.results import Result
from ..core_crypto.rsa_math import InvalidExponentError, RSAKeyPair
from ..messaging.key_exchange import DiffieHellmanParty, DomainParams
from .event_logger import EventLogger


@dataclass(frozen=True)
class ExchangeTranscript:
    """Public keys and shared points seen by both sides of an exchange."""
    public_a: Result
    public_b: Result
    shared_a: Result
    shared_b: Result

    @property
    def agreed(self) -> bool:
        """Both sides derived the same shared point."""
        return self.shared_a.is_ok and self.shared_a == self.shared_b

    @property
    def shared_point(self) -> Optional[Point]:
        return self.shared_a.value if self.agreed else None


class CryptoService:
    """RSA and Diffie-Hellman operations with audit logging."""

    def __init__(self, event_logger: Optional[EventLogger] = None):
        self._logger = event_logger if event_logger is not None else EventLogger()

    @property
    def event_logger(self) -> EventLogger:
        return self._logger

    # ========================================================================
    # RSA
    # ========================================================================

    def derive_rsa_keys(self, owner: str, p: int, q: int, e: int) -> RSAKeyPair:
        """
        Derive keys and log the outcome.

        Raises:
            InvalidExponentError: Logged as INVALID_EXPONENT, then re-raised
            ValueError: If p or q is less than 2
        """
        try:
            keypair = rsa_math.derive_rsa_keys(p, q, e)
        except InvalidExponentError as exc:
            self._logger.log_invalid_exponent(owner, exc.e, exc.gcd)
            raise

        self._logger.log_key_derived(owner, keypair.key_size, keypair.e)
        return keypair

    def encrypt(self, owner: str, keypair: RSAKeyPair,
                message: Sequence[int]) -> List[int]:
        ciphertext = rsa_math.encrypt(keypair, message)
        self._logger.log_encrypt(owner, len(ciphertext))
        return ciphertext

    def decrypt(self, owner: str, keypair: RSAKeyPair,
                ciphertext: Sequence[int]) -> List[int]:
        message = rsa_math.decrypt(keypair, ciphertext)
        self._logger.log_decrypt(owner, len(message))
        return message

    def encrypt_text(self, owner: str, keypair: RSAKeyPair, text: str) -> List[int]:
        return self.encrypt(owner, keypair, rsa_math.text_to_codes(text))

    def decrypt_text(self, owner: str, keypair: RSAKeyPair,
                     ciphertext: Sequence[int]) -> str:
        return rsa_math.codes_to_text(self.decrypt(owner, keypair, ciphertext))

    # ========================================================================
    # Key Agreement
    # ========================================================================

    def exchange(self, params: DomainParams,
                 name_a: str, secret_a: int,
                 name_b: str, secret_b: int) -> ExchangeTranscript:
        """
        Run a full exchange between two parties and log it for both.

        Returns:
            ExchangeTranscript with both public keys and both shared points
        """
        party_a = DiffieHellmanParty(params, secret_a)
        party_b = DiffieHellmanParty(params, secret_b)

        public_a = party_a.public_key
        public_b = party_b.public_key
        shared_a = public_b.and_then(party_a.derive_shared_secret)
        shared_b = public_a.and_then(party_b.derive_shared_secret)

        transcript = ExchangeTranscript(public_a, public_b, shared_a, shared_b)

        for name, peer, shared in ((name_a, name_b, shared_a),
                                   (name_b, name_a, shared_b)):
            if shared.is_ok:
                self._logger.log_key_exchange(name, peer, params.name,
                                              transcript.agreed)
            else:
                self._logger.log_key_exchange_failed(name, peer, params.name,
                                                     shared.kind.value)
        return transcript
