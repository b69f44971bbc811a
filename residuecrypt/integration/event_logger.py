"""
Event Logger Module

Tamper-evident audit trail for residuecrypt operations.

Every event is serialized to compact JSON and appended to a SHA-256
hash chain: each entry stores the digest of (previous digest || record),
so editing, dropping or reordering any record breaks verification.

Recorded events:
- RSA key derivation (and rejected exponents)
- Diffie-Hellman key exchanges (and failed ones)
- Message encryption/decryption

Party names are stored as SHA-256 hashes, never in plaintext. Key
material and message contents are never logged.
"""

import hashlib
import json
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple


# ============================================================================
# Constants
# ============================================================================

EVENT_VERSION = "1.0"
GENESIS_DIGEST = "0" * 64  # digest preceding the first entry


# ============================================================================
# Privacy Functions
# ============================================================================

def get_party_hash(name: str) -> str:
    """
    Privacy-preserving hash of a party name.

    Args:
        name: The plaintext party name

    Returns:
        Hex-encoded SHA-256 hash of the name
    """
    return hashlib.sha256(name.encode()).hexdigest()


def get_party_hash_short(name: str) -> str:
    """First 16 hex characters of the party hash."""
    return get_party_hash(name)[:16]


# ============================================================================
# Event Types
# ============================================================================

class EventType(Enum):
    """Types of events that can be logged."""

    # RSA events
    KEY_DERIVED = "key_derived"
    INVALID_EXPONENT = "invalid_exponent"
    MESSAGE_ENCRYPT = "message_encrypt"
    MESSAGE_DECRYPT = "message_decrypt"

    # Key agreement events
    KEY_EXCHANGE = "key_exchange"
    KEY_EXCHANGE_FAILED = "key_exchange_failed"

    # System events
    SYSTEM_START = "system_start"


# ============================================================================
# Event Structure
# ============================================================================

@dataclass
class CryptoEvent:
    """A single audit event; `party_hash` is a SHA-256 hash, or "system"."""
    event_type: EventType
    party_hash: str
    timestamp: int
    details: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> str:
        """Serialize to the compact JSON record stored in the chain."""
        return json.dumps({
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'party': self.party_hash,
            'time': self.timestamp,
            'details': self.details,
        }, separators=(',', ':'), sort_keys=True)

    @classmethod
    def from_record(cls, record: str) -> 'CryptoEvent':
        """Parse an event from its JSON record."""
        data = json.loads(record)
        return cls(
            event_type=EventType(data['type']),
            party_hash=data['party'],
            timestamp=data['time'],
            details=data.get('details', {}),
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        return (
            f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] "
            f"{self.event_type.value} | "
            f"party:{self.party_hash[:8]}"
        )


def chain_digest(prev_digest: str, record: str) -> str:
    """SHA-256 over the previous digest and the new record."""
    return hashlib.sha256((prev_digest + record).encode()).hexdigest()


# ============================================================================
# Event Logger
# ============================================================================

class EventLogger:
    """
    Hash-chained audit logger.

    Entries are (record, digest) pairs. verify_chain() recomputes every
    digest from GENESIS_DIGEST and reports whether the log is intact.
    """

    def __init__(self, log_system_start: bool = True):
        """
        Args:
            log_system_start: Record a SYSTEM_START event immediately
        """
        self._entries: List[Tuple[str, str]] = []
        self._callbacks: List[Callable[[CryptoEvent], None]] = []
        self.callback_errors: List[Exception] = []

        if log_system_start:
            self._add_event(CryptoEvent(
                event_type=EventType.SYSTEM_START,
                party_hash="system",
                timestamp=int(time.time()),
                details={'node': 'residuecrypt'},
            ))

    @property
    def head_digest(self) -> str:
        """Digest of the latest entry."""
        return self._entries[-1][1] if self._entries else GENESIS_DIGEST

    def __len__(self) -> int:
        return len(self._entries)

    def _add_event(self, event: CryptoEvent) -> CryptoEvent:
        record = event.to_record()
        self._entries.append((record, chain_digest(self.head_digest, record)))

        # A failing observer must not lose the event; keep its error instead
        for callback in self._callbacks:
            try:
                callback(event)
            except Exception as exc:
                self.callback_errors.append(exc)

        return event

    def _log(self, event_type: EventType, party: Optional[str],
             details: Optional[Dict[str, Any]] = None) -> CryptoEvent:
        return self._add_event(CryptoEvent(
            event_type=event_type,
            party_hash=get_party_hash(party) if party else "system",
            timestamp=int(time.time()),
            details=details or {},
        ))

    def add_callback(self, callback: Callable[[CryptoEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[CryptoEvent], None]) -> None:
        """Remove a callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    # ========================================================================
    # RSA Events
    # ========================================================================

    def log_key_derived(self, owner: str, key_bits: int, e: int) -> CryptoEvent:
        """Log a successful RSA key derivation (public values only)."""
        return self._log(EventType.KEY_DERIVED, owner, {
            'bits': key_bits,
            'e': e,
        })

    def log_invalid_exponent(self, owner: str, e: int, gcd: int) -> CryptoEvent:
        """Log a rejected public exponent."""
        return self._log(EventType.INVALID_EXPONENT, owner, {
            'e': e,
            'gcd': gcd,
        })

    def log_encrypt(self, owner: str, length: int) -> CryptoEvent:
        """Log an encryption of `length` elements."""
        return self._log(EventType.MESSAGE_ENCRYPT, owner, {'length': length})

    def log_decrypt(self, owner: str, length: int) -> CryptoEvent:
        """Log a decryption of `length` elements."""
        return self._log(EventType.MESSAGE_DECRYPT, owner, {'length': length})

    # ========================================================================
    # Key Agreement Events
    # ========================================================================

    def log_key_exchange(self, party: str, peer: str, group: str,
                         agreed: bool) -> CryptoEvent:
        """Log a completed exchange; `agreed` is whether both sides matched."""
        return self._log(EventType.KEY_EXCHANGE, party, {
            'peer': get_party_hash_short(peer),
            'group': group,
            'agreed': agreed,
        })

    def log_key_exchange_failed(self, party: str, peer: str, group: str,
                                reason: str) -> CryptoEvent:
        """Log an exchange that produced no shared point."""
        return self._log(EventType.KEY_EXCHANGE_FAILED, party, {
            'peer': get_party_hash_short(peer),
            'group': group,
            'reason': reason,
        })

    # ========================================================================
    # Retrieval and Verification
    # ========================================================================

    def get_all_events(self) -> List[CryptoEvent]:
        """All logged events, oldest first."""
        return [CryptoEvent.from_record(record) for record, _ in self._entries]

    def get_events_by_type(self, event_type: EventType) -> List[CryptoEvent]:
        """All events of a specific type."""
        return [e for e in self.get_all_events() if e.event_type == event_type]

    def get_party_events(self, name: str) -> List[CryptoEvent]:
        """All events recorded for a party."""
        party_hash = get_party_hash(name)
        return [e for e in self.get_all_events() if e.party_hash == party_hash]

    def verify_chain(self) -> bool:
        """Recompute the hash chain; False if any entry was altered."""
        digest = GENESIS_DIGEST
        for record, stored in self._entries:
            digest = chain_digest(digest, record)
            if digest != stored:
                return False
        return True

    def export_log(self) -> str:
        """Export the log as JSON."""
        return json.dumps([
            {'record': record, 'digest': digest}
            for record, digest in self._entries
        ])

    @classmethod
    def import_log(cls, json_str: str) -> 'EventLogger':
        """
        Import a log exported by export_log.

        The chain is taken as is; call verify_chain() to check it.
        """
        logger = cls(log_system_start=False)
        logger._entries = [
            (entry['record'], entry['digest']) for entry in json.loads(json_str)
        ]
        return logger


# ============================================================================
# Convenience Functions
# ============================================================================

def create_event_logger() -> EventLogger:
    """Create a new event logger."""
    return EventLogger()
