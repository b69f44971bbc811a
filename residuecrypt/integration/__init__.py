# Integration Module
"""
Audit logging and the audited service facade.

Events are appended to a SHA-256 hash chain with privacy-preserving
party hashes.
"""

_EXPORTS = {
    'EventType': 'event_logger',
    'CryptoEvent': 'event_logger',
    'EventLogger': 'event_logger',
    'get_party_hash': 'event_logger',
    'create_event_logger': 'event_logger',
    'CryptoService': 'crypto_service',
    'ExchangeTranscript': 'crypto_service',
}


# Lazy imports to avoid RuntimeWarning when running a submodule directly
def __getattr__(name):
    """Resolve exported names from their submodule on first access."""
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module
    module = import_module(f".{_EXPORTS[name]}", __name__)
    return getattr(module, name)


__all__ = list(_EXPORTS)
