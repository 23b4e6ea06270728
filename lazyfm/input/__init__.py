"""Input-layer public API for key decoding."""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, normalize_enter, read_key

__all__ = [
    "read_key",
    "normalize_enter",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
]
