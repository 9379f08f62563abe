from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from es_atompub.kernel.errors import EnvelopeFormatError

__all__ = ["KEY_LEN", "NONCE_LEN", "open_sealed", "seal"]

KEY_LEN = 32
NONCE_LEN = 12


def _check_key(key: bytes | bytearray) -> None:
    if len(key) != KEY_LEN:
        raise ValueError(f"AES-256 key must be {KEY_LEN} bytes, got {len(key)}")


def seal(plaintext: bytes, key: bytes | bytearray) -> bytes:
    """AES-256-GCM encrypt *plaintext*; returns ``nonce || ciphertext || tag``."""
    _check_key(key)
    nonce = os.urandom(NONCE_LEN)
    return nonce + AESGCM(key).encrypt(nonce, plaintext, None)


def open_sealed(sealed: bytes, key: bytes | bytearray) -> bytes:
    """Inverse of :func:`seal`."""
    _check_key(key)
    if len(sealed) < NONCE_LEN:
        raise EnvelopeFormatError("malformed ciphertext")
    try:
        return AESGCM(key).decrypt(sealed[:NONCE_LEN], sealed[NONCE_LEN:], None)
    except InvalidTag as exc:
        raise EnvelopeFormatError("ciphertext failed authentication", cause=exc) from exc
