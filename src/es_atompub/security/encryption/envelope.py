"""Security – envelope encryption of outbound response bodies.

Wire format::

    base64(wrapped data key) + "::" + base64(nonce || ciphertext || tag)

Every call to :meth:`EnvelopeCipher.transform` asks the key service for a
new 256-bit data key, so no key (and therefore no nonce space) is ever
shared between two responses.
"""
from __future__ import annotations

import base64
import binascii

from es_atompub.kernel.errors import EnvelopeFormatError, KeyServiceError
from es_atompub.observability.logging import get_logger
from es_atompub.security.encryption.aes_gcm import KEY_LEN, open_sealed, seal
from es_atompub.security.encryption.kms import AES_256, KeyManagementClient

__all__ = ["KEY_ALIAS_ROOT", "SEPARATOR", "EnvelopeCipher", "EnvelopeDecrypter", "qualify_key_alias"]

logger = get_logger(__name__)

KEY_ALIAS_ROOT = "alias/"
SEPARATOR = b"::"


def qualify_key_alias(key_alias: str) -> str:
    """``"feed"`` → ``"alias/feed"``; empty stays empty (encryption off)."""
    key_alias = key_alias.strip()
    if not key_alias or key_alias.startswith(KEY_ALIAS_ROOT):
        return key_alias
    return KEY_ALIAS_ROOT + key_alias


class EnvelopeCipher:
    """Optional encryption of serialized feed/event documents.

    Constructed once at startup and shared by every handler.  With no key
    alias it is a pass-through; with one it wraps each body in a fresh
    KMS data key.
    """

    def __init__(self, kms: KeyManagementClient | None = None, key_alias: str = "") -> None:
        key_alias = qualify_key_alias(key_alias)
        if key_alias and kms is None:
            raise ValueError("a key management client is required when a key alias is set")
        self._kms = kms
        self._key_alias = key_alias

    @classmethod
    def disabled(cls) -> "EnvelopeCipher":
        return cls()

    @property
    def enabled(self) -> bool:
        return bool(self._key_alias)

    @property
    def key_alias(self) -> str:
        return self._key_alias

    async def check_health(self) -> None:
        """Generate (and discard) a data key; raise :class:`KeyServiceError` on failure."""
        if not self.enabled:
            return
        data_key = await self._kms.generate_data_key(self._key_alias, AES_256)  # type: ignore[union-attr]
        data_key.wipe()

    async def transform(self, body: bytes) -> bytes:
        if not self.enabled:
            return body

        data_key = await self._kms.generate_data_key(self._key_alias, AES_256)  # type: ignore[union-attr]
        del data_key.plaintext[KEY_LEN:]
        try:
            sealed = seal(body, data_key.plaintext)
        finally:
            data_key.wipe()

        return base64.b64encode(data_key.ciphertext_blob) + SEPARATOR + base64.b64encode(sealed)


class EnvelopeDecrypter:
    """Consumer side of :class:`EnvelopeCipher`."""

    def __init__(self, kms: KeyManagementClient) -> None:
        self._kms = kms

    @staticmethod
    def is_envelope(body: bytes) -> bool:
        return body.count(SEPARATOR) == 1 and not body.lstrip().startswith(b"<")

    @staticmethod
    def split(body: bytes) -> tuple[bytes, bytes]:
        """Return ``(wrapped_key, sealed_payload)`` decoded from *body*."""
        parts = body.strip().split(SEPARATOR)
        if len(parts) != 2:
            raise EnvelopeFormatError(f"expected two envelope parts, got {len(parts)}")
        try:
            return (
                base64.b64decode(parts[0], validate=True),
                base64.b64decode(parts[1], validate=True),
            )
        except binascii.Error as exc:
            raise EnvelopeFormatError("envelope part is not valid base64", cause=exc) from exc

    async def decrypt(self, body: bytes) -> bytes:
        wrapped_key, sealed = self.split(body)
        key = await self._kms.decrypt(wrapped_key)
        try:
            if len(key) < KEY_LEN:
                raise KeyServiceError("decrypt", f"data key is {len(key)} bytes, expected {KEY_LEN}")
            del key[KEY_LEN:]
            return open_sealed(sealed, key)
        finally:
            for i in range(len(key)):
                key[i] = 0
