"""Security – key-management client port and aiobotocore KMS adapter."""
from __future__ import annotations

import contextlib
import dataclasses
from typing import Any, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from es_atompub.kernel.errors import KeyServiceError
from es_atompub.observability.logging import get_logger

__all__ = ["AES_256", "AioBotoKmsClient", "DataKey", "KeyManagementClient"]

logger = get_logger(__name__)

AES_256 = "AES_256"


@dataclasses.dataclass
class DataKey:
    """A freshly generated data key.

    ``plaintext`` is mutable so it can be zeroed as soon as it has been used;
    ``ciphertext_blob`` is the key wrapped by the master key and is safe to
    ship with the message.
    """

    plaintext: bytearray
    ciphertext_blob: bytes

    def wipe(self) -> None:
        for i in range(len(self.plaintext)):
            self.plaintext[i] = 0


class KeyManagementClient(Protocol):
    """Port: the two KMS primitives envelope encryption is built on."""

    async def generate_data_key(self, key_id: str, key_spec: str = AES_256) -> DataKey: ...

    async def decrypt(self, ciphertext_blob: bytes) -> bytearray: ...


class AioBotoKmsClient:
    """AWS KMS via ``aiobotocore``; one client shared by all requests.

    Region and credentials come from the standard AWS environment
    (``AWS_REGION``, ``AWS_PROFILE``, ...) unless given explicitly.

    Usage::

        async with AioBotoKmsClient() as kms:
            key = await kms.generate_data_key("alias/feed")
    """

    def __init__(self, region_name: str | None = None, profile: str | None = None) -> None:
        self._region_name = region_name
        self._profile = profile
        self._stack: contextlib.AsyncExitStack | None = None
        self._client: Any = None

    async def open(self) -> None:
        from aiobotocore.session import AioSession

        session = AioSession(profile=self._profile)
        logger.info("opening kms client", region=self._region_name or session.get_config_variable("region"))
        self._stack = contextlib.AsyncExitStack()
        self._client = await self._stack.enter_async_context(
            session.create_client("kms", region_name=self._region_name)
        )

    async def close(self) -> None:
        if self._stack is not None:
            await self._stack.aclose()
        self._stack = None
        self._client = None

    async def __aenter__(self) -> "AioBotoKmsClient":
        await self.open()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _require_client(self) -> Any:
        if self._client is None:
            raise KeyServiceError("connect", "KMS client is not open")
        return self._client

    async def generate_data_key(self, key_id: str, key_spec: str = AES_256) -> DataKey:
        client = self._require_client()
        try:
            resp = await client.generate_data_key(KeyId=key_id, KeySpec=key_spec)
        except (ClientError, BotoCoreError) as exc:
            raise KeyServiceError("generate_data_key", str(exc), key_id=key_id, cause=exc) from exc
        return DataKey(plaintext=bytearray(resp.pop("Plaintext")), ciphertext_blob=resp["CiphertextBlob"])

    async def decrypt(self, ciphertext_blob: bytes) -> bytearray:
        client = self._require_client()
        try:
            resp = await client.decrypt(CiphertextBlob=ciphertext_blob)
        except (ClientError, BotoCoreError) as exc:
            raise KeyServiceError("decrypt", str(exc), cause=exc) from exc
        return bytearray(resp.pop("Plaintext"))
