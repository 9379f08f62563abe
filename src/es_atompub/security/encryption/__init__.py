"""Security – Envelope encryption."""
from es_atompub.security.encryption.aes_gcm import open_sealed, seal
from es_atompub.security.encryption.envelope import (
    EnvelopeCipher,
    EnvelopeDecrypter,
    qualify_key_alias,
)
from es_atompub.security.encryption.kms import AioBotoKmsClient, DataKey, KeyManagementClient

__all__ = [
    "AioBotoKmsClient",
    "DataKey",
    "EnvelopeCipher",
    "EnvelopeDecrypter",
    "KeyManagementClient",
    "open_sealed",
    "qualify_key_alias",
    "seal",
]
