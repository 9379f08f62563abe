"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

from typing import Any

DEFAULT_SENSITIVE_FRAGMENTS: frozenset[str] = frozenset({
    "pass", "secret", "token", "api_key", "apikey", "authorization", "plaintext",
})


class SensitiveFieldsFilter:
    """Replace values of keys containing a sensitive fragment with ``[REDACTED]``.

    Matching is by substring so ``DB_PASSWORD`` and ``pg_pass`` are both
    caught by ``"pass"``.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fragments: frozenset[str] | None = None) -> None:
        self._fragments = sensitive_fragments or DEFAULT_SENSITIVE_FRAGMENTS

    def is_sensitive(self, key: str) -> bool:
        lowered = key.lower()
        return any(fragment in lowered for fragment in self._fragments)

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: (self.REDACTED if self.is_sensitive(k) else v) for k, v in data.items()}

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively redact nested dicts."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            if self.is_sensitive(k):
                result[k] = self.REDACTED
            elif isinstance(v, dict):
                result[k] = self.redact_deep(v)
            else:
                result[k] = v
        return result


__all__ = ["DEFAULT_SENSITIVE_FRAGMENTS", "SensitiveFieldsFilter"]
