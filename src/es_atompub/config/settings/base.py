"""Config settings – dataclass base for environment-loaded settings.

Field names map to upper-cased environment variables (``linkhost`` is read
from ``LINKHOST``); fields without a default are required.
"""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass
class Settings:
    """Settings read once at startup by :class:`EnvSettingsLoader`.

    ``_validate`` runs after construction, so a bad ``LISTENADDR`` fails
    before the server binds anything.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Normalize fields and raise :class:`InvalidSettingValueError` on bad input."""


__all__ = ["Settings"]
