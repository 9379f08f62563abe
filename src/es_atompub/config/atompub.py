"""Config – settings for the feed publisher process."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from es_atompub.config.settings import EnvSettingsLoader, Settings
from es_atompub.config.validation import InvalidSettingValueError
from es_atompub.observability.logging import SensitiveFieldsFilter

DEFAULT_LINK_PROTO = "https"

INSECURE_CONFIG_BANNER = """
 __  .__   __.      _______. _______   ______  __    __  .______       _______
|  | |  \\ |  |     /       ||   ____| /      ||  |  |  | |   _  \\     |   ____|
|  | |   \\|  |    |   (---- |  |__   |  ,----'|  |  |  | |  |_)  |    |  |__
|  | |  .    |     \\   \\    |   __|  |  |     |  |  |  | |      /     |   __|
|  | |  |\\   | .----)   |   |  |____ |   ----.|   --'  | |  |\\  \\----.|  |____
|__| |__| \\__| |_______/    |_______| \\______| \\______/  | _| '._____||_______|
"""


@dataclasses.dataclass
class AtomPubSettings(Settings):
    """Environment-driven settings.

    ==============  ==========================================================
    ``LINKHOST``      host[:port] advertised in link hrefs (required)
    ``LISTENADDR``    host:port the HTTP server binds (required)
    ``DATABASE_URL``  SQLAlchemy async URL of the event store (required)
    ``LINK_PROTO``    scheme for link hrefs, ``https`` when empty
    ``KEY_ALIAS``     KMS key alias; empty disables response encryption
    ``LOG_LEVEL``     stdlib level name
    ==============  ==========================================================
    """

    linkhost: str
    listenaddr: str
    database_url: str
    link_proto: str = DEFAULT_LINK_PROTO
    key_alias: str = ""
    log_level: str = "INFO"

    def _validate(self) -> None:
        self.link_proto = self.link_proto.strip() or DEFAULT_LINK_PROTO
        self.key_alias = self.key_alias.strip()
        self.log_level = self.log_level.upper()
        if not self.linkhost:
            raise InvalidSettingValueError("LINKHOST", self.linkhost, "must not be empty")
        host, sep, port = self.listenaddr.rpartition(":")
        if not sep or not port.isdigit():
            raise InvalidSettingValueError("LISTENADDR", self.listenaddr, "expected host:port")

    @property
    def listen_host(self) -> str:
        return self.listenaddr.rpartition(":")[0] or "0.0.0.0"

    @property
    def listen_port(self) -> int:
        return int(self.listenaddr.rpartition(":")[2])

    @property
    def encryption_enabled(self) -> bool:
        return bool(self.key_alias)

    def safe_dict(self) -> dict[str, Any]:
        """Settings as a dict with credentials removed, for startup logging."""
        values = SensitiveFieldsFilter().redact(dataclasses.asdict(self))
        if "@" in values["database_url"]:
            scheme, _, rest = values["database_url"].partition("://")
            values["database_url"] = f"{scheme}://{SensitiveFieldsFilter.REDACTED}@{rest.rpartition('@')[2]}"
        return values


def load_settings(environ: Mapping[str, str] | None = None) -> AtomPubSettings:
    """Load :class:`AtomPubSettings` from *environ* (default: the process env)."""
    return EnvSettingsLoader(environ).load(AtomPubSettings)


__all__ = ["INSECURE_CONFIG_BANNER", "AtomPubSettings", "load_settings"]
