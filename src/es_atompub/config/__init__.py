"""Config – 12-factor settings and their errors."""
from es_atompub.config.atompub import AtomPubSettings, load_settings
from es_atompub.config.settings import EnvSettingsLoader, Settings, SettingsLoader
from es_atompub.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "AtomPubSettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "load_settings",
]
