"""Config settings – 12-factor env-based configuration."""
from es_atompub.config.settings.base import Settings
from es_atompub.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader"]
