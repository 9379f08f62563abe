"""Config validation errors.

Any :class:`ConfigError` at startup is logged and ends the process with
exit code 1.
"""
from es_atompub.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """The environment cannot produce usable publisher settings."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required variable such as ``LINKHOST`` or ``DATABASE_URL`` is unset."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A variable is set but unusable, e.g. ``LISTENADDR`` without a port."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
