"""Config validation errors."""
from __future__ import annotations

from mp_metrics.errors import MetricsError


class ConfigError(MetricsError):
    """Settings could not be loaded or failed validation."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A setting without a default has no value in the source."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"{setting_name} must be set", detail={"setting": setting_name})
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting has a value that cannot be parsed or is out of range.

    *setting_name* is the environment key when parsing failed and the field
    name when validation of the parsed value failed.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"{setting_name}={value!r} is invalid: {reason}",
            detail={"setting": setting_name, "value": repr(value), "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
