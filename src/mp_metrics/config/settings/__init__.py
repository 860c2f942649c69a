"""Config settings – 12-factor env-based configuration."""
from mp_metrics.config.settings.base import Settings
from mp_metrics.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from mp_metrics.config.settings.metrics import MetricsSettings

__all__ = ["EnvSettingsLoader", "MetricsSettings", "Settings", "SettingsLoader"]
