"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from collections.abc import Mapping
from typing import Any, TypeVar

from mp_metrics.config.settings.base import Settings
from mp_metrics.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class SettingsLoader(abc.ABC):
    """Port: build a settings object from some source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read ``<PREFIX>_<FIELD>`` variables into a :class:`Settings` subclass.

    Parameters
    ----------
    environ:
        Mapping to read from; ``os.environ`` at load time when omitted.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        values: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            key = settings_class.env_key(field.name)
            if key not in environ:
                if not _has_default(field):
                    raise MissingRequiredSettingError(key)
                continue
            raw = environ[key]
            try:
                values[field.name] = coerce_value(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc

        try:
            return settings_class(**values)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Could not build {settings_class.__name__}: {exc}", cause=exc) from exc


def coerce_value(raw: str, hint: Any) -> Any:
    """Convert an environment string to the field's annotated type.

    *hint* may be a type or, under postponed annotations, its string form.
    Sequences are comma separated; blank items are ignored.
    """
    name = hint if isinstance(hint, str) else getattr(hint, "__name__", "")
    origin = getattr(hint, "__origin__", None)
    item = (getattr(hint, "__args__", None) or (None,))[0]

    if name == "bool":
        return raw.strip().lower() in _TRUTHY
    if name == "int":
        return int(raw)
    if name == "float":
        return float(raw)
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    if item is float or name in ("list[float]", "tuple[float, ...]"):
        return [float(p) for p in parts]
    if origin in (list, tuple) or name.startswith(("list", "tuple")):
        return parts
    return raw


def _has_default(field: dataclasses.Field) -> bool:
    return field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING


__all__ = ["EnvSettingsLoader", "SettingsLoader", "coerce_value"]
