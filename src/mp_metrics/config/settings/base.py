"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import ClassVar, TypeVar

S = TypeVar("S", bound="Settings")


@dataclasses.dataclass
class Settings:
    """Dataclass base for settings read from the environment.

    Subclasses set ``_prefix``; field ``foo`` is then read from
    ``<PREFIX>_FOO``. Override :meth:`_validate` for checks that need the
    parsed values.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        pass

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    @classmethod
    def from_env(cls: type[S], environ: Mapping[str, str] | None = None) -> S:
        """Shortcut for ``EnvSettingsLoader(environ).load(cls)``."""
        from mp_metrics.config.settings.loaders import EnvSettingsLoader

        return EnvSettingsLoader(environ).load(cls)


__all__ = ["Settings"]
