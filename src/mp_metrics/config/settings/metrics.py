"""Config settings – MetricsSettings.

Environment variables (prefix ``MP_METRICS``)::

    MP_METRICS_DEFAULT_BUCKETS=0.01,0.1,1,10
    MP_METRICS_OBSERVATION_POLICY=raise
    MP_METRICS_PROCESS_METRICS=false
    MP_METRICS_PROCESS_PREFIX=process
"""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from mp_metrics.config.settings.base import Settings
from mp_metrics.config.validation import InvalidSettingValueError
from mp_metrics.core.labels import METRIC_NAME_RE
from mp_metrics.core.metric import DEFAULT_BUCKETS, normalize_buckets
from mp_metrics.errors import InvalidBucketsError

OBSERVATION_POLICIES = ("log", "raise")


@dataclasses.dataclass
class MetricsSettings(Settings):
    _prefix: ClassVar[str] = "MP_METRICS"

    default_buckets: list[float] = dataclasses.field(default_factory=lambda: list(DEFAULT_BUCKETS))
    observation_policy: str = "log"
    process_metrics: bool = True
    process_prefix: str = "process"

    def _validate(self) -> None:
        self.observation_policy = self.observation_policy.lower()
        if self.observation_policy not in OBSERVATION_POLICIES:
            raise InvalidSettingValueError(
                "observation_policy",
                self.observation_policy,
                f"expected one of {', '.join(OBSERVATION_POLICIES)}",
            )
        try:
            normalize_buckets("default_buckets", self.default_buckets)
        except InvalidBucketsError as exc:
            raise InvalidSettingValueError("default_buckets", self.default_buckets, exc.reason) from exc
        if not METRIC_NAME_RE.fullmatch(self.process_prefix):
            raise InvalidSettingValueError("process_prefix", self.process_prefix, "not a valid metric name")


__all__ = ["MetricsSettings", "OBSERVATION_POLICIES"]
