"""Metrics error hierarchy, public re-export surface.

Hierarchy::

    MetricsError
    ├── RegistrationError     (registration.py)
    │   ├── InvalidNameError
    │   ├── DuplicateMetricError
    │   └── InvalidBucketsError
    ├── ObservationError      (observation.py)
    │   ├── UnknownMetricError
    │   ├── WrongKindError
    │   ├── InvalidDeltaError
│   └── InvalidValueError
    ├── DoubleStopError       (observation.py)
    └── RenderError           (exposition.py)
"""

from mp_metrics.errors.base import MetricsError
from mp_metrics.errors.exposition import RenderError
from mp_metrics.errors.observation import (
    DoubleStopError,
    InvalidDeltaError,
    InvalidValueError,
    ObservationError,
    UnknownMetricError,
    WrongKindError,
)
from mp_metrics.errors.registration import (
    DuplicateMetricError,
    InvalidBucketsError,
    InvalidNameError,
    RegistrationError,
)

__all__ = [
    "DoubleStopError",
    "DuplicateMetricError",
    "InvalidBucketsError",
    "InvalidDeltaError",
    "InvalidNameError",
    "InvalidValueError",
    "MetricsError",
    "ObservationError",
    "RegistrationError",
    "RenderError",
    "UnknownMetricError",
    "WrongKindError",
]
