"""Core – LabelSet value object and name validation."""
from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable, Mapping
from typing import Any, Union

from mp_metrics.errors import InvalidNameError

METRIC_NAME_RE = re.compile(r"[a-zA-Z_:][a-zA-Z0-9_:]*")
LABEL_NAME_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")

LabelPairs = tuple[tuple[str, str], ...]


def validate_metric_name(name: str) -> str:
    """Return *name* unchanged or raise :class:`InvalidNameError`."""
    if not isinstance(name, str) or not METRIC_NAME_RE.fullmatch(name):
        raise InvalidNameError(str(name), kind="metric")
    return name


def validate_label_name(name: str) -> str:
    """Return *name* unchanged or raise :class:`InvalidNameError`.

    Names starting with ``__`` are reserved for internal use.
    """
    if not isinstance(name, str) or not LABEL_NAME_RE.fullmatch(name) or name.startswith("__"):
        raise InvalidNameError(str(name), kind="label")
    return name


@dataclasses.dataclass(frozen=True)
class LabelSet:
    """Ordered, immutable collection of ``(name, value)`` string pairs.

    Two label sets that hold the same pairs in a different order describe the
    same series: :attr:`key` sorts the pairs by name and is what the registry
    uses for lookup.
    """

    pairs: LabelPairs = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for name, _ in self.pairs:
            validate_label_name(name)
            if name in seen:
                raise InvalidNameError(name, kind="label", reason="duplicate label")
            seen.add(name)

    @classmethod
    def of(cls, labels: "LabelsLike" = None, **kwargs: Any) -> "LabelSet":
        """Build a label set from a mapping, an iterable of pairs, or kwargs.

        Values that are not strings are converted with ``str()``.
        """
        if isinstance(labels, LabelSet) and not kwargs:
            return labels
        items: list[tuple[str, str]] = []
        if isinstance(labels, LabelSet):
            items.extend(labels.pairs)
        elif isinstance(labels, Mapping):
            items.extend((k, _as_value(v)) for k, v in labels.items())
        elif labels is not None:
            items.extend((k, _as_value(v)) for k, v in labels)
        items.extend((k, _as_value(v)) for k, v in kwargs.items())
        return cls(tuple(items))

    @property
    def key(self) -> LabelPairs:
        """Series key: the pairs sorted by label name."""
        return tuple(sorted(self.pairs))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.pairs)

    def merge(self, other: "LabelsLike") -> "LabelSet":
        """Return a new set with *other* layered on top (other wins on conflict)."""
        return LabelSet.of(merge_labels(self, other))

    def as_dict(self) -> dict[str, str]:
        return dict(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __bool__(self) -> bool:
        return bool(self.pairs)


LabelsLike = Union[LabelSet, Mapping[str, Any], Iterable[tuple[str, Any]], None]

EMPTY_LABELS = LabelSet()


def merge_labels(*sources: LabelsLike) -> dict[str, Any]:
    """Layer label sources left to right without validating them.

    Later sources win on conflict; a key keeps the position of its first
    appearance.
    """
    merged: dict[str, Any] = {}
    for source in sources:
        if source is None:
            continue
        if isinstance(source, LabelSet):
            merged.update(source.pairs)
        elif isinstance(source, Mapping):
            merged.update(source)
        else:
            merged.update(dict(source))
    return merged


def _as_value(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


__all__ = [
    "EMPTY_LABELS",
    "LABEL_NAME_RE",
    "METRIC_NAME_RE",
    "LabelPairs",
    "LabelSet",
    "LabelsLike",
    "merge_labels",
    "validate_label_name",
    "validate_metric_name",
]
