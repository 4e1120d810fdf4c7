"""Engine-scoped configuration that modulates how later operations execute.

Items are stored under a stable :class:`EnvironmentKey`.  Registering an item
whose key is already present replaces the stored item, so only the latest
setting made before a consuming operation takes effect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Optional

from . import config

LOGGER = logging.getLogger(__name__)


class EnvironmentKey(Enum):
    """Storage identity of an environment item, independent of its value."""

    RESIZE_SAMPLING_FILTER = "Resize_SamplingFilter"


class FilterKind(Enum):
    """Sampling filters available to ``Resize``."""

    NEAREST = "nearest"
    TRIANGLE = "triangle"
    CATMULL_ROM = "catmullrom"
    GAUSSIAN = "gaussian"
    LANCZOS3 = "lanczos3"

    @classmethod
    def default(cls) -> "FilterKind":
        return cls.from_name(config.DEFAULT_RESIZE_FILTER_NAME)

    @classmethod
    def from_name(cls, name: str) -> "FilterKind":
        """Look up a filter by its script name (case-insensitive)."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown sampling filter '{name}', expected one of: {choices}") from None


class EnvironmentItem:
    """Base class for everything that can be registered in an :class:`Environment`."""

    key: ClassVar[EnvironmentKey]


class EnvironmentOption(EnvironmentItem):
    """An item carrying a configuration value."""


class EnvironmentFlag(EnvironmentItem):
    """An item acting as a toggle. No flags are defined yet."""


@dataclass(frozen=True)
class ResizeSamplingFilter(EnvironmentOption):
    key: ClassVar[EnvironmentKey] = EnvironmentKey.RESIZE_SAMPLING_FILTER

    kind: FilterKind


class Environment:
    """Mapping of :class:`EnvironmentKey` to the most recently registered item."""

    def __init__(self) -> None:
        self._store: Dict[EnvironmentKey, EnvironmentItem] = {}

    def insert_or_update(self, item: EnvironmentItem) -> None:
        """Store ``item`` under its key, replacing any previous item."""
        key = item.key
        previous = self._store.get(key)
        self._store[key] = item
        LOGGER.debug("environment %s: %r -> %r", key.value, previous, item)

    def get(self, key: EnvironmentKey) -> Optional[EnvironmentItem]:
        return self._store.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"Environment({self._store!r})"


__all__ = [
    "Environment",
    "EnvironmentFlag",
    "EnvironmentItem",
    "EnvironmentKey",
    "EnvironmentOption",
    "FilterKind",
    "ResizeSamplingFilter",
]
