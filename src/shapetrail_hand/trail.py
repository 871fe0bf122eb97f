from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Tuple

from .config import DEFAULT_TRAIL_CONFIG, TrailConfig
from .types import DrawRequest, TrailEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrailBuffer:
    """
    Fading trail of recently drawn shapes, oldest first.

    Unlike the smoothing windows this survives hand loss; only `clear()` empties it.
    """

    config: TrailConfig = field(default=DEFAULT_TRAIL_CONFIG)
    entries: Tuple[TrailEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def push(self, request: DrawRequest) -> "TrailBuffer":
        aged = tuple(replace(e, age=e.age + 1) for e in self.entries)
        entries = aged + (TrailEntry.from_request(request),)
        if len(entries) > self.config.capacity:
            entries = entries[len(entries) - self.config.capacity :]
        return replace(self, entries=entries)

    def clear(self) -> "TrailBuffer":
        logger.debug("trail cleared (%d entries)", len(self.entries))
        return replace(self, entries=())

    def opacity(self, index_from_oldest: int) -> float:
        return (index_from_oldest + 1) / len(self.entries) * self.config.max_opacity

    def with_opacity(self) -> List[Tuple[TrailEntry, float]]:
        return [(e, self.opacity(i)) for i, e in enumerate(self.entries)]
