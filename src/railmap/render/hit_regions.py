"""Per-frame registry of clickable screen-space boxes."""

from __future__ import annotations

__all__ = ["HitRegion", "HitRegionRegistry"]

from collections.abc import Callable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class HitRegion:
    """An axis-aligned box in screen pixels and the callback it fires."""

    x1: float
    y1: float
    x2: float
    y2: float
    callback: Callable[[], None]

    def contains(self, x: float, y: float) -> bool:
        return self.x1 <= x <= self.x2 and self.y1 <= y <= self.y2


class HitRegionRegistry:
    """Regions registered while drawing, queried topmost-first afterwards.

    A frame calls :meth:`begin_frame`, registers regions in draw order and
    then :meth:`end_frame`, which reverses them so the last-drawn (visually
    topmost) region is checked first.
    """

    def __init__(self) -> None:
        self._regions: list[HitRegion] = []
        self._open = False

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[HitRegion]:
        return iter(self._regions)

    def begin_frame(self) -> None:
        self._regions = []
        self._open = True

    def add(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        callback: Callable[[], None],
    ) -> HitRegion:
        region = HitRegion(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2), callback)
        self._regions.append(region)
        return region

    def end_frame(self) -> None:
        if self._open:
            self._regions.reverse()
            self._open = False

    def find(self, x: float, y: float) -> HitRegion | None:
        """Return the topmost region containing (x, y) without firing it."""
        for region in self._regions:
            if region.contains(x, y):
                return region
        return None

    def resolve(self, x: float, y: float) -> HitRegion | None:
        """Fire the topmost region containing (x, y); at most one fires."""
        region = self.find(x, y)
        if region is not None:
            region.callback()
        return region
