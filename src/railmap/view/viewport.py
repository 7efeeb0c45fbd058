"""Camera state and the world <-> screen transform."""

from __future__ import annotations

__all__ = ["Viewport"]

from dataclasses import dataclass

from railmap.constants import MAX_SCALE, MIN_SCALE


@dataclass
class Viewport:
    """Pan offset (world units, at the screen centre) and zoom scale.

    Screen Y grows downward like world Y; nothing is flipped.
    """

    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE

    def __post_init__(self) -> None:
        self.scale = self._clamp(self.scale)

    def _clamp(self, scale: float) -> float:
        return min(max(scale, self.min_scale), self.max_scale)

    def set_limits(self, min_scale: float, max_scale: float) -> None:
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.scale = self._clamp(self.scale)

    def zoom(self, delta: float) -> None:
        """Shrink the scale by ``delta * scale`` (negative zooms in), clamped."""
        self.scale = self._clamp(self.scale - delta * self.scale)

    def pan(self, dx: float, dy: float) -> None:
        """Move by a screen-pixel drag; the content follows the pointer."""
        self.x -= dx / self.scale
        self.y -= dy / self.scale

    def center_on(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def world_to_screen(
        self, x: float, y: float, width: float, height: float
    ) -> tuple[float, float]:
        return (
            (x - self.x) * self.scale + width / 2,
            (y - self.y) * self.scale + height / 2,
        )

    def screen_to_world(
        self, sx: float, sy: float, width: float, height: float
    ) -> tuple[float, float]:
        return (
            (sx - width / 2) / self.scale + self.x,
            (sy - height / 2) / self.scale + self.y,
        )
