"""Pointer, touch and wheel gesture handling.

Gesture logic is a pure transition function over an immutable
:class:`GestureState`. :class:`InputController` applies the resulting pan,
zoom, redraw and click effects to a viewport and a hit-region registry.

States::

    IDLE --down/1-touch--> PRESSED --up (no movement)--> IDLE + click
    IDLE --2-touch-------> PINCHING --touch end--------> IDLE

A click is only emitted when leaving PRESSED at exactly the press position.
"""

from __future__ import annotations

__all__ = [
    "GesturePhase",
    "GestureResult",
    "GestureState",
    "InputController",
    "PointerDown",
    "PointerMove",
    "PointerUp",
    "TouchEnd",
    "TouchMove",
    "TouchStart",
    "Wheel",
    "transition",
]

import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from railmap.render.hit_regions import HitRegion, HitRegionRegistry
from railmap.view.viewport import Viewport

Point = tuple[float, float]


# --- Events ---


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    """Button release; without a position the last tracked one is used."""

    x: float | None = None
    y: float | None = None


@dataclass(frozen=True)
class TouchStart:
    touches: tuple[Point, ...]


@dataclass(frozen=True)
class TouchMove:
    touches: tuple[Point, ...]


@dataclass(frozen=True)
class TouchEnd:
    pass


@dataclass(frozen=True)
class Wheel:
    delta_y: float


GestureEvent = PointerDown | PointerMove | PointerUp | TouchStart | TouchMove | TouchEnd | Wheel


# --- State ---


class GesturePhase(Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    PINCHING = "pinching"


@dataclass(frozen=True)
class GestureState:
    phase: GesturePhase = GesturePhase.IDLE
    x: float = 0.0
    y: float = 0.0
    click_start: Point | None = None
    pinch_distance: float | None = None


@dataclass(frozen=True)
class GestureResult:
    """New state plus the effects the caller must apply."""

    state: GestureState
    pan: Point | None = None
    zoom: float | None = None
    click: Point | None = None

    @property
    def redraw(self) -> bool:
        return self.pan is not None or self.zoom is not None


def _touch_distance(touches: tuple[Point, ...]) -> float:
    (x1, y1), (x2, y2) = touches[0], touches[1]
    return math.hypot(x1 - x2, y1 - y2)


def _move(state: GestureState, x: float, y: float) -> GestureResult:
    moved = replace(state, x=x, y=y)
    if state.phase is not GesturePhase.PRESSED:
        return GestureResult(moved)
    return GestureResult(moved, pan=(x - state.x, y - state.y))


def _press(state: GestureState, x: float, y: float) -> GestureResult:
    return GestureResult(
        GestureState(phase=GesturePhase.PRESSED, x=x, y=y, click_start=(x, y))
    )


def _release(state: GestureState, x: float, y: float) -> GestureResult:
    click = None
    if state.phase is GesturePhase.PRESSED and state.click_start == (x, y):
        click = (x, y)
    return GestureResult(GestureState(x=x, y=y), click=click)


def transition(
    state: GestureState,
    event: GestureEvent,
    scroll_sensitivity: float,
    pinch_sensitivity: float,
) -> GestureResult:
    """Compute the next gesture state and its effects for one event."""
    if isinstance(event, Wheel):
        return GestureResult(state, zoom=event.delta_y * scroll_sensitivity)

    if isinstance(event, PointerDown):
        return _press(state, event.x, event.y)

    if isinstance(event, PointerMove):
        return _move(state, event.x, event.y)

    if isinstance(event, PointerUp):
        x = state.x if event.x is None else event.x
        y = state.y if event.y is None else event.y
        return _release(state, x, y)

    if isinstance(event, TouchStart):
        if len(event.touches) >= 2:
            return GestureResult(
                GestureState(phase=GesturePhase.PINCHING, x=state.x, y=state.y)
            )
        if not event.touches:
            return GestureResult(state)
        return _press(state, *event.touches[0])

    if isinstance(event, TouchMove):
        if state.phase is GesturePhase.PINCHING:
            if len(event.touches) < 2:
                return GestureResult(state)
            dist = _touch_distance(event.touches)
            zoom = None
            if state.pinch_distance is not None:
                zoom = (state.pinch_distance - dist) * pinch_sensitivity
            return GestureResult(replace(state, pinch_distance=dist), zoom=zoom)
        if not event.touches:
            return GestureResult(state)
        return _move(state, *event.touches[0])

    if isinstance(event, TouchEnd):
        return _release(state, state.x, state.y)

    raise TypeError(f"Unsupported gesture event: {event!r}")


class InputController:
    """Applies gesture transitions to a viewport and resolves clicks.

    ``redraw`` is called synchronously whenever the view changed, before the
    handler returns and before any click is resolved.
    """

    def __init__(
        self,
        viewport: Viewport,
        regions: HitRegionRegistry,
        redraw: Callable[[], object],
        scroll_sensitivity: float,
        pinch_sensitivity: float,
    ):
        self.viewport = viewport
        self.regions = regions
        self.redraw = redraw
        self.scroll_sensitivity = scroll_sensitivity
        self.pinch_sensitivity = pinch_sensitivity
        self.state = GestureState()

    @property
    def phase(self) -> GesturePhase:
        return self.state.phase

    def handle(self, event: GestureEvent) -> HitRegion | None:
        """Process one event; return the hit region that was clicked, if any."""
        result = transition(
            self.state, event, self.scroll_sensitivity, self.pinch_sensitivity
        )
        self.state = result.state

        if result.pan is not None:
            self.viewport.pan(*result.pan)
        if result.zoom is not None:
            self.viewport.zoom(result.zoom)
        if result.redraw:
            self.redraw()

        if result.click is not None:
            return self.regions.resolve(*result.click)
        return None
