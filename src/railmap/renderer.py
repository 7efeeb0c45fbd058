"""The public renderer: data, route, camera, gestures and click callbacks."""

from __future__ import annotations

__all__ = [
    "ConnectionClickedEvent",
    "GroupInfo",
    "RailwayMapRenderer",
    "StationClickedEvent",
]

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from railmap.config import RendererConfig, resolve_config
from railmap.diagnostics import DiagnosticReporter, warn_diagnostic
from railmap.ingest import IngestSummary, load_graph
from railmap.model import Connection, Group, GraphModel, Station
from railmap.records import ConnectionRecord, Identifier, RouteStep, StationRecord
from railmap.render.frame import FrameRenderer
from railmap.render.hit_regions import HitRegion, HitRegionRegistry
from railmap.render.overlay import RouteOverlay
from railmap.render.surface import DrawingSurface
from railmap.view.gestures import (
    GestureEvent,
    InputController,
    Point,
    PointerDown,
    PointerMove,
    PointerUp,
    TouchEnd,
    TouchMove,
    TouchStart,
    Wheel,
)
from railmap.view.viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupInfo:
    id: Identifier
    name: str
    color: str

    @classmethod
    def of(cls, group: Group) -> GroupInfo:
        return cls(id=group.id, name=group.name, color=group.color)


@dataclass(frozen=True)
class StationClickedEvent:
    label: str
    name: str
    groups: tuple[GroupInfo, ...]
    x: float
    y: float


@dataclass(frozen=True)
class ConnectionClickedEvent:
    from_label: str
    from_name: str
    to_label: str
    to_name: str
    group: GroupInfo
    line_id: Identifier
    two_way: bool


def _ignore(event: object) -> None:
    pass


class RailwayMapRenderer:
    """Interactive railway map bound to one drawing surface.

    All calls are synchronous: every operation that changes what is visible
    redraws before returning. The renderer is not thread-safe; a host with
    several threads must serialize calls.

    Parameters
    ----------
    surface
        Where frames are drawn. Required; use :meth:`detach` to model a
        surface that has gone away.
    config
        A :class:`RendererConfig` or a mapping of options. Invalid options
        are reported and replaced by their defaults.
    on_diagnostic
        Receives every recoverable problem found in input data or config.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        config: RendererConfig | Mapping[str, Any] | None = None,
        *,
        on_diagnostic: DiagnosticReporter = warn_diagnostic,
    ):
        if surface is None:
            raise ValueError("RailwayMapRenderer requires a drawing surface")
        self.report = on_diagnostic
        self.graph = GraphModel()
        self.route = RouteOverlay()
        self.regions = HitRegionRegistry()
        self.viewport = Viewport()
        self.config = RendererConfig()

        self.on_station_clicked: Callable[[StationClickedEvent], None] = _ignore
        self.on_connection_clicked: Callable[[ConnectionClickedEvent], None] = _ignore

        self._surface: DrawingSurface | None = surface
        self.input = InputController(
            self.viewport,
            self.regions,
            self.draw,
            self.config.scroll_sensitivity,
            self.config.pinch_sensitivity,
        )
        self.set_config(config)

    # --- Configuration and lifecycle ---

    def set_config(self, config: RendererConfig | Mapping[str, Any] | None) -> None:
        self.config = resolve_config(config, self.report)
        self.viewport.set_limits(self.config.min_scale, self.config.max_scale)
        self.input.scroll_sensitivity = self.config.scroll_sensitivity
        self.input.pinch_sensitivity = self.config.pinch_sensitivity

    @property
    def surface(self) -> DrawingSurface | None:
        return self._surface

    @property
    def is_attached(self) -> bool:
        return self._surface is not None

    def attach(self, surface: DrawingSurface) -> None:
        if surface is None:
            raise ValueError("attach() requires a drawing surface")
        self._surface = surface
        self.draw()

    def detach(self) -> None:
        """Drop the surface; draws become no-ops until :meth:`attach`."""
        self._surface = None
        self.regions.begin_frame()
        self.regions.end_frame()

    # --- Data ---

    def set_data(
        self,
        stations: Iterable[StationRecord | Mapping[str, Any]],
        connections: Iterable[ConnectionRecord | Mapping[str, Any]],
    ) -> IngestSummary:
        """Replace the whole graph with the given records and redraw.

        Any active route refers to the old graph and is cleared.
        """
        self.route.clear()
        summary = load_graph(self.graph, stations, connections, self.report)
        self.draw()
        return summary

    def set_route(
        self, steps: Iterable[RouteStep | Mapping[str, Any]] | None
    ) -> None:
        """Highlight a route; an empty or None step list removes the overlay."""
        self.route.set_route(self.graph, steps, self.report)
        self.draw()

    def set_group_visibility(self, group_id: Identifier, show: bool) -> bool:
        group = self.graph.group(group_id)
        if group is None:
            return False
        group.show = show
        self.draw()
        return True

    def set_connection_visibility(
        self, from_label: str, to_label: str, group_id: Identifier, show: bool
    ) -> bool:
        """Toggle the connection joining two stations in a group (either direction)."""
        group = self.graph.group(group_id)
        for connection in self.graph.connections_between(from_label, to_label):
            if connection.group is group:
                connection.show = show
                self.draw()
                return True
        return False

    # --- Drawing ---

    def draw(self) -> bool:
        """Render a frame; returns False when no surface is attached."""
        if self._surface is None:
            logger.debug("Draw skipped: no surface attached")
            return False
        FrameRenderer(
            self._surface,
            self.config,
            self.viewport,
            self.regions,
            self._station_clicked,
            self._connection_clicked,
        ).render(self.graph, self.route)
        return True

    def _station_clicked(self, station: Station) -> None:
        self.on_station_clicked(
            StationClickedEvent(
                label=station.label,
                name=station.name,
                groups=tuple(GroupInfo.of(g) for g in station.groups),
                x=station.x,
                y=station.y,
            )
        )

    def _connection_clicked(self, connection: Connection) -> None:
        self.on_connection_clicked(
            ConnectionClickedEvent(
                from_label=connection.from_station.label,
                from_name=connection.from_station.name,
                to_label=connection.to_station.label,
                to_name=connection.to_station.name,
                group=GroupInfo.of(connection.group),
                line_id=connection.line.id,
                two_way=connection.two_way,
            )
        )

    # --- Gestures ---

    def handle(self, event: GestureEvent) -> HitRegion | None:
        return self.input.handle(event)

    def pointer_down(self, x: float, y: float) -> None:
        self.handle(PointerDown(x, y))

    def pointer_move(self, x: float, y: float) -> None:
        self.handle(PointerMove(x, y))

    def pointer_up(self, x: float | None = None, y: float | None = None) -> None:
        self.handle(PointerUp(x, y))

    def touch_start(self, *touches: Point) -> None:
        self.handle(TouchStart(tuple(touches)))

    def touch_move(self, *touches: Point) -> None:
        self.handle(TouchMove(tuple(touches)))

    def touch_end(self) -> None:
        self.handle(TouchEnd())

    def wheel(self, delta_y: float) -> None:
        self.handle(Wheel(delta_y))

    def resize(self) -> None:
        """The surface changed size; redraw so hit regions match."""
        self.draw()
