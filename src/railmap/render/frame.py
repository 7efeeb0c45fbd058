"""Frame rendering: turns the graph, camera and route overlay into draw calls.

Every frame clears the surface, culls each primitive against the surface
rectangle, draws what is left and registers a hit region for every
clickable primitive in draw order.
"""

from __future__ import annotations

__all__ = ["FrameRenderer"]

from collections.abc import Callable, Iterable
from functools import partial
from itertools import groupby

from railmap.config import RendererConfig
from railmap.constants import (
    DEBUG_STROKE,
    DEBUG_STROKE_WIDTH,
    FAN_STROKE,
    STATION_NO_GROUP_FILL,
    STATION_STROKE,
    TEXT_CULL_MARGIN,
)
from railmap.model import Connection, GraphModel, Station
from railmap.render.hit_regions import HitRegionRegistry
from railmap.render.overlay import RouteOverlay
from railmap.render.surface import DrawingSurface, Segment
from railmap.view.viewport import Viewport


class FrameRenderer:
    """Draws one frame of a railway map onto a drawing surface."""

    def __init__(
        self,
        surface: DrawingSurface,
        config: RendererConfig,
        viewport: Viewport,
        regions: HitRegionRegistry,
        station_clicked: Callable[[Station], None],
        connection_clicked: Callable[[Connection], None],
    ):
        self.surface = surface
        self.config = config
        self.viewport = viewport
        self.regions = regions
        self.station_clicked = station_clicked
        self.connection_clicked = connection_clicked

    # --- Frame ---

    def render(self, graph: GraphModel, overlay: RouteOverlay) -> None:
        self.surface.clear(self.config.background_style)
        self.regions.begin_frame()

        stations = list(graph.stations.values())
        if overlay.active:
            dimmed = self.config.dimmed_opacity
            ordered = overlay.render_order(stations)
            n_off_route = sum(1 for s in ordered if not overlay.contains_station(s))

            for station in ordered[:n_off_route]:
                self._draw_station(station, dimmed)

            self._draw_connections(
                [c for c in graph.connections if not overlay.contains_connection(c)],
                dimmed,
            )
            self._draw_connections(
                [c for c in graph.connections if overlay.contains_connection(c)],
                1.0,
            )

            for station in ordered[n_off_route:]:
                self._draw_station(station, 1.0)
        else:
            self._draw_connections(graph.connections, 1.0)
            for station in stations:
                self._draw_station(station, 1.0)

        self.regions.end_frame()

        if self.config.debug_overlay:
            self._draw_debug_overlay()

    # --- Stations ---

    def _draw_station(self, station: Station, opacity: float) -> None:
        if not station.show:
            return
        groups = station.visible_groups()
        if not groups and not self.config.show_stations_with_no_connections:
            return

        scale = self.viewport.scale
        x, y = station.x, station.y
        on_click = partial(self.station_clicked, station)

        self._text(x, y + self.config.label_offset / scale, station.name, opacity)

        if not groups:
            self._circle(x, y, STATION_NO_GROUP_FILL, on_click, opacity)
            return

        step = self.config.station_group_offset / scale
        if len(groups) > 1:
            reach = step * (len(groups) - 1)
            fan = self._segment(x, y, x + reach, y - reach, self.config.fan_width)
            if fan is not None:
                self.surface.stroke_segments(
                    [fan], FAN_STROKE, self.config.fan_width, opacity
                )

        for i, group in enumerate(groups):
            self._circle(x + step * i, y - step * i, group.color, on_click, opacity)

    # --- Connections ---

    def _draw_connections(
        self, connections: Iterable[Connection], opacity: float
    ) -> None:
        """Stroke connections in one batch per run of same-group connections."""
        width = self.config.line_width
        for group, batch in groupby(connections, key=lambda c: c.group):
            if not group.show:
                continue
            segments: list[Segment] = []
            for connection in batch:
                if connection.show:
                    segments.extend(self._connection_segments(connection))
            if segments:
                self.surface.stroke_segments(segments, group.color, width, opacity)

    def _fan_index(self, station: Station, connection: Connection) -> int:
        groups = station.visible_groups()
        for i, group in enumerate(groups):
            if group is connection.group:
                return i
        return 0

    def _connection_segments(self, connection: Connection) -> list[Segment]:
        """Screen segments of the L-shaped path: vertical leg, then horizontal.

        Each leg overshoots the corner by half a line width so the joint is
        filled.
        """
        scale = self.viewport.scale
        step = self.config.station_group_offset / scale
        half = self.config.line_width / 2 / scale
        src, tgt = connection.from_station, connection.to_station

        offset_from = self._fan_index(src, connection) * step
        offset_to = self._fan_index(tgt, connection) * step
        x, y = src.x + offset_from, src.y - offset_from
        x2, y2 = tgt.x + offset_to, tgt.y - offset_to

        on_click = partial(self.connection_clicked, connection)
        width = self.config.line_width
        legs = (
            self._segment(x, y, x, y2 + (half if y < y2 else -half), width, on_click),
            self._segment(x + (half if x > x2 else -half), y2, x2, y2, width, on_click),
        )
        return [leg for leg in legs if leg is not None]

    # --- Primitives ---

    def _to_screen(self, x: float, y: float) -> tuple[float, float]:
        return self.viewport.world_to_screen(
            x, y, self.surface.width, self.surface.height
        )

    def _outside(self, x1: float, y1: float, x2: float, y2: float) -> bool:
        """True if the box lies entirely past one edge of the surface."""
        return (
            x2 < 0
            or x1 > self.surface.width
            or y2 < 0
            or y1 > self.surface.height
        )

    def _circle(
        self,
        x: float,
        y: float,
        fill: str,
        on_click: Callable[[], None] | None,
        opacity: float,
    ) -> None:
        """Station marker with a constant on-screen radius."""
        sx, sy = self._to_screen(x, y)
        r = self.config.station_radius
        if self._outside(sx - r, sy - r, sx + r, sy + r):
            return

        if on_click is not None:
            reach = r + self.config.station_stroke_width
            self.regions.add(sx - reach, sy - reach, sx + reach, sy + reach, on_click)

        self.surface.circle(
            sx,
            sy,
            r,
            fill,
            STATION_STROKE,
            self.config.station_stroke_width,
            opacity,
        )

    def _segment(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        width: float,
        on_click: Callable[[], None] | None = None,
    ) -> Segment | None:
        """Project a world segment; None when both ends are past one edge."""
        sx1, sy1 = self._to_screen(x1, y1)
        sx2, sy2 = self._to_screen(x2, y2)
        if self._outside(min(sx1, sx2), min(sy1, sy2), max(sx1, sx2), max(sy1, sy2)):
            return None

        if on_click is not None:
            half = width / 2
            self.regions.add(
                min(sx1, sx2) - half,
                min(sy1, sy2) - half,
                max(sx1, sx2) + half,
                max(sy1, sy2) + half,
                on_click,
            )
        return (sx1, sy1, sx2, sy2)

    def _text(self, x: float, y: float, text: str, opacity: float) -> None:
        sx, sy = self._to_screen(x, y)
        m = TEXT_CULL_MARGIN
        if self._outside(sx - m, sy - m, sx + m, sy + m):
            return
        self.surface.text(
            sx,
            sy,
            text,
            self.config.font_size,
            self.config.font,
            self.config.font_color,
            "middle",
            opacity,
        )

    # --- Debug ---

    def _draw_debug_overlay(self) -> None:
        """Outline every registered hit region."""
        segments: list[Segment] = []
        for r in self.regions:
            segments.extend(
                [
                    (r.x1, r.y1, r.x2, r.y1),
                    (r.x2, r.y1, r.x2, r.y2),
                    (r.x2, r.y2, r.x1, r.y2),
                    (r.x1, r.y2, r.x1, r.y1),
                ]
            )
        self.surface.stroke_segments(segments, DEBUG_STROKE, DEBUG_STROKE_WIDTH)
