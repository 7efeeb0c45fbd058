"""Highlighted-route overlay: which connections and stations to foreground."""

from __future__ import annotations

__all__ = ["RouteOverlay"]

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from railmap.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticReporter,
    warn_diagnostic,
)
from railmap.model import Connection, GraphModel, Station
from railmap.records import RouteStep, id_key

logger = logging.getLogger(__name__)


def _matches_line(connection: Connection, line_ref: object) -> bool:
    """True if *line_ref* names the connection's line, group id or group name.

    Ids compare as strings so ``1`` and ``"1"`` refer to the same line.
    """
    ref = id_key(line_ref)
    return ref in (
        id_key(connection.line.id),
        id_key(connection.group.id),
        connection.group.name,
    )


class RouteOverlay:
    """An ordered path of connections and the set of stations it touches.

    The overlay is rebuilt from scratch by every :meth:`set_route` call; an
    empty or missing step list leaves it inactive.
    """

    def __init__(self) -> None:
        self.connections: list[Connection] = []
        self.stations: set[str] = set()
        self._connection_ids: set[int] = set()

    @property
    def active(self) -> bool:
        return bool(self.connections)

    def clear(self) -> None:
        self.connections = []
        self.stations = set()
        self._connection_ids = set()

    def contains_connection(self, connection: Connection) -> bool:
        return id(connection) in self._connection_ids

    def contains_station(self, station: Station) -> bool:
        return station.label in self.stations

    def set_route(
        self,
        graph: GraphModel,
        steps: Iterable[RouteStep | Mapping[str, Any]] | None,
        report: DiagnosticReporter = warn_diagnostic,
    ) -> None:
        """Match each route step to a connection of *graph*.

        Candidates join the step's two stations in either direction and match
        its line reference by line id, group id or group name. When several
        qualify the first in connection order is used and the ambiguity is
        reported.
        """
        self.clear()
        if not steps:
            return

        for raw in steps:
            if isinstance(raw, RouteStep):
                step = raw
            elif isinstance(raw, Mapping):
                try:
                    step = RouteStep.from_mapping(raw)
                except ValueError as e:
                    report(Diagnostic(DiagnosticKind.INVALID_RECORD, str(e), raw))
                    continue
            else:
                report(
                    Diagnostic(
                        DiagnosticKind.INVALID_RECORD,
                        f"Expected a mapping for RouteStep, got {type(raw).__name__}",
                        raw,
                    )
                )
                continue

            candidates = [
                c
                for c in graph.connections_between(
                    step.current_station_label, step.next_station_label
                )
                if _matches_line(c, step.line)
            ]
            if not candidates:
                report(
                    Diagnostic(
                        DiagnosticKind.UNMATCHED_ROUTE_STEP,
                        f"No connection {step.current_station_label!r} <-> "
                        f"{step.next_station_label!r} on line {step.line!r}",
                        raw,
                    )
                )
                continue
            if len(candidates) > 1:
                report(
                    Diagnostic(
                        DiagnosticKind.AMBIGUOUS_ROUTE_STEP,
                        f"{len(candidates)} connections match "
                        f"{step.current_station_label!r} <-> "
                        f"{step.next_station_label!r} on line {step.line!r}; "
                        f"using group {candidates[0].group.name!r}",
                        raw,
                    )
                )

            chosen = candidates[0]
            if self.contains_connection(chosen):
                continue
            self.connections.append(chosen)
            self._connection_ids.add(id(chosen))
            self.stations.add(chosen.from_station.label)
            self.stations.add(chosen.to_station.label)

        logger.debug(
            "Route overlay: %d connections, %d stations",
            len(self.connections),
            len(self.stations),
        )

    def render_order(self, stations: Iterable[Station]) -> list[Station]:
        """Stable partition of *stations*: off-route first, route stations last."""
        off_route: list[Station] = []
        on_route: list[Station] = []
        for station in stations:
            (on_route if station.label in self.stations else off_route).append(station)
        return off_route + on_route
