"""Data model for railway map graphs: stations, groups, lines, connections."""

from __future__ import annotations

__all__ = [
    "Connection",
    "GraphModel",
    "Group",
    "Line",
    "Station",
    "normalize_color",
]

from dataclasses import dataclass, field

import networkx as nx

from railmap.records import Identifier, id_key


def normalize_color(color: str) -> str:
    """Return *color* with a leading ``#`` (API colors come as bare hex)."""
    color = color.strip()
    if not color or color.startswith("#"):
        return color
    return f"#{color}"


@dataclass(eq=False)
class Line:
    """A sub-route within a group, distinguishing parallel services."""

    id: Identifier
    group: Group


@dataclass(eq=False)
class Group:
    """A named, colored classification of connections (e.g. an operator)."""

    id: Identifier
    name: str
    color: str
    show: bool = True
    lines: dict[str, Line] = field(default_factory=dict)

    def line(self, line_id: Identifier) -> Line:
        """Return the line with *line_id*, creating it on first reference.

        ``lines`` is keyed by :func:`id_key`; the line keeps the id it was
        first seen with.
        """
        key = id_key(line_id)
        existing = self.lines.get(key)
        if existing is None:
            existing = Line(id=line_id, group=self)
            self.lines[key] = existing
        return existing


@dataclass(eq=False)
class Station:
    """A labeled point in world space.

    ``groups`` keeps first-discovery order; the index of a group in this
    list decides its slot in the station's radial fan.
    """

    label: str
    name: str
    x: float
    y: float
    show: bool = True
    groups: list[Group] = field(default_factory=list)

    def add_group(self, group: Group) -> None:
        if group not in self.groups:
            self.groups.append(group)

    def visible_groups(self) -> list[Group]:
        return [g for g in self.groups if g.show]


@dataclass(eq=False)
class Connection:
    """A (possibly bidirectional) edge between two stations in one group."""

    from_station: Station
    to_station: Station
    group: Group
    line: Line
    two_way: bool = False
    show: bool = True

    @property
    def endpoints(self) -> frozenset[str]:
        return frozenset((self.from_station.label, self.to_station.label))

    def is_visible(self) -> bool:
        return self.show and self.group.show


class GraphModel:
    """Owns every station, group, line and connection of one map.

    Connections are mirrored into an undirected ``networkx.MultiGraph`` keyed
    by station label so endpoint-pair lookups do not scan the full list.
    Edges between a pair are kept in connection-list order.
    """

    def __init__(self) -> None:
        self.stations: dict[str, Station] = {}
        self.groups: dict[str, Group] = {}
        self.connections: list[Connection] = []
        self._index = nx.MultiGraph()

    def reset(self) -> None:
        self.stations.clear()
        self.groups.clear()
        self.connections.clear()
        self._index.clear()

    # --- Stations ---

    def add_station(self, station: Station) -> None:
        self.stations[station.label] = station
        self._index.add_node(station.label)

    def station(self, label: str) -> Station | None:
        return self.stations.get(label)

    # --- Groups and lines ---

    def group(self, group_id: Identifier) -> Group | None:
        return self.groups.get(id_key(group_id))

    def ensure_group(self, group_id: Identifier, name: str, color: str) -> Group:
        """Return the group with *group_id*, creating it on first reference.

        ``groups`` is keyed by :func:`id_key`, so ``1`` and ``"1"`` share a
        group. The first record seen supplies its id, name and color.
        """
        key = id_key(group_id)
        group = self.groups.get(key)
        if group is None:
            group = Group(id=group_id, name=name, color=normalize_color(color))
            self.groups[key] = group
        return group

    @property
    def lines(self) -> list[Line]:
        return [line for g in self.groups.values() for line in g.lines.values()]

    # --- Connections ---

    def add_connection(self, connection: Connection) -> None:
        self.connections.append(connection)
        self._index_connection(connection)

    def find_connection(
        self, from_station: Station, to_station: Station, group: Group
    ) -> Connection | None:
        """Return the directed connection from -> to within *group*."""
        for conn in self.connections_between(from_station.label, to_station.label):
            if (
                conn.group is group
                and conn.from_station is from_station
                and conn.to_station is to_station
            ):
                return conn
        return None

    def connections_between(self, label_a: str, label_b: str) -> list[Connection]:
        """All connections joining two stations, in either direction."""
        data = self._index.get_edge_data(label_a, label_b)
        if not data:
            return []
        return [attrs["connection"] for attrs in data.values()]

    def sort_connections(self) -> None:
        """Stable-sort connections by group id so draws batch per group."""
        self.connections.sort(key=lambda c: _group_sort_key(c.group.id))
        self._index.remove_edges_from(list(self._index.edges(keys=True)))
        for conn in self.connections:
            self._index_connection(conn)

    def station_degree(self, label: str) -> int:
        """Number of connections touching a station."""
        if label not in self._index:
            return 0
        return self._index.degree(label)

    def _index_connection(self, connection: Connection) -> None:
        self._index.add_edge(
            connection.from_station.label,
            connection.to_station.label,
            connection=connection,
        )


def _group_sort_key(group_id: Identifier) -> tuple[int, float, str]:
    """Numeric ids sort numerically and before non-numeric ones."""
    try:
        return (0, float(group_id), "")
    except (TypeError, ValueError):
        return (1, 0.0, str(group_id))
