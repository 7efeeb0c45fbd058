"""Tests for route matching and route-aware draw ordering."""

from conftest import NETWORK_CONNECTIONS, NETWORK_STATIONS
from railmap.diagnostics import DiagnosticKind
from railmap.ingest import load_graph
from railmap.model import GraphModel
from railmap.records import RouteStep
from railmap.render.overlay import RouteOverlay


def _graph(connections=NETWORK_CONNECTIONS):
    graph = GraphModel()
    load_graph(graph, NETWORK_STATIONS, connections, lambda d: None)
    return graph


def _step(a, b, line):
    return {"current_station_label": a, "next_station_label": b, "current_line": line}


def test_route_matches_by_line_id_in_either_direction():
    graph = _graph()
    overlay = RouteOverlay()
    overlay.set_route(graph, [_step("B", "A", 10), _step("B", "C", 10)])
    assert [(c.from_station.label, c.to_station.label) for c in overlay.connections] == [
        ("A", "B"),
        ("B", "C"),
    ]
    assert overlay.stations == {"A", "B", "C"}
    assert overlay.active


def test_route_matches_by_group_id_and_name():
    graph = _graph()
    overlay = RouteOverlay()
    overlay.set_route(graph, [_step("B", "D", "Blue"), _step("A", "B", "1")])
    assert [c.group.name for c in overlay.connections] == ["Blue", "Red"]


def test_repeated_step_added_once():
    graph = _graph()
    overlay = RouteOverlay()
    overlay.set_route(graph, [_step("A", "B", 10), _step("B", "A", 10)])
    assert len(overlay.connections) == 1


def test_unmatched_step_reported_and_skipped():
    graph = _graph()
    overlay = RouteOverlay()
    found = []
    overlay.set_route(graph, [_step("A", "D", 10), _step("A", "B", 99)], found.append)
    assert overlay.connections == []
    assert [d.kind for d in found] == [DiagnosticKind.UNMATCHED_ROUTE_STEP] * 2
    assert not overlay.active


def test_ambiguous_step_reported_first_match_kept():
    connections = NETWORK_CONNECTIONS + [
        {"from_label": "A", "to_label": "B", "group_id": 3, "group_name": "Green",
         "color": "00ff00", "line_id": 10},
    ]
    graph = _graph(connections)
    overlay = RouteOverlay()
    found = []
    overlay.set_route(graph, [_step("A", "B", 10)], found.append)
    assert [d.kind for d in found] == [DiagnosticKind.AMBIGUOUS_ROUTE_STEP]
    # Group 1 sorts before group 3 in connection order
    assert overlay.connections[0].group.id == 1


def test_empty_route_clears_overlay():
    graph = _graph()
    overlay = RouteOverlay()
    stations = list(graph.stations.values())
    overlay.set_route(graph, [_step("A", "B", 10)])
    assert overlay.render_order(stations) != stations

    overlay.set_route(graph, [])
    assert overlay.stations == set()
    assert overlay.connections == []
    assert overlay.render_order(stations) == stations

    overlay.set_route(graph, [_step("A", "B", 10)])
    overlay.set_route(graph, None)
    assert not overlay.active


def test_render_order_is_stable_partition_without_mutation():
    graph = _graph()
    overlay = RouteOverlay()
    overlay.set_route(graph, [RouteStep("B", "D", 20)])
    stations = list(graph.stations.values())
    ordered = overlay.render_order(stations)
    assert [s.label for s in ordered] == ["A", "C", "B", "D"]
    assert [s.label for s in graph.stations.values()] == ["A", "B", "C", "D"]


def test_invalid_step_reported():
    graph = _graph()
    overlay = RouteOverlay()
    found = []
    overlay.set_route(graph, [{"current_station_label": "A"}, 42], found.append)
    assert [d.kind for d in found] == [DiagnosticKind.INVALID_RECORD] * 2
