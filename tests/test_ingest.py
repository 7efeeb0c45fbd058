"""Tests for graph construction from flat records."""

import pytest

from conftest import NETWORK_CONNECTIONS, NETWORK_STATIONS, RED_A_TO_B, TWO_STATIONS
from railmap.diagnostics import DiagnosticKind, RailmapWarning
from railmap.ingest import load_graph
from railmap.model import GraphModel, normalize_color
from railmap.records import ConnectionRecord, StationRecord, coerce_coordinate, id_key


def _load(stations, connections):
    graph = GraphModel()
    found = []
    summary = load_graph(graph, stations, connections, found.append)
    return graph, summary, found


def test_single_connection_builds_pair_group_and_line():
    graph, summary, found = _load(TWO_STATIONS, [RED_A_TO_B])
    assert set(graph.stations) == {"A", "B"}
    assert list(graph.groups) == ["1"]
    group = graph.group(1)
    assert group.id == 1
    assert group.name == "Red"
    assert group.color == "#ff0000"
    assert list(group.lines) == ["1"]
    assert len(graph.connections) == 1
    assert graph.connections[0].two_way is False
    assert graph.connections[0].line is group.lines["1"]
    assert found == []


def test_reverse_connection_merges_into_two_way():
    reverse = {**RED_A_TO_B, "from": "B", "to": "A"}
    graph, summary, _ = _load(TWO_STATIONS, [RED_A_TO_B, reverse])
    assert len(graph.connections) == 1
    conn = graph.connections[0]
    assert conn.two_way is True
    assert conn.from_station.label == "A"
    assert summary.merged_two_way == 1


def test_second_load_replaces_previous_graph():
    graph = GraphModel()
    load_graph(graph, TWO_STATIONS, [RED_A_TO_B], lambda d: None)
    first = graph.connections[0]
    assert first.two_way is False

    reverse = {**RED_A_TO_B, "from": "B", "to": "A"}
    load_graph(graph, TWO_STATIONS, [RED_A_TO_B, reverse], lambda d: None)
    assert len(graph.connections) == 1
    assert graph.connections[0] is not first
    assert graph.connections[0].two_way is True
    assert len(graph.groups) == 1


def test_mixed_type_group_ids_share_one_group():
    reverse = {**RED_A_TO_B, "from": "B", "to": "A", "group_id": "1", "line_id": "1"}
    graph, summary, _ = _load(TWO_STATIONS, [RED_A_TO_B, reverse])
    assert len(graph.groups) == 1
    assert graph.group("1") is graph.group(1)
    # The first record seen keeps its original id for payloads
    assert graph.group("1").id == 1
    assert len(graph.connections) == 1
    assert graph.connections[0].two_way is True
    assert len(graph.lines) == 1
    assert graph.stations["A"].groups == [graph.group(1)]


def test_same_direction_duplicate_dropped():
    graph, summary, _ = _load(TWO_STATIONS, [RED_A_TO_B, dict(RED_A_TO_B)])
    assert len(graph.connections) == 1
    assert graph.connections[0].two_way is False
    assert summary.duplicates_dropped == 1


def test_reverse_in_other_group_is_separate_edge():
    other = {**RED_A_TO_B, "from": "B", "to": "A", "group_id": 2, "group_name": "Blue"}
    graph, _, _ = _load(TWO_STATIONS, [RED_A_TO_B, other])
    assert len(graph.connections) == 2
    assert all(not c.two_way for c in graph.connections)


def test_station_with_missing_z_is_omitted_and_connection_reported():
    stations = [
        {"label": "A", "name": "Alpha", "x": 0, "z": 0},
        {"label": "B", "name": "Beta", "x": 0},
    ]
    graph, summary, found = _load(stations, [RED_A_TO_B])
    assert set(graph.stations) == {"A"}
    assert graph.connections == []
    kinds = [d.kind for d in found]
    assert kinds == [DiagnosticKind.MISSING_POSITION, DiagnosticKind.MISSING_STATION]
    assert summary.connections_skipped == 1


def test_zero_coordinates_are_kept():
    graph, _, _ = _load([{"label": "O", "name": "Origin", "x": 0, "z": 0}], [])
    station = graph.stations["O"]
    assert (station.x, station.y) == (0.0, 0.0)


def test_unknown_station_reference_reported():
    conn = {**RED_A_TO_B, "to": "nowhere"}
    graph, _, found = _load(TWO_STATIONS, [conn])
    assert graph.connections == []
    assert found[0].kind is DiagnosticKind.MISSING_STATION
    assert "nowhere" in found[0].message
    # Groups are only created for resolvable connections
    assert graph.groups == {}


def test_duplicate_station_label_keeps_first():
    stations = TWO_STATIONS + [{"label": "A", "name": "Other", "x": 5, "z": 5}]
    graph, _, found = _load(stations, [])
    assert graph.stations["A"].name == "Alpha"
    assert found[0].kind is DiagnosticKind.DUPLICATE_STATION


def test_malformed_records_reported_not_raised():
    graph, summary, found = _load(
        [{"name": "no label", "x": 1, "z": 1}, "junk"],
        [{"from": "A"}],
    )
    assert graph.stations == {}
    assert [d.kind for d in found] == [DiagnosticKind.INVALID_RECORD] * 3
    assert summary.stations_skipped == 2


def test_default_reporter_warns():
    graph = GraphModel()
    with pytest.warns(RailmapWarning, match="no position"):
        load_graph(graph, [{"label": "X", "name": "X", "x": None, "z": 1}], [])


def test_connections_sorted_by_group_id_stable():
    graph, _, _ = _load(NETWORK_STATIONS, NETWORK_CONNECTIONS)
    pairs = [(c.group.id, c.from_station.label, c.to_station.label) for c in graph.connections]
    assert pairs == [(1, "A", "B"), (1, "B", "C"), (2, "B", "D")]
    assert graph.connections[1].two_way is True


def test_group_membership_in_first_seen_order():
    graph, _, _ = _load(NETWORK_STATIONS, NETWORK_CONNECTIONS)
    # Blue (B -> D) is the first record, so it precedes Red on station B
    assert [g.name for g in graph.stations["B"].groups] == ["Blue", "Red"]
    assert [g.name for g in graph.stations["A"].groups] == ["Red"]


def test_lines_created_per_group():
    conns = [
        RED_A_TO_B,
        {**RED_A_TO_B, "from": "B", "to": "A", "line_id": 2},
    ]
    graph, _, _ = _load(TWO_STATIONS, conns)
    assert sorted(graph.group(1).lines) == ["1", "2"]
    assert len(graph.lines) == 2


def test_connections_between_is_unordered():
    graph, _, _ = _load(NETWORK_STATIONS, NETWORK_CONNECTIONS)
    assert graph.connections_between("C", "B") == graph.connections_between("B", "C")
    assert len(graph.connections_between("B", "C")) == 1
    assert graph.connections_between("A", "D") == []


def test_legacy_field_names_accepted():
    station = StationRecord.from_mapping(
        {"label": "A", "name": "Alpha", "x_position": 3, "z_position": 4}
    )
    assert (station.x, station.z) == (3.0, 4.0)
    conn = ConnectionRecord.from_mapping(
        {
            "from_station_label": "A",
            "to_station_label": "B",
            "group_id": 7,
            "group_name": "G",
            "colour": "00ff00",
        }
    )
    assert conn.color == "00ff00"
    assert conn.line_id is None


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0.0), ("2.5", 2.5), (None, None), ("abc", None), (float("nan"), None), (True, None)],
)
def test_coerce_coordinate(value, expected):
    assert coerce_coordinate(value) == expected


def test_normalize_color():
    assert normalize_color("ff0000") == "#ff0000"
    assert normalize_color("#00ff00") == "#00ff00"


def test_null_fields_fall_back_like_missing_ones():
    station = StationRecord.from_mapping(
        {"label": "A", "name": None, "x": None, "x_position": 3, "z": 4}
    )
    assert station.name == "A"
    assert station.x == 3.0
    conn = ConnectionRecord.from_mapping(
        {"from": "A", "to": "B", "group_id": 2, "group_name": None, "color": None}
    )
    assert conn.group_name == "2"
    assert conn.color == "fff"


@pytest.mark.parametrize("value, expected", [(1, "1"), ("1", "1"), (1.0, "1"), ("Red", "Red")])
def test_id_key(value, expected):
    assert id_key(value) == expected
