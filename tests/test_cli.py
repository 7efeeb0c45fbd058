"""Tests for the command-line interface."""

import json
from pathlib import Path
import xml.etree.ElementTree as ET

import pytest
from click.testing import CliRunner

from conftest import NETWORK_CONNECTIONS, NETWORK_STATIONS
from railmap.cli import cli


@pytest.fixture
def record_files(tmp_path):
    stations = tmp_path / "stations.json"
    stations.write_text(json.dumps(NETWORK_STATIONS))
    connections = tmp_path / "connections.json"
    connections.write_text(json.dumps(NETWORK_CONNECTIONS))
    return stations, connections


def test_cli_render_writes_svg(tmp_path, record_files):
    stations, connections = record_files
    out = tmp_path / "map.svg"
    result = CliRunner().invoke(cli, ["render", str(stations), str(connections), "-o", str(out)])
    assert result.exit_code == 0, result.output
    root = ET.fromstring(out.read_text())
    assert root.tag.endswith("svg")
    assert "Rendered 4 stations and 3 connections" in result.output


def test_cli_render_with_route_and_debug(tmp_path, record_files):
    stations, connections = record_files
    route = tmp_path / "route.json"
    route.write_text(
        json.dumps(
            [{"current_station_label": "A", "next_station_label": "B", "current_line": 10}]
        )
    )
    out = tmp_path / "map.svg"
    result = CliRunner().invoke(
        cli,
        [
            "render", str(stations), str(connections), "-o", str(out),
            "--route", str(route), "--debug", "--scale", "2", "--center", "0", "0",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "stroke-opacity" in out.read_text()


def test_cli_render_reports_diagnostics(tmp_path):
    stations = tmp_path / "stations.json"
    stations.write_text(json.dumps([{"label": "A", "name": "Alpha", "x": 1}]))
    connections = tmp_path / "connections.json"
    connections.write_text("[]")
    out = tmp_path / "map.svg"
    result = CliRunner().invoke(
        cli, ["render", str(stations), str(connections), "-o", str(out)]
    )
    assert result.exit_code == 0
    assert "missing_position" in result.output


def test_cli_rejects_non_array_records(tmp_path, record_files):
    _, connections = record_files
    bad = tmp_path / "bad.json"
    bad.write_text('{"label": "A"}')
    result = CliRunner().invoke(
        cli, ["render", str(bad), str(connections), "-o", str(tmp_path / "x.svg")]
    )
    assert result.exit_code != 0
    assert "JSON array" in result.output


def test_cli_stats(record_files):
    stations, connections = record_files
    result = CliRunner().invoke(cli, ["stats", str(stations), str(connections)])
    assert result.exit_code == 0, result.output
    assert "Stations:    4" in result.output
    assert "Groups:      2" in result.output
    assert "1 two-way" in result.output


EXAMPLE_DIR = Path(__file__).parent.parent / "examples" / "ring_network"


def test_cli_renders_ring_network_example(tmp_path):
    out = tmp_path / "ring.svg"
    result = CliRunner().invoke(
        cli,
        [
            "render",
            str(EXAMPLE_DIR / "stations.json"),
            str(EXAMPLE_DIR / "connections.json"),
            "-o", str(out),
            "--route", str(EXAMPLE_DIR / "route.json"),
        ],
    )
    assert result.exit_code == 0, result.output
    svg = out.read_text()
    assert "Central" in svg and "Airport" in svg
    # Depot has no z position, so its freight connection is dropped too
    assert "missing_position" in result.output
    assert "missing_station" in result.output
    assert "Depot" not in svg
