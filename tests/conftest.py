"""Shared test fixtures and record data for the railmap test suite."""

from __future__ import annotations

import pytest

from railmap.renderer import RailwayMapRenderer
from recording_surface import RecordingSurface

# --- Record constants ---

TWO_STATIONS = [
    {"label": "A", "name": "Alpha", "x": 0, "z": 0},
    {"label": "B", "name": "Beta", "x": 10, "z": 0},
]

RED_A_TO_B = {
    "from": "A",
    "to": "B",
    "group_id": 1,
    "group_name": "Red",
    "color": "ff0000",
    "line_id": 1,
}

# A - B - C on the red group, B - D on blue; B belongs to both groups.
NETWORK_STATIONS = [
    {"label": "A", "name": "Alpha", "x": -100, "z": 0},
    {"label": "B", "name": "Beta", "x": 0, "z": 0},
    {"label": "C", "name": "Gamma", "x": 100, "z": 0},
    {"label": "D", "name": "Delta", "x": 0, "z": 100},
]

NETWORK_CONNECTIONS = [
    {"from_label": "B", "to_label": "D", "group_id": 2, "group_name": "Blue",
     "color": "0000ff", "line_id": 20},
    {"from_label": "A", "to_label": "B", "group_id": 1, "group_name": "Red",
     "color": "ff0000", "line_id": 10},
    {"from_label": "B", "to_label": "C", "group_id": 1, "group_name": "Red",
     "color": "ff0000", "line_id": 10},
    {"from_label": "C", "to_label": "B", "group_id": 1, "group_name": "Red",
     "color": "ff0000", "line_id": 10},
]


# --- Pytest fixtures ---


@pytest.fixture
def diagnostics() -> list:
    """Collects every diagnostic a component reports."""
    return []


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface(800, 600)


@pytest.fixture
def renderer(surface, diagnostics) -> RailwayMapRenderer:
    """A renderer on a recording surface that collects diagnostics."""
    return RailwayMapRenderer(surface, on_diagnostic=diagnostics.append)


@pytest.fixture
def network_renderer(renderer) -> RailwayMapRenderer:
    """Renderer loaded with the four-station, two-group network."""
    renderer.set_data(NETWORK_STATIONS, NETWORK_CONNECTIONS)
    return renderer
