"""Command-line interface: render railway map records to SVG."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

import click

from railmap.config import RendererConfig, load_config
from railmap.diagnostics import Diagnostic
from railmap.ingest import load_graph
from railmap.model import GraphModel
from railmap.renderer import RailwayMapRenderer
from railmap.render.surface import SvgSurface


def _read_records(path: Path, what: str) -> list[dict[str, Any]]:
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{path}: invalid JSON ({e})", param_hint=what)
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise click.BadParameter(
            f"{path}: expected a JSON array of objects", param_hint=what
        )
    return data


def _echo_diagnostic(diagnostic: Diagnostic) -> None:
    click.echo(f"warning: {diagnostic}", err=True)


def _graph_center(graph: GraphModel) -> tuple[float, float]:
    if not graph.stations:
        return (0.0, 0.0)
    xs = [s.x for s in graph.stations.values()]
    ys = [s.y for s in graph.stations.values()]
    return ((min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2)


@click.group()
@click.version_option(package_name="railmap")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """railmap - interactive railway map renderer."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


@cli.command()
@click.argument("stations", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument(
    "connections", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output SVG file.",
)
@click.option(
    "--route",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON array of route steps to highlight.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON object of renderer options.",
)
@click.option("--width", type=float, default=1200.0, show_default=True)
@click.option("--height", type=float, default=800.0, show_default=True)
@click.option("--scale", type=float, default=1.0, show_default=True)
@click.option(
    "--center",
    type=(float, float),
    default=None,
    help="World X Y at the centre of the image (default: middle of the map).",
)
@click.option("--debug", is_flag=True, help="Outline clickable hit regions.")
def render(
    stations: Path,
    connections: Path,
    output: Path,
    route: Path | None,
    config_path: Path | None,
    width: float,
    height: float,
    scale: float,
    center: tuple[float, float] | None,
    debug: bool,
) -> None:
    """Render STATIONS and CONNECTIONS (JSON record arrays) to an SVG file."""
    station_records = _read_records(stations, "STATIONS")
    connection_records = _read_records(connections, "CONNECTIONS")
    route_steps = _read_records(route, "--route") if route else None

    if config_path is not None:
        try:
            config = load_config(config_path, _echo_diagnostic)
        except (ValueError, json.JSONDecodeError) as e:
            raise click.BadParameter(str(e), param_hint="--config")
    else:
        config = RendererConfig()
    if debug:
        config = replace(config, debug_overlay=True)

    surface = SvgSurface(width, height)
    renderer = RailwayMapRenderer(surface, config, on_diagnostic=_echo_diagnostic)
    renderer.set_data(station_records, connection_records)

    renderer.viewport.scale = scale
    renderer.viewport.set_limits(renderer.config.min_scale, renderer.config.max_scale)
    renderer.viewport.center_on(*(center or _graph_center(renderer.graph)))

    if route_steps is not None:
        renderer.set_route(route_steps)
    else:
        renderer.draw()

    surface.save_svg(output)
    click.echo(
        f"Rendered {len(renderer.graph.stations)} stations and "
        f"{len(renderer.graph.connections)} connections to {output}"
    )


@cli.command()
@click.argument("stations", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument(
    "connections", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
def stats(stations: Path, connections: Path) -> None:
    """Print what the records ingest to, without rendering."""
    graph = GraphModel()
    summary = load_graph(
        graph,
        _read_records(stations, "STATIONS"),
        _read_records(connections, "CONNECTIONS"),
        _echo_diagnostic,
    )
    isolated = sum(1 for label in graph.stations if graph.station_degree(label) == 0)
    click.echo(f"Stations:    {summary.stations} ({summary.stations_skipped} skipped)")
    click.echo(f"Isolated:    {isolated}")
    click.echo(f"Groups:      {len(graph.groups)}")
    click.echo(f"Lines:       {len(graph.lines)}")
    click.echo(
        f"Connections: {summary.connections} "
        f"({summary.merged_two_way} two-way, {summary.connections_skipped} skipped)"
    )


if __name__ == "__main__":
    cli()
