#!/usr/bin/env python3
"""Batch render every dataset under examples/ to SVG.

A dataset is a directory holding ``stations.json`` and ``connections.json``,
plus an optional ``route.json`` that is highlighted on top of the map.
Outputs go to /tmp/railmap_example_renders/.

Usage:
    python scripts/render_examples.py
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from railmap.config import RendererConfig  # noqa: E402
from railmap.diagnostics import Diagnostic  # noqa: E402
from railmap.render.surface import SvgSurface  # noqa: E402
from railmap.renderer import RailwayMapRenderer  # noqa: E402

OUTPUT_DIR = Path("/tmp/railmap_example_renders")
EXAMPLES_DIR = project_root / "examples"


def _collect_datasets() -> list[Path]:
    return sorted(p.parent for p in EXAMPLES_DIR.rglob("stations.json"))


def render_dataset(
    dataset: Path,
    output_dir: Path,
    *,
    debug: bool = False,
    width: float = 1200,
    height: float = 800,
) -> tuple[str, list[str]]:
    """Load, render and save one dataset.

    Returns (name, list_of_issues).  Diagnostics raised while ingesting
    records or matching the route are reported as issues, not errors.
    """
    name = str(dataset.relative_to(EXAMPLES_DIR)).replace("/", "_")
    issues: list[str] = []

    def collect(diagnostic: Diagnostic) -> None:
        issues.append(str(diagnostic))

    try:
        stations = json.loads((dataset / "stations.json").read_text())
        connections = json.loads((dataset / "connections.json").read_text())
        route_path = dataset / "route.json"
        route = json.loads(route_path.read_text()) if route_path.exists() else None
    except (OSError, json.JSONDecodeError) as e:
        return name, [f"READ ERROR: {e}"]

    surface = SvgSurface(width, height)
    renderer = RailwayMapRenderer(
        surface, RendererConfig(debug_overlay=debug), on_diagnostic=collect
    )
    try:
        renderer.set_data(stations, connections)
        if renderer.graph.stations:
            xs = [s.x for s in renderer.graph.stations.values()]
            ys = [s.y for s in renderer.graph.stations.values()]
            renderer.viewport.center_on((min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2)
        if route is not None:
            renderer.set_route(route)
        else:
            renderer.draw()
    except (TypeError, ValueError) as e:
        return name, [f"RENDER ERROR: {e}"]

    surface.save_svg(output_dir / f"{name}.svg")
    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render all example datasets")
    parser.add_argument(
        "--debug", action="store_true", help="Outline clickable hit regions"
    )
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    datasets = _collect_datasets()
    if not datasets:
        print(f"No datasets found under {EXAMPLES_DIR}/")
        return
    print(f"Rendering {len(datasets)} datasets to {OUTPUT_DIR}/")
    if args.debug:
        print("Debug overlay: ON")
    print()

    max_name_len = max(len(str(d.relative_to(EXAMPLES_DIR))) for d in datasets)
    any_errors = False

    for dataset in datasets:
        name, issues = render_dataset(dataset, OUTPUT_DIR, debug=args.debug)
        status = "OK" if not issues else "ISSUES"
        if any("ERROR" in i for i in issues):
            status = "FAIL"
            any_errors = True

        print(f"  {name:<{max_name_len}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    print(f"\nOutputs in: {OUTPUT_DIR}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
