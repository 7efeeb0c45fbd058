"""Renderer configuration with validation and per-option fallback."""

from __future__ import annotations

__all__ = ["RendererConfig", "load_config", "resolve_config"]

import json
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from railmap import constants
from railmap.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticReporter,
    warn_diagnostic,
)


@dataclass(frozen=True)
class RendererConfig:
    """Visual and interaction options for a RailwayMapRenderer."""

    background_style: str = constants.BACKGROUND_STYLE
    font_size: float = constants.FONT_SIZE
    font: str = constants.FONT
    font_color: str = constants.FONT_COLOR
    line_width: float = constants.LINE_WIDTH
    station_group_offset: float = constants.STATION_GROUP_OFFSET
    station_radius: float = constants.STATION_RADIUS
    station_stroke_width: float = constants.STATION_STROKE_WIDTH
    fan_width: float = constants.FAN_WIDTH
    label_offset: float = constants.LABEL_OFFSET
    min_scale: float = constants.MIN_SCALE
    max_scale: float = constants.MAX_SCALE
    scroll_sensitivity: float = constants.SCROLL_SENSITIVITY
    pinch_sensitivity: float = constants.PINCH_SENSITIVITY
    dimmed_opacity: float = constants.DIMMED_OPACITY
    show_stations_with_no_connections: bool = True
    debug_overlay: bool = False


_DEFAULTS = RendererConfig()
_FIELD_NAMES = {f.name for f in fields(RendererConfig)}

# Options that must be strictly positive; the rest may be zero.
_POSITIVE = {
    "font_size",
    "line_width",
    "station_radius",
    "min_scale",
    "max_scale",
}
_NON_NEGATIVE = {
    "station_group_offset",
    "station_stroke_width",
    "fan_width",
    "label_offset",
    "scroll_sensitivity",
    "pinch_sensitivity",
}
_BOOLEAN = {"show_stations_with_no_connections", "debug_overlay"}
_STRING = {"background_style", "font", "font_color"}

# Option names used by older embeddings of the renderer
_ALIASES = {
    "bg_style": "background_style",
    "station_groups_offset": "station_group_offset",
    "render_debug": "debug_overlay",
    "font_style": "font_color",
}


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _check_value(name: str, value: Any) -> str | None:
    """Return a problem description for *value*, or None if it is valid."""
    if name in _BOOLEAN:
        return None if isinstance(value, bool) else "must be a boolean"
    if name in _STRING:
        return None if isinstance(value, str) and value else "must be a non-empty string"
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "must be a number"
    if not math.isfinite(value):
        return "must be finite"
    if name in _POSITIVE and value <= 0:
        return "must be greater than zero"
    if name in _NON_NEGATIVE and value < 0:
        return "must not be negative"
    if name == "dimmed_opacity" and not 0 <= value <= 1:
        return "must be between 0 and 1"
    return None


def resolve_config(
    config: RendererConfig | Mapping[str, Any] | None,
    report: DiagnosticReporter = warn_diagnostic,
) -> RendererConfig:
    """Validate *config* and replace every invalid option by its default.

    Mappings may use snake_case or camelCase keys, including the older
    names (``bgStyle``, ``stationGroupsOffset``, ``renderDebug``,
    ``fontStyle``); unknown keys are reported and ignored. Problems are reported as INVALID_CONFIG diagnostics.
    """
    if config is None:
        return _DEFAULTS

    if isinstance(config, RendererConfig):
        values = {f.name: getattr(config, f.name) for f in fields(RendererConfig)}
    else:
        values = {}
        for key, value in config.items():
            name = _snake_case(key)
            name = _ALIASES.get(name, name)
            if name not in _FIELD_NAMES:
                report(
                    Diagnostic(
                        DiagnosticKind.INVALID_CONFIG,
                        f"Unknown option {key!r} ignored",
                        {key: value},
                    )
                )
                continue
            values[name] = value

    resolved: dict[str, Any] = {}
    for name, value in values.items():
        problem = _check_value(name, value)
        if problem is None:
            resolved[name] = value
            continue
        report(
            Diagnostic(
                DiagnosticKind.INVALID_CONFIG,
                f"Option {name!r}={value!r} {problem}; using default "
                f"{getattr(_DEFAULTS, name)!r}",
                {name: value},
            )
        )

    result = replace(_DEFAULTS, **resolved)
    if result.min_scale > result.max_scale:
        report(
            Diagnostic(
                DiagnosticKind.INVALID_CONFIG,
                f"min_scale {result.min_scale!r} exceeds max_scale "
                f"{result.max_scale!r}; using defaults "
                f"{_DEFAULTS.min_scale!r}..{_DEFAULTS.max_scale!r}",
                {"min_scale": result.min_scale, "max_scale": result.max_scale},
            )
        )
        result = replace(
            result, min_scale=_DEFAULTS.min_scale, max_scale=_DEFAULTS.max_scale
        )
    return result


def load_config(
    path: str | Path, report: DiagnosticReporter = warn_diagnostic
) -> RendererConfig:
    """Read a JSON object of options from *path* and resolve it."""
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return resolve_config(data, report)
