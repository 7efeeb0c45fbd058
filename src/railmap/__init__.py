"""railmap: interactive pan/zoom renderer for transit-style railway maps."""

from railmap.config import RendererConfig
from railmap.diagnostics import Diagnostic, DiagnosticKind, RailmapWarning
from railmap.renderer import (
    ConnectionClickedEvent,
    GroupInfo,
    RailwayMapRenderer,
    StationClickedEvent,
)
from railmap.render.surface import DrawingSurface, SvgSurface

__all__ = [
    "ConnectionClickedEvent",
    "Diagnostic",
    "DiagnosticKind",
    "DrawingSurface",
    "GroupInfo",
    "RailmapWarning",
    "RailwayMapRenderer",
    "RendererConfig",
    "StationClickedEvent",
    "SvgSurface",
]
