"""Drawing surface contract and an SVG implementation built on drawsvg.

The renderer only needs filled/stroked circles, batches of straight stroked
segments, anchored text and a full-surface fill. Anti-aliasing and font
metrics are left to the surface.
"""

from __future__ import annotations

__all__ = ["DrawingSurface", "Segment", "SvgSurface", "TextAnchor"]

from collections.abc import Sequence
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

import drawsvg as draw

Segment = tuple[float, float, float, float]
TextAnchor = Literal["start", "middle"]


@runtime_checkable
class DrawingSurface(Protocol):
    """Screen-space drawing primitives used by the frame renderer."""

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    def clear(self, fill: str) -> None: ...

    def circle(
        self,
        cx: float,
        cy: float,
        r: float,
        fill: str,
        stroke: str | None = None,
        stroke_width: float = 0.0,
        opacity: float = 1.0,
    ) -> None: ...

    def stroke_segments(
        self,
        segments: Sequence[Segment],
        stroke: str,
        width: float,
        opacity: float = 1.0,
    ) -> None: ...

    def text(
        self,
        x: float,
        y: float,
        text: str,
        size: float,
        font: str,
        fill: str,
        anchor: TextAnchor = "middle",
        opacity: float = 1.0,
    ) -> None: ...


class SvgSurface:
    """Renders frames into an in-memory SVG document.

    Every :meth:`clear` starts a fresh document, so the SVG always holds
    exactly the last frame.
    """

    def __init__(self, width: float, height: float):
        self._width = width
        self._height = height
        self.drawing = draw.Drawing(width, height)

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def resize(self, width: float, height: float) -> None:
        self._width = width
        self._height = height
        self.drawing = draw.Drawing(width, height)

    def clear(self, fill: str) -> None:
        self.drawing = draw.Drawing(self._width, self._height)
        self.drawing.append(draw.Rectangle(0, 0, self._width, self._height, fill=fill))

    def circle(
        self,
        cx: float,
        cy: float,
        r: float,
        fill: str,
        stroke: str | None = None,
        stroke_width: float = 0.0,
        opacity: float = 1.0,
    ) -> None:
        attrs: dict[str, object] = {"fill": fill}
        if stroke and stroke_width > 0:
            attrs["stroke"] = stroke
            attrs["stroke_width"] = stroke_width
        if opacity < 1.0:
            attrs["opacity"] = opacity
        self.drawing.append(draw.Circle(cx, cy, r, **attrs))

    def stroke_segments(
        self,
        segments: Sequence[Segment],
        stroke: str,
        width: float,
        opacity: float = 1.0,
    ) -> None:
        if not segments:
            return
        attrs: dict[str, object] = {
            "stroke": stroke,
            "stroke_width": width,
            "fill": "none",
        }
        if opacity < 1.0:
            attrs["stroke_opacity"] = opacity
        path = draw.Path(**attrs)
        for x1, y1, x2, y2 in segments:
            path.M(x1, y1).L(x2, y2)
        self.drawing.append(path)

    def text(
        self,
        x: float,
        y: float,
        text: str,
        size: float,
        font: str,
        fill: str,
        anchor: TextAnchor = "middle",
        opacity: float = 1.0,
    ) -> None:
        attrs: dict[str, object] = {
            "fill": fill,
            "text_anchor": anchor,
            "font_family": font,
        }
        if opacity < 1.0:
            attrs["opacity"] = opacity
        self.drawing.append(draw.Text(text, size, x, y, **attrs))

    def as_svg(self) -> str:
        return self.drawing.as_svg()

    def save_svg(self, path: str | Path) -> None:
        Path(path).write_text(self.as_svg())
