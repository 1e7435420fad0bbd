"""Recorded drawing operations and their reportlab rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

from reportlab.pdfgen.canvas import Canvas

from ..types import RGB
from .resources import ImageHandle

Point = Tuple[float, float]

BLACK = RGB(0.0, 0.0, 0.0)


def _apply_style(
    canvas: Canvas,
    color: Optional[RGB],
    border_color: Optional[RGB],
    border_width: float,
    opacity: float,
) -> tuple[int, int]:
    if color is not None:
        canvas.setFillColorRGB(*color.as_tuple())
    if border_color is not None:
        canvas.setStrokeColorRGB(*border_color.as_tuple())
        canvas.setLineWidth(border_width)
    if opacity < 1.0:
        canvas.setFillAlpha(opacity)
        canvas.setStrokeAlpha(opacity)
    fill = 1 if color is not None else 0
    stroke = 1 if border_color is not None and border_width > 0 else 0
    return stroke, fill


@dataclass(frozen=True)
class TextOperation:
    text: str
    x: float
    y: float
    size: float
    font: str
    color: RGB = BLACK
    opacity: float = 1.0
    rotate: float = 0.0

    def render(self, canvas: Canvas) -> None:
        canvas.saveState()
        canvas.setFillColorRGB(*self.color.as_tuple())
        if self.opacity < 1.0:
            canvas.setFillAlpha(self.opacity)
        canvas.setFont(self.font, self.size)
        # rotation pivots on the text origin
        canvas.translate(self.x, self.y)
        if self.rotate:
            canvas.rotate(self.rotate)
        canvas.drawString(0, 0, self.text)
        canvas.restoreState()


@dataclass(frozen=True)
class ImageOperation:
    image: ImageHandle
    x: float
    y: float
    width: float
    height: float
    opacity: float = 1.0

    def render(self, canvas: Canvas) -> None:
        canvas.saveState()
        if self.opacity < 1.0:
            canvas.setFillAlpha(self.opacity)
        canvas.drawImage(
            self.image.reader,
            self.x,
            self.y,
            width=self.width,
            height=self.height,
            mask="auto",
        )
        canvas.restoreState()


@dataclass(frozen=True)
class RectangleOperation:
    x: float
    y: float
    width: float
    height: float
    color: Optional[RGB] = None
    border_color: Optional[RGB] = None
    border_width: float = 1.0
    radius: float = 0.0
    opacity: float = 1.0

    def render(self, canvas: Canvas) -> None:
        canvas.saveState()
        stroke, fill = _apply_style(canvas, self.color, self.border_color, self.border_width, self.opacity)
        if self.radius > 0:
            canvas.roundRect(self.x, self.y, self.width, self.height, self.radius, stroke=stroke, fill=fill)
        else:
            canvas.rect(self.x, self.y, self.width, self.height, stroke=stroke, fill=fill)
        canvas.restoreState()


@dataclass(frozen=True)
class CircleOperation:
    x: float
    y: float
    radius: float
    color: Optional[RGB] = None
    border_color: Optional[RGB] = None
    border_width: float = 1.0
    opacity: float = 1.0

    def render(self, canvas: Canvas) -> None:
        canvas.saveState()
        stroke, fill = _apply_style(canvas, self.color, self.border_color, self.border_width, self.opacity)
        canvas.circle(self.x, self.y, self.radius, stroke=stroke, fill=fill)
        canvas.restoreState()


@dataclass(frozen=True)
class PathOperation:
    """A closed polygon through ``points``."""

    points: Tuple[Point, ...]
    color: Optional[RGB] = None
    border_color: Optional[RGB] = None
    border_width: float = 1.0
    opacity: float = 1.0

    def render(self, canvas: Canvas) -> None:
        canvas.saveState()
        stroke, fill = _apply_style(canvas, self.color, self.border_color, self.border_width, self.opacity)
        path = canvas.beginPath()
        first, *rest = self.points
        path.moveTo(*first)
        for point in rest:
            path.lineTo(*point)
        path.close()
        canvas.drawPath(path, stroke=stroke, fill=fill)
        canvas.restoreState()


DrawOperation = Union[TextOperation, ImageOperation, RectangleOperation, CircleOperation, PathOperation]


def render_operations(canvas: Canvas, operations: Iterable[DrawOperation]) -> None:
    for operation in operations:
        operation.render(canvas)


def as_points(points: Sequence[Point]) -> Tuple[Point, ...]:
    result = tuple((float(x), float(y)) for x, y in points)
    if len(result) < 2:
        raise ValueError("A path needs at least two points")
    return result


__all__ = [
    "BLACK",
    "DrawOperation",
    "TextOperation",
    "ImageOperation",
    "RectangleOperation",
    "CircleOperation",
    "PathOperation",
    "render_operations",
    "as_points",
]
