"""
Module: geometry

Purpose:
    Point and GeometryBox value types for the editable content region.
    Coordinates are page-canvas pixels (794x1123 canvas at 96 DPI),
    origin at the top-left.

Key Classes:
    - Point: Pointer position
    - GeometryBox: Content region rectangle

Dependencies:
    - dataclasses (std)

Used By:
    - composer.geometry.model: Gesture arithmetic
    - composer.config: Default region
    - composer.output.rasterizer: Placing content on the page
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Point:
    """Pointer position in global (screen or test) coordinates."""

    x: float
    y: float

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


@dataclass(frozen=True, slots=True)
class GeometryBox:
    """
    Content region rectangle.

    x/y are not bounded by the page canvas: the region may be dragged
    partly or fully off-page. Minimum width/height are enforced by the
    geometry model, which knows the configured minimums.

    Attributes:
        x: Left edge in canvas pixels
        y: Top edge in canvas pixels
        width: Region width in pixels (> 0)
        height: Region height in pixels (> 0)

    Example:
        >>> box = GeometryBox(80, 120, 630, 850)
        >>> box.moved_to(100, 100).size
        (630, 850)
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def moved_to(self, x: float, y: float) -> "GeometryBox":
        return replace(self, x=x, y=y)

    def resized_to(self, width: float, height: float) -> "GeometryBox":
        return replace(self, width=width, height=height)

    def contains(self, point: Point) -> bool:
        """Check if point lies inside the box (edges inclusive)."""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom
