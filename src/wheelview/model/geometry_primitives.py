"""
Geometric Primitives for the wheel layout and touch physics.

All coordinates are screen coordinates: x grows to the right, y grows DOWN.
"""
from __future__ import annotations
from dataclasses import dataclass
import math


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass
class Vector:
    """
    A vector in 2D space, used for the force and radius vectors of a fling.
    """
    x: float = 0.0
    y: float = 0.0

    def cross(self, other: Vector) -> float:
        """Z component of the 3D cross product of the two planar vectors."""
        return self.x * other.y - self.y * other.x


@dataclass
class Rect:
    """Axis aligned rectangle, right/bottom exclusive."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.right) / 2.0, (self.top + self.bottom) / 2.0

    def intersects(self, other: Rect) -> bool:
        # Touching edges do not count as an intersection
        return (self.left < other.right and other.left < self.right
                and self.top < other.bottom and other.top < self.bottom)

    def inset(self, dx: float, dy: float) -> Rect:
        """Shrinks the rectangle by dx/dy on every side (negative values grow it)."""
        return Rect(self.left + dx, self.top + dy, self.right - dx, self.bottom - dy)


@dataclass
class Circle:
    """
    A circle with helpers for hit testing and angle measurement.
    Used for the wheel bounds as well as for every item bound.
    """
    center_x: float
    center_y: float
    radius: float = 0.0

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError(f"Circle radius must be non-negative, got {self.radius}")

    def distance_squared_to(self, x: float, y: float) -> float:
        dx = self.center_x - x
        dy = self.center_y - y
        return dx * dx + dy * dy

    def contains(self, x: float, y: float) -> bool:
        return self.distance_squared_to(x, y) <= self.radius * self.radius

    def bounding_box(self) -> Rect:
        return Rect(
            _round_half_up(self.center_x - self.radius),
            _round_half_up(self.center_y - self.radius),
            _round_half_up(self.center_x + self.radius),
            _round_half_up(self.center_y + self.radius),
        )

    def angle_to(self, x: float, y: float) -> float:
        """
        The angle in radians from the circle's center to (x, y), in [-pi, pi].
        y is considered to go down, so points above the center have a positive angle.
        """
        return math.atan2(self.center_y - y, x - self.center_x)

    def angle_to_degrees(self, x: float, y: float) -> float:
        return math.degrees(self.angle_to(x, y))

    def radius_vector_to(self, x: float, y: float) -> Vector:
        """Vector pointing from (x, y) back to the center."""
        return Vector(self.center_x - x, self.center_y - y)

    def __str__(self) -> str:
        return f"Radius: {self.radius} X: {self.center_x} Y: {self.center_y}"
