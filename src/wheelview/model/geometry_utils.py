from __future__ import annotations

from typing import TYPE_CHECKING

from math import asin, sin, degrees, radians
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt


def normalize_to_180(angle: float) -> float:
    """
    Map any angle in degrees into [-180, 180).

    The second modulo keeps tiny negative inputs (where `x % 360` rounds up to
    exactly 360.0) inside the range.
    """
    return ((angle + 180.0) % 360.0 + 360.0) % 360.0 - 180.0


def shortest_signed_angle_diff(angle_a: float, angle_b: float) -> float:
    """
    The shortest rotation (in degrees) that takes angle_b onto angle_a.

    Both inputs must already lie within [-180, 180] (as returned by atan2).
    """
    angle = angle_a - angle_b
    if angle > 180.0:
        angle -= 360.0
    elif angle < -180.0:
        angle += 360.0
    return angle


def wrap_index(value: int, modulus: int) -> int:
    """
    Wrap any integer (including large negative ones) into [0, modulus).

    Raises:
        ValueError: if modulus is not positive.
    """
    if modulus <= 0:
        raise ValueError(f"Cannot wrap an index with modulus {modulus}")
    # Integer modulo in Python is floored, so it is exact for negative values
    return int(value) % modulus


def rotate_points(
    points: npt.NDArray[np.float64],
    center: tuple[float, float],
    angle_degrees: float
) -> npt.NDArray[np.float64]:
    """
    Rotate (N, 2) points about a center.

    Positive angles rotate clockwise on screen (y down), matching the way the
    wheel drawable is rotated.

    Args:
        points: Array of shape (n, 2) with the (x, y) coordinates.
        center: (x, y) coordinates of the rotation center.
        angle_degrees: Rotation angle in degrees.

    Returns:
        A new array of shape (n, 2) with the rotated coordinates.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    theta = radians(angle_degrees)
    cos_a = np.cos(theta)
    sin_a = np.sin(theta)
    rotation = np.array([[cos_a, -sin_a], [sin_a, cos_a]])

    # translate so that the origin is at the center, rotate, translate back
    origin = np.asarray(center, dtype=np.float64)
    return (pts - origin) @ rotation.T + origin


def item_angle_for_radius(item_radius: float, wheel_to_item_distance: float) -> float:
    """
    Angle (degrees) subtended at the wheel center by an item circle of the given radius.
    """
    if wheel_to_item_distance <= 0 or item_radius > wheel_to_item_distance:
        raise ValueError(
            f"Item radius {item_radius} does not fit at distance {wheel_to_item_distance}"
        )
    return 2.0 * degrees(asin(item_radius / wheel_to_item_distance))


def item_radius_for_angle(item_angle: float, wheel_to_item_distance: float, angle_padding: float = 0.0) -> float:
    """
    Find the largest circle to fit within the item angle.
    The point of intersection occurs at a tangent to the wheel item.
    """
    return wheel_to_item_distance * sin(radians((item_angle - angle_padding) / 2.0))
