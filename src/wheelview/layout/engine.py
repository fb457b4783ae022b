"""
Wheel Layout Engine
===================
Computes the wheel bounds and the pre-rotation item slots, and maps raw
(unbounded) item positions onto adapter positions and wheel slots.

Slots are laid out once per layout pass around the wheel center, relative to
the selection angle. The on-screen position of a slot for a given frame is
obtained by rotating its reference center by the wheel angle.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, TYPE_CHECKING

import numpy as np

from wheelview.config import WheelConfig, WheelPosition
from wheelview.exceptions import ConfigurationError
from wheelview.model.geometry_primitives import Circle, Rect
from wheelview.model.geometry_utils import (
    item_angle_for_radius,
    item_radius_for_angle,
    normalize_to_180,
    rotate_points,
    wrap_index,
)
from wheelview.model.state import WheelGeometry

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Padding = tuple[float, float, float, float]  # left, top, right, bottom


class WheelLayout:
    """
    Owns the WheelGeometry of one wheel.

    The requested radii (which may be None for "fill") are kept separately from the
    resolved values stored in the geometry, so every layout pass starts from the
    user's request again.
    """

    def __init__(self, config: WheelConfig, geometry: Optional[WheelGeometry] = None) -> None:
        self.geometry = geometry or WheelGeometry()
        self.geometry.is_repeatable = config.repeatable
        self.geometry.item_angle_padding = config.item_angle_padding
        self.geometry.selection_angle = normalize_to_180(config.selection_angle)

        self.requested_wheel_radius: Optional[float] = config.wheel_radius
        self.requested_item_radius: float = config.item_radius
        self.requested_wheel_to_item_distance: Optional[float] = config.wheel_to_item_distance
        self.wheel_padding: float = config.wheel_padding
        self.offset_x: float = config.offset_x
        self.offset_y: float = config.offset_y
        self.position: WheelPosition = WheelPosition(config.position)

        self.viewport: Rect = Rect(0, 0, 0, 0)
        self.slots: list[Circle] = []
        self._slot_centers: npt.NDArray[np.float64] = np.zeros((0, 2))
        self._size: Optional[tuple[float, float, Padding]] = None

        if config.item_count:
            self.set_item_count(config.item_count)
        elif config.item_angle:
            self.set_item_angle(config.item_angle)
        elif config.wheel_to_item_distance and config.item_radius > 0:
            try:
                item_angle = item_angle_for_radius(config.item_radius, config.wheel_to_item_distance)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
            self.set_item_angle(item_angle)

    # ------------------------------------------------------------------
    # Item count / angle
    # ------------------------------------------------------------------
    @property
    def item_count(self) -> int:
        return self.geometry.item_count

    @property
    def item_angle(self) -> float:
        return self.geometry.item_angle

    def set_item_count(self, count: int) -> None:
        if count <= 0:
            raise ConfigurationError(f"Item count must be positive, got {count}")
        self.geometry.item_count = int(count)
        self.geometry.item_angle = 360.0 / count
        self._relayout_slots()

    def set_item_angle(self, angle: float) -> None:
        """Sets the angle per item. The angle padding is added on top of it."""
        item_angle = angle + self.geometry.item_angle_padding
        if angle <= 0 or item_angle > 360.0:
            raise ConfigurationError(f"Invalid item angle: {angle}")
        self.geometry.item_angle = item_angle
        # rounded first so that derived angles such as 60.00000000000001 still fit 6 items
        self.geometry.item_count = int(round(360.0 / item_angle, 9))
        self._relayout_slots()

    def set_item_angle_padding(self, padding: float) -> None:
        if padding < 0:
            raise ConfigurationError(f"Invalid item angle padding: {padding}")
        base_angle = self.geometry.item_angle - self.geometry.item_angle_padding
        self.geometry.item_angle_padding = padding
        if base_angle > 0:
            self.set_item_angle(base_angle)

    def set_selection_angle(self, angle: float) -> None:
        self.geometry.selection_angle = normalize_to_180(angle)
        self._relayout_slots()

    def set_wheel_radius(self, radius: Optional[float]) -> None:
        if radius is not None and radius < 0:
            raise ConfigurationError(f"Invalid wheel radius: {radius}")
        self.requested_wheel_radius = radius
        self._relayout()

    def set_item_radius(self, radius: float) -> None:
        if radius < 0:
            raise ConfigurationError(f"Invalid item radius: {radius}")
        self.requested_item_radius = radius
        self._relayout()

    def set_wheel_to_item_distance(self, distance: Optional[float]) -> None:
        if distance is not None and distance < 0:
            raise ConfigurationError(f"Invalid wheel to item distance: {distance}")
        self.requested_wheel_to_item_distance = distance
        self._relayout()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def layout(self, width: float, height: float, padding: Padding = (0.0, 0.0, 0.0, 0.0)) -> bool:
        """
        Lays out the wheel inside a container of the given size.

        A zero width or height keeps the previous geometry.

        Returns:
            True if a layout pass was performed.
        """
        if width <= 0 or height <= 0:
            logger.debug(f"Skipping layout for empty size {width}x{height}")
            return False

        self._size = (width, height, padding)
        self.viewport = Rect(0, 0, width, height)
        self.geometry.wheel_bounds = self._measure_wheel_bounds(width, height, padding)
        self.layout_item_slots()
        return True

    def _relayout(self) -> None:
        if self._size is not None:
            self.layout(*self._size)

    def _relayout_slots(self) -> None:
        if self.geometry.is_laid_out:
            self.layout_item_slots()

    def _measure_wheel_bounds(self, width: float, height: float, padding: Padding) -> Circle:
        relative_horizontal, relative_vertical = 0.5, 0.5
        if WheelPosition.LEFT in self.position:
            relative_horizontal -= 0.5
        if WheelPosition.RIGHT in self.position:
            relative_horizontal += 0.5
        if WheelPosition.TOP in self.position:
            relative_vertical -= 0.5
        if WheelPosition.BOTTOM in self.position:
            relative_vertical += 0.5

        center_x = self.offset_x + width * relative_horizontal
        center_y = self.offset_y + height * relative_vertical

        if self.requested_wheel_radius is None:
            pad_left, pad_top, pad_right, pad_bottom = padding
            radius = min(width - pad_left - pad_right, height - pad_top - pad_bottom) / 2.0
        else:
            radius = self.requested_wheel_radius

        return Circle(center_x, center_y, max(0.0, radius))

    def _resolve_item_geometry(self, wheel_radius: float) -> tuple[float, float]:
        """Returns (item_radius, wheel_to_item_distance)."""
        item_radius = self.requested_item_radius
        distance = self.requested_wheel_to_item_distance
        sin_half = math.sin(math.radians((self.geometry.item_angle - self.geometry.item_angle_padding) / 2.0))

        if distance is None:
            available = max(0.0, wheel_radius - self.wheel_padding)
            if item_radius == 0:
                # r = (R - p - r) * sin(a / 2), the largest item still touching the rim
                item_radius = available * sin_half / (1.0 + sin_half)
            distance = max(0.0, available - item_radius)
        elif item_radius == 0:
            item_radius = item_radius_for_angle(
                self.geometry.item_angle, distance, self.geometry.item_angle_padding
            )

        return max(0.0, item_radius), distance

    def layout_item_slots(self) -> None:
        """
        Computes the pre-rotation bounds of every slot around the wheel.
        """
        bounds = self.geometry.wheel_bounds
        if bounds is None:
            return

        item_radius, distance = self._resolve_item_geometry(bounds.radius)
        self.geometry.item_radius = item_radius
        self.geometry.wheel_to_item_distance = distance

        count = self.geometry.item_count
        angles = np.radians(self.geometry.item_angle) * np.arange(count) - np.radians(self.geometry.selection_angle)
        self._slot_centers = np.column_stack((
            bounds.center_x + distance * np.cos(angles),
            bounds.center_y + distance * np.sin(angles),
        )).reshape(-1, 2)
        self.slots = [Circle(float(x), float(y), item_radius) for x, y in self._slot_centers]

        logger.debug(
            f"Laid out {count} slots: wheel {bounds}, item radius {item_radius:.2f}, distance {distance:.2f}"
        )

    @property
    def slot_centers(self) -> npt.NDArray[np.float64]:
        return self._slot_centers.copy()

    def rotated_slot_centers(self, angle: Optional[float] = None) -> npt.NDArray[np.float64]:
        """Slot centers rotated about the wheel center by the given (default: current) wheel angle."""
        bounds = self.geometry.wheel_bounds
        if bounds is None or len(self._slot_centers) == 0:
            return np.zeros((0, 2))
        if angle is None:
            angle = self.geometry.angle
        return rotate_points(self._slot_centers, (bounds.center_x, bounds.center_y), angle)

    # ------------------------------------------------------------------
    # Position mapping
    # ------------------------------------------------------------------
    def _wraps(self) -> bool:
        return self.geometry.is_repeatable and self.geometry.adapter_item_count > 0

    def is_empty_position(self, position: int) -> bool:
        """True for positions outside the adapter range. Only possible with non-repeatable items."""
        return not self.geometry.is_repeatable and not (0 <= position < self.geometry.adapter_item_count)

    def raw_to_adapter_position(self, raw_position: int) -> int:
        if self._wraps():
            return wrap_index(raw_position, self.geometry.adapter_item_count)
        return raw_position

    def raw_to_slot_index(self, raw_position: int, adapter_position: Optional[int] = None) -> int:
        """
        Converts the raw position to a slot index within [0, item_count).

        With repeatable items, each adapter cycle is shifted by the difference between
        the adapter and slot counts so rotation stays continuous across wrap boundaries.
        """
        if adapter_position is None:
            adapter_position = self.raw_to_adapter_position(raw_position)

        circular_offset = 0
        if self._wraps():
            adapter_count = self.geometry.adapter_item_count
            circular_offset = (raw_position // adapter_count) * (adapter_count - self.geometry.item_count)
        return wrap_index(adapter_position + circular_offset, self.geometry.item_count)

    def angle_for_position(self, raw_position: int) -> float:
        """The absolute angle of the item at the given raw position."""
        return raw_position * self.geometry.item_angle
