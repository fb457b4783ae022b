"""
Configuration & Tunable Constants
=================================
This module is the central registry for the wheel configuration surface and
the physics constants.

Why is this file needed?
------------------------
1. Abstraction: The friction/velocity constants are tunable, so they live in one
   dataclass instead of being scattered through the integrator.
2. Validation: Misconfiguration fails fast with a ConfigurationError when the
   config is validated, not later as NaN angles.

Exports:
    PhysicsConfig: Friction and fling constants.
    WheelPosition: Alignment flags of the wheel inside its container.
    SelectionRounding: How a wheel angle is turned into a raw position.
    WheelConfig: The full configuration of one wheel.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, asdict
from enum import IntFlag, StrEnum
from typing import Any, Dict, Optional
import logging

from wheelview.exceptions import ConfigurationError
from wheelview.transformers import resolve_item_transformer, resolve_selection_transformer

logger = logging.getLogger(__name__)


@dataclass
class PhysicsConfig:
    """
    Velocities are in degrees per millisecond.
    """
    velocity_friction: float = 0.015      # scales velocity^2
    constant_friction: float = 0.0028     # guarantees the wheel stops in finite time
    angular_velocity_gain: float = 22.0   # angular acceleration -> initial velocity
    max_angular_velocity: float = 0.3

    def validate(self) -> None:
        if self.velocity_friction < 0:
            raise ConfigurationError(f"Velocity friction must be non-negative, got {self.velocity_friction}")
        if self.constant_friction <= 0:
            raise ConfigurationError(f"Constant friction must be positive, got {self.constant_friction}")
        if self.max_angular_velocity <= 0:
            raise ConfigurationError(f"Max angular velocity must be positive, got {self.max_angular_velocity}")


class WheelPosition(IntFlag):
    CENTER = 0
    LEFT = 0x01
    RIGHT = 0x02
    TOP = 0x04
    BOTTOM = 0x08


class SelectionRounding(StrEnum):
    TRUNCATE = "truncate"   # truncate -angle / item_angle toward zero
    NEAREST = "nearest"     # nearest item, ties away from zero


@dataclass
class WheelConfig:
    """
    Holds every user-facing wheel option.
    Logic:
    1. If 'item_count' is non-zero it wins and the item angle is 360 / count.
    2. Else if 'item_angle' is non-zero the count is floor(360 / angle).
    3. Else, with an explicit 'wheel_to_item_distance' and 'item_radius',
       the angle is the one subtended by an item circle.
    """
    wheel_radius: Optional[float] = None             # None -> fill the container
    item_count: int = 0
    item_angle: float = 0.0
    item_angle_padding: float = 0.0
    selection_angle: float = 0.0
    item_radius: float = 0.0                         # 0 -> largest circle fitting the item angle
    wheel_to_item_distance: Optional[float] = None   # None -> wheel radius - item radius - padding
    repeatable: bool = False
    wheel_drawable_rotatable: bool = True
    selection_padding: float = 0.0
    wheel_padding: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    position: WheelPosition = WheelPosition.CENTER
    item_transformer: Any = "scaling"
    selection_transformer: Any = "fading"
    click_max_dragged_angle: float = 0.7
    selection_rounding: SelectionRounding = SelectionRounding.TRUNCATE
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: on the first invalid value.
        """
        if self.wheel_radius is not None and self.wheel_radius < 0:
            raise ConfigurationError(f"Invalid wheel radius: {self.wheel_radius}")
        if self.wheel_to_item_distance is not None and self.wheel_to_item_distance < 0:
            raise ConfigurationError(f"Invalid wheel to item distance: {self.wheel_to_item_distance}")
        if self.item_radius < 0:
            raise ConfigurationError(f"Invalid item radius: {self.item_radius}")
        if self.item_count < 0:
            raise ConfigurationError(f"Invalid item count: {self.item_count}")
        if self.item_angle < 0 or self.item_angle + self.item_angle_padding > 360.0:
            raise ConfigurationError(f"Invalid item angle: {self.item_angle}")
        if self.item_angle_padding < 0:
            raise ConfigurationError(f"Invalid item angle padding: {self.item_angle_padding}")
        derives_item_angle = not self.item_count and not self.item_angle and self.wheel_to_item_distance
        if derives_item_angle and self.item_radius > self.wheel_to_item_distance:
            raise ConfigurationError(
                f"Item radius {self.item_radius} does not fit at distance {self.wheel_to_item_distance}"
            )
        for name in ("selection_padding", "wheel_padding"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"Invalid {name}: {getattr(self, name)}")
        if self.click_max_dragged_angle < 0:
            raise ConfigurationError(f"Invalid click threshold: {self.click_max_dragged_angle}")

        resolve_item_transformer(self.item_transformer)
        resolve_selection_transformer(self.selection_transformer)
        self.physics.validate()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["position"] = int(self.position)
        data["selection_rounding"] = self.selection_rounding.value
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> WheelConfig:
        known = {f.name for f in fields(WheelConfig)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown wheel options: {', '.join(sorted(unknown))}")

        values = dict(data)
        if "physics" in values and isinstance(values["physics"], dict):
            try:
                values["physics"] = PhysicsConfig(**values["physics"])
            except TypeError as e:
                raise ConfigurationError(f"Invalid physics options: {e}") from e
        if "position" in values:
            values["position"] = WheelPosition(int(values["position"]))
        if "selection_rounding" in values:
            try:
                values["selection_rounding"] = SelectionRounding(values["selection_rounding"])
            except ValueError as e:
                raise ConfigurationError(f"Unknown selection rounding: {values['selection_rounding']}") from e

        config = WheelConfig(**values)
        config.validate()
        logger.debug(f"Loaded wheel config with {len(data)} options.")
        return config
