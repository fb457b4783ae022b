"""
Wheel State (Data Model)
========================
Plain data holders shared by the layout, selection, gesture and physics code.

Classes:
    WheelGeometry: Result of a layout pass plus the current wheel angle.
    ItemState: Per-frame rotated position of one visible item.
    CacheEntry: Per-adapter-position content cache flags.
    GestureState: Touch tracking state.
    PhysicsState: Angular velocity and integration timestamp.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from wheelview.model.geometry_primitives import Circle


@dataclass
class WheelGeometry:
    """
    Holds the layout of one wheel. Recomputed in full by every layout pass.
    """
    wheel_bounds: Optional[Circle] = None
    item_angle: float = 0.0            # degrees per item, padding included
    item_angle_padding: float = 0.0
    selection_angle: float = 0.0       # normalized to [-180, 180)
    item_radius: float = 0.0
    wheel_to_item_distance: float = 0.0
    item_count: int = 0                # slots around the wheel
    angle: float = 0.0                 # current rotation, unbounded
    adapter_item_count: int = 0
    is_repeatable: bool = False

    @property
    def is_laid_out(self) -> bool:
        return self.wheel_bounds is not None


@dataclass
class ItemState:
    """
    Rotated position of an item for the current frame. Handed to the item and
    selection transformers.
    """
    adapter_position: int = 0
    raw_position: int = 0
    slot_index: int = 0
    bounds: Circle = field(default_factory=lambda: Circle(0.0, 0.0, 0.0))
    angle_from_selection: float = 0.0
    relative_position: float = 0.0


@dataclass
class CacheEntry:
    dirty: bool = True
    is_visible: bool = False
    is_empty: bool = False
    content: Any = None


class _EmptyCacheEntry(CacheEntry):
    """Shared read-only entry standing in for every empty position."""

    def __init__(self) -> None:
        super().__init__(dirty=False, is_visible=False, is_empty=True, content=None)
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_sealed", False):
            raise AttributeError("The empty cache entry is shared and cannot be modified")
        super().__setattr__(name, value)


EMPTY_CACHE_ENTRY: CacheEntry = _EmptyCacheEntry()


@dataclass
class GestureState:
    is_dragging: bool = False
    last_touch_angle: float = 0.0
    dragged_angle: float = 0.0
    last_x: float = 0.0
    last_y: float = 0.0
    last_time: float = 0.0
    clicked_slot: Optional[int] = None


@dataclass
class PhysicsState:
    angular_velocity: float = 0.0      # degrees per millisecond
    last_update_time: float = 0.0      # milliseconds
    requires_update: bool = False
