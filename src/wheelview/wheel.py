"""
Wheel
=====
The headless wheel: one instance per on-screen wheel.

Why is this file needed?
------------------------
It wires the components of one wheel together and is the only object a host
UI talks to:
1. Layout: `layout()` whenever the container size changes.
2. Input: `on_touch_event()` for every pointer event.
3. Frames: `frame()` once per draw; keep scheduling frames while
   `requires_update` is True.
4. Callbacks: `on_angle_change`, `on_item_selected`, `on_item_click` and
   `on_item_visibility_change` (one subscriber each).
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Optional

from wheelview.config import WheelConfig
from wheelview.controller.frame import Clock, FrameDriver, uptime_millis
from wheelview.controller.gesture import PointerEvent, TouchGestureController
from wheelview.exceptions import ConfigurationError, NoAdapterError
from wheelview.layout.cache import ItemCache
from wheelview.layout.engine import Padding, WheelLayout
from wheelview.layout.selection import ItemDraw, SelectionTracker
from wheelview.model.adapter import WheelAdapter
from wheelview.model.geometry_primitives import Circle
from wheelview.model.state import ItemState, WheelGeometry
from wheelview.physics.integrator import AngularPhysics
from wheelview.transformers import (
    ItemTransformer,
    SelectionTransformer,
    SelectionVisual,
    resolve_item_transformer,
    resolve_selection_transformer,
)

logger = logging.getLogger(__name__)


@dataclass
class WheelFrame:
    """Everything a renderer needs to draw one frame."""
    wheel_bounds: Optional[Circle]
    wheel_rotation: float
    items: list[ItemDraw] = field(default_factory=list)
    selection: Optional[SelectionVisual] = None
    requires_update: bool = False


class Wheel:

    def __init__(self, config: Optional[WheelConfig] = None, clock: Clock = uptime_millis) -> None:
        self.config = config or WheelConfig()
        self.config.validate()
        self.clock = clock

        self.layout_engine = WheelLayout(self.config)
        self.selection = SelectionTracker(self.layout_engine, self.config.selection_rounding)
        self.physics = AngularPhysics(self.config.physics)
        self.frame_driver = FrameDriver(self.physics, clock)
        self.gestures = TouchGestureController(self)

        self.item_transformer: ItemTransformer = resolve_item_transformer(self.config.item_transformer)
        self.selection_transformer: Optional[SelectionTransformer] = resolve_selection_transformer(
            self.config.selection_transformer
        )
        self.selection_padding: float = self.config.selection_padding
        self.is_wheel_drawable_rotatable: bool = self.config.wheel_drawable_rotatable
        self.empty_item_content: Any = None

        self._adapter: Optional[WheelAdapter] = None
        self._cache = ItemCache(None, self.is_empty_position)
        self._item_states: list[ItemState] = []

        self.on_angle_change: Optional[Callable[[float], None]] = None
        self.on_item_selected: Optional[Callable[[int], None]] = None
        self.on_item_click: Optional[Callable[[int, bool], None]] = None
        self.on_item_visibility_change: Optional[Callable[[int, bool], None]] = None

    # ------------------------------------------------------------------
    # Geometry access
    # ------------------------------------------------------------------
    @property
    def geometry(self) -> WheelGeometry:
        return self.layout_engine.geometry

    @property
    def wheel_bounds(self) -> Optional[Circle]:
        return self.geometry.wheel_bounds

    @property
    def item_count(self) -> int:
        return self.geometry.item_count

    @property
    def item_angle(self) -> float:
        return self.geometry.item_angle

    @property
    def selection_angle(self) -> float:
        return self.geometry.selection_angle

    @property
    def item_radius(self) -> float:
        return self.geometry.item_radius

    @property
    def wheel_to_item_distance(self) -> float:
        return self.geometry.wheel_to_item_distance

    @property
    def is_repeatable(self) -> bool:
        return self.geometry.is_repeatable

    def layout(self, width: float, height: float, padding: Padding = (0.0, 0.0, 0.0, 0.0)) -> bool:
        return self.layout_engine.layout(width, height, padding)

    # ------------------------------------------------------------------
    # Configuration setters
    # ------------------------------------------------------------------
    def set_item_count(self, count: int) -> None:
        self.layout_engine.set_item_count(count)
        self._update_selected_position()

    def set_item_angle(self, angle: float) -> None:
        self.layout_engine.set_item_angle(angle)
        self._update_selected_position()

    def set_item_angle_padding(self, padding: float) -> None:
        self.layout_engine.set_item_angle_padding(padding)
        self._update_selected_position()

    def set_selection_angle(self, angle: float) -> None:
        self.layout_engine.set_selection_angle(angle)

    def set_wheel_radius(self, radius: Optional[float]) -> None:
        self.layout_engine.set_wheel_radius(radius)

    def set_item_radius(self, radius: float) -> None:
        self.layout_engine.set_item_radius(radius)

    def set_wheel_to_item_distance(self, distance: Optional[float]) -> None:
        self.layout_engine.set_wheel_to_item_distance(distance)

    def set_repeatable(self, is_repeatable: bool) -> None:
        """Repeatable wheels cycle through the adapter items continuously."""
        self.geometry.is_repeatable = is_repeatable

    def set_item_transformer(self, transformer: Any) -> None:
        self.item_transformer = resolve_item_transformer(transformer)

    def set_selection_transformer(self, transformer: Any) -> None:
        self.selection_transformer = resolve_selection_transformer(transformer)

    # ------------------------------------------------------------------
    # Adapter & content cache
    # ------------------------------------------------------------------
    @property
    def adapter(self) -> Optional[WheelAdapter]:
        return self._adapter

    def set_adapter(self, adapter: WheelAdapter) -> None:
        if adapter is None:
            raise ConfigurationError("Adapter cannot be None")
        count = adapter.get_count()
        if count < 0:
            raise ConfigurationError(f"Adapter returned a negative count: {count}")

        self._adapter = adapter
        self.geometry.adapter_item_count = count
        self._cache = ItemCache(adapter, self.is_empty_position)
        logger.debug(f"Adapter set with {count} items.")

    @property
    def adapter_item_count(self) -> int:
        return self.geometry.adapter_item_count

    def is_empty_position(self, position: int) -> bool:
        return self.layout_engine.is_empty_position(position)

    def get_item_content(self, position: int) -> Any:
        """
        The content at the given adapter position, fetched from the adapter only when
        the cached entry is dirty. None without adapter items.
        """
        if self._adapter is None or self.adapter_item_count == 0:
            return None
        if self.is_empty_position(position):
            return self.empty_item_content
        return self._cache.fetch(position)

    def invalidate_item(self, position: int) -> None:
        """Refresh the content of the given raw position on the next frame."""
        adapter_position = self.raw_to_adapter_position(position)
        self._cache.invalidate(adapter_position)

    def invalidate_all(self) -> None:
        """
        Invalidate every item. Changing the number of items requires `set_adapter` instead.
        """
        self._cache.invalidate_all()

    @property
    def cache(self) -> ItemCache:
        return self._cache

    # ------------------------------------------------------------------
    # Angle & selection
    # ------------------------------------------------------------------
    @property
    def angle(self) -> float:
        return self.geometry.angle

    def set_angle(self, angle: float) -> None:
        """
        Set the wheel angle (degrees, any value) instantaneously.
        """
        self.geometry.angle = angle
        self._update_selected_position()
        if self.on_angle_change is not None:
            self.on_angle_change(angle)

    def add_angle(self, degrees: float) -> None:
        self.set_angle(self.geometry.angle + degrees)

    def _update_selected_position(self) -> None:
        position = self.selection.update(self.geometry.angle)
        if position is not None and self.on_item_selected is not None:
            self.on_item_selected(position)

    def angle_for_position(self, raw_position: int) -> float:
        return self.layout_engine.angle_for_position(raw_position)

    def set_selected(self, raw_position: int) -> None:
        """Rotate the wheel so that the raw position becomes selected."""
        self.set_angle(-self.angle_for_position(raw_position))

    def set_mid_selected(self) -> None:
        """Select the item in the middle of the adapter."""
        if self._adapter is None or self.adapter_item_count == 0:
            raise NoAdapterError("Cannot select position with no adapter items")
        self.set_selected(self.adapter_item_count // 2)

    @property
    def raw_selected_position(self) -> int:
        return self.selection.raw_selected_position

    @property
    def selected_position(self) -> int:
        return self.selection.selected_position

    def raw_to_adapter_position(self, raw_position: int) -> int:
        return self.layout_engine.raw_to_adapter_position(raw_position)

    def raw_to_wheel_position(self, raw_position: int, adapter_position: Optional[int] = None) -> int:
        return self.layout_engine.raw_to_slot_index(raw_position, adapter_position)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def on_touch_event(self, event: PointerEvent) -> bool:
        return self.gestures.on_touch_event(event)

    def dispatch_item_click(self, adapter_position: int, is_selected: bool) -> None:
        if self.on_item_click is not None:
            self.on_item_click(adapter_position, is_selected)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    @property
    def requires_update(self) -> bool:
        return self.frame_driver.needs_tick()

    def update(self, now: Optional[float] = None) -> bool:
        """
        Advance the settling wheel.

        Returns:
            True if the wheel angle changed.
        """
        if not self.frame_driver.needs_tick():
            return False
        delta = self.frame_driver.tick(now)
        if delta == 0.0:
            return False
        self.add_angle(delta)
        return True

    @property
    def item_states(self) -> list[ItemState]:
        """Item states of the most recent frame."""
        return list(self._item_states)

    def frame(self, now: Optional[float] = None) -> WheelFrame:
        """
        Run one frame: integrate physics, then lay out the visible items.
        """
        self.update(now)

        frame = WheelFrame(
            wheel_bounds=self.wheel_bounds,
            wheel_rotation=self.angle if self.is_wheel_drawable_rotatable else 0.0,
            requires_update=self.requires_update,
        )
        if self._adapter is None or self.adapter_item_count == 0 or not self.geometry.is_laid_out:
            return frame

        result = self.selection.visibility_pass(
            self._cache,
            self.item_transformer,
            empty_content=self.empty_item_content,
        )
        self._item_states = result.states
        frame.items = result.items

        for item in result.items:
            if item.is_selected and not item.is_empty:
                visual = SelectionVisual(bounds=item.bounds.inset(-self.selection_padding, -self.selection_padding))
                if self.selection_transformer is not None:
                    self.selection_transformer(visual, item.state)
                frame.selection = visual

        if self.on_item_visibility_change is not None:
            for position, is_visible in result.visibility_changes:
                self.on_item_visibility_change(position, is_visible)

        return frame
