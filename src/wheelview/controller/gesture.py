"""
Touch Gesture Controller
========================
Single pointer drag and fling handling for a wheel.

States:
    Idle -> Dragging on pointer down (or move) inside the wheel.
    Dragging -> Idle on pointer up/cancel, or when the pointer leaves the wheel;
    the release hands a torque estimate to the physics integrator.

A short press that barely rotates the wheel and is released over the same
item it started on is reported as an item click.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import Optional, TYPE_CHECKING

from wheelview.controller.velocity import VelocityTracker
from wheelview.model.geometry_primitives import Vector
from wheelview.model.geometry_utils import shortest_signed_angle_diff
from wheelview.model.state import GestureState

if TYPE_CHECKING:
    from wheelview.wheel import Wheel

logger = logging.getLogger(__name__)

# The touch factors decrease the drag movement towards the center of the wheel, so that
# dragging near the hub does not whip the wheel around. Indexed by r^2 / R^2, squared to
# give a linear response in r.
TOUCH_FACTOR_SIZE = 20
TOUCH_DRAG_COEFFICIENT = 0.8
TOUCH_FACTORS: tuple[float, ...] = tuple(
    (1.0 - (TOUCH_FACTOR_SIZE - i) ** 2 / TOUCH_FACTOR_SIZE ** 2) * TOUCH_DRAG_COEFFICIENT
    for i in range(TOUCH_FACTOR_SIZE)
)


def touch_factor(distance_squared: float, radius_squared: float) -> float:
    """Radial damping factor for a touch at distance^2 from the wheel center."""
    if radius_squared <= 0:
        return 0.0
    index = int(distance_squared / radius_squared * TOUCH_FACTOR_SIZE)
    return TOUCH_FACTORS[max(0, min(TOUCH_FACTOR_SIZE - 1, index))]


class PointerAction(StrEnum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


@dataclass
class PointerEvent:
    action: PointerAction
    x: float
    y: float
    time_ms: Optional[float] = None


class TouchGestureController:

    def __init__(self, wheel: Wheel) -> None:
        self.wheel = wheel
        self.state = GestureState()
        self.velocity_tracker = VelocityTracker()

    @property
    def is_dragging(self) -> bool:
        return self.state.is_dragging

    @property
    def dragged_angle(self) -> float:
        return self.state.dragged_angle

    def on_touch_event(self, event: PointerEvent) -> bool:
        """
        Dispatch a pointer event.

        Returns:
            False if the wheel has not been laid out yet and the event was ignored.
        """
        if self.wheel.wheel_bounds is None:
            return False

        time_ms = event.time_ms if event.time_ms is not None else self.wheel.clock()
        if event.action == PointerAction.DOWN:
            self.on_pointer_down(event.x, event.y, time_ms)
        elif event.action == PointerAction.MOVE:
            self.on_pointer_move(event.x, event.y, time_ms)
        elif event.action == PointerAction.UP:
            self.on_pointer_up(event.x, event.y, time_ms)
        else:
            self.on_pointer_cancel()
        return True

    def _leave_if_outside(self, x: float, y: float) -> bool:
        """Releases an ongoing drag when the pointer is outside the wheel. Returns True if outside."""
        if self.wheel.wheel_bounds.contains(x, y):
            return False
        if self.state.is_dragging:
            self.state.clicked_slot = None
            self.fling()
        return True

    def on_pointer_down(self, x: float, y: float, time_ms: float) -> None:
        if self._leave_if_outside(x, y):
            return

        if not self.state.is_dragging:
            self.start_drag(x, y, time_ms)

        clicked = self.wheel.selection.clicked_state(x, y)
        self.state.clicked_slot = clicked.slot_index if clicked is not None else None

    def on_pointer_move(self, x: float, y: float, time_ms: float) -> None:
        if self._leave_if_outside(x, y):
            return

        if not self.state.is_dragging:
            self.start_drag(x, y, time_ms)
            return

        bounds = self.wheel.wheel_bounds
        self.velocity_tracker.add_movement(time_ms, x, y)
        self.state.last_x = x
        self.state.last_y = y
        self.state.last_time = time_ms

        factor = touch_factor(bounds.distance_squared_to(x, y), bounds.radius * bounds.radius)
        touch_angle = bounds.angle_to_degrees(x, y)
        dragged = -shortest_signed_angle_diff(touch_angle, self.state.last_touch_angle) * factor
        self.state.last_touch_angle = touch_angle
        self.state.dragged_angle += abs(dragged)

        self.wheel.physics.stop()
        self.wheel.add_angle(dragged)

    def on_pointer_up(self, x: float, y: float, time_ms: float) -> None:
        if self._leave_if_outside(x, y):
            self.velocity_tracker.clear()
            return

        self._check_click(x, y)
        if self.state.is_dragging:
            self.fling()
        self.velocity_tracker.clear()

    def on_pointer_cancel(self) -> None:
        if self.state.is_dragging:
            self.fling()
        self.state.clicked_slot = None
        self.velocity_tracker.clear()

    def start_drag(self, x: float, y: float, time_ms: float) -> None:
        """Begins a drag and cancels any ongoing settle."""
        self.state.is_dragging = True
        self.state.dragged_angle = 0.0
        self.state.clicked_slot = None
        self.state.last_x = x
        self.state.last_y = y
        self.state.last_time = time_ms
        self.state.last_touch_angle = self.wheel.wheel_bounds.angle_to_degrees(x, y)

        self.velocity_tracker.clear()
        self.velocity_tracker.add_movement(time_ms, x, y)
        self.wheel.physics.stop()

    def _check_click(self, x: float, y: float) -> None:
        clicked_slot = self.state.clicked_slot
        self.state.clicked_slot = None
        if clicked_slot is None or self.state.dragged_angle >= self.wheel.config.click_max_dragged_angle:
            return

        released = self.wheel.selection.clicked_state(x, y)
        if released is None or released.slot_index != clicked_slot:
            return
        if self.wheel.is_empty_position(released.adapter_position):
            return

        is_selected = abs(released.relative_position) < 1.0
        logger.debug(f"Item click at adapter position {released.adapter_position} (selected={is_selected})")
        self.wheel.dispatch_item_click(released.adapter_position, is_selected)

    def fling(self) -> None:
        """
        Ends the drag and starts the wheel settling.

        torque = F x r, with F the pointer velocity at release and r the vector from
        the last touch point to the wheel center.
        """
        self.state.is_dragging = False
        bounds = self.wheel.wheel_bounds
        if bounds is None or bounds.radius <= 0:
            return

        vx, vy = self.velocity_tracker.compute_velocity()
        force = Vector(vx, vy)
        radius_vector = bounds.radius_vector_to(self.state.last_x, self.state.last_y)
        torque = force.cross(radius_vector)
        self.wheel.physics.apply_fling(torque, bounds.radius, self.wheel.clock())
