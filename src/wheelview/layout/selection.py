"""
Selection & Visibility Tracker
==============================
Maps the wheel angle to the selected raw position and runs the per-frame
visibility pass over the items around the selection.

The tracker reports changes (new selection, visibility edges) back to its
caller instead of invoking listeners itself; the Wheel dispatches them to the
user callbacks.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Optional

from wheelview.config import SelectionRounding
from wheelview.layout.cache import ItemCache
from wheelview.layout.engine import WheelLayout
from wheelview.model.geometry_primitives import Circle, Rect
from wheelview.model.geometry_utils import shortest_signed_angle_diff
from wheelview.model.state import ItemState, WheelGeometry

logger = logging.getLogger(__name__)


@dataclass
class ItemDraw:
    """An on-screen item of one frame, ready for an external renderer."""
    raw_position: int
    adapter_position: int
    state: ItemState
    bounds: Rect
    content: Any = None
    is_empty: bool = False
    is_selected: bool = False


@dataclass
class VisibilityPass:
    items: list[ItemDraw] = field(default_factory=list)
    states: list[ItemState] = field(default_factory=list)
    visibility_changes: list[tuple[int, bool]] = field(default_factory=list)


class SelectionTracker:

    def __init__(self, layout: WheelLayout, rounding: SelectionRounding = SelectionRounding.TRUNCATE) -> None:
        self.layout = layout
        self.rounding = rounding
        self.raw_selected_position: int = 0

    @property
    def geometry(self) -> WheelGeometry:
        return self.layout.geometry

    def angle_to_raw_position(self, angle: float) -> int:
        """
        The raw position selected at the given wheel angle.

        The wheel has to rotate by -n * item_angle to select position n, hence the
        negated angle.
        """
        item_angle = self.geometry.item_angle
        if item_angle <= 0:
            return 0
        if self.rounding == SelectionRounding.NEAREST:
            sign = (angle > 0) - (angle < 0)
            return int((-angle - 0.5 * sign * item_angle) / item_angle)
        return int(-angle / item_angle)

    def update(self, angle: float) -> Optional[int]:
        """
        Recomputes the selected raw position.

        Returns:
            The new adapter position if the selection changed to a non-empty position, else None.
        """
        position = self.angle_to_raw_position(angle)
        if position == self.raw_selected_position:
            return None

        self.raw_selected_position = position
        logger.debug(f"Selected raw position {position}")
        if self.geometry.adapter_item_count == 0 or self.layout.is_empty_position(position):
            return None
        return self.selected_position

    @property
    def selected_position(self) -> int:
        return self.layout.raw_to_adapter_position(self.raw_selected_position)

    def _item_state(self, raw: int, adapter: int, slot: int, x: float, y: float, radius: float) -> ItemState:
        geometry = self.geometry
        item_angle = geometry.wheel_bounds.angle_to_degrees(x, y)
        angle_from_selection = shortest_signed_angle_diff(item_angle, geometry.selection_angle)
        return ItemState(
            adapter_position=adapter,
            raw_position=raw,
            slot_index=slot,
            bounds=Circle(x, y, radius),
            angle_from_selection=angle_from_selection,
            relative_position=angle_from_selection / geometry.item_angle * 2.0,
        )

    def compute_item_states(self) -> list[ItemState]:
        """
        Rotated states of the item_count raw positions centered on the selection.
        Pure: does not touch the cache.
        """
        geometry = self.geometry
        count = geometry.item_count
        if not geometry.is_laid_out or count == 0 or not self.layout.slots:
            return []

        rotated = self.layout.rotated_slot_centers(geometry.angle)
        first = self.raw_selected_position - count // 2
        states = []
        for raw in range(first, first + count):
            adapter = self.layout.raw_to_adapter_position(raw)
            slot = self.layout.raw_to_slot_index(raw, adapter)
            x, y = rotated[slot]
            states.append(self._item_state(raw, adapter, slot, float(x), float(y), geometry.item_radius))
        return states

    def visibility_pass(
        self,
        cache: ItemCache,
        item_transformer: Callable[[ItemState], Rect],
        viewport: Optional[Rect] = None,
        empty_content: Any = None
    ) -> VisibilityPass:
        """
        Runs one frame: transforms item bounds, fetches dirty content of on-screen items
        and flips visibility flags.

        An adapter position counts as visible if any slot hosting it is on screen, so
        visibility changes are reported once per edge.
        """
        viewport = viewport or self.layout.viewport
        result = VisibilityPass(states=self.compute_item_states())
        visible: dict[int, bool] = {}

        for state in result.states:
            bounds = item_transformer(state)
            entry = cache.get(state.adapter_position)
            on_screen = bounds.intersects(viewport)

            if not entry.is_empty:
                visible[state.adapter_position] = visible.get(state.adapter_position, False) or on_screen

            if on_screen:
                content = empty_content if entry.is_empty else cache.fetch(state.adapter_position)
                result.items.append(ItemDraw(
                    raw_position=state.raw_position,
                    adapter_position=state.adapter_position,
                    state=state,
                    bounds=bounds,
                    content=content,
                    is_empty=entry.is_empty,
                    is_selected=state.raw_position == self.raw_selected_position,
                ))

        # Positions that left the window entirely are no longer visible
        for position in list(cache.visible_positions()):
            visible.setdefault(position, False)

        for position, is_visible in visible.items():
            entry = cache.get(position)
            if entry.is_visible != is_visible:
                entry.is_visible = is_visible
                result.visibility_changes.append((position, is_visible))

        return result

    def clicked_state(self, x: float, y: float, states: Optional[list[ItemState]] = None) -> Optional[ItemState]:
        """The item state whose rotated bounds contain (x, y), if any."""
        if states is None:
            states = self.compute_item_states()
        for state in states:
            if state.bounds.contains(x, y):
                return state
        return None
