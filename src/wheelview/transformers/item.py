from __future__ import annotations

from typing import TYPE_CHECKING

from wheelview.model.geometry_primitives import Circle, Rect
from wheelview.transformers.base import ItemTransformer
from wheelview.transformers.registry import register_item_transformer

if TYPE_CHECKING:
    from wheelview.model.state import ItemState


@register_item_transformer
class SimpleItemTransformer(ItemTransformer):
    """Draws the item at its rotated bounding circle."""
    KEY = "simple"

    def transform(self, item_state: ItemState) -> Rect:
        return item_state.bounds.bounding_box()


@register_item_transformer
class ScalingItemTransformer(ItemTransformer):
    """
    Enlarges items close to the selection angle and shrinks the ones further away.
    """
    KEY = "scaling"

    SCALE_PER_DEGREE: float = 0.014
    MAX_SCALE: float = 1.12
    BASE_SCALE: float = 1.15
    MAX_SHRINK: float = 0.25

    def transform(self, item_state: ItemState) -> Rect:
        shrink = abs(item_state.angle_from_selection * self.SCALE_PER_DEGREE)
        scale = min(self.MAX_SCALE, self.BASE_SCALE - min(self.MAX_SHRINK, shrink))
        bounds = item_state.bounds
        return Circle(bounds.center_x, bounds.center_y, bounds.radius * scale).bounding_box()
