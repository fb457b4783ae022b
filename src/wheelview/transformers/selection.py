from __future__ import annotations

from typing import TYPE_CHECKING

from wheelview.transformers.base import SelectionTransformer, SelectionVisual
from wheelview.transformers.registry import register_selection_transformer

if TYPE_CHECKING:
    from wheelview.model.state import ItemState


@register_selection_transformer
class FadingSelectionTransformer(SelectionTransformer):
    """Fades the selection visual out as the selected item moves away from the selection angle."""
    KEY = "fading"

    EXPONENT: float = 2.5

    def transform(self, visual: SelectionVisual, item_state: ItemState) -> None:
        relative_position = abs(item_state.relative_position)
        alpha = int((1.0 - relative_position ** self.EXPONENT) * 255.0)
        visual.alpha = max(0, min(255, alpha))
