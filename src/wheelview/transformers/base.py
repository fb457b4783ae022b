from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from wheelview.model.geometry_primitives import Rect
    from wheelview.model.state import ItemState


@dataclass
class SelectionVisual:
    """The visual drawn behind the selected item. Selection transformers mutate it."""
    bounds: Optional[Rect] = None
    alpha: int = 255


class ItemTransformer(ABC):
    """
    Gives control over an item's draw bounds.
    Must be a pure function of the item state.
    """
    KEY: str = ""

    @abstractmethod
    def transform(self, item_state: ItemState) -> Rect:
        pass

    def __call__(self, item_state: ItemState) -> Rect:
        return self.transform(item_state)


class SelectionTransformer(ABC):
    """Adjusts the selection visual (e.g. its opacity) for the selected item."""
    KEY: str = ""

    @abstractmethod
    def transform(self, visual: SelectionVisual, item_state: ItemState) -> None:
        pass

    def __call__(self, visual: SelectionVisual, item_state: ItemState) -> None:
        self.transform(visual, item_state)


class FunctionItemTransformer(ItemTransformer):
    """Adapts a plain function to the ItemTransformer interface."""

    def __init__(self, func: Callable[[ItemState], Rect]) -> None:
        self._func = func

    def transform(self, item_state: ItemState) -> Rect:
        return self._func(item_state)


class FunctionSelectionTransformer(SelectionTransformer):
    """Adapts a plain function to the SelectionTransformer interface."""

    def __init__(self, func: Callable[[SelectionVisual, ItemState], None]) -> None:
        self._func = func

    def transform(self, visual: SelectionVisual, item_state: ItemState) -> None:
        self._func(visual, item_state)
