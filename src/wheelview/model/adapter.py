"""
Content Adapters
================
The wheel never owns item content. It asks an adapter for the number of items
and, lazily, for the content of a given adapter position.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence, TypeVar

T = TypeVar("T")


class WheelAdapter(ABC):
    """
    Supplies the items displayed on the wheel.

    The count must stay constant between two calls to `Wheel.set_adapter`.
    """

    @abstractmethod
    def get_count(self) -> int:
        pass

    @abstractmethod
    def get_content(self, position: int) -> Any:
        """
        Args:
            position: Adapter position in [0, get_count()).

        Returns:
            The opaque visual payload for the position.
        """
        pass


class WheelArrayAdapter(WheelAdapter, Generic[T]):
    """Adapter backed by a sequence. The content of a position is the item itself."""

    def __init__(self, items: Sequence[T]) -> None:
        self._items = items

    def get_item(self, position: int) -> T:
        return self._items[position]

    def get_count(self) -> int:
        return len(self._items)

    def get_content(self, position: int) -> Any:
        return self.get_item(position)
