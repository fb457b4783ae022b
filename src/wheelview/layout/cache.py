from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Optional

from wheelview.model.adapter import WheelAdapter
from wheelview.model.state import CacheEntry, EMPTY_CACHE_ENTRY

logger = logging.getLogger(__name__)


class ItemCache:
    """
    One CacheEntry per adapter position. Content is fetched from the adapter at
    most once until the entry is invalidated.

    Empty positions all share the read-only EMPTY_CACHE_ENTRY.
    """

    def __init__(self, adapter: Optional[WheelAdapter], is_empty_position: Callable[[int], bool]) -> None:
        self.adapter = adapter
        self._is_empty_position = is_empty_position
        count = adapter.get_count() if adapter is not None else 0
        self._entries: list[Optional[CacheEntry]] = [None] * count

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, position: int) -> CacheEntry:
        if self._is_empty_position(position) or not 0 <= position < len(self._entries):
            return EMPTY_CACHE_ENTRY

        entry = self._entries[position]
        if entry is None:
            entry = CacheEntry()
            self._entries[position] = entry
        return entry

    def fetch(self, position: int) -> Any:
        """
        Returns the content at the adapter position, asking the adapter only if the entry is dirty.
        """
        entry = self.get(position)
        if entry.is_empty or self.adapter is None:
            return None
        if entry.dirty:
            entry.content = self.adapter.get_content(position)
            entry.dirty = False
        return entry.content

    def invalidate(self, position: int) -> bool:
        """Marks one adapter position dirty. Returns False for empty positions."""
        if self._is_empty_position(position) or not 0 <= position < len(self._entries):
            return False
        entry = self._entries[position]
        if entry is not None:
            entry.dirty = True
        return True

    def invalidate_all(self) -> None:
        for entry in self._entries:
            if entry is not None:
                entry.dirty = True
        logger.debug(f"Invalidated {len(self._entries)} cached items.")

    def visible_positions(self) -> Iterator[int]:
        for position, entry in enumerate(self._entries):
            if entry is not None and entry.is_visible:
                yield position
