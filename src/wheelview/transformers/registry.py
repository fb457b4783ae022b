from __future__ import annotations

from typing import Any, Optional

from wheelview.exceptions import ConfigurationError
from wheelview.transformers.base import (
    FunctionItemTransformer,
    FunctionSelectionTransformer,
    ItemTransformer,
    SelectionTransformer,
)

_ITEM_REGISTRY: dict[str, type[ItemTransformer]] = {}
_SELECTION_REGISTRY: dict[str, type[SelectionTransformer]] = {}


def _key_of(cls: type) -> str:
    key = getattr(cls, "KEY", None)
    if not key:
        raise ValueError(f"{cls.__name__} must define KEY")
    return key


def register_item_transformer(cls: type[ItemTransformer]) -> type[ItemTransformer]:
    """Class decorator to register an item transformer by its KEY."""
    _ITEM_REGISTRY[_key_of(cls)] = cls
    return cls


def register_selection_transformer(cls: type[SelectionTransformer]) -> type[SelectionTransformer]:
    """Class decorator to register a selection transformer by its KEY."""
    _SELECTION_REGISTRY[_key_of(cls)] = cls
    return cls


def create_item_transformer(key: str) -> ItemTransformer:
    cls = _ITEM_REGISTRY.get(key)
    if not cls:
        raise ConfigurationError(f"No item transformer registered for key '{key}'")
    return cls()


def create_selection_transformer(key: str) -> SelectionTransformer:
    cls = _SELECTION_REGISTRY.get(key)
    if not cls:
        raise ConfigurationError(f"No selection transformer registered for key '{key}'")
    return cls()


def list_item_keys() -> list[str]:
    return list(_ITEM_REGISTRY.keys())


def list_selection_keys() -> list[str]:
    return list(_SELECTION_REGISTRY.keys())


def resolve_item_transformer(value: Any) -> ItemTransformer:
    """
    Turn a registry key, an ItemTransformer or a plain function into an ItemTransformer.

    Raises:
        ConfigurationError: for None, unknown keys or non-callable values.
    """
    if value is None:
        raise ConfigurationError("Item transformer cannot be None")
    if isinstance(value, str):
        return create_item_transformer(value)
    if isinstance(value, ItemTransformer):
        return value
    if callable(value):
        return FunctionItemTransformer(value)
    raise ConfigurationError(f"Invalid item transformer: {value!r}")


def resolve_selection_transformer(value: Any) -> Optional[SelectionTransformer]:
    """Same as resolve_item_transformer, except that None disables the selection transform."""
    if value is None:
        return None
    if isinstance(value, str):
        return create_selection_transformer(value)
    if isinstance(value, SelectionTransformer):
        return value
    if callable(value):
        return FunctionSelectionTransformer(value)
    raise ConfigurationError(f"Invalid selection transformer: {value!r}")
