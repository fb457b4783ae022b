"""
Pluggable visual policies: item bounds transformers and selection transformers.
Importing this package registers the built-in variants.
"""
from wheelview.transformers.base import (
    FunctionItemTransformer,
    FunctionSelectionTransformer,
    ItemTransformer,
    SelectionTransformer,
    SelectionVisual,
)
from wheelview.transformers.item import ScalingItemTransformer, SimpleItemTransformer
from wheelview.transformers.selection import FadingSelectionTransformer
from wheelview.transformers.registry import (
    create_item_transformer,
    create_selection_transformer,
    list_item_keys,
    list_selection_keys,
    register_item_transformer,
    register_selection_transformer,
    resolve_item_transformer,
    resolve_selection_transformer,
)
