"""
wheelview
=========
Angular physics and layout engine for a rotating wheel of selectable items.
"""
from wheelview.config import PhysicsConfig, SelectionRounding, WheelConfig, WheelPosition
from wheelview.controller import PointerAction, PointerEvent
from wheelview.exceptions import ConfigurationError, NoAdapterError, WheelViewError
from wheelview.model.adapter import WheelAdapter, WheelArrayAdapter
from wheelview.model.geometry_primitives import Circle, Rect, Vector
from wheelview.wheel import Wheel, WheelFrame

__version__ = "0.1.0"
