from wheelview.controller.frame import FrameDriver, uptime_millis
from wheelview.controller.gesture import PointerAction, PointerEvent, TouchGestureController
from wheelview.controller.velocity import VelocityTracker
