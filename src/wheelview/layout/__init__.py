from wheelview.layout.cache import ItemCache
from wheelview.layout.engine import WheelLayout
from wheelview.layout.selection import ItemDraw, SelectionTracker, VisibilityPass
