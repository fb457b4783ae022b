import matplotlib

matplotlib.use("Agg")

import pytest

from wheelview import Wheel, WheelConfig
from wheelview.model.adapter import WheelAdapter


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


class CountingAdapter(WheelAdapter):
    """Records every content fetch."""

    def __init__(self, count: int) -> None:
        self.count = count
        self.fetches: list[int] = []

    def get_count(self) -> int:
        return self.count

    def get_content(self, position: int) -> str:
        self.fetches.append(position)
        return f"item-{position}"


@pytest.fixture
def clock():
    return FakeClock(1000.0)


@pytest.fixture
def make_wheel(clock):
    def _make(width=400, height=400, adapter_count=8, **options):
        options.setdefault("item_count", 8)
        options.setdefault("item_radius", 20.0)
        options.setdefault("item_transformer", "simple")
        wheel = Wheel(WheelConfig(**options), clock=clock)
        if adapter_count is not None:
            wheel.set_adapter(CountingAdapter(adapter_count))
        wheel.layout(width, height)
        return wheel

    return _make
