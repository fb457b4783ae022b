from __future__ import annotations

import time
from typing import Callable, Optional

from wheelview.physics.integrator import AngularPhysics

Clock = Callable[[], float]


def uptime_millis() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


class FrameDriver:
    """
    Advances the physics once per animation frame while the wheel is settling.
    Scheduling the frames is up to the host; `needs_tick` tells it whether to keep going.
    """

    def __init__(self, physics: AngularPhysics, clock: Clock = uptime_millis) -> None:
        self.physics = physics
        self.clock = clock

    def needs_tick(self) -> bool:
        return self.physics.requires_update

    def tick(self, now: Optional[float] = None) -> float:
        """
        Integrates the time elapsed since the previous tick.

        Returns:
            The angle (degrees) to add to the wheel, 0.0 when there is nothing to do.
        """
        if not self.physics.requires_update:
            return 0.0

        if now is None:
            now = self.clock()
        state = self.physics.state
        delta = now - state.last_update_time
        state.last_update_time = now
        return self.physics.tick(delta)
