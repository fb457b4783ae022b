from __future__ import annotations

from collections import deque

import numpy as np


class VelocityTracker:
    """
    Estimates pointer velocity from recent movement samples.

    A least squares line is fitted through the samples of the last
    `horizon_ms` milliseconds, so a single jittery move does not dominate
    the fling.
    """

    def __init__(self, max_samples: int = 20, horizon_ms: float = 100.0) -> None:
        self.horizon_ms = horizon_ms
        self._samples: deque[tuple[float, float, float]] = deque(maxlen=max_samples)

    def __len__(self) -> int:
        return len(self._samples)

    def clear(self) -> None:
        self._samples.clear()

    def add_movement(self, time_ms: float, x: float, y: float) -> None:
        # A sample older than the newest one means the clock was reset
        if self._samples and time_ms < self._samples[-1][0]:
            self._samples.clear()
        self._samples.append((time_ms, x, y))

    def compute_velocity(self) -> tuple[float, float]:
        """
        Returns:
            (vx, vy) in pixels per millisecond, (0, 0) when there is not enough data.
        """
        if len(self._samples) < 2:
            return 0.0, 0.0

        data = np.array(self._samples, dtype=np.float64)
        newest = data[-1, 0]
        data = data[data[:, 0] >= newest - self.horizon_ms]
        if len(data) < 2:
            return 0.0, 0.0

        t = data[:, 0] - newest
        if np.ptp(t) == 0.0:
            return 0.0, 0.0

        vx = np.polyfit(t, data[:, 1], 1)[0]
        vy = np.polyfit(t, data[:, 2], 1)[0]
        return float(vx), float(vy)
