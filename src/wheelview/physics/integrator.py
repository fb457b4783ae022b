"""
Angular Physics Integrator
==========================
Turns a fling torque into an angular velocity and decays it with friction.

States:
    Idle: angular velocity is exactly zero, no ticks are needed.
    Settling: angular velocity is non-zero, tick once per frame.

Friction per tick is `k_v * v^2 + k_c`, always opposing the velocity. The
constant term makes the velocity reach exactly zero after a bounded number of
ticks; the velocity never overshoots past zero.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from wheelview.config import PhysicsConfig
from wheelview.exceptions import ConfigurationError
from wheelview.model.state import PhysicsState

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class AngularPhysics:
    """
    Angular velocity integrator of one wheel. Velocities are in degrees per millisecond.
    """

    def __init__(self, config: Optional[PhysicsConfig] = None, state: Optional[PhysicsState] = None) -> None:
        self.config = config or PhysicsConfig()
        self.config.validate()
        self.state = state or PhysicsState()

    @property
    def angular_velocity(self) -> float:
        return self.state.angular_velocity

    @property
    def is_settling(self) -> bool:
        return self.state.angular_velocity != 0.0

    @property
    def requires_update(self) -> bool:
        return self.state.requires_update

    def clamp_velocity(self, velocity: float) -> float:
        limit = self.config.max_angular_velocity
        return max(-limit, min(limit, velocity))

    def start(self, velocity: float, now: float) -> float:
        """
        Start settling from the given velocity (clamped).

        Returns:
            The velocity actually applied.
        """
        self.state.angular_velocity = self.clamp_velocity(velocity)
        self.state.last_update_time = now
        self.state.requires_update = self.state.angular_velocity != 0.0
        return self.state.angular_velocity

    def apply_fling(self, torque: float, wheel_radius: float, now: float) -> float:
        """
        Estimate an angular velocity from the fling torque.

        dw/dt = torque / I, with the wheel treated as a ring of unit mass (I = r^2).

        Args:
            torque: Cross product of the release force and radius vectors.
            wheel_radius: Radius of the wheel in pixels.
            now: Current time in milliseconds.

        Returns:
            The new angular velocity.
        """
        if wheel_radius <= 0:
            raise ConfigurationError(f"Cannot fling a wheel of radius {wheel_radius}")

        angular_accel = torque / (wheel_radius * wheel_radius)
        velocity = self.start(angular_accel * self.config.angular_velocity_gain, now)
        logger.debug(f"Fling: torque={torque:.3f}, angular velocity={velocity:.4f} deg/ms")
        return velocity

    def stop(self) -> None:
        self.state.angular_velocity = 0.0
        self.state.requires_update = False

    def apply_friction(self) -> float:
        """One friction step. Returns the new velocity."""
        vel = self.state.angular_velocity
        friction = vel * vel * self.config.velocity_friction + self.config.constant_friction
        if vel > 0.0:
            vel = max(0.0, vel - friction)
        elif vel < 0.0:
            vel = min(0.0, vel + friction)
        self.state.angular_velocity = vel
        return vel

    def tick(self, delta_time: float) -> float:
        """
        Apply friction and integrate over delta_time milliseconds.

        Returns:
            The angle (degrees) the wheel moves during this tick, 0.0 once settled.
        """
        velocity = self.apply_friction()
        if velocity == 0.0:
            if self.state.requires_update:
                logger.debug("Wheel settled.")
            self.state.requires_update = False
            return 0.0
        return velocity * max(0.0, delta_time)

    def simulate(
        self,
        initial_velocity: float,
        frame_ms: float = 16.0,
        max_steps: int = 100_000
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """
        Run a fling to rest with a fixed frame time, without touching this integrator's state.

        Returns:
            Arrays of time (ms), velocity (deg/ms) and accumulated angle (deg), one entry per tick
            plus the initial sample.
        """
        trial = AngularPhysics(self.config)
        trial.start(initial_velocity, 0.0)

        times = [0.0]
        velocities = [trial.angular_velocity]
        angles = [0.0]
        for _ in range(max_steps):
            if not trial.requires_update:
                break
            angles.append(angles[-1] + trial.tick(frame_ms))
            times.append(times[-1] + frame_ms)
            velocities.append(trial.angular_velocity)

        return np.array(times), np.array(velocities), np.array(angles)

    def plot(self, initial_velocity: Optional[float] = None, frame_ms: float = 16.0) -> None:
        """
        Plot velocity and angle of a fling until the wheel comes to rest.
        """
        if initial_velocity is None:
            initial_velocity = self.config.max_angular_velocity
        times, velocities, angles = self.simulate(initial_velocity, frame_ms)

        plt.rcParams["figure.constrained_layout.use"] = True
        fig, (ax_vel, ax_angle) = plt.subplots(2, 1, figsize=(7, 6), sharex=True)

        ax_vel.plot(times, velocities, 'r', lw=2)
        ax_vel.set_ylabel("Angular velocity (°/ms)")
        ax_vel.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)

        ax_angle.plot(times, angles, 'b', lw=2)
        ax_angle.set_ylabel("Angle (°)")
        ax_angle.set_xlabel("Time (ms)")
        ax_angle.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)

        fig.suptitle(f"Fling from {initial_velocity:.3f} °/ms")
        plt.show()
