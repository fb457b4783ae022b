import math

import matplotlib.pyplot as plt
import numpy as np
import pytest

from wheelview.config import PhysicsConfig
from wheelview.controller.frame import FrameDriver
from wheelview.exceptions import ConfigurationError
from wheelview.physics import AngularPhysics


def test_apply_fling_scales_torque_and_clamps():
    physics = AngularPhysics()
    velocity = physics.apply_fling(torque=100.0, wheel_radius=200.0, now=0.0)
    assert velocity == pytest.approx(100.0 / 40000.0 * 22.0)
    assert physics.requires_update

    assert physics.apply_fling(1e9, 200.0, 0.0) == 0.3
    assert physics.apply_fling(-1e9, 200.0, 0.0) == -0.3


def test_apply_fling_rejects_zero_radius():
    with pytest.raises(ConfigurationError):
        AngularPhysics().apply_fling(10.0, 0.0, 0.0)


def test_zero_fling_does_not_require_update():
    physics = AngularPhysics()
    physics.apply_fling(0.0, 100.0, 0.0)
    assert not physics.requires_update
    assert not physics.is_settling


@pytest.mark.parametrize("initial", np.linspace(-0.3, 0.3, 13))
def test_settling_terminates_without_sign_change(initial):
    physics = AngularPhysics()
    physics.start(initial, 0.0)
    max_ticks = math.ceil(0.3 / PhysicsConfig().constant_friction) + 1

    ticks = 0
    while physics.requires_update:
        previous = physics.angular_velocity
        physics.tick(16.0)
        ticks += 1
        assert physics.angular_velocity * previous >= 0.0
        assert abs(physics.angular_velocity) < abs(previous)
        assert ticks <= max_ticks

    assert physics.angular_velocity == 0.0


def test_tick_integrates_velocity_after_friction():
    physics = AngularPhysics()
    physics.start(0.2, 0.0)
    moved = physics.tick(10.0)
    expected_velocity = 0.2 - (0.2 * 0.2 * 0.015 + 0.0028)
    assert physics.angular_velocity == pytest.approx(expected_velocity)
    assert moved == pytest.approx(expected_velocity * 10.0)


def test_tick_ignores_negative_delta():
    physics = AngularPhysics()
    physics.start(-0.1, 0.0)
    assert physics.tick(-5.0) == 0.0
    assert physics.requires_update


def test_frame_driver_uses_elapsed_time():
    clock_times = iter([116.0])
    physics = AngularPhysics()
    physics.start(0.1, 100.0)
    driver = FrameDriver(physics, clock=lambda: next(clock_times))

    assert driver.needs_tick()
    moved = driver.tick()
    assert moved == pytest.approx(physics.angular_velocity * 16.0)
    assert physics.state.last_update_time == 116.0


def test_frame_driver_idle_returns_zero():
    driver = FrameDriver(AngularPhysics(), clock=lambda: 0.0)
    assert not driver.needs_tick()
    assert driver.tick() == 0.0


def test_physics_config_validation():
    with pytest.raises(ConfigurationError):
        AngularPhysics(PhysicsConfig(constant_friction=0.0))
    with pytest.raises(ConfigurationError):
        AngularPhysics(PhysicsConfig(max_angular_velocity=-1.0))


def test_simulate_runs_to_rest_without_touching_state():
    physics = AngularPhysics()
    times, velocities, angles = physics.simulate(0.25, frame_ms=16.0)

    assert physics.angular_velocity == 0.0
    assert velocities[0] == 0.25
    assert velocities[-1] == 0.0
    assert len(times) == len(velocities) == len(angles)
    assert np.all(np.diff(angles) >= 0.0)
    assert np.all(np.diff(times) == 16.0)


def test_plot_draws_two_axes():
    physics = AngularPhysics()
    physics.plot(0.2)
    fig = plt.gcf()
    assert len(fig.axes) == 2
    plt.close("all")
