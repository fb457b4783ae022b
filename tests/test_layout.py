import math

import numpy as np
import pytest

from wheelview import WheelConfig, WheelPosition
from wheelview.exceptions import ConfigurationError
from wheelview.layout import WheelLayout


def laid_out(width=400, height=400, **options):
    layout = WheelLayout(WheelConfig(**options))
    layout.layout(width, height)
    return layout


def test_fill_wheel_radius_is_centered():
    layout = laid_out(item_count=8, item_radius=20.0)
    bounds = layout.geometry.wheel_bounds
    assert (bounds.center_x, bounds.center_y, bounds.radius) == (200.0, 200.0, 200.0)
    assert layout.geometry.wheel_to_item_distance == pytest.approx(180.0)


def test_wheel_padding_and_container_padding():
    layout = WheelLayout(WheelConfig(item_count=8, item_radius=20.0, wheel_padding=10.0))
    layout.layout(400, 300, padding=(10.0, 20.0, 10.0, 20.0))
    assert layout.geometry.wheel_bounds.radius == 130.0
    assert layout.geometry.wheel_to_item_distance == pytest.approx(100.0)


def test_slot_centers_follow_selection_angle():
    layout = laid_out(item_count=8, item_radius=20.0)
    centers = layout.slot_centers
    assert centers[0] == pytest.approx([380.0, 200.0])
    # positive slot angles run clockwise on screen
    assert centers[2] == pytest.approx([200.0, 380.0])

    layout.set_selection_angle(90.0)
    assert layout.slot_centers[0] == pytest.approx([200.0, 20.0])


def test_layout_item_slots_is_idempotent():
    layout = laid_out(item_count=7, item_radius=15.0)
    first = layout.slot_centers
    layout.layout_item_slots()
    np.testing.assert_array_equal(first, layout.slot_centers)
    assert layout.slots[3].radius == 15.0


def test_zero_size_keeps_previous_geometry():
    layout = laid_out(item_count=8, item_radius=20.0)
    bounds = layout.geometry.wheel_bounds
    assert layout.layout(0, 300) is False
    assert layout.geometry.wheel_bounds == bounds


def test_position_flags_and_offsets():
    layout = laid_out(
        width=400,
        height=200,
        item_count=8,
        position=WheelPosition.LEFT | WheelPosition.BOTTOM,
        offset_x=5.0,
        offset_y=-5.0,
    )
    bounds = layout.geometry.wheel_bounds
    assert (bounds.center_x, bounds.center_y) == (5.0, 195.0)
    assert bounds.radius == 100.0


def test_explicit_wheel_radius():
    layout = laid_out(item_count=8, item_radius=10.0, wheel_radius=50.0)
    assert layout.geometry.wheel_bounds.radius == 50.0


def test_fill_item_radius_touches_rim_and_neighbours():
    layout = laid_out(item_count=4)
    radius = layout.geometry.item_radius
    distance = layout.geometry.wheel_to_item_distance
    assert radius + distance == pytest.approx(200.0)
    assert distance * math.sin(math.radians(45.0)) == pytest.approx(radius)


def test_item_count_takes_priority_over_item_angle():
    layout = WheelLayout(WheelConfig(item_count=6, item_angle=45.0))
    assert layout.item_angle == 60.0
    assert layout.item_count == 6


def test_item_angle_derived_from_radius_and_distance():
    layout = WheelLayout(WheelConfig(item_radius=50.0, wheel_to_item_distance=100.0))
    assert layout.item_angle == pytest.approx(60.0)
    assert layout.item_count == 6


def test_item_angle_with_padding():
    layout = WheelLayout(WheelConfig(item_angle_padding=5.0))
    layout.set_item_angle(40.0)
    assert layout.item_angle == 45.0
    assert layout.item_count == 8

    layout.set_item_angle(50.0)
    assert layout.item_count == 6


def test_invalid_item_settings():
    layout = WheelLayout(WheelConfig(item_count=8))
    with pytest.raises(ConfigurationError):
        layout.set_item_count(0)
    with pytest.raises(ConfigurationError):
        layout.set_item_angle(400.0)
    with pytest.raises(ConfigurationError):
        layout.set_item_radius(-1.0)


def test_raw_to_adapter_position():
    layout = WheelLayout(WheelConfig(item_count=8))
    layout.geometry.adapter_item_count = 8
    assert layout.raw_to_adapter_position(-2) == -2
    assert layout.is_empty_position(-2)
    assert layout.is_empty_position(8)
    assert not layout.is_empty_position(7)

    layout.geometry.is_repeatable = True
    assert layout.raw_to_adapter_position(-2) == 6
    assert not layout.is_empty_position(-2)


def test_raw_to_slot_index_is_continuous_across_cycles():
    layout = WheelLayout(WheelConfig(item_count=8, repeatable=True))
    layout.geometry.adapter_item_count = 10

    assert layout.raw_to_slot_index(10) == 2
    assert layout.raw_to_slot_index(-1) == 7
    for raw in range(-25, 25):
        assert layout.raw_to_slot_index(raw) == raw % 8


def test_raw_to_slot_index_non_repeatable():
    layout = WheelLayout(WheelConfig(item_count=8))
    layout.geometry.adapter_item_count = 3
    assert layout.raw_to_slot_index(9) == 1
    assert layout.raw_to_slot_index(-3) == 5


def test_rotated_slot_centers():
    layout = laid_out(item_count=8, item_radius=20.0)
    rotated = layout.rotated_slot_centers(90.0)
    assert rotated[0] == pytest.approx([200.0, 380.0])
    assert layout.geometry.angle == 0.0


def test_item_radius_fills_angle_at_explicit_distance():
    layout = laid_out(item_count=6, wheel_to_item_distance=120.0)
    assert layout.geometry.wheel_to_item_distance == 120.0
    assert layout.geometry.item_radius == pytest.approx(60.0)


def test_plain_int_position_flags():
    layout = laid_out(width=200, height=200, item_count=8, position=int(WheelPosition.TOP))
    assert layout.geometry.wheel_bounds.center_y == 0.0
