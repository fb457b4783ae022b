import pytest

from wheelview import SelectionRounding, Wheel, WheelArrayAdapter, WheelConfig, WheelPosition
from wheelview.model.state import EMPTY_CACHE_ENTRY


@pytest.mark.parametrize(
    "angle, expected",
    [(0.0, 0), (-45.0, 1), (22.5, 0), (-22.5, 0), (44.9, 0), (45.1, -1), (90.0, -2), (-360.0, 8)],
)
def test_angle_to_raw_position_truncates(angle, expected):
    wheel = Wheel(WheelConfig(item_count=8))
    assert wheel.selection.angle_to_raw_position(angle) == expected


@pytest.mark.parametrize(
    "angle, expected",
    [(0.0, 0), (-45.0, 1), (22.4, 0), (22.5, -1), (-22.5, 1), (22.6, -1), (44.9, -1), (-67.0, 1), (-68.0, 2)],
)
def test_angle_to_raw_position_nearest(angle, expected):
    wheel = Wheel(WheelConfig(item_count=8, selection_rounding=SelectionRounding.NEAREST))
    assert wheel.selection.angle_to_raw_position(angle) == expected


def test_selection_without_item_angle_is_zero():
    wheel = Wheel()
    assert wheel.selection.angle_to_raw_position(123.0) == 0


def test_selection_callback_fires_on_change_only(make_wheel):
    wheel = make_wheel()
    selected = []
    wheel.on_item_selected = selected.append

    wheel.set_angle(-10.0)
    wheel.set_angle(-50.0)
    wheel.set_angle(-60.0)
    wheel.set_angle(-95.0)
    assert selected == [1, 2]
    assert wheel.selected_position == 2


def test_selection_callback_skips_empty_positions(make_wheel):
    wheel = make_wheel()
    selected = []
    wheel.on_item_selected = selected.append

    wheel.set_angle(50.0)
    assert wheel.raw_selected_position == -1
    assert selected == []
    wheel.set_angle(0.0)
    assert selected == [0]


def test_compute_item_states_window(make_wheel):
    wheel = make_wheel()
    states = wheel.selection.compute_item_states()
    assert [s.raw_position for s in states] == list(range(-4, 4))

    selected = states[4]
    assert selected.raw_position == 0
    assert selected.relative_position == pytest.approx(0.0)
    assert (selected.bounds.center_x, selected.bounds.center_y) == pytest.approx((380.0, 200.0))

    below = states[6]
    assert below.angle_from_selection == pytest.approx(-90.0)
    assert below.relative_position == pytest.approx(-4.0)


def test_compute_item_states_before_layout():
    wheel = Wheel(WheelConfig(item_count=8))
    assert wheel.selection.compute_item_states() == []


def test_clicked_state_hit_test(make_wheel):
    wheel = make_wheel()
    state = wheel.selection.clicked_state(385.0, 205.0)
    assert state is not None and state.raw_position == 0
    assert wheel.selection.clicked_state(200.0, 200.0) is None


def _visibility_wheel(make_wheel):
    # Wheel centered on the right edge of the container: the right half is off screen
    return make_wheel(repeatable=True, position=WheelPosition.RIGHT)


def test_visibility_edges_fire_once(make_wheel):
    wheel = _visibility_wheel(make_wheel)
    changes = []
    wheel.on_item_visibility_change = lambda position, visible: changes.append((position, visible))

    wheel.frame()
    assert sorted(changes) == [(2, True), (3, True), (4, True), (5, True), (6, True)]

    changes.clear()
    wheel.frame()
    wheel.frame()
    assert changes == []

    wheel.set_angle(45.0)
    wheel.frame()
    assert sorted(changes) == [(1, True), (6, False)]


def test_positions_leaving_the_window_become_invisible(make_wheel):
    wheel = make_wheel()
    changes = []
    wheel.on_item_visibility_change = lambda position, visible: changes.append((position, visible))

    wheel.frame()
    assert sorted(changes) == [(0, True), (1, True), (2, True), (3, True)]

    changes.clear()
    wheel.set_angle(180.0)
    wheel.frame()
    assert sorted(changes) == [(0, False), (1, False), (2, False), (3, False)]
    assert all(item.is_empty for item in wheel.frame().items)


def test_empty_positions_share_the_sealed_entry(make_wheel):
    wheel = make_wheel()
    wheel.frame()
    assert wheel.cache.get(-1) is EMPTY_CACHE_ENTRY
    assert wheel.cache.get(8) is EMPTY_CACHE_ENTRY
    assert not EMPTY_CACHE_ENTRY.is_visible
    with pytest.raises(AttributeError):
        EMPTY_CACHE_ENTRY.is_visible = True


def test_content_fetched_once_until_invalidated(make_wheel):
    wheel = make_wheel()
    adapter = wheel.adapter

    wheel.frame()
    assert sorted(adapter.fetches) == [0, 1, 2, 3]

    adapter.fetches.clear()
    wheel.frame()
    assert adapter.fetches == []

    wheel.invalidate_item(2)
    wheel.frame()
    assert adapter.fetches == [2]

    adapter.fetches.clear()
    wheel.invalidate_all()
    wheel.frame()
    assert sorted(adapter.fetches) == [0, 1, 2, 3]


def test_get_item_content(make_wheel):
    wheel = make_wheel()
    wheel.empty_item_content = "blank"
    assert wheel.get_item_content(3) == "item-3"
    assert wheel.get_item_content(3) == "item-3"
    assert wheel.adapter.fetches == [3]
    assert wheel.get_item_content(-1) == "blank"


def test_selection_callback_needs_adapter_items():
    wheel = Wheel(WheelConfig(item_count=8, repeatable=True))
    wheel.set_adapter(WheelArrayAdapter([]))
    selected = []
    wheel.on_item_selected = selected.append

    wheel.set_angle(50.0)
    assert wheel.raw_selected_position == -1
    assert selected == []
