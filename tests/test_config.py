import pytest

from wheelview import ConfigurationError, PhysicsConfig, SelectionRounding, Wheel, WheelConfig, WheelPosition
from wheelview.layout import WheelLayout


def test_defaults_are_valid():
    config = WheelConfig()
    config.validate()
    assert config.physics == PhysicsConfig(0.015, 0.0028, 22.0, 0.3)
    assert config.click_max_dragged_angle == 0.7
    assert config.selection_rounding is SelectionRounding.TRUNCATE


@pytest.mark.parametrize(
    "options",
    [
        {"wheel_radius": -1.0},
        {"item_radius": -2.0},
        {"item_count": -1},
        {"item_angle": 350.0, "item_angle_padding": 20.0},
        {"wheel_padding": -3.0},
        {"item_transformer": "no-such-transformer"},
        {"item_transformer": None},
        {"selection_transformer": 42},
        {"physics": PhysicsConfig(velocity_friction=-0.1)},
    ],
)
def test_invalid_options_raise(options):
    with pytest.raises(ConfigurationError):
        WheelConfig(**options).validate()


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        WheelConfig(item_count=-4).validate()


def test_dict_round_trip():
    config = WheelConfig(
        item_count=12,
        repeatable=True,
        position=WheelPosition.RIGHT | WheelPosition.TOP,
        selection_rounding=SelectionRounding.NEAREST,
        physics=PhysicsConfig(max_angular_velocity=0.5),
    )
    data = config.to_dict()
    assert data["position"] == 6
    assert data["selection_rounding"] == "nearest"
    assert data["physics"]["max_angular_velocity"] == 0.5

    restored = WheelConfig.from_dict(data)
    assert restored == config
    assert restored.position is not None and WheelPosition.TOP in restored.position


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigurationError, match="spin_speed"):
        WheelConfig.from_dict({"item_count": 8, "spin_speed": 3})


def test_from_dict_rejects_bad_nested_values():
    with pytest.raises(ConfigurationError):
        WheelConfig.from_dict({"physics": {"gravity": 9.81}})
    with pytest.raises(ConfigurationError):
        WheelConfig.from_dict({"selection_rounding": "ceil"})
    with pytest.raises(ConfigurationError):
        WheelConfig.from_dict({"physics": {"constant_friction": 0.0}})


def test_item_radius_must_fit_the_derived_item_angle():
    config = WheelConfig(wheel_to_item_distance=10.0, item_radius=20.0)
    with pytest.raises(ConfigurationError, match="does not fit"):
        config.validate()
    with pytest.raises(ConfigurationError):
        Wheel(config)
    with pytest.raises(ConfigurationError):
        WheelLayout(config)

    # with an explicit item count the item angle is not derived from the radius
    WheelConfig(item_count=8, wheel_to_item_distance=10.0, item_radius=20.0).validate()
