import math

import pytest

from vehicles.base import ConfigurationError, ValidationError
from vehicles.pen_robot import (
    DEFAULT_SPEED_CM_S, DEFAULT_WHEEL_OFFSET_CM, DEFAULT_WHEEL_TRACK_CM,
    VehicleConfig, VehicleState, clear_trail, create, get_axle_center, get_orientation,
    get_position, get_remaining, get_trail, get_wheel_positions,
    is_motion_complete, place, reset, set_pen_down, set_speed,
    set_wheel_distances,
)
from sim.integrator import step


def test_create_defaults():
    state = create()
    assert (state.wheel_track, state.wheel_offset, state.speed) == (
        DEFAULT_WHEEL_TRACK_CM, DEFAULT_WHEEL_OFFSET_CM, DEFAULT_SPEED_CM_S)
    assert get_position(state) == (0.0, 0.0)
    assert get_orientation(state) == 0.0
    assert get_remaining(state) == (0.0, 0.0)
    assert state.pen_down is False
    assert get_trail(state) == []


def test_create_from_dict():
    state = create({"wheel_track": 10, "wheel_offset": 5, "speed": 2})
    assert (state.wheel_track, state.wheel_offset, state.speed) == (10.0, 5.0, 2.0)


@pytest.mark.parametrize("cfg", [
    {"wheel_track": 0, "wheel_offset": 12, "speed": 10},
    {"wheel_track": -1, "wheel_offset": 12, "speed": 10},
    {"wheel_track": 8.5, "wheel_offset": 0, "speed": 10},
    {"wheel_track": 8.5, "wheel_offset": 12, "speed": 0},
    {"wheel_track": float("nan"), "wheel_offset": 12, "speed": 10},
    {"wheel_track": 8.5, "wheel_offset": 12, "speed": float("inf")},
    {"wheel_track": "8.5", "wheel_offset": 12, "speed": 10},
])
def test_bad_configuration_rejected(cfg):
    with pytest.raises(ConfigurationError):
        create(cfg)


def test_unknown_config_key_rejected():
    with pytest.raises(ConfigurationError):
        create({"wheel_track": 8.5, "wheel_offset": 12, "speed": 10, "radius": 3})


def test_unsupported_config_type_rejected():
    with pytest.raises(ConfigurationError):
        create((8.5, 12, 10))


@pytest.mark.parametrize("kwargs", [
    {"wheel_track": 0.0, "wheel_offset": 12.0, "speed": 10.0},
    {"wheel_track": 8.5, "wheel_offset": 12.0, "speed": -1.0},
    {"wheel_track": 8.5, "wheel_offset": -0.5, "speed": 10.0},
    {"wheel_track": 8.5, "wheel_offset": float("nan"), "speed": 10.0},
])
def test_direct_state_construction_validated(kwargs):
    with pytest.raises(ConfigurationError):
        VehicleState(**kwargs)


def test_direct_state_allows_zero_offset():
    state = VehicleState(wheel_track=8.5, wheel_offset=0.0, speed=10.0)
    set_wheel_distances(state, 0, 3)
    step(state, 1.0)
    assert get_orientation(state) == pytest.approx(3.0 / 8.5)


def test_config_as_dict_round_trip(config):
    assert VehicleConfig.from_dict(config.as_dict()) == config


def test_set_wheel_distances_validates(robot):
    set_wheel_distances(robot, 3, -4)
    with pytest.raises(ValidationError):
        set_wheel_distances(robot, float("nan"), 1.0)
    assert get_remaining(robot) == (3.0, -4.0)


def test_set_speed(robot):
    set_speed(robot, 20)
    assert robot.speed == 20.0
    with pytest.raises(ConfigurationError):
        set_speed(robot, 0)
    assert robot.speed == 20.0


def test_speed_change_applies_to_next_step(robot):
    set_wheel_distances(robot, 10, 10)
    set_speed(robot, 4.0)
    step(robot, 1.0)
    assert get_position(robot) == pytest.approx((4.0, 0.0))


def test_readers_return_snapshots(robot):
    set_pen_down(robot, True)
    set_wheel_distances(robot, 2, 2)
    step(robot, 1.0)
    trail = get_trail(robot)
    trail.append((99.0, 99.0))
    assert get_trail(robot) == [(2.0, 0.0)]


def test_clear_trail_keeps_pose(robot):
    set_pen_down(robot, True)
    set_wheel_distances(robot, 2, 3)
    step(robot, 1.0)
    pose = (get_position(robot), get_orientation(robot))
    clear_trail(robot)
    assert get_trail(robot) == []
    assert (get_position(robot), get_orientation(robot)) == pose


def test_reset(robot):
    place(robot, 4.0, 5.0, 1.0)
    set_pen_down(robot, True)
    set_wheel_distances(robot, 1, 2)
    robot.trail.append((4.0, 5.0))
    reset(robot)
    assert get_position(robot) == (0.0, 0.0)
    assert get_orientation(robot) == 0.0
    assert get_remaining(robot) == (0.0, 0.0)
    assert robot.pen_down is False
    assert get_trail(robot) == []
    assert robot.wheel_track == 8.5


def test_axle_and_wheels_sit_behind_pen(robot):
    assert get_axle_center(robot) == pytest.approx((-12.0, 0.0))
    left, right = get_wheel_positions(robot)
    assert left == pytest.approx((-12.0, 4.25))
    assert right == pytest.approx((-12.0, -4.25))

    place(robot, 0.0, 0.0, math.pi / 2)
    assert get_axle_center(robot) == pytest.approx((0.0, -12.0), abs=1e-12)
    left, right = get_wheel_positions(robot)
    assert left == pytest.approx((-4.25, -12.0), abs=1e-12)
    assert right == pytest.approx((4.25, -12.0), abs=1e-12)


def test_is_motion_complete(robot):
    assert is_motion_complete(robot)
    set_wheel_distances(robot, 0.005, -0.009)
    assert is_motion_complete(robot)
    set_wheel_distances(robot, 0.0, 0.02)
    assert not is_motion_complete(robot)
    assert is_motion_complete(robot, tolerance=0.05)


def test_place_normalizes_heading(robot):
    place(robot, 1.0, 2.0, -math.pi / 2)
    assert get_orientation(robot) == pytest.approx(1.5 * math.pi)
    with pytest.raises(ValidationError):
        place(robot, float("nan"), 0.0, 0.0)
