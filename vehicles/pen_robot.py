# vehicles/pen_robot.py
"""
Two-wheeled pen robot: configuration, mutable state and the narrow
read/write interface used by drivers and renderers.

The tracked point is the pen. It sits `wheel_offset` cm ahead of the
wheel axle, on the robot's centerline. Distances are cm, angles radians.
The only function that moves the robot is sim.integrator.step.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from vehicles.base import (
    ConfigurationError, require_finite, require_non_negative, require_positive,
)
from geom.angles import wrap_0_2pi
from geom.transforms import heading_vector, left_normal

# Defaults from the demo set-up: 8.5 cm track, pen 12 cm ahead of the axle, 10 cm/s.
DEFAULT_WHEEL_TRACK_CM = 8.5
DEFAULT_WHEEL_OFFSET_CM = 12.0
DEFAULT_SPEED_CM_S = 10.0


@dataclass(frozen=True)
class VehicleConfig:
    wheel_track: float = DEFAULT_WHEEL_TRACK_CM
    wheel_offset: float = DEFAULT_WHEEL_OFFSET_CM
    speed: float = DEFAULT_SPEED_CM_S

    def __post_init__(self):
        require_positive("wheel_track", self.wheel_track)
        require_positive("wheel_offset", self.wheel_offset)
        require_positive("speed", self.speed)

    @classmethod
    def from_dict(cls, cfg: dict):
        """Build from a plain dict; unknown keys are rejected."""
        unknown = set(cfg) - {"wheel_track", "wheel_offset", "speed"}
        if unknown:
            raise ConfigurationError(f"unknown config keys: {sorted(unknown)}")
        return cls(**cfg)

    def as_dict(self):
        return {"wheel_track": self.wheel_track,
                "wheel_offset": self.wheel_offset,
                "speed": self.speed}


@dataclass
class VehicleState:
    wheel_track: float
    wheel_offset: float
    speed: float
    x: float = 0.0
    y: float = 0.0
    orientation: float = 0.0
    left_remaining: float = 0.0
    right_remaining: float = 0.0
    pen_down: bool = False
    trail: List[Tuple[float, float]] = field(default_factory=list)

    def __post_init__(self):
        require_positive("wheel_track", self.wheel_track)
        require_positive("speed", self.speed)
        require_non_negative("wheel_offset", self.wheel_offset)  # 0 is legal for a bare state

    @property
    def position(self):
        return (self.x, self.y)


def create(config=None) -> VehicleState:
    """
    Build a robot at the origin facing +x with the pen up.
    `config` may be a VehicleConfig, a dict, or None for the defaults.
    """
    if config is None:
        config = VehicleConfig()
    elif isinstance(config, dict):
        config = VehicleConfig.from_dict(config)
    elif not isinstance(config, VehicleConfig):
        raise ConfigurationError(f"unsupported config type: {type(config).__name__}")
    return VehicleState(wheel_track=float(config.wheel_track),
                        wheel_offset=float(config.wheel_offset),
                        speed=float(config.speed))


def set_wheel_distances(state: VehicleState, left: float, right: float):
    require_finite("left", left)
    require_finite("right", right)
    state.left_remaining = float(left)
    state.right_remaining = float(right)


def set_pen_down(state: VehicleState, is_down: bool):
    state.pen_down = bool(is_down)


def set_speed(state: VehicleState, speed: float):
    require_positive("speed", speed)
    state.speed = float(speed)


def get_position(state: VehicleState):
    return (state.x, state.y)


def get_orientation(state: VehicleState):
    return state.orientation


def get_remaining(state: VehicleState):
    return (state.left_remaining, state.right_remaining)


def get_trail(state: VehicleState):
    return list(state.trail)


def clear_trail(state: VehicleState):
    state.trail.clear()


def reset(state: VehicleState):
    """Back to the origin, facing +x, pen up, nothing owed, empty trail."""
    state.x, state.y = 0.0, 0.0
    state.orientation = 0.0
    state.left_remaining = 0.0
    state.right_remaining = 0.0
    state.pen_down = False
    state.trail.clear()


def get_axle_center(state: VehicleState):
    hx, hy = heading_vector(state.orientation)
    return (state.x - state.wheel_offset * hx,
            state.y - state.wheel_offset * hy)


def get_wheel_positions(state: VehicleState):
    """((left_x, left_y), (right_x, right_y)) wheel contact points in the world frame."""
    ax, ay = get_axle_center(state)
    nx, ny = left_normal(state.orientation)
    half = state.wheel_track / 2.0
    return ((ax + half * nx, ay + half * ny),
            (ax - half * nx, ay - half * ny))


def is_motion_complete(state: VehicleState, tolerance: float = 0.01):
    """True once both wheel budgets are within `tolerance` cm of zero."""
    return (abs(state.left_remaining) < tolerance and
            abs(state.right_remaining) < tolerance)


def place(state: VehicleState, x: float, y: float, orientation: float):
    """Teleport the pen to (x, y) with the given heading; trail is left alone."""
    for name, v in (("x", x), ("y", y), ("orientation", orientation)):
        require_finite(name, v)
    state.x, state.y = float(x), float(y)
    state.orientation = wrap_0_2pi(float(orientation))
