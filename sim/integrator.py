# sim/integrator.py
"""
Forward kinematics for the pen robot.

step(state, dt) moves each wheel by at most speed*dt along its remaining
budget, classifies the pair of wheel steps into one motion regime and
applies that regime's closed-form pose update:

    Straight   both wheels moved the same signed distance
    Pivot      exactly one wheel moved; rotation about the other wheel
    Arc        both moved by different amounts; rotation about the ICC

Heading is kept in [0, 2*pi). One trail sample is recorded per moving
step while the pen is down.
"""
from dataclasses import dataclass
from typing import Union

from vehicles.base import require_finite
from vehicles.pen_robot import VehicleState, get_axle_center, get_wheel_positions
from geom.angles import wrap_0_2pi
from geom.transforms import heading_vector, left_normal, rotate_about

# below this |dtheta| an arc is treated as a straight move (R -> inf)
MIN_ARC_DTHETA = 1e-4

LEFT = "left"
RIGHT = "right"


@dataclass(frozen=True)
class Straight:
    distance: float


@dataclass(frozen=True)
class Pivot:
    side: str          # the wheel that stays put
    distance: float    # travel of the moving wheel


@dataclass(frozen=True)
class Arc:
    left: float
    right: float


Motion = Union[Straight, Pivot, Arc]


def wheel_step(remaining, max_step):
    """Travel for one wheel this step: bounded by max_step, never past zero."""
    if remaining > 0:
        return min(remaining, max_step)
    if remaining < 0:
        return max(remaining, -max_step)
    return 0.0


def classify(left_step, right_step) -> Motion:
    if left_step == right_step:
        return Straight(left_step)
    if left_step == 0:
        return Pivot(LEFT, right_step)
    if right_step == 0:
        return Pivot(RIGHT, left_step)
    return Arc(left_step, right_step)


def _set_from_axle(state, axle, theta):
    hx, hy = heading_vector(theta)
    state.orientation = theta
    state.x = axle[0] + state.wheel_offset * hx
    state.y = axle[1] + state.wheel_offset * hy


def _translate(state, distance):
    hx, hy = heading_vector(state.orientation)
    state.x += distance * hx
    state.y += distance * hy


def _apply_pivot(state, motion: Pivot):
    left_wheel, right_wheel = get_wheel_positions(state)
    if motion.side == LEFT:
        # right wheel drives forward -> CCW about the left wheel
        fixed, angle = left_wheel, motion.distance / state.wheel_track
    else:
        fixed, angle = right_wheel, -motion.distance / state.wheel_track
    axle = rotate_about(get_axle_center(state), fixed, angle)
    _set_from_axle(state, axle, state.orientation + angle)


def _apply_arc(state, motion: Arc):
    l, r = motion.left, motion.right
    dtheta = (r - l) / state.wheel_track
    if abs(dtheta) < MIN_ARC_DTHETA:
        _translate(state, (l + r) / 2.0)
        return
    R = (state.wheel_track / 2.0) * (l + r) / (r - l)
    ax, ay = get_axle_center(state)
    nx, ny = left_normal(state.orientation)
    icc = (ax + R * nx, ay + R * ny)
    axle = rotate_about((ax, ay), icc, dtheta)
    _set_from_axle(state, axle, state.orientation + dtheta)


def apply_motion(state: VehicleState, motion: Motion):
    """Apply one classified motion to the pose and normalize heading."""
    if isinstance(motion, Straight):
        _translate(state, motion.distance)
    elif isinstance(motion, Pivot):
        _apply_pivot(state, motion)
    elif isinstance(motion, Arc):
        _apply_arc(state, motion)
    else:
        raise TypeError(f"unknown motion {motion!r}")
    state.orientation = wrap_0_2pi(state.orientation)


def step(state: VehicleState, dt: float):
    """
    Integrate one time slice of `dt` seconds.
    Returns the Motion applied, or None when nothing moved.
    """
    require_finite("dt", dt)
    require_finite("speed", state.speed)
    require_finite("left_remaining", state.left_remaining)
    require_finite("right_remaining", state.right_remaining)
    if dt <= 0:
        return None
    if state.left_remaining == 0 and state.right_remaining == 0:
        return None

    max_step = state.speed * dt
    left_step = wheel_step(state.left_remaining, max_step)
    right_step = wheel_step(state.right_remaining, max_step)
    if left_step == 0 and right_step == 0:
        return None  # max_step underflowed
    state.left_remaining -= left_step
    state.right_remaining -= right_step

    motion = classify(left_step, right_step)
    apply_motion(state, motion)

    if state.pen_down:
        state.trail.append((state.x, state.y))
    return motion
