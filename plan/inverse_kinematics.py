# plan/inverse_kinematics.py
"""
Closed-form target -> wheel-distance conversion for the pen robot.

The pen-to-target offset is split into a forward and a lateral part and
mapped onto a wheel-distance differential scaled by track/offset:

    right = dx + k*dy
    left  = dx - k*dy        k = wheel_track / wheel_offset

This is a first-order approximation, not an exact inverse of the arc
integration: one command gets the pen close, repeated commands converge.
"""
import math
from dataclasses import dataclass

from vehicles.base import State2D, WheelCommand, require_finite
from geom.angles import wrap_0_2pi
from geom.transforms import world_to_local

LOCAL_FRAME = "local"   # rotate the world delta by -theta (default)
WORLD_FRAME = "world"   # use the world delta as-is
FRAMES = (LOCAL_FRAME, WORLD_FRAME)


@dataclass(frozen=True)
class IKSolution:
    command: WheelCommand
    predicted: State2D

    @property
    def left_distance(self):
        return self.command.left_distance

    @property
    def right_distance(self):
        return self.command.right_distance

    @property
    def predicted_position(self):
        return self.predicted.position

    @property
    def predicted_orientation(self):
        return self.predicted.theta


def solve(state, target, frame=LOCAL_FRAME) -> IKSolution:
    """
    Wheel distances that move the pen of `state` toward `target` (x, y),
    plus the pose this command is predicted to end in. Does not mutate `state`.
    """
    tx, ty = target
    require_finite("target x", tx)
    require_finite("target y", ty)
    if frame not in FRAMES:
        raise ValueError(f"frame must be one of {FRAMES}, got {frame!r}")

    x, y, theta = state.x, state.y, state.orientation
    track, offset = state.wheel_track, state.wheel_offset

    dx_world = tx - x
    dy_world = ty - y
    if frame == LOCAL_FRAME:
        dx, dy = world_to_local(dx_world, dy_world, theta)
    else:
        dx, dy = dx_world, dy_world

    k = track / (offset if offset != 0 else 1.0)
    right = dx + k * dy
    left = dx - k * dy

    heading = wrap_0_2pi(theta + math.atan((left - right) / track))
    return IKSolution(WheelCommand(left, right),
                      State2D(x + dx_world, y + dy_world, heading))
