# sim/simulate.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from vehicles.base import State2D, WheelCommand
from vehicles.pen_robot import set_wheel_distances, is_motion_complete
from plan.inverse_kinematics import solve, LOCAL_FRAME
from sim.integrator import step

FRAME_DT_S = 1.0 / 60.0            # one display frame at 60 Hz
COMPLETION_TOLERANCE_CM = 0.01
MAX_ROLLOUT_STEPS = 100000


def _pose(state):
    return State2D(state.x, state.y, state.orientation)


@dataclass
class MoveRecord:
    """What one command did: the request, the prediction (if solved) and the outcome."""
    command: WheelCommand
    target: Optional[Tuple[float, float]] = None
    predicted: Optional[State2D] = None
    final: Optional[State2D] = None
    steps: int = 0
    trail_len: int = 0
    poses: List[State2D] = field(default_factory=list)


def rollout_wheel_command(state, left, right, dt=FRAME_DT_S,
                          tolerance=COMPLETION_TOLERANCE_CM,
                          max_steps=MAX_ROLLOUT_STEPS):
    """
    Apply one wheel command and step the robot until both budgets are within
    `tolerance`. Returns the (x, y, theta) poses sampled after each step,
    starting with the pose before the first step.
    """
    set_wheel_distances(state, left, right)
    poses = [_pose(state)]
    n = 0
    while not is_motion_complete(state, tolerance):
        if n >= max_steps:
            raise RuntimeError(
                f"wheel command ({left}, {right}) not finished after {max_steps} steps "
                f"(remaining {state.left_remaining:.4f}, {state.right_remaining:.4f})")
        step(state, dt)
        poses.append(_pose(state))
        n += 1
    return poses


def run_wheel_commands(state, commands, dt=FRAME_DT_S,
                       tolerance=COMPLETION_TOLERANCE_CM):
    """Execute (left, right) pairs one after another."""
    records = []
    for left, right in commands:
        poses = rollout_wheel_command(state, left, right, dt, tolerance)
        records.append(MoveRecord(command=WheelCommand(float(left), float(right)),
                                  final=poses[-1], steps=len(poses) - 1,
                                  trail_len=len(state.trail), poses=poses))
    return records


def drive_to_targets(state, targets, dt=FRAME_DT_S,
                     tolerance=COMPLETION_TOLERANCE_CM, frame=LOCAL_FRAME):
    """
    For each target: solve for wheel distances, apply them and roll out until
    done, then move on to the next target. One solve per target, no retries.
    """
    records = []
    for target in targets:
        solution = solve(state, target, frame=frame)
        poses = rollout_wheel_command(state, solution.left_distance,
                                      solution.right_distance, dt, tolerance)
        records.append(MoveRecord(command=solution.command,
                                  target=(float(target[0]), float(target[1])),
                                  predicted=solution.predicted,
                                  final=poses[-1], steps=len(poses) - 1,
                                  trail_len=len(state.trail), poses=poses))
    return records
