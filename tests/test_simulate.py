import pytest

from vehicles.base import State2D, WheelCommand
from vehicles.pen_robot import get_remaining, set_pen_down
from sim.simulate import (
    COMPLETION_TOLERANCE_CM, drive_to_targets, rollout_wheel_command,
    run_wheel_commands,
)


def test_rollout_runs_until_budgets_done(robot):
    poses = rollout_wheel_command(robot, 10, 10, dt=0.1)
    assert poses[0] == State2D(0.0, 0.0, 0.0)
    assert len(poses) == 11
    assert poses[-1].x == pytest.approx(10.0)
    l, r = get_remaining(robot)
    assert abs(l) < COMPLETION_TOLERANCE_CM and abs(r) < COMPLETION_TOLERANCE_CM


def test_rollout_gives_up_when_clock_does_not_advance(robot):
    with pytest.raises(RuntimeError):
        rollout_wheel_command(robot, 5, 5, dt=0.0, max_steps=50)


def test_run_wheel_commands_records_each_move(robot):
    set_pen_down(robot, True)
    records = run_wheel_commands(robot, [(10, 10), (0, 13.35), (5, 5)], dt=0.1)
    assert [rec.command for rec in records] == [
        WheelCommand(10.0, 10.0), WheelCommand(0.0, 13.35), WheelCommand(5.0, 5.0)]
    assert all(rec.target is None and rec.predicted is None for rec in records)
    assert records[0].steps == 10
    # pen down: one sample per moving step
    assert records[-1].trail_len == sum(rec.steps for rec in records)
    assert records[-1].final == records[-1].poses[-1]


def test_drive_to_targets_solves_each_target(robot):
    set_pen_down(robot, True)
    targets = [(10.0, 0.0), (20.0, 0.0)]
    records = drive_to_targets(robot, targets)
    assert [rec.target for rec in records] == targets
    for rec, target in zip(records, targets):
        assert rec.predicted.position == pytest.approx(target)
        assert (rec.final.x, rec.final.y) == pytest.approx(target, abs=0.02)
    assert records[0].trail_len < records[1].trail_len


def test_drive_to_targets_turning_target_moves_pen_left(robot):
    records = drive_to_targets(robot, [(5.0, 5.0)])
    rec = records[0]
    assert rec.command.right_distance > rec.command.left_distance
    assert rec.final.theta > 0.0
    assert rec.final.y > 0.0
