# sim/run_drawing.py
#!/usr/bin/env python3
"""
Drive the pen robot through a list of targets (inverse kinematics) or raw
wheel commands, then write the run to a directory:

    run_config.json   effective configuration
    run_log.csv       one row per move
    trail.png         grid, pen trail and final robot pose
    drawing.gif       optional animation (--gif)

Usage examples:
  python3 -m sim.run_drawing --targets "10,0;10,10;0,10;0,0" --outdir results
  python3 -m sim.run_drawing --wheels "10,10;0,13.35" --gif
"""
import argparse, math, os

from vehicles.base import PenRobotError
from vehicles.pen_robot import (
    VehicleConfig, create, place, set_pen_down,
    DEFAULT_WHEEL_TRACK_CM, DEFAULT_WHEEL_OFFSET_CM, DEFAULT_SPEED_CM_S,
)
from plan.inverse_kinematics import FRAMES, LOCAL_FRAME
from sim.simulate import (
    drive_to_targets, run_wheel_commands, FRAME_DT_S, COMPLETION_TOLERANCE_CM,
)
from sim.animate import save_trail_png, save_gif_frames
from records.run_log import RunLog, move_rows
from records.metrics import trail_length


def parse_pairs(text):
    """'1,2; 3,4' -> [(1.0, 2.0), (3.0, 4.0)]"""
    pairs = []
    for chunk in text.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        parts = chunk.split(",")
        if len(parts) != 2:
            raise argparse.ArgumentTypeError(f"expected 'a,b', got {chunk!r}")
        try:
            pairs.append((float(parts[0]), float(parts[1])))
        except ValueError:
            raise argparse.ArgumentTypeError(f"not a number pair: {chunk!r}") from None
    if not pairs:
        raise argparse.ArgumentTypeError("no pairs given")
    return pairs


def parse_point(text):
    """'1,2' -> (1.0, 2.0); exactly one pair."""
    pairs = parse_pairs(text)
    if len(pairs) != 1:
        raise argparse.ArgumentTypeError(f"expected a single 'x,y', got {len(pairs)} pairs")
    return pairs[0]


def positive_float(text):
    try:
        v = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if not (math.isfinite(v) and v > 0):
        raise argparse.ArgumentTypeError(f"must be a finite value > 0, got {text!r}")
    return v


def build_parser():
    ap = argparse.ArgumentParser(description="Pen robot differential-drive simulator")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument('--targets', type=parse_pairs, help="'x,y;x,y;...' target points [cm]")
    src.add_argument('--wheels', type=parse_pairs, help="'left,right;...' wheel distances [cm]")
    ap.add_argument('--wheel-track', type=float, default=DEFAULT_WHEEL_TRACK_CM)
    ap.add_argument('--wheel-offset', type=float, default=DEFAULT_WHEEL_OFFSET_CM)
    ap.add_argument('--speed', type=float, default=DEFAULT_SPEED_CM_S)
    ap.add_argument('--start', type=parse_point, default=None,
                    help="'x,y' start pen position (heading set by --start-theta)")
    ap.add_argument('--start-theta', type=float, default=0.0, help="start heading [rad]")
    ap.add_argument('--dt', type=positive_float, default=FRAME_DT_S, help="frame time slice [s]")
    ap.add_argument('--tolerance', type=positive_float, default=COMPLETION_TOLERANCE_CM)
    ap.add_argument('--frame', choices=FRAMES, default=LOCAL_FRAME,
                    help="inverse-kinematics frame convention")
    ap.add_argument('--pen', choices=('down', 'up'), default='down')
    ap.add_argument('--outdir', type=str, default='results')
    ap.add_argument('--gif', action='store_true')
    ap.add_argument('--gif-stride', type=int, default=5)
    ap.add_argument('--verbose', action='store_true')
    return ap


def run(args):
    cfg = VehicleConfig(args.wheel_track, args.wheel_offset, args.speed)
    state = create(cfg)
    if args.start:
        sx, sy = args.start
        place(state, sx, sy, args.start_theta)
    set_pen_down(state, args.pen == 'down')

    if args.targets:
        mode = "target"
        records = drive_to_targets(state, args.targets, dt=args.dt,
                                   tolerance=args.tolerance, frame=args.frame)
    else:
        mode = "wheels"
        records = run_wheel_commands(state, args.wheels, dt=args.dt,
                                     tolerance=args.tolerance)

    os.makedirs(args.outdir, exist_ok=True)
    RunLog.export_config_json(args.outdir, {
        "vehicle": cfg.as_dict(),
        "mode": mode,
        "frame": args.frame,
        "dt": args.dt,
        "tolerance": args.tolerance,
        "pen": args.pen,
        "start": {"xy": list(args.start) if args.start else [0.0, 0.0],
                  "theta": args.start_theta},
        "inputs": [list(p) for p in (args.targets or args.wheels)],
    })
    RunLog.export_log_csv(args.outdir, move_rows(records, mode))
    save_trail_png(state, os.path.join(args.outdir, "trail.png"), targets=args.targets)

    if args.gif:
        poses = [records[0].poses[0]] + [p for rec in records for p in rec.poses[1:]]
        save_gif_frames(poses, os.path.join(args.outdir, "drawing.gif"),
                        state.wheel_track, state.wheel_offset, args.gif_stride,
                        pen_down=(args.pen == 'down'), targets=args.targets)

    if args.verbose:
        for rec in records:
            f = rec.final
            print(f"L={rec.command.left_distance:.2f} R={rec.command.right_distance:.2f} "
                  f"-> ({f.x:.2f}, {f.y:.2f}) steps={rec.steps}")
        print(f"trail samples={len(state.trail)} length={trail_length(state.trail):.2f} cm")
    return state, records


def main(argv=None):
    ap = build_parser()
    args = ap.parse_args(argv)
    try:
        run(args)
    except (PenRobotError, RuntimeError) as e:
        ap.exit(2, f"error: {e}\n")
    return 0


if __name__ == '__main__':
    main()
