# records/metrics.py
#!/usr/bin/env python3
import argparse, os
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from records.run_log import CONFIG_FILE, RunLog


def trail_length(trail):
    """Total XY length of a pen trail = sum of Euclidean segment distances."""
    if not trail or len(trail) < 2:
        return 0.0
    pts = np.asarray(trail, dtype=float)
    return float(np.hypot(*np.diff(pts, axis=0).T).sum())


def target_errors(rows):
    """Distance from final pen position to target, for rows that had a target."""
    errs = []
    for row in rows:
        if row["target_x"] is None:
            continue
        errs.append(float(np.hypot(row["final_x"] - row["target_x"],
                                   row["final_y"] - row["target_y"])))
    return errs


def plot_wheel_distances(rows, out_path):
    moves = [r["move"] for r in rows]
    left = [r["left_cm"] for r in rows]
    right = [r["right_cm"] for r in rows]
    x = np.arange(len(moves))

    plt.figure()
    plt.bar(x - 0.2, left, width=0.4, label="left")
    plt.bar(x + 0.2, right, width=0.4, label="right")
    plt.xticks(x, [str(m) for m in moves])
    plt.xlabel("move"); plt.ylabel("wheel distance [cm]")
    plt.title("Wheel distances per move"); plt.grid(True, linewidth=0.3); plt.legend()
    plt.tight_layout()
    plt.savefig(out_path, dpi=150)
    plt.close()


def main(argv=None):
    ap = argparse.ArgumentParser(description="Summarize a run directory written by sim.run_drawing")
    ap.add_argument('run_dir')
    ap.add_argument('--out', default=None, help="PNG path (default: <run_dir>/wheel_distances.png)")
    args = ap.parse_args(argv)

    rows = RunLog.load_run_csv(args.run_dir)
    if os.path.exists(os.path.join(args.run_dir, CONFIG_FILE)):
        cfg = RunLog.load_config_json(args.run_dir)
        veh = cfg.get("vehicle", {})
        print("vehicle: " + " ".join(f"{k}={v}" for k, v in veh.items()) +
              f" mode={cfg.get('mode')} dt={cfg.get('dt')}")
    out = args.out or os.path.join(args.run_dir, "wheel_distances.png")
    plot_wheel_distances(rows, out)

    errs = target_errors(rows)
    print(f"moves={len(rows)} steps={sum(r['steps'] for r in rows)}")
    if errs:
        print(f"target error: mean={np.mean(errs):.3f} cm max={np.max(errs):.3f} cm")
    return 0


if __name__ == '__main__':
    main()
