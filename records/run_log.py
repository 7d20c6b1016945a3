# records/run_log.py
import os, csv, json

from geom.angles import to_display_degrees

CONFIG_FILE = "run_config.json"
LOG_FILE = "run_log.csv"

LOG_HEADER = [
    "move", "mode",
    "target_x", "target_y",
    "left_cm", "right_cm",
    "pred_x", "pred_y", "pred_theta_deg",
    "final_x", "final_y", "final_theta_deg",
    "steps", "trail_len",
]


def _fmt(v):
    return "" if v is None else f"{v:.4f}"


def move_rows(records, mode):
    """Flatten sim.simulate.MoveRecord objects into CSV rows (see LOG_HEADER)."""
    rows = []
    for i, rec in enumerate(records):
        tx, ty = rec.target if rec.target is not None else (None, None)
        p = rec.predicted
        f = rec.final
        rows.append([
            i, mode,
            _fmt(tx), _fmt(ty),
            _fmt(rec.command.left_distance), _fmt(rec.command.right_distance),
            _fmt(p.x if p is not None else None), _fmt(p.y if p is not None else None),
            _fmt(to_display_degrees(p.theta) if p is not None else None),
            _fmt(f.x), _fmt(f.y), _fmt(to_display_degrees(f.theta)),
            rec.steps,
            rec.trail_len,
        ])
    return rows


class RunLog:
    @staticmethod
    def export_config_json(outdir, cfg: dict):
        path = os.path.join(outdir, CONFIG_FILE)
        with open(path, "w") as f:
            json.dump(cfg, f, indent=2)
        return path

    @staticmethod
    def export_log_csv(outdir, rows, header=LOG_HEADER):
        path = os.path.join(outdir, LOG_FILE)
        with open(path, "w", newline="") as f:
            w = csv.writer(f); w.writerow(header); w.writerows(rows)
        return path

    @staticmethod
    def load_config_json(outdir):
        with open(os.path.join(outdir, CONFIG_FILE)) as f:
            return json.load(f)

    @staticmethod
    def load_run_csv(outdir):
        rows = []
        with open(os.path.join(outdir, LOG_FILE), newline="") as f:
            r = csv.DictReader(f)
            for row in r:
                row["move"] = int(row["move"])
                row["steps"] = int(row["steps"])
                row["trail_len"] = int(row.get("trail_len", 0) or 0)
                for key in ("left_cm", "right_cm", "final_x", "final_y", "final_theta_deg"):
                    row[key] = float(row[key])
                for key in ("target_x", "target_y", "pred_x", "pred_y", "pred_theta_deg"):
                    row[key] = float(row[key]) if row[key] else None
                rows.append(row)
        return rows
