# sim/animate.py
import math
import numpy as np
import matplotlib
matplotlib.use("Agg")  # off-screen backend for image/GIF writing
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as MplPoly
import imageio.v2 as imageio
from geom.angles import to_display_degrees
from geom.polygons import robot_body, wheel_boxes

GRID_RANGE_CM = 40       # grid drawn over [-40, 40] cm on both axes
GRID_SPACING_CM = 10
TRAIL_COLOR = "#3498db"
BODY_COLOR = "#e74c3c"
WHEEL_COLOR = "#2c3e50"
PEN_DOWN_COLOR = "#27ae60"
PEN_UP_COLOR = "#bdc3c7"


def _extent(points, grid_range):
    """Half-width of the view: the grid range, grown to fit every point."""
    r = grid_range
    for (x, y) in points:
        r = max(r, abs(x) + GRID_SPACING_CM, abs(y) + GRID_SPACING_CM)
    return GRID_SPACING_CM * math.ceil(r / GRID_SPACING_CM)


def draw_scene(ax, trail, pose, wheel_track, wheel_offset,
               pen_down=False, targets=None, grid_range=GRID_RANGE_CM):
    """Draw grid, axes, pen trail, optional targets and the robot at `pose`."""
    x, y, th = pose
    r = _extent(list(trail) + list(targets or []) + [(x, y)], grid_range)

    ax.clear()
    ax.set_aspect('equal', adjustable='box')
    ax.set_xlim(-r, r)
    ax.set_ylim(-r, r)
    ticks = list(range(-r, r + 1, GRID_SPACING_CM))
    ax.set_xticks(ticks)
    ax.set_yticks(ticks)
    ax.grid(True, linewidth=0.5, color="#dddddd")
    ax.axhline(0.0, color="black", linewidth=1)
    ax.axvline(0.0, color="black", linewidth=1)

    if len(trail) >= 2:
        xs, ys = zip(*trail)
        ax.plot(xs, ys, linewidth=2, color=TRAIL_COLOR)

    if targets:
        tx, ty = zip(*targets)
        ax.plot(tx, ty, linestyle="none", marker="x", markersize=8, color=PEN_DOWN_COLOR)

    ax.add_patch(MplPoly(robot_body((x, y), th, wheel_track, wheel_offset),
                         closed=True, fill=True, color=BODY_COLOR, alpha=0.8))
    for box in wheel_boxes((x, y), th, wheel_track, wheel_offset):
        ax.add_patch(MplPoly(box, closed=True, fill=True, color=WHEEL_COLOR))
    ax.plot(x, y, marker='o', markersize=5,
            color=PEN_DOWN_COLOR if pen_down else PEN_UP_COLOR)

    ax.set_xlabel("x [cm]")
    ax.set_ylabel("y [cm]")
    ax.set_title(f"Pen ({x:.2f}, {y:.2f})  θ: {to_display_degrees(th):.2f}°")


def save_trail_png(state, out_path, targets=None, grid_range=GRID_RANGE_CM):
    """Render the robot's current pose and trail to a PNG."""
    fig, ax = plt.subplots(figsize=(6, 6))
    draw_scene(ax, state.trail, (state.x, state.y, state.orientation),
               state.wheel_track, state.wheel_offset,
               pen_down=state.pen_down, targets=targets, grid_range=grid_range)
    fig.savefig(out_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def save_gif_frames(
    poses,
    out,
    wheel_track,
    wheel_offset,
    stride=1,
    *,
    pen_down=True,
    targets=None,
    frame_delay=0.05,
    grid_range=GRID_RANGE_CM,
):
    """
    Save an animated GIF of the robot moving along `poses`.

    Args:
        poses: list of (x, y, theta) pen poses, one per integration step.
        out (str): output GIF filename.
        stride (int): sample every k-th pose; the last pose is always drawn.
        pen_down (bool): draw the pen path up to each frame as the trail.
        targets: optional list of (x, y) target markers.
        frame_delay (float): frame duration in seconds.
    """
    if not poses:
        raise ValueError("no poses to animate")
    stride = max(1, int(stride))
    indices = list(range(0, len(poses), stride))
    if indices[-1] != len(poses) - 1:
        indices.append(len(poses) - 1)

    imgs = []
    for k in indices:
        fig, ax = plt.subplots(figsize=(6, 6))
        trail = [(px, py) for (px, py, _) in poses[:k + 1]] if pen_down else []
        draw_scene(ax, trail, tuple(poses[k]), wheel_track, wheel_offset,
                   pen_down=pen_down, targets=targets, grid_range=grid_range)

        # rasterize
        fig.canvas.draw()
        w, h = fig.canvas.get_width_height()
        buf = np.frombuffer(fig.canvas.buffer_rgba(), dtype=np.uint8)
        rgba = buf.reshape(h, w, 4)
        imgs.append(rgba[..., :3].copy())
        plt.close(fig)

    imageio.mimsave(out, imgs, duration=float(frame_delay))
    return len(imgs)
