# geom/polygons.py
import math


def _place(points_local, origin, theta):
    """Rotate local (forward, left) points by theta and shift to origin."""
    x, y = origin
    c, s = math.cos(theta), math.sin(theta)
    return [(x + c*px - s*py, y + s*px + c*py) for (px, py) in points_local]


def oriented_box(center, length, width, theta):
    """
    Return a 4-vertex polygon for a rectangle centered at 'center' with heading 'theta'.
    Long side = length (front/back), short side = width (left/right).
    """
    L = length / 2.0
    W = width / 2.0
    return _place([(L, W), (L, -W), (-L, -W), (-L, W)], center, theta)


def robot_body(pen_xy, theta, wheel_track, wheel_offset):
    """
    Triangle footprint of the pen robot: front vertex at the pen,
    back vertices at the two wheels.
    """
    half = wheel_track / 2.0
    return _place([(0.0, 0.0), (-wheel_offset, -half), (-wheel_offset, half)],
                  pen_xy, theta)


def wheel_boxes(pen_xy, theta, wheel_track, wheel_offset,
                wheel_length=3.0, wheel_width=1.0):
    """(left_box, right_box) wheel rectangles, centered on each wheel contact point."""
    half = wheel_track / 2.0
    c, s = math.cos(theta), math.sin(theta)
    x, y = pen_xy
    boxes = []
    for lateral in (half, -half):
        px, py = -wheel_offset, lateral
        center = (x + c*px - s*py, y + s*px + c*py)
        boxes.append(oriented_box(center, wheel_length, wheel_width, theta))
    return boxes[0], boxes[1]
