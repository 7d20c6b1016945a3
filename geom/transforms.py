# geom/transforms.py
import math


def heading_vector(theta):
    return math.cos(theta), math.sin(theta)


def left_normal(theta):
    """Unit vector pointing to the vehicle's left (+90 deg from heading)."""
    return -math.sin(theta), math.cos(theta)


def rotate_about(point, center, angle):
    """Rotate `point` about `center` by `angle` (CCW positive)."""
    x, y = point
    cx, cy = center
    c, s = math.cos(angle), math.sin(angle)
    dx, dy = x - cx, y - cy
    return (cx + c*dx - s*dy,
            cy + s*dx + c*dy)


def world_to_local(dx, dy, theta):
    """
    Express a world-frame offset in the vehicle frame (+x forward, +y left),
    i.e. rotate it by -theta.
    """
    c, s = math.cos(theta), math.sin(theta)
    return (dx*c + dy*s,
            -dx*s + dy*c)
