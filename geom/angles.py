# geom/angles.py
import math

TWO_PI = 2.0 * math.pi


def wrap_0_2pi(a):
    """Normalize an angle into [0, 2*pi)."""
    a = math.fmod(a, TWO_PI)
    if a < 0.0:
        a += TWO_PI
    # fmod of a tiny negative can round back up to exactly 2*pi
    if a >= TWO_PI:
        a = 0.0
    return a


def to_display_degrees(a):
    """Heading in degrees within (-180, 180], the way readouts show it."""
    deg = math.degrees(a)
    while deg > 180.0:
        deg -= 360.0
    while deg <= -180.0:
        deg += 360.0
    return deg
