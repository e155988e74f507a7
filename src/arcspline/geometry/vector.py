"""
2-D vector helpers on numpy arrays of shape (2,).

Points and vectors share the representation; a vector is the difference of
two points.
"""

import math

import numpy as np


def as_vector(p):
    """Convert a point-like value to a float array of shape (2,)."""
    return np.asarray(p, dtype=float).reshape(2)


def to_point(v):
    """Convert an array back to a plain (x, y) tuple for the models."""
    return (float(v[0]), float(v[1]))


def length(v):
    return math.hypot(v[0], v[1])


def normalized(v):
    """Unit vector in the direction of v. The zero vector stays zero."""
    n = length(v)
    if n == 0.0:
        return np.zeros(2)
    return v / n


def perpendicular(v):
    """v rotated by +90 degrees."""
    return np.array([-v[1], v[0]])


def normal(v):
    """Unit perpendicular of v."""
    return normalized(perpendicular(v))


def rebase(v, bx):
    """
    Express v in the frame whose x axis is bx.

    Returns (v . bx, v . perpendicular(bx)); with a unit bx this rotates v
    so that bx lands on the x axis.
    """
    by = perpendicular(bx)
    return np.array([v[0] * bx[0] + v[1] * bx[1], v[0] * by[0] + v[1] * by[1]])


def angle(v):
    return math.atan2(v[1], v[0])


def cross(a, b):
    """z component of the 3-D cross product."""
    return a[0] * b[1] - a[1] * b[0]


def wrap_angle(a):
    """Wrap an angle into (-pi, pi]."""
    a = math.fmod(a, 2 * math.pi)
    if a <= -math.pi:
        a += 2 * math.pi
    elif a > math.pi:
        a -= 2 * math.pi
    return a
