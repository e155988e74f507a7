"""
Bezier/arc error estimation.

Every estimate is the sum of two terms: ea, the error of the arc against
its own standard Bezier approximation, and eb, how far the given Bezier
strays from that approximation. eb comes from max_dev on the control point
displacements, measured in the arc's local frame and turned into a radial
distance from the circle.
"""

import math

import numpy as np

from arcspline.fitting.deviation import max_dev
from arcspline.geometry.bezier import control_points, halve_bezier
from arcspline.geometry.circle import arc_to_bezier, circle_through_points
from arcspline.geometry.vector import (
    angle, as_vector, length, normal, normalized, perpendicular, rebase, wrap_angle,
)

_X_AXIS = np.array([1.0, 0.0])


def _frame(v):
    """Unit vector along v, or the x axis when v vanishes."""
    u = normalized(v)
    if not u.any():
        return _X_AXIS
    return u


def _radial_excess(r, v, b, b2_source):
    """
    Radial distance added by a control point displacement bound.

    v holds the per-axis max_dev bounds in frame b. It is re-expressed in
    the frame of b2_source (a direction at the arc's end, given in world
    coordinates) and pushed out from a circle of radius r.
    """
    b2 = _frame(rebase(b2_source, b))
    u = rebase(v, b2)
    ux = abs(u[0])
    uy = u[1]
    denom = math.sqrt((r + ux) ** 2 + uy * uy) + r
    if denom == 0.0:
        return 0.0
    # sqrt((r + ux)^2 + uy^2) - r without cancellation for large r
    return (2 * r * ux + ux * ux + uy * uy) / denom


def _displacement_bound(v0, v1, b):
    """Per-axis max_dev of two control point displacements, in frame b."""
    v0 = rebase(v0, b)
    v1 = rebase(v1, b)
    return np.array([max_dev(v0[0], v1[0]), max_dev(v0[1], v1[1])])


def bezier_arc_error(bezier, arc):
    """
    Upper bound on the distance between a Bezier and an arc.

    The arc must start and end exactly where the Bezier does.
    """
    b1, ea = arc_to_bezier(arc)

    assert bezier.p0 == b1.p0, f"arc starts at {b1.p0}, curve at {bezier.p0}"
    assert bezier.p3 == b1.p3, f"arc ends at {b1.p3}, curve at {bezier.p3}"

    p = control_points(bezier)
    q = control_points(b1)

    b = _frame(normal(p[3] - p[0]))
    v = _displacement_bound(q[1] - p[1], q[2] - p[2], b)

    if arc.d == 0.0:
        return ea + length(v)

    c = length(q[3] - q[0])
    r = abs(c * (arc.d * arc.d + 1) / (4 * arc.d))
    eb = _radial_excess(r, v, b, normal(q[3] - q[2]))

    return ea + eb


def line_bezier_error(bezier, a, b):
    """
    Upper bound on the distance between a Bezier and the line through a and b.

    For a zero-length line this is the distance from a, bounded by the
    farthest control point.
    """
    p = control_points(bezier)
    a = as_vector(a)
    direction = as_vector(b) - a

    if not direction.any():
        return max(length(pt - a) for pt in p)

    n = normal(direction)
    d = [float(np.dot(pt - a, n)) for pt in p]
    return max(abs(d[0]), abs(d[3])) + max_dev(d[1], d[2])


def arc_bezier_error(bezier, circle):
    """
    Upper bound on the distance between a Bezier and the arc of a circle
    that joins the Bezier's end points.

    The end points are assumed to lie on the circle. A None circle stands
    for a straight line through the end points.
    """
    if circle is None:
        return line_bezier_error(bezier, bezier.p0, bezier.p3)

    p = control_points(bezier)
    c = as_vector(circle.center)
    r = circle.radius

    a0 = angle(p[0] - c)
    a1 = angle(p[3] - c)
    a4 = wrap_angle(a1 - a0) / 4.0
    k = 4.0 / 3.0 * math.tan(a4)

    # Control points of the standard Bezier for the arc
    p1s = p[0] + perpendicular(p[0] - c) * k
    p2s = p[3] + perpendicular(c - p[3]) * k

    ea = 2.0 / 27.0 * r * math.sin(a4) ** 6 / (math.cos(a4) / 4.0) ** 2

    radial = p[0] - c + p[3] - c
    if radial.any():
        b = _frame(radial)
    else:
        # End points diametrically opposite
        b = _frame(normal(p[3] - p[0]))
    v = _displacement_bound(p1s - p[1], p2s - p[2], b)
    eb = _radial_excess(r, v, b, p[3] - c)

    return ea + eb


def arc_bezier_error_improved(bezier):
    """
    Error of the arc through the curve's start, midpoint and end.

    Each half of the curve is measured against the shared circle and the
    worse half wins, which catches deviation that a single whole-curve
    estimate averages away.
    """
    first, second = halve_bezier(bezier)
    midpoint = second.p0

    circle = circle_through_points(bezier.p0, midpoint, bezier.p3)
    if circle is None:
        return max(
            line_bezier_error(first, bezier.p0, bezier.p3),
            line_bezier_error(second, bezier.p0, bezier.p3),
        )

    return max(arc_bezier_error(first, circle), arc_bezier_error(second, circle))
