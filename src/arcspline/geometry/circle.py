"""
Circles and circular arcs for arcspline.

Three points that are collinear (or coincide) have no circle. Those cases
return None here and callers treat them as straight segments, the limit of
an infinite radius.
"""

import math

from arcspline.geometry.bezier import line_to_bezier, make_bezier
from arcspline.geometry.vector import angle, as_vector, cross, length, perpendicular, to_point
from arcspline.models import Arc, Circle

# Relative cross product below which three points count as collinear
COLLINEAR_EPS = 1e-9


def circle_through_points(p0, p1, p2):
    """
    Circumscribed circle of three points.

    Returns None if the points are collinear or two of them coincide.
    """
    p0 = as_vector(p0)
    a = as_vector(p1) - p0
    b = as_vector(p2) - p0

    denom = 2 * cross(a, b)
    scale = length(a) * length(b)
    if scale == 0.0 or abs(denom) <= 2 * COLLINEAR_EPS * scale:
        return None

    # Center relative to p0 keeps precision for points far from the origin
    aa = a[0] * a[0] + a[1] * a[1]
    bb = b[0] * b[0] + b[1] * b[1]
    offset = as_vector([(aa * b[1] - bb * a[1]) / denom, (bb * a[0] - aa * b[0]) / denom])

    return Circle(center=to_point(p0 + offset), radius=length(offset))


def arc_from_points(p0, p1, through):
    """
    Arc from p0 to p1 passing through a third point.

    The through point fixes which of the two arcs between p0 and p1 is
    meant, and so the orientation. Collinear input gives a straight arc.
    """
    circle = circle_through_points(p0, through, p1)
    if circle is None:
        return Arc(p0=to_point(as_vector(p0)), p1=to_point(as_vector(p1)), d=0.0)

    c = as_vector(circle.center)
    a0 = angle(as_vector(p0) - c)
    sweep = (angle(as_vector(p1) - c) - a0) % (2 * math.pi)
    through_sweep = (angle(as_vector(through) - c) - a0) % (2 * math.pi)

    # The through point lies on the counter-clockwise path from p0 to p1 or
    # the arc goes the other way round.
    theta = sweep if through_sweep < sweep else sweep - 2 * math.pi
    return Arc(p0=to_point(as_vector(p0)), p1=to_point(as_vector(p1)), d=math.tan(theta / 4))


def arc_radius(arc):
    """Radius of an arc; infinite for a straight one."""
    if arc.d == 0.0:
        return math.inf
    chord = length(as_vector(arc.p1) - as_vector(arc.p0))
    return abs(chord * (arc.d * arc.d + 1) / (4 * arc.d))


def arc_circle(arc):
    """The circle an arc lies on, or None for a straight arc."""
    if arc.d == 0.0:
        return None

    p0 = as_vector(arc.p0)
    p1 = as_vector(arc.p1)
    d = arc.d
    mid = (p0 + p1) / 2
    # Signed distance from chord midpoint to center, in units of chord length
    center = mid + perpendicular(p1 - p0) * ((1 - d * d) / (4 * d))
    return Circle(center=to_point(center), radius=arc_radius(arc))


def arc_to_bezier(arc):
    """
    Standard cubic Bezier approximation of an arc.

    Returns (bezier, error) where error bounds the radial distance between
    the Bezier and the arc. A straight arc is represented exactly.
    """
    if arc.d == 0.0:
        return line_to_bezier(arc.p0, arc.p1), 0.0

    p0 = as_vector(arc.p0)
    p1 = as_vector(arc.p1)
    d = arc.d
    dp = p1 - p0
    pp = perpendicular(dp)

    error = length(dp) * abs(d) ** 5 / (54 * (1 + d * d))

    along = (1 - d * d) / 3
    across = 2 * d / 3
    p0s = p0 + along * dp - across * pp
    p1s = p1 - along * dp - across * pp

    return make_bezier([p0, p0s, p1s, p1]), error


def arc_to_svg_path(arc, move=True):
    """SVG path data for an arc, using the elliptical arc command."""
    start = f"M {arc.p0[0]:.3f} {arc.p0[1]:.3f} " if move else ""
    end = f"{arc.p1[0]:.3f} {arc.p1[1]:.3f}"

    if arc.d == 0.0:
        return f"{start}L {end}"

    r = arc_radius(arc)
    large_arc = 1 if abs(arc.d) > 1 else 0
    # SVG sweep-flag 1 means increasing angle in SVG's own y-down frame,
    # which is counter-clockwise in the y-up frame used for d.
    sweep_flag = 1 if arc.d > 0 else 0
    return f"{start}A {r:.3f} {r:.3f} 0 {large_arc} {sweep_flag} {end}"
