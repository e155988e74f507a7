"""
Cubic Bezier primitives for arcspline.

Evaluation, derivatives, curvature and sub-curve extraction. Sub-curves are
built from the polar form (blossom) of the cubic, so the end point of
segment(a, b) and the start point of segment(b, c) are computed by the same
arithmetic and match exactly.
"""

import numpy as np

from arcspline.geometry.vector import as_vector, cross, length, normalized, perpendicular, to_point
from arcspline.models import Circle, CubicBezier


def control_points(bezier):
    """Control points of a CubicBezier as a (4, 2) float array."""
    return np.array([bezier.p0, bezier.p1, bezier.p2, bezier.p3], dtype=float)


def make_bezier(ctrl):
    """Build a CubicBezier from four point-like values."""
    if len(ctrl) != 4:
        raise ValueError(f"A cubic Bezier needs 4 control points, got {len(ctrl)}")
    return CubicBezier(
        p0=to_point(as_vector(ctrl[0])),
        p1=to_point(as_vector(ctrl[1])),
        p2=to_point(as_vector(ctrl[2])),
        p3=to_point(as_vector(ctrl[3])),
    )


def _blossom(ctrl, u, v, w):
    """Polar form of the cubic at (u, v, w); (t, t, t) is the curve point."""
    a = (1 - u) * ctrl[:-1] + u * ctrl[1:]
    b = (1 - v) * a[:-1] + v * a[1:]
    return (1 - w) * b[0] + w * b[1]


def evaluate_bezier(bezier, t):
    """Evaluate a cubic Bezier at parameter t."""
    return _blossom(control_points(bezier), t, t, t)


def sample_bezier(bezier, steps):
    """Curve points at steps + 1 evenly spaced parameters, as a (steps + 1, 2) array."""
    t = np.linspace(0.0, 1.0, steps + 1)[:, None]
    s = 1 - t
    p = control_points(bezier)
    return s ** 3 * p[0] + 3 * s * s * t * p[1] + 3 * s * t * t * p[2] + t ** 3 * p[3]


def bezier_tangent(bezier, t):
    """First derivative B'(t)."""
    p = control_points(bezier)
    s = 1 - t
    return 3 * (s * s * (p[1] - p[0]) + 2 * s * t * (p[2] - p[1]) + t * t * (p[3] - p[2]))


def bezier_second_derivative(bezier, t):
    """Second derivative B''(t)."""
    p = control_points(bezier)
    return 6 * ((1 - t) * (p[2] - 2 * p[1] + p[0]) + t * (p[3] - 2 * p[2] + p[1]))


def bezier_curvature(bezier, t):
    """
    Signed curvature at t.

    kappa = (x' * y'' - y' * x'') / |B'|^3, positive when the curve turns
    counter-clockwise. Returns 0.0 where the derivative vanishes.
    """
    d1 = bezier_tangent(bezier, t)
    d2 = bezier_second_derivative(bezier, t)
    denom = length(d1) ** 3
    if denom == 0.0:
        return 0.0
    return float(cross(d1, d2) / denom)


def bezier_segment(bezier, t0, t1):
    """The part of the curve between parameters t0 and t1, reparameterized to [0, 1]."""
    p = control_points(bezier)
    return make_bezier([
        _blossom(p, t0, t0, t0),
        _blossom(p, t0, t0, t1),
        _blossom(p, t0, t1, t1),
        _blossom(p, t1, t1, t1),
    ])


def split_bezier(bezier, t):
    """Split at t into the curves over [0, t] and [t, 1]."""
    return bezier_segment(bezier, 0.0, t), bezier_segment(bezier, t, 1.0)


def halve_bezier(bezier):
    """Split at t = 0.5."""
    return split_bezier(bezier, 0.5)


def osculating_circle(bezier, t):
    """
    Circle matching position, tangent and curvature at t.

    None where the curvature is zero (inflection or straight curve).
    """
    kappa = bezier_curvature(bezier, t)
    if kappa == 0.0:
        return None

    point = evaluate_bezier(bezier, t)
    unit_tangent = normalized(bezier_tangent(bezier, t))
    center = point + perpendicular(unit_tangent) / kappa
    return Circle(center=to_point(center), radius=1.0 / abs(kappa))


def line_to_bezier(p0, p1):
    """Create a degenerate Bezier for a straight line segment."""
    p0 = as_vector(p0)
    p1 = as_vector(p1)

    # Control points at 1/3 and 2/3 along the line
    return make_bezier([p0, p0 + (p1 - p0) / 3, p0 + 2 * (p1 - p0) / 3, p1])


def quadratic_to_bezier(q0, q1, q2):
    """Degree-elevate a quadratic Bezier to the equivalent cubic."""
    q0 = as_vector(q0)
    q1 = as_vector(q1)
    q2 = as_vector(q2)
    return make_bezier([q0, q0 + 2 * (q1 - q0) / 3, q2 + 2 * (q1 - q2) / 3, q2])


def bezier_to_svg_path(beziers):
    """
    Convert a list of CubicBezier objects to an SVG path d attribute.

    A new subpath is started wherever a curve does not begin at the end of
    the previous one.
    """
    if not beziers:
        return ""

    parts = []
    previous_end = None
    for bez in beziers:
        if previous_end != bez.p0:
            parts.append(f"M {bez.p0[0]:.2f} {bez.p0[1]:.2f}")
        parts.append(
            f"C {bez.p1[0]:.2f} {bez.p1[1]:.2f} {bez.p2[0]:.2f} {bez.p2[1]:.2f} "
            f"{bez.p3[0]:.2f} {bez.p3[1]:.2f}"
        )
        previous_end = bez.p3

    return " ".join(parts)


def compute_bezier_bbox(beziers):
    """Bounding box of the control polygons, which contains the curves."""
    if not beziers:
        return [0.0, 0.0, 0.0, 0.0]

    points = np.vstack([control_points(b) for b in beziers])
    return [
        float(points[:, 0].min()),
        float(points[:, 1].min()),
        float(points[:, 0].max()),
        float(points[:, 1].max()),
    ]
