"""
Adaptive cut search.

Greedy passes that walk along the curve and, at each step, bisect for the
farthest parameter whose sub-curve still fits an arc within tolerance.
Bisection runs a fixed number of steps rather than to convergence, so the
work per cut is bounded; the returned cut can sit slightly past the exact
tolerance boundary.
"""

import math

from arcspline.fitting.error import arc_bezier_error_improved
from arcspline.geometry.bezier import bezier_segment
from arcspline.tracer import get_tracer, trace

MAX_ITERS = 20


def check_tolerance(tolerance):
    """Reject tolerances the greedy passes could never satisfy."""
    if not (tolerance > 0 and math.isfinite(tolerance)):
        raise ValueError(f"tolerance must be a positive finite number, got {tolerance!r}")


def find_cut_left(bezier, start, tolerance, iterations=MAX_ITERS):
    """
    Farthest end in (start, 1] such that [start, end] fits one arc.

    Returns 1.0 when the whole remainder fits. Otherwise the midpoint of the
    last bisection step, which may be just above tolerance.
    """
    tracer = get_tracer()

    error = arc_bezier_error_improved(bezier_segment(bezier, start, 1.0))
    if error <= tolerance:
        return 1.0

    low = start
    high = 1.0
    cut = high
    for _ in range(iterations):
        cut = (low + high) / 2.0
        error = arc_bezier_error_improved(bezier_segment(bezier, start, cut))
        tracer.event("bisect", level="DEBUG", start=start, cut=cut, error=error)

        if error == tolerance:
            return cut
        if error < tolerance:
            low = cut
        else:
            high = cut

    return cut


def find_cut_right(bezier, end, tolerance, iterations=MAX_ITERS):
    """
    Earliest start in [0, end) such that [start, end] fits one arc.

    Mirror image of find_cut_left; returns 0.0 when [0, end] fits.
    """
    tracer = get_tracer()

    error = arc_bezier_error_improved(bezier_segment(bezier, 0.0, end))
    if error <= tolerance:
        return 0.0

    low = 0.0
    high = end
    cut = low
    for _ in range(iterations):
        cut = (low + high) / 2.0
        error = arc_bezier_error_improved(bezier_segment(bezier, cut, end))
        tracer.event("bisect", level="DEBUG", end=end, cut=cut, error=error)

        if error == tolerance:
            return cut
        if error < tolerance:
            high = cut
        else:
            low = cut

    return cut


@trace(label="find_cut_points_left", level="DEBUG")
def find_cut_points_left(bezier, tolerance, iterations=MAX_ITERS):
    """
    Greedy left-to-right segmentation.

    Returns the end parameter of every segment in order; the last one is
    exactly 1.0.
    """
    check_tolerance(tolerance)

    cuts = []
    t = 0.0
    while t < 1.0:
        t = find_cut_left(bezier, t, tolerance, iterations)
        cuts.append(t)

    return cuts


@trace(label="find_cut_points_right", level="DEBUG")
def find_cut_points_right(bezier, tolerance, iterations=MAX_ITERS):
    """
    Greedy right-to-left segmentation.

    Returns the start parameter of every segment in ascending order; the
    first one is exactly 0.0.
    """
    check_tolerance(tolerance)

    cuts = []
    t = 1.0
    while t > 0.0:
        t = find_cut_right(bezier, t, tolerance, iterations)
        cuts.append(t)

    cuts.reverse()
    return cuts
