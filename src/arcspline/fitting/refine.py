"""
Cut range reconciliation and refinement ("jiggle").

The left and right greedy passes bracket every interior cut: a cover with
the minimal arc count can put cut i anywhere between the right pass's cut
and the left pass's cut. Refinement starts each cut in the middle of its
range and nudges it toward the neighbour segment with the larger error.
"""

from arcspline.fitting.cut_search import check_tolerance
from arcspline.fitting.error import arc_bezier_error_improved
from arcspline.geometry.bezier import bezier_curvature, bezier_segment
from arcspline.models import CutPoint
from arcspline.tracer import get_tracer, trace

MAX_PASSES = 10

# 2 ** 60 already makes any step vanish
MAX_EXPONENT = 60.0


def segment_error(bezier, t0, t1):
    """Improved arc error of the sub-curve [t0, t1]."""
    return arc_bezier_error_improved(bezier_segment(bezier, t0, t1))


def _fill_errors(bezier, cuts):
    start = 0.0
    for cut in cuts:
        cut.error = segment_error(bezier, start, cut.position)
        start = cut.position
    return cuts


def _strictly_increasing(values):
    return all(a < b for a, b in zip(values, values[1:]))


@trace(label="reconcile_cut_ranges", level="DEBUG")
def reconcile_cut_ranges(bezier, left_cuts, right_cuts):
    """
    Pair left-pass and right-pass cuts into ranges.

    Args:
        left_cuts: output of find_cut_points_left, ending with 1.0
        right_cuts: output of find_cut_points_right, starting with 0.0

    Returns:
        (cuts, reconciled): the CutPoint list, terminated by a fixed cut at
        1.0, and whether paired ranges were used. When the passes disagree
        the pass with fewer arcs is used as is, with zero-width ranges.
    """
    tracer = get_tracer()

    highs = list(left_cuts[:-1])
    lows = list(right_cuts[1:])

    cuts = None
    if len(highs) == len(lows):
        cuts = [
            CutPoint(low=min(lo, hi), high=max(lo, hi), position=(lo + hi) / 2.0)
            for lo, hi in zip(lows, highs)
        ]
        if not _strictly_increasing([0.0] + [c.position for c in cuts] + [1.0]):
            tracer.event("paired cut ranges out of order, keeping left pass", level="WARN")
            cuts = None
    else:
        tracer.event("passes disagree on arc count", level="DEBUG",
                     left=len(left_cuts), right=len(right_cuts))

    reconciled = cuts is not None
    if not reconciled:
        fixed = highs if len(highs) <= len(lows) else lows
        cuts = [CutPoint(low=t, high=t, position=t) for t in fixed]

    cuts.append(CutPoint(low=1.0, high=1.0, position=1.0))
    return _fill_errors(bezier, cuts), reconciled


def _step_size(bezier, cut, following, tolerance):
    """
    Fraction of the way to move a cut toward its range bound.

    Proportional to the error imbalance of the two segments meeting at the
    cut and damped by the curvature there.
    """
    kappa = abs(bezier_curvature(bezier, cut.position))
    exponent = min(1.0 + kappa, MAX_EXPONENT)
    step = abs(following.error - cut.error) / (2.0 ** exponent * tolerance)
    return min(step, 1.0)


@trace(label="refine_cut_points", level="DEBUG")
def refine_cut_points(bezier, cuts, tolerance, passes=MAX_PASSES):
    """
    Balance the errors of adjacent segments by moving interior cuts.

    Runs exactly `passes` sweeps. A cut never leaves its [low, high] range
    and never moves past the halfway point to a neighbouring cut, so the
    partition stays strictly increasing. The input list is not modified.
    """
    check_tolerance(tolerance)
    tracer = get_tracer()

    cuts = [c.model_copy() for c in cuts]

    for pass_index in range(passes):
        for i in range(len(cuts) - 1):
            cut = cuts[i]
            if cut.high <= cut.low:
                continue

            following = cuts[i + 1]
            previous_position = cuts[i - 1].position if i > 0 else 0.0

            step = _step_size(bezier, cut, following, tolerance)
            if step == 0.0:
                continue

            if following.error > cut.error:
                # shrink the segment after the cut
                upper = min(cut.high, (cut.position + following.position) / 2.0)
                position = cut.position + step * (upper - cut.position)
            else:
                lower = max(cut.low, (previous_position + cut.position) / 2.0)
                position = cut.position - step * (cut.position - lower)

            cut.position = position
            cut.error = segment_error(bezier, previous_position, position)
            following.error = segment_error(bezier, position, following.position)

        tracer.event("refine pass", level="DEBUG", index=pass_index,
                     max_error=max(c.error for c in cuts))

    return cuts


def cut_partition(cuts):
    """The parameter partition 0 = t0 < ... < tn = 1 defined by a cut list."""
    return [0.0] + [c.position for c in cuts]
