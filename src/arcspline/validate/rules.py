"""
Validation rules for fitted arc splines.

The estimators are bounds computed in closed form; these checks look at
the result from the outside: the partition, the joins between arcs, and
the deviation measured by dense sampling.
"""

import numpy as np

from arcspline.geometry.bezier import sample_bezier
from arcspline.geometry.circle import arc_circle
from arcspline.geometry.vector import as_vector, length, normal
from arcspline.models import CheckResult, Severity, ValidationReport
from arcspline.tracer import get_tracer, trace


def sampled_arc_error(bezier, arc, steps=1000):
    """
    Measured deviation between a curve and the circle (or line) of an arc.

    Samples the curve at steps + 1 parameters and returns the largest
    distance from the arc's circle. Straight arcs measure distance from
    the line through their end points.
    """
    points = sample_bezier(bezier, steps)
    circle = arc_circle(arc)

    if circle is None:
        a = as_vector(arc.p0)
        direction = as_vector(arc.p1) - a
        if not direction.any():
            return float(np.max(np.hypot(*(points - a).T)))
        return float(np.max(np.abs((points - a) @ normal(direction))))

    c = as_vector(circle.center)
    distances = np.hypot(*(points - c).T)
    return float(np.max(np.abs(distances - circle.radius)))


@trace(label="run_validation")
def run_validation(arc_path, config):
    """
    Run all validation checks on an ArcPath.

    Returns ValidationReport with all check results.
    """
    tracer = get_tracer()

    slack = config.validation.slack_factor
    checks = [
        check_partition(arc_path),
        check_cut_ranges(arc_path),
        check_continuity(arc_path),
        check_estimated_error(arc_path, slack),
        check_sampled_error(arc_path, slack),
    ]

    report = ValidationReport(checks=checks)

    tracer.event(f"Validation complete: {report.error_count} errors, {report.warning_count} warnings")

    return report


def check_partition(arc_path):
    """Every partition must run from exactly 0 to exactly 1, strictly increasing."""
    bad = []
    for spline in arc_path.splines:
        t = spline.cut_points
        ok = (
            len(t) >= 2
            and t[0] == 0.0
            and t[-1] == 1.0
            and all(a < b for a, b in zip(t, t[1:]))
        )
        if not ok:
            bad.append(spline.curve_id)

    return CheckResult(
        rule_id="partition_monotonic",
        severity=Severity.ERROR,
        passed=not bad,
        message=("All partitions strictly increase from 0 to 1" if not bad
                 else f"{len(bad)} curve(s) have a malformed partition"),
        evidence={"curves": bad},
    )


def check_cut_ranges(arc_path):
    """Refined cuts must stay inside the ranges the two search passes allow."""
    bad = []
    for spline in arc_path.splines:
        for index, cut in enumerate(spline.cuts):
            if not cut.low <= cut.position <= cut.high:
                bad.append({"curve": spline.curve_id, "cut": index, "position": cut.position})

    return CheckResult(
        rule_id="cuts_in_range",
        severity=Severity.ERROR,
        passed=not bad,
        message="All cuts lie inside their ranges" if not bad else f"{len(bad)} cut(s) left their range",
        evidence={"violations": bad[:20]},
    )


def check_continuity(arc_path, max_gap=1e-9):
    """Consecutive arcs must join, and the chain must start and end with the curve."""
    worst = 0.0
    for spline in arc_path.splines:
        if not spline.segments:
            continue
        joins = [(spline.bezier.p0, spline.segments[0].arc.p0)]
        joins += [(a.arc.p1, b.arc.p0) for a, b in zip(spline.segments, spline.segments[1:])]
        joins.append((spline.segments[-1].arc.p1, spline.bezier.p3))
        for p, q in joins:
            worst = max(worst, length(as_vector(p) - as_vector(q)))

    return CheckResult(
        rule_id="arc_continuity",
        severity=Severity.ERROR,
        passed=worst <= max_gap,
        message=f"Largest gap between consecutive arcs: {worst:.3g}",
        evidence={"max_gap": worst},
    )


def check_estimated_error(arc_path, slack_factor):
    """
    Estimated errors may sit slightly above tolerance.

    Bisection stops after a fixed step count, so a warning rather than an
    error when the bound exceeds tolerance * slack_factor.
    """
    limit = arc_path.tolerance * slack_factor
    worst = max((s.max_error for s in arc_path.splines), default=0.0)

    return CheckResult(
        rule_id="estimated_error",
        severity=Severity.WARN,
        passed=worst <= limit,
        message=f"Largest estimated arc error {worst:.4g} (limit {limit:.4g})",
        evidence={"max_error": worst, "limit": limit},
    )


def check_sampled_error(arc_path, slack_factor):
    """Deviation measured by sampling, where the pipeline recorded it."""
    limit = arc_path.tolerance * slack_factor
    sampled = [
        seg.sampled_error
        for spline in arc_path.splines
        for seg in spline.segments
        if seg.sampled_error is not None
    ]

    if not sampled:
        return CheckResult(
            rule_id="sampled_error",
            severity=Severity.INFO,
            passed=True,
            message="Sampling disabled; no measured errors",
        )

    worst = max(sampled)
    return CheckResult(
        rule_id="sampled_error",
        severity=Severity.WARN,
        passed=worst <= limit,
        message=f"Largest sampled arc error {worst:.4g} over {len(sampled)} arcs (limit {limit:.4g})",
        evidence={"max_sampled_error": worst, "limit": limit},
    )
