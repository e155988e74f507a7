"""
Main pipeline orchestrator for arcspline.

Runs SEARCH -> RECONCILE -> REFINE -> ASSEMBLE for every curve of a path,
then validates and writes the results.
"""

import os

from arcspline.config import load_config
from arcspline.export.svg_emit import emit_arcs_svg
from arcspline.fitting.cut_search import (
    check_tolerance, find_cut_points_left, find_cut_points_right,
)
from arcspline.fitting.refine import (
    cut_partition, reconcile_cut_ranges, refine_cut_points, segment_error,
)
from arcspline.geometry.bezier import bezier_segment, evaluate_bezier, make_bezier
from arcspline.geometry.circle import arc_from_points, circle_through_points
from arcspline.geometry.vector import to_point
from arcspline.io.save_artifacts import ensure_dir, save_json, save_svg
from arcspline.models import (
    ArcPath, ArcSegment, ArcSpline, CubicBezier,
    generate_curve_id, generate_path_id,
)
from arcspline.tracer import get_tracer, trace
from arcspline.validate.report import generate_report
from arcspline.validate.rules import run_validation, sampled_arc_error


def _resolve(tolerance, config):
    if config is None:
        config = load_config()
    if tolerance is None:
        tolerance = config.fit.tolerance
    check_tolerance(tolerance)
    return tolerance, config


def assemble_arcs(bezier, partition, errors=None, sample_steps=0):
    """
    Build one arc per parameter interval of a partition.

    Each arc runs from the curve point at t_i to the curve point at t_{i+1}
    through the curve point at the middle of the interval, so consecutive
    arcs share their end points exactly.

    Args:
        bezier: CubicBezier being approximated
        partition: increasing parameters from 0.0 to 1.0
        errors: estimated error per interval (computed when omitted)
        sample_steps: when > 0, also measure each arc by dense sampling

    Returns:
        List of ArcSegment
    """
    segments = []
    for i, (t0, t1) in enumerate(zip(partition, partition[1:])):
        start = evaluate_bezier(bezier, t0)
        end = evaluate_bezier(bezier, t1)
        through = evaluate_bezier(bezier, (t0 + t1) / 2.0)

        arc = arc_from_points(start, end, through)
        error = errors[i] if errors is not None else segment_error(bezier, t0, t1)

        sampled = None
        if sample_steps > 0:
            sampled = sampled_arc_error(bezier_segment(bezier, t0, t1), arc, sample_steps)

        segments.append(ArcSegment(
            t0=t0,
            t1=t1,
            arc=arc,
            circle=circle_through_points(start, through, end),
            through=to_point(through),
            error=error,
            sampled_error=sampled,
        ))

    return segments


@trace(label="fit_arcs")
def fit_arcs(bezier, tolerance=None, config=None):
    """
    Approximate one cubic Bezier with circular arcs.

    Args:
        bezier: CubicBezier, or four control points
        tolerance: maximum estimated deviation (defaults to config.fit.tolerance)
        config: ArcSplineConfig (defaults are used when omitted)

    Returns:
        ArcSpline with the partition, the refined cuts and the arcs
    """
    tracer = get_tracer()
    tolerance, config = _resolve(tolerance, config)

    if not isinstance(bezier, CubicBezier):
        bezier = make_bezier(bezier)

    iterations = config.fit.bisection_iterations
    with tracer.span("search", module="pipeline"):
        left = find_cut_points_left(bezier, tolerance, iterations)
        right = find_cut_points_right(bezier, tolerance, iterations)

    with tracer.span("reconcile", module="pipeline"):
        cuts, reconciled = reconcile_cut_ranges(bezier, left, right)

    with tracer.span("refine", module="pipeline"):
        cuts = refine_cut_points(bezier, cuts, tolerance, config.fit.refinement_passes)

    partition = cut_partition(cuts)

    with tracer.span("assemble", module="pipeline"):
        segments = assemble_arcs(
            bezier, partition,
            errors=[c.error for c in cuts],
            sample_steps=config.validation.sample_steps,
        )

    spline = ArcSpline(
        curve_id=generate_curve_id(bezier),
        bezier=bezier,
        tolerance=tolerance,
        cut_points=partition,
        cuts=cuts,
        segments=segments,
        left_cuts=left,
        right_cuts=right,
        reconciled=reconciled,
    )

    tracer.event(f"{spline.arc_count} arcs, max error {spline.max_error:.4g}",
                 curve=spline.curve_id)

    return spline


@trace(label="fit_path")
def fit_path(beziers, tolerance=None, config=None, skipped=0):
    """
    Fit every curve of a path.

    Curves are fitted independently; skipped counts path segments that were
    not curves and is carried through to the result.
    """
    tolerance, config = _resolve(tolerance, config)

    splines = [fit_arcs(b, tolerance, config) for b in beziers]

    return ArcPath(
        path_id=generate_path_id([s.curve_id for s in splines]),
        tolerance=tolerance,
        splines=splines,
        skipped_segments=skipped,
    )


@trace(label="run_pipeline")
def run_pipeline(beziers, out_dir, config=None, config_path=None, tolerance=None, skipped=0):
    """
    Fit a path and write all outputs.

    Args:
        beziers: list of CubicBezier
        out_dir: output directory
        config: ArcSplineConfig object (optional)
        config_path: path to YAML config file (optional)
        tolerance: overrides config.fit.tolerance
        skipped: count of non-curve path segments

    Returns:
        (ArcPath, ValidationReport)

    Creates arcs.json, arcs.svg, validation_report.json and
    validation_summary.txt in out_dir.
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)

    if not beziers:
        raise ValueError("No cubic curves to fit")

    ensure_dir(out_dir)

    arc_path = fit_path(beziers, tolerance, config, skipped)

    with tracer.span("validate_export", module="pipeline"):
        report = run_validation(arc_path, config)

        save_json(arc_path, os.path.join(out_dir, "arcs.json"))
        save_svg(emit_arcs_svg(arc_path, config.export), os.path.join(out_dir, "arcs.svg"))

        generate_report(report, out_dir, arc_path)

    tracer.event(
        f"Pipeline complete: {len(arc_path.splines)} curves, {arc_path.segment_count} arcs"
    )

    return arc_path, report
