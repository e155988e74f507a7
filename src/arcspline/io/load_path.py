"""
Curve input for arcspline.

Reads cubic Beziers from SVG path data, SVG files, JSON control point
lists, or plain coordinates. Only curve segments are fitted: quadratic
segments are degree-elevated to cubics, while lines and elliptical arcs are
counted as skipped.
"""

import json
import os

from svgpathtools import CubicBezier as SvgCubicBezier
from svgpathtools import QuadraticBezier as SvgQuadraticBezier
from svgpathtools import parse_path, svg2paths

from arcspline.geometry.bezier import make_bezier, quadratic_to_bezier
from arcspline.tracer import get_tracer, trace


def _xy(z):
    return (z.real, z.imag)


def curves_from_svg_path(path):
    """
    Extract cubic Beziers from an svgpathtools Path.

    Returns (beziers, skipped) where skipped counts the segments that are
    not curves.
    """
    beziers = []
    skipped = 0
    for seg in path:
        if isinstance(seg, SvgCubicBezier):
            beziers.append(make_bezier([
                _xy(seg.start), _xy(seg.control1), _xy(seg.control2), _xy(seg.end),
            ]))
        elif isinstance(seg, SvgQuadraticBezier):
            beziers.append(quadratic_to_bezier(_xy(seg.start), _xy(seg.control), _xy(seg.end)))
        else:
            skipped += 1
    return beziers, skipped


def parse_path_data(d):
    """Parse an SVG path d attribute into (beziers, skipped)."""
    try:
        path = parse_path(d)
    except Exception as e:
        raise ValueError(f"Could not parse path data {d[:40]!r}: {e}") from e
    return curves_from_svg_path(path)


def curve_from_values(values):
    """
    Build one Bezier from 8 numbers (x0 y0 ... x3 y3) or 4 (x, y) pairs.
    """
    values = list(values)
    if len(values) == 8 and all(isinstance(v, (int, float)) for v in values):
        values = [values[i:i + 2] for i in range(0, 8, 2)]
    if len(values) != 4 or any(not isinstance(p, (list, tuple)) or len(p) != 2 for p in values):
        raise ValueError("A cubic Bezier needs 4 control points (8 coordinates)")
    return make_bezier(values)


@trace(label="load_curves_file")
def load_curves_file(path):
    """
    Load curves from a file.

    .svg files contribute every path element; .json files hold either
    {"curves": [[[x, y] x 4], ...]}, {"path": "<d>"} or a bare list of
    curves; anything else is read as path data.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise ValueError(f"Input file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    beziers = []
    skipped = 0

    if ext == ".svg":
        paths, _ = svg2paths(path)
        for svg_path in paths:
            found, missed = curves_from_svg_path(svg_path)
            beziers.extend(found)
            skipped += missed
    elif ext == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict) and "path" in data:
            beziers, skipped = parse_path_data(data["path"])
        else:
            curves = data.get("curves", []) if isinstance(data, dict) else data
            beziers = [curve_from_values(c) for c in curves]
    else:
        with open(path, "r", encoding="utf-8") as f:
            beziers, skipped = parse_path_data(f.read().strip())

    tracer.event(f"Loaded {len(beziers)} curves from {path}", skipped=skipped)

    return beziers, skipped
