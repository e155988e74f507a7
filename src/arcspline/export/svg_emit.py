"""
SVG emission for arcspline.

Draws the source curves, the fitted arcs over them, and a marker at every
cut point, so the approximation can be inspected in any SVG viewer.
"""

import svgwrite

from arcspline.geometry.bezier import bezier_to_svg_path, compute_bezier_bbox
from arcspline.geometry.circle import arc_to_svg_path
from arcspline.tracer import get_tracer, trace


def arcs_to_svg_path(segments):
    """SVG path data for a chain of arc segments, one subpath per break."""
    parts = []
    previous_end = None
    for seg in segments:
        parts.append(arc_to_svg_path(seg.arc, move=previous_end != seg.arc.p0))
        previous_end = seg.arc.p1
    return " ".join(parts)


@trace(label="emit_arcs_svg")
def emit_arcs_svg(arc_path, export_config):
    """
    Create an SVG document for an ArcPath.

    Args:
        arc_path: ArcPath with fitted splines
        export_config: ExportConfig with colours, widths and margin

    Returns:
        svgwrite.Drawing object
    """
    tracer = get_tracer()
    cfg = export_config

    beziers = [s.bezier for s in arc_path.splines]
    min_x, min_y, max_x, max_y = compute_bezier_bbox(beziers)
    width = (max_x - min_x) + 2 * cfg.margin
    height = (max_y - min_y) + 2 * cfg.margin

    dwg = svgwrite.Drawing(size=(f"{width:.0f}px", f"{height:.0f}px"))
    dwg.viewbox(min_x - cfg.margin, min_y - cfg.margin, width, height)

    if cfg.flip_y:
        # y-up drawing: mirror about the middle of the view box
        content = dwg.g(id="content", transform=f"matrix(1 0 0 -1 0 {min_y + max_y:.3f})")
    else:
        content = dwg.g(id="content")

    curve_group = dwg.g(id="curves", fill="none", stroke=cfg.curve_color,
                        stroke_width=cfg.curve_width, stroke_opacity=0.4)
    arc_group = dwg.g(id="arcs", fill="none", stroke=cfg.arc_color, stroke_width=cfg.arc_width)
    cut_group = dwg.g(id="cuts", fill=cfg.arc_color)

    for spline in arc_path.splines:
        curve_group.add(dwg.path(d=bezier_to_svg_path([spline.bezier]), id=spline.curve_id))
        for index, seg in enumerate(spline.segments):
            arc_group.add(dwg.path(d=arc_to_svg_path(seg.arc), id=f"{spline.curve_id}_arc{index}"))
            cut_group.add(dwg.circle(center=seg.arc.p0, r=cfg.marker_radius))
        if spline.segments:
            cut_group.add(dwg.circle(center=spline.segments[-1].arc.p1, r=cfg.marker_radius))

    content.add(curve_group)
    content.add(arc_group)
    content.add(cut_group)
    dwg.add(content)

    tracer.event(f"SVG emitted with {arc_path.segment_count} arcs for {len(beziers)} curves")

    return dwg
