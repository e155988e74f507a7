"""
Validation report generation for arcspline.

Writes the check results as JSON and as a short text summary.
"""

import os

from arcspline.io.save_artifacts import ensure_dir, save_json
from arcspline.tracer import get_tracer, trace


@trace(label="generate_report")
def generate_report(report, out_dir, arc_path=None):
    """
    Generate validation report files.

    Creates:
    - validation_report.json: full check results
    - validation_summary.txt: human-readable summary, with one line per
      fitted curve when arc_path is given
    """
    tracer = get_tracer()

    report_path = os.path.join(out_dir, "validation_report.json")
    save_json(report.model_dump(mode="json"), report_path)

    failed = [c for c in report.checks if not c.passed]

    lines = ["arcspline validation report", "=" * 40, ""]
    lines.append(f"Total checks: {len(report.checks)}")
    lines.append(f"Passed: {len(report.checks) - len(failed)}")
    lines.append(f"Failed: {len(failed)}")
    lines.append("")

    if failed:
        lines.append("ISSUES:")
        lines.append("-" * 40)
        lines.extend(format_check_result(c) for c in failed)
        lines.append("")

    lines.append("ALL CHECKS:")
    lines.append("-" * 40)
    lines.extend(format_check_result(c) for c in report.checks)

    if arc_path is not None:
        lines.append("")
        lines.append(f"CURVES (tolerance {arc_path.tolerance:g}):")
        lines.append("-" * 40)
        for spline in arc_path.splines:
            lines.append(
                f"{spline.curve_id}: {spline.arc_count} arcs, "
                f"max estimated error {spline.max_error:.4g}"
            )

    summary_path = os.path.join(out_dir, "validation_summary.txt")
    ensure_dir(out_dir)
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")

    tracer.event(f"Report saved: {len(report.checks)} checks, {report.error_count} errors")

    return report_path, summary_path


def format_check_result(check):
    """Format a single check result for display."""
    status = "PASS" if check.passed else "FAIL"
    severity = check.severity.value.upper()
    return f"[{status}][{severity}] {check.rule_id}: {check.message}"
