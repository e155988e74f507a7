"""Tests for validation rules and reports."""

import json
import os

import pytest


@pytest.fixture
def fitted_path(s_curve, quarter_circle):
    """A path of two fitted curves."""
    from arcspline.pipeline import fit_path
    return fit_path([s_curve, quarter_circle], 1.0)


class TestSampledError:
    """Tests for the sampled deviation measure."""

    def test_curve_on_its_line(self):
        from arcspline.geometry.bezier import line_to_bezier
        from arcspline.models import Arc
        from arcspline.validate.rules import sampled_arc_error

        bez = line_to_bezier((0, 0), (10, 0))
        assert sampled_arc_error(bez, Arc(p0=(0, 0), p1=(10, 0), d=0.0)) == pytest.approx(0.0)

    def test_parallel_line(self):
        from arcspline.geometry.bezier import line_to_bezier
        from arcspline.models import Arc
        from arcspline.validate.rules import sampled_arc_error

        bez = line_to_bezier((0, 1), (10, 1))
        assert sampled_arc_error(bez, Arc(p0=(0, 0), p1=(10, 0), d=0.0)) == pytest.approx(1.0)

    def test_distance_from_circle(self):
        """Points 1 to 2 units out from the unit circle."""
        from arcspline.geometry.bezier import line_to_bezier
        from arcspline.models import Arc
        from arcspline.validate.rules import sampled_arc_error

        bez = line_to_bezier((2, 0), (3, 0))
        arc = Arc(p0=(1, 0), p1=(-1, 0), d=1.0)
        assert sampled_arc_error(bez, arc, steps=10) == pytest.approx(2.0)

    def test_circular_curve(self, quarter_circle):
        from arcspline.geometry.circle import arc_from_points
        from arcspline.validate.rules import sampled_arc_error

        arc = arc_from_points((100, 0), (0, 100), (100 / 2 ** 0.5, 100 / 2 ** 0.5))
        assert sampled_arc_error(quarter_circle, arc) < 0.05


class TestRules:
    """Tests for individual validation checks."""

    def test_fitted_path_passes(self, fitted_path, default_config):
        from arcspline.models import Severity
        from arcspline.validate.rules import run_validation

        report = run_validation(fitted_path, default_config)

        assert len(report.checks) == 5
        assert not report.has_errors
        assert all(c.passed for c in report.checks if c.severity == Severity.ERROR)

    def test_fitted_path_estimated_error(self, fitted_path, default_config):
        """Refined arcs stay within the tolerance slack."""
        from arcspline.validate.rules import check_estimated_error

        result = check_estimated_error(fitted_path, default_config.validation.slack_factor)

        assert result.passed
        assert result.evidence["max_error"] <= fitted_path.tolerance * 1.05

    def test_malformed_partition(self, fitted_path):
        from arcspline.validate.rules import check_partition

        spline = fitted_path.splines[0]
        broken = spline.model_copy(update={"cut_points": [0.0, 0.5, 0.5, 1.0]})
        arc_path = fitted_path.model_copy(update={"splines": [broken]})

        result = check_partition(arc_path)
        assert not result.passed
        assert result.evidence["curves"] == [spline.curve_id]

    def test_cut_out_of_range(self, fitted_path):
        from arcspline.models import CutPoint
        from arcspline.validate.rules import check_cut_ranges

        spline = fitted_path.splines[0]
        cuts = [CutPoint(low=0.2, high=0.3, position=0.5)] + spline.cuts[1:]
        arc_path = fitted_path.model_copy(
            update={"splines": [spline.model_copy(update={"cuts": cuts})]}
        )

        assert not check_cut_ranges(arc_path).passed

    def test_gap_between_arcs(self, fitted_path):
        from arcspline.models import Arc
        from arcspline.validate.rules import check_continuity

        spline = fitted_path.splines[0]
        first = spline.segments[0]
        moved = first.model_copy(update={"arc": Arc(p0=first.arc.p0, p1=(500.0, 500.0), d=0.0)})
        segments = [moved] + spline.segments[1:]
        arc_path = fitted_path.model_copy(
            update={"splines": [spline.model_copy(update={"segments": segments})]}
        )

        result = check_continuity(arc_path)
        assert not result.passed
        assert result.evidence["max_gap"] > 100

    def test_estimated_error_limit(self, fitted_path):
        from arcspline.models import Severity
        from arcspline.validate.rules import check_estimated_error

        tight = fitted_path.model_copy(update={"tolerance": 1e-6})
        result = check_estimated_error(tight, 1.05)

        assert result.severity == Severity.WARN
        assert not result.passed

    def test_sampled_error_without_samples(self, s_curve, default_config):
        from arcspline.models import Severity
        from arcspline.pipeline import fit_path
        from arcspline.validate.rules import check_sampled_error

        default_config.validation.sample_steps = 0
        arc_path = fit_path([s_curve], 1.0, default_config)
        result = check_sampled_error(arc_path, 1.05)

        assert result.passed
        assert result.severity == Severity.INFO


class TestReport:
    """Tests for report files."""

    def test_generate_report(self, fitted_path, default_config, temp_dir):
        from arcspline.validate.report import generate_report
        from arcspline.validate.rules import run_validation

        report = run_validation(fitted_path, default_config)
        report_path, summary_path = generate_report(report, temp_dir, fitted_path)

        with open(report_path) as f:
            data = json.load(f)
        assert len(data["checks"]) == len(report.checks)

        with open(summary_path) as f:
            summary = f.read()
        assert "Total checks: 5" in summary
        for spline in fitted_path.splines:
            assert spline.curve_id in summary

        assert os.path.dirname(summary_path) == temp_dir

    def test_format_check_result(self):
        from arcspline.models import CheckResult, Severity
        from arcspline.validate.report import format_check_result

        check = CheckResult(rule_id="x", severity=Severity.WARN, passed=False, message="bad")
        assert format_check_result(check) == "[FAIL][WARN] x: bad"
