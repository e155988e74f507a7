"""Tests for the tracer module."""

import json

import numpy as np
import pytest


class TestSummarize:
    """Tests for object summarization."""

    def test_numpy_array_summary(self):
        """Test that numpy arrays are summarized with shape and type."""
        from arcspline.tracer import summarize

        arr = np.zeros((100, 2), dtype=np.float64)
        summary = summarize(arr)

        assert "ndarray" in summary
        assert "100x2" in summary
        assert "float64" in summary

    def test_small_array_shows_values(self):
        from arcspline.tracer import summarize

        assert summarize(np.array([1.5, -2.0])) == "ndarray(float64,2,[1.5,-2])"

    def test_summary_capped_length(self):
        """Test that summary never exceeds max length."""
        from arcspline.tracer import summarize

        large_dict = {f"key_{i}": f"value_{i}" for i in range(100)}
        summary = summarize(large_dict, max_len=20)

        assert len(summary) <= 20

    def test_list_summary(self):
        """Short numeric lists are printed in full."""
        from arcspline.tracer import summarize

        assert summarize([0.0, 0.25, 1.0]) == "list[0,0.25,1]"
        assert "len=10" in summarize(list(range(10)))

    def test_string_summary(self):
        """Test long string summarization."""
        from arcspline.tracer import summarize

        long_string = "a" * 1000
        summary = summarize(long_string)

        assert "str" in summary
        assert "len=1000" in summary
        assert len(summary) <= 200

    def test_none_summary(self):
        from arcspline.tracer import summarize

        assert summarize(None) == "None"

    def test_bezier_summary(self, s_curve):
        """Curves are shown by their end points."""
        from arcspline.tracer import summarize

        assert summarize(s_curve) == "CubicBezier((0,0)->(100,100))"

    def test_spline_summary(self, quarter_circle):
        from arcspline.pipeline import fit_arcs
        from arcspline.tracer import summarize

        summary = summarize(fit_arcs(quarter_circle, 1.0))
        assert summary == "ArcSpline(segments=1)"


class TestTracerSpan:
    """Tests for tracer span functionality."""

    def test_span_nesting(self, capsys):
        """Test that spans produce proper indentation."""
        from arcspline.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with tracer.span("outer", module="test"):
            with tracer.span("inner", module="test"):
                tracer.event("inside")

        lines = capsys.readouterr().err.strip().split("\n")

        # start/end for both spans plus the event
        assert len(lines) == 5
        assert "  test:inner" in lines[1]
        assert "    test:inner  inside" in lines[2]

    def test_tracer_disabled_no_output(self, capsys):
        """Test that disabled tracer produces no output."""
        from arcspline.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=False)
        tracer = get_tracer()

        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        assert capsys.readouterr().err == ""

    def test_level_filter(self, capsys):
        from arcspline.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        tracer.event("detail", level="DEBUG")
        tracer.event("problem", level="WARN")

        err = capsys.readouterr().err
        assert "detail" not in err
        assert "problem" in err

    def test_failed_span(self, capsys):
        """A failing span logs the error and unwinds its depth."""
        from arcspline.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with pytest.raises(ValueError):
            with tracer.span("broken", module="test"):
                raise ValueError("bad input")

        tracer.event("after")

        lines = capsys.readouterr().err.strip().split("\n")
        assert "failed" in lines[-2]
        assert "ValueError: bad input" in lines[-2]
        assert lines[-1].endswith("INFO    after")

    def test_json_output(self, capsys):
        from arcspline.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO", json_output=True)
        get_tracer().event("fitted", arcs=3)

        lines = capsys.readouterr().err.strip().split("\n")
        record = json.loads(lines[-1])

        assert record["message"] == "fitted arcs=3"
        assert record["meta"] == {"arcs": "3"}


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        """Test that decorated function executes normally."""
        from arcspline.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="test_func")
        def my_func(x):
            return x * 2

        assert my_func(5) == 10

    def test_decorator_with_exception(self):
        """Test that decorator handles exceptions properly."""
        from arcspline.tracer import configure_tracer, trace

        configure_tracer(enabled=True, level="ERROR")

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            failing_func()

    def test_decorator_span_level(self, capsys):
        """DEBUG-level functions stay quiet at INFO."""
        from arcspline.tracer import configure_tracer, trace

        configure_tracer(enabled=True, level="INFO")

        @trace(label="inner_loop", level="DEBUG")
        def inner():
            return 1

        @trace(label="outer_call")
        def outer():
            return inner()

        assert outer() == 1
        err = capsys.readouterr().err
        assert "outer_call" in err
        assert "inner_loop" not in err
