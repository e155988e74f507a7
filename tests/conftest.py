"""Pytest fixtures for arcspline tests."""

import tempfile

import pytest

# Bezier handle length for a quarter circle
KAPPA = 0.5523


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def s_curve():
    """Symmetric S-curve with an inflection at t = 0.5."""
    from arcspline.geometry.bezier import make_bezier
    return make_bezier([(0, 0), (0, 100), (100, 0), (100, 100)])


@pytest.fixture
def quarter_circle():
    """Counter-clockwise quarter of the circle of radius 100 about the origin."""
    from arcspline.geometry.bezier import make_bezier
    k = 100 * KAPPA
    return make_bezier([(100, 0), (100, k), (k, 100), (0, 100)])


@pytest.fixture
def default_config():
    """Create default configuration."""
    from arcspline.config import ArcSplineConfig
    return ArcSplineConfig()


@pytest.fixture(autouse=True)
def reset_tracer():
    """Leave the global tracer disabled after every test."""
    yield
    from arcspline.tracer import configure_tracer
    configure_tracer(enabled=False)
