"""
Pydantic data models for arcspline.

Geometry values are frozen so curves, circles and arcs can be shared freely
between the search, refinement and assembly stages. Content-based IDs keep
outputs deterministic.
"""

import hashlib
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

Point = Tuple[float, float]


class Orientation(str, Enum):
    """Sweep direction of a fitted arc."""
    CCW = "ccw"
    CW = "cw"
    LINE = "line"


class Severity(str, Enum):
    """Severity levels for validation checks."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


class CubicBezier(BaseModel):
    """A single cubic Bezier curve segment."""
    p0: Point  # start point
    p1: Point  # control point 1
    p2: Point  # control point 2
    p3: Point  # end point

    model_config = ConfigDict(frozen=True, extra="forbid")


class Circle(BaseModel):
    """A circle given by center and radius."""
    center: Point
    radius: float = Field(..., ge=0.0)

    model_config = ConfigDict(frozen=True, extra="forbid")


class Arc(BaseModel):
    """
    A circular arc from p0 to p1.

    d is tan(theta / 4) where theta is the signed sweep angle, positive for
    counter-clockwise in a y-up frame. d == 0 is a straight segment.
    """
    p0: Point
    p1: Point
    d: float = 0.0

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def orientation(self):
        if self.d > 0:
            return Orientation.CCW
        if self.d < 0:
            return Orientation.CW
        return Orientation.LINE


class CutPoint(BaseModel):
    """
    A cut on the curve parameter domain.

    position must stay inside [low, high]. error is the estimated arc error
    of the segment that ends at this cut.
    """
    low: float
    high: float
    position: float
    error: float = 0.0

    model_config = ConfigDict(extra="forbid")


class ArcSegment(BaseModel):
    """One fitted arc covering the parameter interval [t0, t1] of a curve."""
    t0: float
    t1: float
    arc: Arc
    circle: Optional[Circle] = None
    through: Point
    error: float
    sampled_error: Optional[float] = None

    model_config = ConfigDict(extra="forbid")

    @property
    def orientation(self):
        return self.arc.orientation


class ArcSpline(BaseModel):
    """The arc approximation of a single cubic Bezier curve."""
    curve_id: str
    bezier: CubicBezier
    tolerance: float
    cut_points: List[float] = Field(default_factory=list)
    cuts: List[CutPoint] = Field(default_factory=list)
    segments: List[ArcSegment] = Field(default_factory=list)
    left_cuts: List[float] = Field(default_factory=list)
    right_cuts: List[float] = Field(default_factory=list)
    reconciled: bool = False

    model_config = ConfigDict(extra="forbid")

    @property
    def arc_count(self):
        return len(self.segments)

    @property
    def max_error(self):
        """Largest estimated segment error."""
        return max((s.error for s in self.segments), default=0.0)


class ArcPath(BaseModel):
    """Arc approximations of every curve segment of one input path."""
    path_id: str
    tolerance: float
    splines: List[ArcSpline] = Field(default_factory=list)
    skipped_segments: int = 0

    model_config = ConfigDict(extra="forbid")

    @property
    def segment_count(self):
        return sum(s.arc_count for s in self.splines)


class CheckResult(BaseModel):
    """Result of a single validation check."""
    rule_id: str
    severity: Severity
    passed: bool
    message: str
    evidence: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ValidationReport(BaseModel):
    """Collection of validation check results."""
    checks: List[CheckResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def has_errors(self):
        """Check if any errors exist."""
        return any(c.severity == Severity.ERROR and not c.passed for c in self.checks)

    @property
    def error_count(self):
        """Count of failed error-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.ERROR and not c.passed)

    @property
    def warning_count(self):
        """Count of failed warning-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.WARN and not c.passed)


# ID generation functions for deterministic outputs

def generate_curve_id(bezier, round_digits=6):
    """
    Generate a deterministic curve ID from control point coordinates.

    Rounds coordinates to avoid floating point instability.
    """
    rounded = [
        [round(p[0], round_digits), round(p[1], round_digits)]
        for p in (bezier.p0, bezier.p1, bezier.p2, bezier.p3)
    ]
    h = hashlib.sha256(str(rounded).encode()).hexdigest()[:12]
    return f"curve_{h}"


def generate_path_id(curve_ids):
    """Generate a deterministic path ID from its curve IDs, in order."""
    if not curve_ids:
        return "path_empty"

    data = ":".join(curve_ids)
    h = hashlib.sha256(data.encode()).hexdigest()[:12]
    return f"path_{h}"
