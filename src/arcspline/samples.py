"""
Named sample curves.

Each sample is either SVG path data in drawing units or a curve given in
its own units together with the translate/scale/translate transform that
maps it onto a 1400 x 1000 drawing.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from arcspline.geometry.bezier import make_bezier
from arcspline.io.load_path import parse_path_data


@dataclass(frozen=True)
class Sample:
    """A named sample curve."""
    description: str
    path_data: Optional[str] = None
    points: Optional[tuple] = None
    translate: tuple = (0.0, 0.0)
    scale: tuple = (1.0, 1.0)
    pre_translate: tuple = (0.0, 0.0)

    def curves(self):
        """Return (beziers, skipped) in drawing units."""
        if self.path_data is not None:
            return parse_path_data(self.path_data)

        pts = np.asarray(self.points, dtype=float)
        pts = np.asarray(self.translate) + np.asarray(self.scale) * (pts + np.asarray(self.pre_translate))
        return [make_bezier(pts)], 0


_RASKUS_COMPLICATED = dict(translate=(-500.0, 400.0), scale=(100.0, -100.0), pre_translate=(-10.0, -1.0))

SAMPLES = {
    "dream": Sample(
        description="A line followed by two wide curves",
        path_data="M 50 650 l 250 50 c 250 50 600 -50 600 -250 c 0 -400 -300 -100 -800 -300",
    ),
    "raskus-simple": Sample(
        description="A gentle single-bump curve",
        points=((16.9753, 0.7421), (18.2203, 2.2238), (21.0939, 2.4017), (23.1643, 1.6148)),
        translate=(-1300.0, 500.0),
        scale=(200.0, -200.0),
        pre_translate=(-10.0, -1.0),
    ),
    "raskus-complicated": Sample(
        description="An inflected curve with a tight turn",
        points=((17.5415, 0.9003), (18.4778, 3.8448), (22.4037, -0.9109), (22.563, 0.7782)),
        **_RASKUS_COMPLICATED,
    ),
    "raskus-complicated2": Sample(
        description="The inflected curve with its control points swapped around",
        points=((18.4778, 3.8448), (17.5415, 0.9003), (22.563, 0.7782), (22.4037, -0.9109)),
        **_RASKUS_COMPLICATED,
    ),
    "skewed": Sample(
        description="A lopsided arch",
        path_data="M 50 380 c 0 -200 500 -100 660 20",
    ),
}


def list_samples():
    """Sample names with their descriptions, sorted by name."""
    return [(name, SAMPLES[name].description) for name in sorted(SAMPLES)]


def get_sample(name):
    """Return (beziers, skipped) for a named sample."""
    if name not in SAMPLES:
        raise ValueError(f"Unknown sample {name!r}; choose from {', '.join(sorted(SAMPLES))}")
    return SAMPLES[name].curves()
