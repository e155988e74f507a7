"""
Closed-form deviation bounds.

The difference of two cubic Beziers that share their end points is
3t(1-t)^2 * dp1 + 3t^2(1-t) * dp2, where dp1 and dp2 are the differences
of the inner control points. Along one axis that is
3t(1-t)(d0(1-t) + d1 t), and its largest magnitude on [0, 1] bounds how
far the two curves drift apart along that axis.
"""

import math


def max_dev(d0, d1):
    """Return max |3t(1-t)(d0(1-t) + d1 t)| for 0 <= t <= 1."""
    candidates = [0.0, 1.0]
    if d0 == d1:
        candidates.append(0.5)
    else:
        # Critical points are the roots of the derivative, a quadratic
        delta = d0 * d0 - d0 * d1 + d1 * d1
        t2 = 1.0 / (3 * (d0 - d1))
        t0 = (2 * d0 - d1) * t2
        if delta == 0:
            candidates.append(t0)
        elif delta > 0:
            t1 = math.sqrt(delta) * t2
            candidates.append(t0 - t1)
            candidates.append(t0 + t1)

    e = 0.0
    for t in candidates:
        if t < 0.0 or t > 1.0:
            continue
        e = max(e, abs(3 * t * (1 - t) * (d0 * (1 - t) + d1 * t)))

    return e


def max_dev_approx(d0, d1):
    """Cheap envelope of max_dev; may overestimate it."""
    d0 = abs(d0)
    d1 = abs(d1)
    return min(3.0 / 4.0 * max(d0, d1), 4.0 / 9.0 * (d0 + d1))
