"""Validity-aware depth gradients."""

from __future__ import annotations

from typing import Tuple

import numpy as np


def depth_gradient(depth: np.ndarray, x: int, y: int) -> Tuple[float, float]:
    """
    Finite-difference gradient of ``depth`` at ``(x, y)``.

    Backward and forward differences are averaged along each axis, but only
    pairs whose samples are both known (non-zero) contribute. An axis with no
    valid pair has gradient 0, so the edge of a filled region does not produce
    a spurious jump to zero.
    """
    height, width = depth.shape[:2]
    center = float(depth[y, x])
    if center == 0:
        return 0.0, 0.0

    dx = 0.0
    wx = 0
    if x > 0 and depth[y, x - 1] != 0:
        dx += center - float(depth[y, x - 1])
        wx += 1
    if x + 1 < width and depth[y, x + 1] != 0:
        dx += float(depth[y, x + 1]) - center
        wx += 1

    dy = 0.0
    wy = 0
    if y > 0 and depth[y - 1, x] != 0:
        dy += center - float(depth[y - 1, x])
        wy += 1
    if y + 1 < height and depth[y + 1, x] != 0:
        dy += float(depth[y + 1, x]) - center
        wy += 1

    return (dx / wx if wx > 0 else 0.0), (dy / wy if wy > 0 else 0.0)
