"""Precomputed Gaussian weight tables."""

from __future__ import annotations

from typing import Union

import numpy as np

from gdfmm.errors import ConfigurationError

IntLike = Union[int, np.ndarray]


class WeightCache:
    """
    Lookup table for ``exp(-d^2 / (2 sigma^2))`` over integer ``d`` in ``[-radius, radius]``.

    Queries outside the configured range are not checked; callers bound their
    offsets to the window they were built for.
    """

    def __init__(self, sigma: float, radius: int) -> None:
        if sigma <= 0:
            raise ConfigurationError(f"sigma must be positive, got {sigma}")
        if radius < 0:
            raise ConfigurationError(f"radius must be non-negative, got {radius}")
        self.sigma = float(sigma)
        self.radius = int(radius)
        offsets = np.arange(-self.radius, self.radius + 1, dtype=np.float64)
        self._table = np.exp(-(offsets * offsets) / (2.0 * self.sigma * self.sigma))
        self._table.setflags(write=False)

    def __call__(self, diff: IntLike) -> Union[float, np.ndarray]:
        if isinstance(diff, np.ndarray):
            return self._table[diff.astype(np.intp) + self.radius]
        return float(self._table[int(diff) + self.radius])

    def __len__(self) -> int:
        return self._table.shape[0]

    def __repr__(self) -> str:
        return f"WeightCache(sigma={self.sigma}, radius={self.radius})"
