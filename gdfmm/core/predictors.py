"""Local depth predictors used by the propagation engine."""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from gdfmm.core.gradient import depth_gradient
from gdfmm.core.weights import WeightCache
from gdfmm.errors import ConfigurationError, DegenerateWindowError

logger = logging.getLogger(__name__)

Prediction = Tuple[float, bool]

# Returned when the window does not hold enough known samples yet.
FAILURE: Prediction = (0.0, False)

MIN_KNOWN = 4
COLOR_RANGE = 255
_WEIGHT_FLOOR = 1e-6
_STD_FLOOR = 1e-5


def validate_window_size(window_size: int) -> int:
    if window_size < 3 or window_size % 2 != 1:
        raise ConfigurationError(f"window_size must be odd and >= 3, got {window_size}")
    return window_size // 2


class DepthPredictor:
    """
    Estimates the depth of an unknown pixel from known pixels in a square window.

    Subclasses implement :meth:`predict`, which returns ``(value, True)`` on
    success and :data:`FAILURE` when fewer than four known samples are
    available. The engine treats a failure as "retry later".
    """

    def __init__(self, window_size: int) -> None:
        self.window_size = int(window_size)
        self.radius = validate_window_size(self.window_size)

    def predict(self, depth: np.ndarray, color: np.ndarray, x: int, y: int) -> Prediction:
        raise NotImplementedError

    def _known_samples(self, depth: np.ndarray, x: int, y: int) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(xs, ys)`` of known pixels in the window clipped to the image."""
        height, width = depth.shape[:2]
        x0 = max(0, x - self.radius)
        y0 = max(0, y - self.radius)
        x1 = min(width - 1, x + self.radius) + 1
        y1 = min(height - 1, y + self.radius) + 1
        ys, xs = np.nonzero(depth[y0:y1, x0:x1])
        return xs + x0, ys + y0


class BilateralPredictor(DepthPredictor):
    """Bilateral (spatial x colour) weighted average of known depths."""

    def __init__(
        self,
        window_size: int,
        sigma_distance: float,
        sigma_color: float,
        gradient_correction: bool = False,
    ) -> None:
        super().__init__(window_size)
        self.distance_weights = WeightCache(sigma_distance, self.radius)
        self.color_weights = WeightCache(sigma_color, COLOR_RANGE)
        self.gradient_correction = gradient_correction

    def predict(self, depth: np.ndarray, color: np.ndarray, x: int, y: int) -> Prediction:
        xs, ys = self._known_samples(depth, x, y)
        if xs.size < MIN_KNOWN:
            return FAILURE

        weights = self.distance_weights(xs - x) * self.distance_weights(ys - y)
        color_diff = color[y, x].astype(np.int32) - color[ys, xs].astype(np.int32)
        weights = weights * self.color_weights(color_diff).prod(axis=1)
        weights = np.maximum(weights, _WEIGHT_FLOOR)

        values = depth[ys, xs].astype(np.float64)
        if self.gradient_correction:
            # First-order extrapolation from each sample towards (x, y).
            for idx, (m, n) in enumerate(zip(xs, ys)):
                grad_x, grad_y = depth_gradient(depth, int(m), int(n))
                values[idx] += grad_x * (x - m) + grad_y * (y - n)

        return float(np.dot(weights, values) / weights.sum()), True


class RegressionPredictor(DepthPredictor):
    """
    Ridge-regularised local linear regression of depth on colour.

    Suited to larger holes than :class:`BilateralPredictor`. Colour features
    are standardised per window, so the raw 0..255 range does not affect the
    conditioning of the system.
    """

    def __init__(
        self,
        window_size: int,
        epsilon: float,
        constant: float,
        truncation: float,
        clamp_output: bool = False,
    ) -> None:
        super().__init__(window_size)
        if not epsilon > 0:
            raise ConfigurationError(f"epsilon must be positive, got {epsilon}")
        self.epsilon = float(epsilon)
        self.constant = float(constant)
        self.truncation = float(truncation)
        self.clamp_output = clamp_output

    def predict(self, depth: np.ndarray, color: np.ndarray, x: int, y: int) -> Prediction:
        xs, ys = self._known_samples(depth, x, y)
        if xs.size < MIN_KNOWN:
            return FAILURE

        features = np.zeros((xs.size, 4), dtype=np.float64)
        features[:, :3] = color[ys, xs]
        targets = depth[ys, xs].astype(np.float64)

        feature_mean = features.mean(axis=0)
        target_mean = targets.mean()
        features -= feature_mean
        centered_targets = targets - target_mean

        feature_std = np.maximum(np.sqrt((features * features).mean(axis=0)), _STD_FLOOR)
        feature_std[3] = 1.0
        features[:, 3] = self.constant
        features /= feature_std

        gram = features.T @ features + self.epsilon * np.eye(4)
        beta = np.linalg.solve(gram, features.T @ centered_targets)

        query = np.zeros(4, dtype=np.float64)
        query[:3] = color[y, x]
        query = (query - feature_mean) / feature_std
        query[3] = max(_STD_FLOOR, self.constant)

        prediction = float(beta @ query + target_mean)
        if not np.isfinite(prediction):
            logger.debug("Non-finite regression at (%d, %d): beta=%s", x, y, beta)
            raise DegenerateWindowError(f"Regression produced a non-finite depth at ({x}, {y}).")

        if self.clamp_output:
            low, high = float(targets.min()), float(targets.max())
            margin = (high - low) * self.truncation
            prediction = min(max(prediction, low - margin), high + margin)
        return prediction, True
