"""Colour-edge driven propagation priorities."""

from __future__ import annotations

from dataclasses import dataclass

import cv2
import numpy as np

from gdfmm.errors import ConfigurationError, InputShapeError


def gradient_energy(color: np.ndarray, blur_sigma: float) -> np.ndarray:
    """Per-pixel, per-channel squared Sobel magnitude of the smoothed colour image."""
    if blur_sigma <= 0:
        raise ConfigurationError(f"blur_sigma must be positive, got {blur_sigma}")
    if color.ndim != 3 or color.shape[2] != 3:
        raise InputShapeError("Expected colour image of shape HxWx3.")
    blurred = cv2.GaussianBlur(color, (0, 0), blur_sigma, blur_sigma)
    grad_x = cv2.Sobel(blurred, cv2.CV_32F, 1, 0, ksize=3)
    grad_y = cv2.Sobel(blurred, cv2.CV_32F, 0, 1, ksize=3)
    return grad_x * grad_x + grad_y * grad_y


@dataclass(frozen=True)
class SpeedField:
    """
    Priority assigned to a pixel when it is filled.

    Values lie in (-1, 0]: close to 0 on strong colour edges, -1 in flat
    regions. The frontier expands the highest value first, so edges are
    crossed early and flat interiors wait for more context.
    """

    priorities: np.ndarray  # HxW float32

    @classmethod
    def from_color(cls, color: np.ndarray, blur_sigma: float) -> "SpeedField":
        energy = gradient_energy(color, blur_sigma)
        priorities = (-1.0 / (1.0 + energy.sum(axis=2))).astype(np.float32)
        priorities.setflags(write=False)
        return cls(priorities=priorities)

    @property
    def shape(self):
        return self.priorities.shape

    def __call__(self, x: int, y: int) -> float:
        return float(self.priorities[y, x])
