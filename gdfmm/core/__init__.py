"""Propagation engine, predictors and the kernels that drive them."""

from .gradient import depth_gradient
from .predictors import FAILURE, BilateralPredictor, DepthPredictor, RegressionPredictor
from .propagation import PropagationEngine, RunStats
from .speed import SpeedField, gradient_energy
from .weights import WeightCache

__all__ = [
    "depth_gradient",
    "FAILURE",
    "BilateralPredictor",
    "DepthPredictor",
    "RegressionPredictor",
    "PropagationEngine",
    "RunStats",
    "SpeedField",
    "gradient_energy",
    "WeightCache",
]
