"""Colour-guided depth map inpainting by greedy fast marching (GDFMM)."""

from .config import GDFMMConfig, InpaintConfig, IOConfig, load_yaml_config
from .core import BilateralPredictor, PropagationEngine, RegressionPredictor, SpeedField, WeightCache
from .errors import (
    ConfigurationError,
    DegenerateWindowError,
    GDFMMError,
    InputShapeError,
    InsufficientDataError,
)
from .pipeline import GDFMM, BatchInpainter

__all__ = [
    "GDFMMConfig",
    "InpaintConfig",
    "IOConfig",
    "load_yaml_config",
    "BilateralPredictor",
    "PropagationEngine",
    "RegressionPredictor",
    "SpeedField",
    "WeightCache",
    "ConfigurationError",
    "DegenerateWindowError",
    "GDFMMError",
    "InputShapeError",
    "InsufficientDataError",
    "GDFMM",
    "BatchInpainter",
]

__version__ = "0.1.0"
