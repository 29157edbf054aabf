"""Colour-guided depth inpainting entry points."""

from __future__ import annotations

import logging
import time
from typing import Optional

import numpy as np

from gdfmm.config import InpaintConfig
from gdfmm.core.predictors import BilateralPredictor, DepthPredictor, RegressionPredictor
from gdfmm.core.propagation import DEFAULT_MAX_DEFERRALS, PropagationEngine, RunStats
from gdfmm.core.speed import SpeedField
from gdfmm.errors import ConfigurationError, InputShapeError
from gdfmm.utils.img import as_color_u8, as_depth_f32, to_uint16

logger = logging.getLogger(__name__)


class GDFMM:
    """
    Guided depth fast marching.

    Fills the zero-valued pixels of a depth image, visiting them in an order
    driven by the edges of a co-registered colour image. The weight tables are
    built once here and shared by every call, so one instance can process any
    number of images with the same parameters.

    Parameters
    ----------
    sigma_distance:
        Gaussian scale of the spatial weight, in pixels.
    sigma_color:
        Gaussian scale of the per-channel colour weight, in 8-bit levels.
    blur_sigma:
        Smoothing applied to the colour image before edge detection.
    window_size:
        Odd side length (>= 3) of the prediction window.
    """

    def __init__(
        self,
        sigma_distance: float,
        sigma_color: float,
        blur_sigma: float,
        window_size: int,
        gradient_correction: bool = False,
        max_deferrals: int = DEFAULT_MAX_DEFERRALS,
    ) -> None:
        if blur_sigma <= 0:
            raise ConfigurationError(f"blur_sigma must be positive, got {blur_sigma}")
        self.blur_sigma = float(blur_sigma)
        self.window_size = window_size
        self.max_deferrals = max_deferrals
        self._bilateral = BilateralPredictor(
            window_size,
            sigma_distance,
            sigma_color,
            gradient_correction=gradient_correction,
        )
        self._config: Optional[InpaintConfig] = None
        self.last_stats: Optional[RunStats] = None

    @classmethod
    def from_config(cls, config: InpaintConfig) -> "GDFMM":
        config.validate()
        instance = cls(
            sigma_distance=config.sigma_distance,
            sigma_color=config.sigma_color,
            blur_sigma=config.blur_sigma,
            window_size=config.window_size,
            gradient_correction=config.gradient_correction,
            max_deferrals=config.max_deferrals,
        )
        instance._config = config
        return instance

    def run(
        self, depth: np.ndarray, color: np.ndarray, out: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """Inpaint with the method selected in the instance's configuration."""
        config = self._config or InpaintConfig(window_size=self.window_size)
        if config.method == "regression":
            return self.inpaint_regression(
                depth,
                color,
                epsilon=config.epsilon,
                constant=config.constant,
                truncation=config.truncation,
                out=out,
                clamp_output=config.clamp_output,
            )
        return self.inpaint(depth, color, out=out)

    def inpaint(
        self, depth: np.ndarray, color: np.ndarray, out: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """Inpaint using the bilateral weighted-average predictor."""
        return self._inpaint_base(depth, color, out, self._bilateral)

    def inpaint_regression(
        self,
        depth: np.ndarray,
        color: np.ndarray,
        epsilon: float,
        constant: float,
        truncation: float,
        out: Optional[np.ndarray] = None,
        clamp_output: bool = False,
    ) -> np.ndarray:
        """
        Inpaint using the local colour regression predictor.

        Better suited to large missing areas, since it fits a linear colour
        model per window instead of averaging neighbours.
        """
        predictor = RegressionPredictor(
            self.window_size,
            epsilon=epsilon,
            constant=constant,
            truncation=truncation,
            clamp_output=clamp_output,
        )
        return self._inpaint_base(depth, color, out, predictor)

    def _inpaint_base(
        self,
        depth: np.ndarray,
        color: np.ndarray,
        out: Optional[np.ndarray],
        predictor: DepthPredictor,
    ) -> np.ndarray:
        working = as_depth_f32(depth)
        color_u8 = as_color_u8(color)
        if color_u8.shape[:2] != working.shape:
            raise InputShapeError(
                f"Images must have same size: depth {working.shape}, colour {color_u8.shape[:2]}"
            )
        if out is not None and (out.shape != working.shape or out.dtype != np.uint16):
            raise InputShapeError(
                f"Output buffer must be uint16 with shape {working.shape}, "
                f"got {out.dtype} {out.shape}"
            )

        start = time.perf_counter()
        speed = SpeedField.from_color(color_u8, self.blur_sigma)
        engine = PropagationEngine(predictor, speed, max_deferrals=self.max_deferrals)
        engine.run(working, color_u8)
        self.last_stats = engine.stats

        logger.info(
            "Inpainted %dx%d depth with %s: %d filled, %d still unknown (%.2fs)",
            working.shape[1],
            working.shape[0],
            type(predictor).__name__,
            engine.stats.filled,
            int(np.count_nonzero(working == 0)),
            time.perf_counter() - start,
        )

        result = to_uint16(working)
        if out is not None:
            np.copyto(out, result)
            return out
        return result
