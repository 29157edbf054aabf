"""Exception hierarchy for GDFMM depth inpainting."""

from __future__ import annotations

from typing import Optional, Tuple


class GDFMMError(Exception):
    """Base class for all errors raised by the inpainting package."""


class ConfigurationError(GDFMMError, ValueError):
    """Invalid parameters, detected before any image is processed."""


class InputShapeError(GDFMMError, ValueError):
    """Depth/colour images (or the output buffer) have incompatible shapes."""


class InsufficientDataError(GDFMMError, RuntimeError):
    """A frontier pixel was deferred more often than the retry budget allows."""

    def __init__(
        self,
        message: Optional[str] = None,
        position: Optional[Tuple[int, int]] = None,
        priority: Optional[float] = None,
    ) -> None:
        if message is None:
            message = (
                "Too few known values. Try densifying your depth image first, "
                "or increasing the window size."
            )
        super().__init__(message)
        self.position = position
        self.priority = priority


class DegenerateWindowError(GDFMMError, ArithmeticError):
    """The regression predictor produced a non-finite depth."""
