"""Depth and colour image conversion helpers."""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from gdfmm.errors import InputShapeError

_U16_MAX = np.iinfo(np.uint16).max


def as_depth_f32(depth: np.ndarray) -> np.ndarray:
    """Return a float32 HxW copy of a single-channel depth image."""
    depth = np.asarray(depth)
    if depth.ndim == 3 and depth.shape[2] == 1:
        depth = depth[..., 0]
    if depth.ndim != 2:
        raise InputShapeError(f"Expected single-channel depth image, got shape {depth.shape}")
    return depth.astype(np.float32, copy=True)


def as_color_u8(color: np.ndarray) -> np.ndarray:
    """Ensure the colour image is HxWx3 uint8 (values outside 0..255 are clipped)."""
    color = np.asarray(color)
    if color.ndim != 3 or color.shape[2] != 3:
        raise InputShapeError(f"Expected 3-channel colour image, got shape {color.shape}")
    if color.dtype != np.uint8:
        color = np.clip(np.rint(color), 0, 255).astype(np.uint8)
    return np.ascontiguousarray(color)


def to_uint16(depth: np.ndarray) -> np.ndarray:
    """Round and saturate a float depth image to uint16."""
    return np.clip(np.rint(depth), 0, _U16_MAX).astype(np.uint16)


def load_depth(path: Path) -> np.ndarray:
    image = cv2.imread(str(path), cv2.IMREAD_ANYDEPTH)
    if image is None:
        raise FileNotFoundError(f"Failed to read depth image: {path}")
    return image


def load_color(path: Path) -> np.ndarray:
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise FileNotFoundError(f"Failed to read colour image: {path}")
    return image


def save_depth(depth: np.ndarray, path: Path) -> None:
    """Write a uint16 depth image as 16-bit PNG."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), to_uint16(depth) if depth.dtype != np.uint16 else depth):
        raise RuntimeError(f"Failed to write depth image: {path}")
