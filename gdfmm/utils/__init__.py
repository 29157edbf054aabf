"""Utility helpers for GDFMM."""

from .fs import ensure_dir, find_image_pairs, save_json
from .img import as_color_u8, as_depth_f32, load_color, load_depth, save_depth, to_uint16

__all__ = [
    "ensure_dir",
    "find_image_pairs",
    "save_json",
    "as_color_u8",
    "as_depth_f32",
    "load_color",
    "load_depth",
    "save_depth",
    "to_uint16",
]
