"""Filesystem helpers."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple


def ensure_dir(path: Path) -> Path:
    """Create ``path`` if missing and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_json(data: Dict[str, Any], path: Path) -> None:
    """Write ``data`` as sorted, indented JSON via an atomic rename."""
    ensure_dir(path.parent)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, sort_keys=True)
    os.replace(tmp_path, path)


def find_image_pairs(
    depth_dir: Path, color_dir: Path, pattern: str = "*.png"
) -> Tuple[List[Tuple[Path, Path]], List[Path]]:
    """
    Match depth and colour files by stem.

    Returns ``(pairs, unmatched)`` where ``unmatched`` lists depth files with
    no colour counterpart. Colour files may use any extension.
    """
    colors = {p.stem: p for p in sorted(color_dir.iterdir()) if p.is_file()}
    pairs: List[Tuple[Path, Path]] = []
    unmatched: List[Path] = []
    for depth_path in sorted(depth_dir.glob(pattern)):
        color_path = colors.get(depth_path.stem)
        if color_path is None:
            unmatched.append(depth_path)
        else:
            pairs.append((depth_path, color_path))
    return pairs, unmatched
