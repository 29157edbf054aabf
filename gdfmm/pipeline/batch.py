"""Batch inpainting over directories of depth/colour image pairs."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List

import numpy as np
from tqdm import tqdm

from gdfmm.config import GDFMMConfig
from gdfmm.errors import ConfigurationError
from gdfmm.pipeline.inpaint import GDFMM
from gdfmm.utils.fs import ensure_dir, find_image_pairs, save_json
from gdfmm.utils.img import load_color, load_depth, save_depth

logger = logging.getLogger(__name__)


@dataclass
class ImageMetadata:
    name: str
    width: int
    height: int
    known_before: int
    known_after: int
    filled: int
    deferrals: int
    output_path: str


class BatchInpainter:
    """Runs GDFMM over every depth image in ``io.depth_dir`` that has a colour match."""

    def __init__(self, config: GDFMMConfig) -> None:
        io_cfg = config.io
        if io_cfg.depth_dir is None or io_cfg.color_dir is None or io_cfg.output_dir is None:
            raise ConfigurationError("Batch mode requires io.depth_dir, io.color_dir and io.output_dir.")
        self.config = config
        self._gdfmm = GDFMM.from_config(config.inpaint)

    def run(self) -> Dict[str, object]:
        io_cfg = self.config.io
        ensure_dir(io_cfg.output_dir)

        pairs, unmatched = find_image_pairs(io_cfg.depth_dir, io_cfg.color_dir, io_cfg.pattern)
        for path in unmatched:
            logger.warning("No colour image for %s, skipping", path.name)

        images: List[Dict[str, object]] = []
        for depth_path, color_path in tqdm(pairs, desc="GDFMM inpaint"):
            images.append(asdict(self._process_pair(depth_path, color_path)))

        metadata: Dict[str, object] = {
            "inpaint": asdict(self.config.inpaint),
            "images": images,
            "skipped": [path.name for path in unmatched],
        }
        save_json(metadata, io_cfg.output_dir / "metadata.json")
        return metadata

    def _process_pair(self, depth_path: Path, color_path: Path) -> ImageMetadata:
        depth = load_depth(depth_path)
        color = load_color(color_path)
        filled = self._gdfmm.run(depth, color)

        output_path = self.config.io.output_dir / f"{depth_path.stem}.png"
        save_depth(filled, output_path)

        stats = self._gdfmm.last_stats
        return ImageMetadata(
            name=depth_path.name,
            width=int(filled.shape[1]),
            height=int(filled.shape[0]),
            known_before=int(np.count_nonzero(depth)),
            known_after=int(np.count_nonzero(filled)),
            filled=stats.filled if stats is not None else 0,
            deferrals=stats.deferrals if stats is not None else 0,
            output_path=str(output_path.relative_to(self.config.io.output_dir)),
        )
