"""Configuration dataclasses and utilities for GDFMM inpainting."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from gdfmm.errors import ConfigurationError

METHODS = ("bilateral", "regression")


@dataclass
class IOConfig:
    depth_dir: Optional[Path] = None
    color_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    pattern: str = "*.png"


@dataclass
class InpaintConfig:
    method: str = "bilateral"
    window_size: int = 5
    sigma_distance: float = 2.0
    sigma_color: float = 10.0
    blur_sigma: float = 1.0
    # regression only
    epsilon: float = 1e-3
    constant: float = 1.0
    truncation: float = 0.5
    # optional extensions, off by default
    gradient_correction: bool = False
    clamp_output: bool = False
    max_deferrals: int = 20

    def validate(self) -> "InpaintConfig":
        """Raise :class:`ConfigurationError` for parameters that cannot run."""
        if self.method not in METHODS:
            raise ConfigurationError(f"Unknown method '{self.method}', expected one of {METHODS}")
        if self.window_size < 3 or self.window_size % 2 != 1:
            raise ConfigurationError(f"window_size must be odd and >= 3, got {self.window_size}")
        for name in ("sigma_distance", "sigma_color", "blur_sigma"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.method == "regression" and self.epsilon <= 0:
            raise ConfigurationError(f"epsilon must be positive, got {self.epsilon}")
        if self.max_deferrals < 0:
            raise ConfigurationError(f"max_deferrals must be non-negative, got {self.max_deferrals}")
        return self


@dataclass
class GDFMMConfig:
    io: IOConfig = field(default_factory=IOConfig)
    inpaint: InpaintConfig = field(default_factory=InpaintConfig)

    @staticmethod
    def from_dict(config: Dict[str, Any], base_dir: Optional[Path] = None) -> "GDFMMConfig":
        """Build a GDFMMConfig from nested dictionaries."""
        io_cfg = config.get("io", {}) or {}
        inpaint_cfg = dict(config.get("inpaint", {}) or {})

        def resolve_relative_to_base(value: Optional[str]) -> Optional[Path]:
            if value is None:
                return None
            path = Path(value)
            if path.is_absolute() or base_dir is None:
                return path
            return base_dir / path

        unknown = set(inpaint_cfg) - set(InpaintConfig.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown inpaint options: {sorted(unknown)}")

        return GDFMMConfig(
            io=IOConfig(
                depth_dir=resolve_relative_to_base(io_cfg.get("depth_dir")),
                color_dir=resolve_relative_to_base(io_cfg.get("color_dir")),
                output_dir=resolve_relative_to_base(io_cfg.get("output_dir")),
                pattern=io_cfg.get("pattern", IOConfig.__dataclass_fields__["pattern"].default),
            ),
            inpaint=InpaintConfig(**inpaint_cfg).validate(),
        )


def load_yaml_config(path: Path) -> GDFMMConfig:
    """Load a YAML configuration file into a GDFMMConfig."""
    import yaml

    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    return GDFMMConfig.from_dict(raw, base_dir=path.parent)
