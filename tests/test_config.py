from pathlib import Path

import pytest

from gdfmm.config import GDFMMConfig, InpaintConfig, load_yaml_config
from gdfmm.errors import ConfigurationError


def test_defaults_are_valid():
    config = GDFMMConfig()
    assert config.inpaint.validate() is config.inpaint
    assert config.inpaint.method == "bilateral"
    assert config.inpaint.window_size % 2 == 1


def test_from_dict_resolves_paths_relative_to_base(tmp_path):
    raw = {
        "io": {"depth_dir": "depth", "color_dir": "/abs/color", "output_dir": "out"},
        "inpaint": {"method": "regression", "window_size": 7, "epsilon": 0.01},
    }
    config = GDFMMConfig.from_dict(raw, base_dir=tmp_path)

    assert config.io.depth_dir == tmp_path / "depth"
    assert config.io.color_dir == Path("/abs/color")
    assert config.io.output_dir == tmp_path / "out"
    assert config.io.pattern == "*.png"
    assert config.inpaint.method == "regression"
    assert config.inpaint.window_size == 7
    assert config.inpaint.epsilon == 0.01
    assert config.inpaint.sigma_color == InpaintConfig().sigma_color


@pytest.mark.parametrize(
    "inpaint",
    [
        {"window_size": 4},
        {"window_size": 1},
        {"method": "telea"},
        {"sigma_color": 0.0},
        {"method": "regression", "epsilon": 0.0},
        {"unknown_option": 3},
    ],
)
def test_invalid_inpaint_options(inpaint):
    with pytest.raises(ConfigurationError):
        GDFMMConfig.from_dict({"inpaint": inpaint})


def test_load_yaml_config(tmp_path):
    path = tmp_path / "gdfmm.yaml"
    path.write_text(
        "io:\n"
        "  depth_dir: data/depth\n"
        "  color_dir: data/color\n"
        "  output_dir: filled\n"
        "inpaint:\n"
        "  window_size: 9\n"
        "  blur_sigma: 2.5\n",
        encoding="utf-8",
    )
    config = load_yaml_config(path)
    assert config.io.depth_dir == tmp_path / "data" / "depth"
    assert config.inpaint.window_size == 9
    assert config.inpaint.blur_sigma == 2.5


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    config = load_yaml_config(path)
    assert config.io.depth_dir is None
    assert config.inpaint == InpaintConfig()
