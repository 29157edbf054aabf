import numpy as np
import pytest

from gdfmm.core.predictors import FAILURE, BilateralPredictor, RegressionPredictor
from gdfmm.errors import ConfigurationError


def _predictors(window_size=5):
    return [
        BilateralPredictor(window_size, sigma_distance=2.0, sigma_color=10.0),
        RegressionPredictor(window_size, epsilon=1e-3, constant=1.0, truncation=0.5),
    ]


def _sparse_window(known):
    depth = np.zeros((7, 7), dtype=np.float32)
    color = np.zeros((7, 7, 3), dtype=np.uint8)
    for idx, (x, y) in enumerate(known):
        depth[y, x] = 1000.0 + 50.0 * idx
        color[y, x] = (20 * idx, 200 - 30 * idx, 15 + 40 * idx)
    color[3, 3] = (60, 120, 90)
    return depth, color


@pytest.mark.parametrize("predictor", _predictors(), ids=["bilateral", "regression"])
def test_three_known_samples_fail(predictor):
    depth, color = _sparse_window([(2, 2), (4, 2), (3, 4)])
    assert predictor.predict(depth, color, 3, 3) == FAILURE


@pytest.mark.parametrize("predictor", _predictors(), ids=["bilateral", "regression"])
def test_four_known_samples_succeed(predictor):
    depth, color = _sparse_window([(2, 2), (4, 2), (3, 4), (1, 3)])
    value, ok = predictor.predict(depth, color, 3, 3)
    assert ok
    assert value != 0.0
    assert np.isfinite(value)


def test_samples_outside_window_are_ignored():
    predictor = BilateralPredictor(3, sigma_distance=2.0, sigma_color=10.0)
    depth, color = _sparse_window([(2, 2), (4, 2), (3, 4), (0, 0), (6, 6)])
    assert predictor.predict(depth, color, 3, 3) == FAILURE


def test_window_clipped_at_image_border():
    predictor = BilateralPredictor(5, sigma_distance=2.0, sigma_color=10.0)
    depth = np.zeros((6, 6), dtype=np.float32)
    color = np.zeros((6, 6, 3), dtype=np.uint8)
    depth[0:3, 0:3] = 700.0
    depth[0, 0] = 0.0
    value, ok = predictor.predict(depth, color, 0, 0)
    assert ok
    assert value == pytest.approx(700.0)


def test_bilateral_prefers_similar_colour():
    predictor = BilateralPredictor(5, sigma_distance=2.0, sigma_color=10.0)
    depth = np.zeros((5, 5), dtype=np.float32)
    color = np.zeros((5, 5, 3), dtype=np.uint8)
    depth[:, :2] = 1000.0
    color[:, :2] = (100, 100, 100)
    depth[:, 3:] = 3000.0
    color[:, 3:] = (200, 30, 30)
    color[2, 2] = (105, 100, 95)

    value, ok = predictor.predict(depth, color, 2, 2)
    assert ok
    assert value == pytest.approx(1000.0, abs=1.0)


def test_bilateral_uniform_depth_is_preserved():
    predictor = BilateralPredictor(3, sigma_distance=1.0, sigma_color=5.0)
    rng = np.random.default_rng(3)
    depth = np.full((3, 3), 1234.0, dtype=np.float32)
    depth[1, 1] = 0.0
    color = rng.integers(0, 256, size=(3, 3, 3), dtype=np.uint8)
    value, ok = predictor.predict(depth, color, 1, 1)
    assert ok
    assert value == pytest.approx(1234.0)


def test_gradient_correction_extrapolates_ramp():
    depth = np.tile((100.0 + 10.0 * np.arange(5)).astype(np.float32), (5, 1))
    depth[2, 0] = 0.0
    color = np.full((5, 5, 3), 128, dtype=np.uint8)

    plain = BilateralPredictor(5, sigma_distance=2.0, sigma_color=10.0)
    corrected = BilateralPredictor(5, sigma_distance=2.0, sigma_color=10.0, gradient_correction=True)

    plain_value, _ = plain.predict(depth, color, 0, 2)
    corrected_value, ok = corrected.predict(depth, color, 0, 2)
    assert ok
    assert plain_value > 105.0
    assert corrected_value == pytest.approx(100.0, abs=1e-4)


def test_regression_recovers_linear_colour_model():
    rng = np.random.default_rng(0)
    color = rng.integers(0, 256, size=(7, 7, 3), dtype=np.uint8)
    channels = color.astype(np.float64)
    truth = 2.0 * channels[..., 0] - 0.5 * channels[..., 1] + 1.5 * channels[..., 2] + 1000.0
    depth = truth.astype(np.float32)
    depth[3, 3] = 0.0

    predictor = RegressionPredictor(7, epsilon=1e-9, constant=1.0, truncation=0.5)
    value, ok = predictor.predict(depth, color, 3, 3)
    assert ok
    assert value == pytest.approx(truth[3, 3], abs=1e-2)


def test_regression_constant_depth_predicts_mean():
    rng = np.random.default_rng(1)
    color = rng.integers(0, 256, size=(5, 5, 3), dtype=np.uint8)
    depth = np.full((5, 5), 850.0, dtype=np.float32)
    depth[2, 2] = 0.0
    predictor = RegressionPredictor(5, epsilon=1e-3, constant=0.0, truncation=0.5)
    value, ok = predictor.predict(depth, color, 2, 2)
    assert ok
    assert value == pytest.approx(850.0)


def test_regression_flat_colour_window_is_finite():
    color = np.full((5, 5, 3), 42, dtype=np.uint8)
    depth = np.arange(1, 26, dtype=np.float32).reshape(5, 5)
    depth[2, 2] = 0.0
    predictor = RegressionPredictor(5, epsilon=1e-6, constant=1.0, truncation=0.5)
    value, ok = predictor.predict(depth, color, 2, 2)
    assert ok
    assert value == pytest.approx(float(depth[depth != 0].mean()), rel=1e-5)


def test_regression_clamp_output_limits_extrapolation():
    rng = np.random.default_rng(2)
    color = rng.integers(0, 101, size=(5, 5, 3), dtype=np.uint8)
    color[2, 2] = (255, 50, 50)
    depth = (1000.0 + 10.0 * color[..., 0].astype(np.float32)).astype(np.float32)
    depth[2, 2] = 0.0
    known = depth[depth != 0]

    free = RegressionPredictor(5, epsilon=1e-6, constant=1.0, truncation=0.0)
    clamped = RegressionPredictor(5, epsilon=1e-6, constant=1.0, truncation=0.0, clamp_output=True)

    free_value, _ = free.predict(depth, color, 2, 2)
    clamped_value, ok = clamped.predict(depth, color, 2, 2)
    assert ok
    assert free_value > known.max()
    assert clamped_value == pytest.approx(float(known.max()))


@pytest.mark.parametrize("window_size", [1, 2, 4, 0, -3])
def test_invalid_window_sizes(window_size):
    with pytest.raises(ConfigurationError):
        BilateralPredictor(window_size, sigma_distance=1.0, sigma_color=1.0)
    with pytest.raises(ConfigurationError):
        RegressionPredictor(window_size, epsilon=1e-3, constant=1.0, truncation=0.5)


@pytest.mark.parametrize("epsilon", [0.0, -1e-3])
def test_regression_requires_positive_epsilon(epsilon):
    with pytest.raises(ConfigurationError):
        RegressionPredictor(5, epsilon=epsilon, constant=1.0, truncation=0.5)
