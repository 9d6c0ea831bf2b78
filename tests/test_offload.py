import numpy as np
import pytest

tf = pytest.importorskip("tensorflow")

from gpufractals.iteration import FractalKind
from gpufractals.offload import evaluate_offloaded
from gpufractals.params import FractalParams
from gpufractals.renderer import compute_outcomes, render
from gpufractals.roots import roots_of_unity
from gpufractals.viewport import Viewport

SQUARE = Viewport(-1.0, 1.0, -1.0, 1.0)


@pytest.mark.parametrize(
    "params, viewport",
    [
        (FractalParams(kind=FractalKind.MANDELBROT, iterations=25), Viewport(-2.0, 1.0, -1.5, 1.5)),
        (FractalParams(kind=FractalKind.JULIA, iterations=25), SQUARE),
        (FractalParams(kind=FractalKind.NEWTON, iterations=10, roots=roots_of_unity(3)), SQUARE),
    ],
)
def test_offloaded_outcomes_match_numpy(params, viewport):
    offloaded = evaluate_offloaded(params, viewport, 16, 16, device="/CPU:0")
    reference = compute_outcomes(params, viewport, 16, 16)
    assert offloaded.shape == reference.shape
    assert offloaded.dtype == np.int64
    assert np.mean(offloaded != reference) <= 0.02


def test_offloaded_known_points():
    params = FractalParams(kind=FractalKind.MANDELBROT, iterations=30)
    outcomes = evaluate_offloaded(params, SQUARE, 5, 5, device="/CPU:0")
    assert outcomes[2, 2] == 0
    far = evaluate_offloaded(params, Viewport(10.0, 12.0, 10.0, 12.0), 2, 2, device="/CPU:0")
    np.testing.assert_array_equal(far, 30)


def test_tensorflow_backend_renders_colors():
    params = FractalParams(kind=FractalKind.NEWTON, iterations=8, roots=roots_of_unity(4))
    colors = render(8, 8, params, SQUARE, backend="tensorflow")
    assert colors.shape == (8, 8, 4)
    np.testing.assert_array_equal(colors[..., 3], 1.0)
