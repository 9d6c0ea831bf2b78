import numpy as np

from gpufractals.complex_ops import ComplexValue
from gpufractals.polynomial import derivative, evaluate
from gpufractals.roots import as_root_set, roots_of_unity


def test_two_roots():
    roots = as_root_set([1.0, -1.0])
    z = ComplexValue.of(2.0)
    assert complex(evaluate(z, roots)) == 3.0
    assert complex(derivative(z, roots)) == 4.0


def test_single_root_has_unit_derivative():
    roots = as_root_set([0.5 + 0.5j])
    z = ComplexValue.of(2.0 - 1.0j)
    assert complex(evaluate(z, roots)) == 1.5 - 1.5j
    assert complex(derivative(z, roots)) == 1.0


def test_cube_roots_of_unity_match_closed_form():
    roots = roots_of_unity(3)
    z = ComplexValue.of(2.0 + 0.5j)
    expected = complex(2.0 + 0.5j)
    np.testing.assert_allclose(complex(evaluate(z, roots)), expected ** 3 - 1, rtol=1e-12)
    np.testing.assert_allclose(complex(derivative(z, roots)), 3 * expected ** 2, rtol=1e-12)


def test_array_samples():
    roots = as_root_set([1.0, -1.0, 1.0j])
    z = ComplexValue(np.array([[0.0, 2.0], [1.0, -3.0]]), np.array([[1.0, 0.0], [0.5, 2.0]]))
    value = evaluate(z, roots)
    slope = derivative(z, roots)
    assert value.re.shape == (2, 2)
    assert slope.im.shape == (2, 2)
    np.testing.assert_allclose(value.re[0, 0] + 1j * value.im[0, 0], 0.0)
    points = z.re + 1j * z.im
    np.testing.assert_allclose(slope.re + 1j * slope.im, 3 * points ** 2 - 2j * points - 1, atol=1e-12)
