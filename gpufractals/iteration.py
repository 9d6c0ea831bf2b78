"""Per-sample iteration for Newton, Mandelbrot and Julia fractals."""

from __future__ import annotations

import enum
from typing import Sequence

import numpy as np

from .complex_ops import ComplexValue, add, div, exp, magnitude, mul, scale, sub
from .polynomial import derivative, evaluate

ESCAPE_RADIUS = 2.0
JULIA_MODULUS = 0.7885


class FractalKind(enum.Enum):
    NEWTON = "newton"
    MANDELBROT = "mandelbrot"
    JULIA = "julia"

    @classmethod
    def parse(cls, name: str) -> "FractalKind":
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ", ".join(kind.name.capitalize() for kind in cls)
            raise ValueError(f"Invalid fractal type '{name}'. Admissible values are {valid}.") from None


def julia_constant(angle: float) -> ComplexValue:
    """Return ``0.7885 * exp(i * angle)``, the Julia recurrence constant."""

    return scale(exp(ComplexValue(np.float64(0.0), np.float64(angle))), JULIA_MODULUS)


def newton_step(z: ComplexValue, roots: Sequence[ComplexValue]) -> ComplexValue:
    return sub(z, div(evaluate(z, roots), derivative(z, roots)))


def nearest_root(z: ComplexValue, roots: Sequence[ComplexValue]):
    """Index of the root closest to ``z``.

    Roots are scanned in order and only a strictly smaller distance replaces
    the current best, so ties keep the lowest index and NaN distances never
    win. A non-finite ``z`` therefore maps to root 0.
    """

    best = magnitude(sub(z, roots[0]))
    index = np.zeros(np.shape(best), dtype=np.int64)[()]
    for k in range(1, len(roots)):
        distance = magnitude(sub(z, roots[k]))
        closer = distance < best
        best = np.where(closer, distance, best)[()]
        index = np.where(closer, k, index)[()]
    return index


def newton_outcome(sample: ComplexValue, roots: Sequence[ComplexValue], iterations: int):
    """Run exactly ``iterations`` Newton steps from ``sample``.

    There is no convergence test. A vanishing derivative makes the division
    non-finite and the NaN/Inf values carry through the remaining steps; this
    is left as is so results stay comparable across backends. Works on scalar
    and array samples alike.
    """

    z = sample
    for _ in range(iterations):
        z = newton_step(z, roots)
    return nearest_root(z, roots)


def escape_outcome(z: ComplexValue, c: ComplexValue, iterations: int) -> int:
    """Escape-time iteration of ``z <- z**2 + c`` for a single sample.

    Returns ``iterations - i`` for the first step ``i`` at which the magnitude
    exceeds 2, or 0 when the budget runs out first.
    """

    for i in range(iterations):
        z = add(mul(z, z), c)
        if magnitude(z) > ESCAPE_RADIUS:
            return iterations - i
    return 0


def escape_outcomes(z: ComplexValue, c: ComplexValue, iterations: int) -> np.ndarray:
    """Array counterpart of :func:`escape_outcome`.

    Escaped samples are frozen and stop contributing, which yields the same
    outcome as iterating every sample on its own.
    """

    re = np.array(z.re, dtype=np.float64, copy=True)
    im = np.array(z.im, dtype=np.float64, copy=True)
    c = ComplexValue(np.broadcast_to(c.re, re.shape), np.broadcast_to(c.im, re.shape))
    outcomes = np.zeros(re.shape, dtype=np.int64)
    active = np.ones(re.shape, dtype=bool)

    for i in range(iterations):
        current = ComplexValue(re[active], im[active])
        stepped = add(mul(current, current), ComplexValue(c.re[active], c.im[active]))
        re[active] = stepped.re
        im[active] = stepped.im
        escaped = magnitude(stepped) > ESCAPE_RADIUS
        indices = np.flatnonzero(active)[escaped]
        outcomes.flat[indices] = iterations - i
        active.flat[indices] = False
        if not active.any():
            break
    return outcomes


def mandelbrot_outcome(sample: ComplexValue, iterations: int) -> int:
    return escape_outcome(sample, sample, iterations)


def julia_outcome(sample: ComplexValue, angle: float, iterations: int) -> int:
    return escape_outcome(sample, julia_constant(angle), iterations)
