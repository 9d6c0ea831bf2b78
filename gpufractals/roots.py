"""Helpers for building Newton root sets on the caller side.

The renderer never generates roots itself. A session builds its root set once
with one of these helpers (or from its own points) and passes it in through
:class:`~gpufractals.renderer.FractalParams`.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from .complex_ops import ComplexValue
from .viewport import Viewport

# Soft limit for interactive use; evaluation cost grows with the square of the count.
MAX_ROOTS = 100


def as_root_set(points: Iterable[complex]) -> tuple[ComplexValue, ...]:
    """Convert Python complex numbers (or ComplexValues) to an immutable root set."""

    roots = []
    for point in points:
        if isinstance(point, ComplexValue):
            roots.append(ComplexValue(np.float64(point.re), np.float64(point.im)))
        else:
            roots.append(ComplexValue.of(point))
    if not roots:
        raise ValueError("A root set needs at least one root.")
    return tuple(roots)


def roots_of_unity(count: int) -> tuple[ComplexValue, ...]:
    """Return the ``count`` roots of ``z**count - 1``, starting at 1."""

    if count < 1:
        raise ValueError("Number of roots must be greater than zero.")
    return tuple(
        ComplexValue(np.float64(math.cos(2.0 * math.pi * k / count)), np.float64(math.sin(2.0 * math.pi * k / count)))
        for k in range(count)
    )


def default_cubic_roots() -> tuple[ComplexValue, ...]:
    """Roots of ``z**3 - 1`` as hard-coded by the interactive viewer."""

    return as_root_set([1.0 + 0.0j, -0.5 - 0.86603j, -0.5 + 0.86603j])


def random_roots(count: int, viewport: Viewport, seed: int | None = 0) -> tuple[ComplexValue, ...]:
    """Place ``count`` roots uniformly inside ``viewport``.

    The generator is seeded explicitly, so the same seed always yields the same
    root set. Pass ``seed=None`` for fresh entropy.
    """

    if count < 1:
        raise ValueError("Number of roots must be greater than zero.")
    rng = np.random.default_rng(seed)
    draws = rng.random((count, 2))
    return tuple(viewport.sample(np.float64(u), np.float64(v)) for u, v in draws)
