"""Monic polynomials described only by their roots."""

from __future__ import annotations

from typing import Sequence

from .complex_ops import ONE, ComplexValue, add, mul, sub


def evaluate(z: ComplexValue, roots: Sequence[ComplexValue]) -> ComplexValue:
    """Evaluate ``prod(z - root)`` over ``roots``, left to right."""

    value = sub(z, roots[0])
    for root in roots[1:]:
        value = mul(value, sub(z, root))
    return value


def derivative(z: ComplexValue, roots: Sequence[ComplexValue]) -> ComplexValue:
    """Evaluate the derivative of the monic polynomial with ``roots`` at ``z``.

    By the product rule the derivative is the sum, over every root, of the
    product of the remaining factors. The cost is quadratic in the number of
    roots, which stays small for the polynomials rendered here. A single root
    has the constant derivative 1.
    """

    if len(roots) == 1:
        return ONE

    total = None
    for skipped in range(len(roots)):
        term = None
        for index, root in enumerate(roots):
            if index == skipped:
                continue
            factor = sub(z, root)
            term = factor if term is None else mul(term, factor)
        total = term if total is None else add(total, term)
    return total
