"""Arithmetic on two-component complex values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class ComplexValue:
    """A complex number stored as separate real and imaginary parts.

    Both parts may be float64 scalars or float64 arrays of one shape. Every
    operation in this module applies the same IEEE operations in both cases,
    so a pixel evaluated alone and the same pixel evaluated inside a grid
    produce identical bits.
    """

    re: Any
    im: Any

    @classmethod
    def of(cls, value: complex) -> "ComplexValue":
        value = complex(value)
        return cls(np.float64(value.real), np.float64(value.imag))

    def __complex__(self) -> complex:
        return complex(float(self.re), float(self.im))


ONE = ComplexValue(np.float64(1.0), np.float64(0.0))


def add(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    return ComplexValue(a.re + b.re, a.im + b.im)


def sub(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    return ComplexValue(a.re - b.re, a.im - b.im)


def mul(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    return ComplexValue(a.re * b.re - a.im * b.im, a.re * b.im + a.im * b.re)


def div(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    """Divide ``a`` by ``b``.

    Dividing by exactly (0, 0) produces NaN/Inf components rather than an
    error. Callers evaluating under ``np.errstate`` get no warning either.
    """

    denom = b.re * b.re + b.im * b.im
    return ComplexValue(
        (a.re * b.re + a.im * b.im) / denom,
        (a.im * b.re - a.re * b.im) / denom,
    )


def magnitude(z: ComplexValue) -> Any:
    return np.sqrt(z.re * z.re + z.im * z.im)


def exp(z: ComplexValue) -> ComplexValue:
    """Complex exponential, ``e**re * (cos(im), sin(im))``."""

    modulus = np.exp(z.re)
    return ComplexValue(modulus * np.cos(z.im), modulus * np.sin(z.im))


def scale(z: ComplexValue, factor: float) -> ComplexValue:
    return ComplexValue(z.re * factor, z.im * factor)
