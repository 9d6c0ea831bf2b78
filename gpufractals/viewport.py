"""Mapping between normalized image coordinates and the complex plane."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .complex_ops import ComplexValue


@dataclass(frozen=True)
class Viewport:
    """Rectangular region of the complex plane mapped onto an image."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        if not self.x_max > self.x_min:
            raise ValueError(f"Viewport needs x_max > x_min, got [{self.x_min}, {self.x_max}].")
        if not self.y_max > self.y_min:
            raise ValueError(f"Viewport needs y_max > y_min, got [{self.y_min}, {self.y_max}].")

    @classmethod
    def centered(cls, x_center: float, y_center: float, x_width: float, y_width: float) -> "Viewport":
        x_center = np.float64(x_center)
        y_center = np.float64(y_center)
        half_x = np.float64(x_width) / 2.0
        half_y = np.float64(y_width) / 2.0
        return cls(
            x_min=float(x_center - half_x),
            x_max=float(x_center + half_x),
            y_min=float(y_center - half_y),
            y_max=float(y_center + half_y),
        )

    @property
    def x_width(self) -> float:
        return float(np.float64(self.x_max) - np.float64(self.x_min))

    @property
    def y_width(self) -> float:
        return float(np.float64(self.y_max) - np.float64(self.y_min))

    def sample(self, u: Any, v: Any) -> ComplexValue:
        """Map normalized coordinates ``(u, v)`` to a point of the plane.

        ``u = 0`` lands on ``x_min`` and ``u = 1`` on ``x_max`` exactly (likewise
        for ``v``). Values outside ``[0, 1]`` extrapolate linearly. ``u`` and
        ``v`` may be scalars or arrays.
        """

        u = np.asarray(u, dtype=np.float64)[()]
        v = np.asarray(v, dtype=np.float64)[()]
        x = (1.0 - u) * np.float64(self.x_min) + u * np.float64(self.x_max)
        y = (1.0 - v) * np.float64(self.y_min) + v * np.float64(self.y_max)
        return ComplexValue(x, y)


def pixel_centers(count: int) -> np.ndarray:
    """Normalized coordinates of the centers of ``count`` pixels along one axis."""

    return (np.arange(count, dtype=np.float64) + 0.5) / np.float64(count)
