"""Parameters shared by every pixel of one render."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .complex_ops import ComplexValue
from .iteration import FractalKind, julia_constant
from .roots import as_root_set

DEFAULT_ITERATIONS = 40
DEFAULT_JULIA_ANGLE = float(np.pi / 2.0)


@dataclass(frozen=True)
class FractalParams:
    """Everything a render needs besides the viewport and the image size.

    ``roots`` must be given for Newton fractals and only for them.
    ``julia_angle`` is read only by Julia fractals.
    """

    kind: FractalKind
    iterations: int = DEFAULT_ITERATIONS
    julia_angle: float = DEFAULT_JULIA_ANGLE
    roots: Optional[tuple[ComplexValue, ...]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, FractalKind):
            object.__setattr__(self, "kind", FractalKind.parse(str(self.kind)))
        if int(self.iterations) < 0:
            raise ValueError("The iteration budget cannot be negative.")
        object.__setattr__(self, "iterations", int(self.iterations))
        if self.kind is FractalKind.NEWTON:
            if self.roots is None:
                raise ValueError("Newton fractals need a root set.")
            object.__setattr__(self, "roots", as_root_set(self.roots))
        elif self.roots is not None:
            raise ValueError(f"{self.kind.name.capitalize()} fractals do not take roots.")

    @property
    def total_steps(self) -> int:
        """Normalization denominator: root count for Newton, budget otherwise."""

        if self.kind is FractalKind.NEWTON:
            return len(self.roots)
        return self.iterations

    def julia_c(self) -> ComplexValue:
        return julia_constant(self.julia_angle)

    def adjust_iterations(self, delta: int) -> "FractalParams":
        return replace(self, iterations=max(0, self.iterations + int(delta)))
