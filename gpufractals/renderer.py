"""Rendering of fractal frames into RGBA buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .backends import get_backend
from .colormap import normalize_outcome, palette_color, grayscale as grayscale_colors
from .params import FractalParams
from .viewport import Viewport


@dataclass(frozen=True)
class RenderResult:
    """Container for the numerical results of a fractal render.

    ``colors`` has shape ``(height, width, 4)``; row 0 holds the samples
    nearest ``viewport.y_min``. ``outcomes`` are the raw iteration outcomes
    and ``normalized`` their values scaled to ``[0, 1]``.
    """

    colors: np.ndarray
    outcomes: np.ndarray
    normalized: np.ndarray
    viewport: Viewport


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive, got {width}x{height}.")


def compute_outcomes(
    params: FractalParams,
    viewport: Viewport,
    width: int,
    height: int,
    *,
    backend: str = "vectorized",
) -> np.ndarray:
    """Evaluate the integer outcome of every pixel.

    Pixel ``(px, py)`` is sampled at its center, ``u = (px + 0.5) / width``
    and ``v = (py + 0.5) / height``.
    """

    _check_size(width, height)
    return get_backend(backend)(params, viewport, width, height)


def render_frame(
    params: FractalParams,
    viewport: Viewport,
    width: int,
    height: int,
    *,
    grayscale: bool = False,
    palette: Optional[np.ndarray] = None,
    backend: str = "vectorized",
    out: Optional[np.ndarray] = None,
) -> RenderResult:
    """Render a frame and keep the intermediate outcome arrays.

    Newton outcomes are normalized by the number of roots, escape-time
    outcomes by the iteration budget. When ``out`` is given it must have
    shape ``(height, width, 4)``; it is overwritten completely and returned
    as ``colors``.
    """

    outcomes = compute_outcomes(params, viewport, width, height, backend=backend)
    normalized = normalize_outcome(outcomes, params.total_steps)
    colors = grayscale_colors(normalized) if grayscale else palette_color(normalized, palette)

    if out is not None:
        if out.shape != (height, width, 4):
            raise ValueError(f"Output buffer must have shape {(height, width, 4)}, got {out.shape}.")
        out[...] = colors
        colors = out

    return RenderResult(colors=colors, outcomes=outcomes, normalized=normalized, viewport=viewport)


def render(
    width: int,
    height: int,
    params: FractalParams,
    viewport: Viewport,
    *,
    grayscale: bool = False,
    palette: Optional[np.ndarray] = None,
    backend: str = "vectorized",
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Render ``params`` over ``viewport`` into a ``(height, width, 4)`` RGBA buffer."""

    result = render_frame(
        params,
        viewport,
        width,
        height,
        grayscale=grayscale,
        palette=palette,
        backend=backend,
        out=out,
    )
    return result.colors
