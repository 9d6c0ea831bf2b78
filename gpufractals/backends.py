"""Execution strategies that evaluate iteration outcomes over a pixel grid.

Every backend returns an integer array of shape ``(height, width)``. The
NumPy-based backends agree bit for bit; they differ only in how the work is
scheduled.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

import numpy as np

from .complex_ops import ComplexValue
from .iteration import FractalKind, escape_outcome, escape_outcomes, newton_outcome
from .params import FractalParams
from .viewport import Viewport, pixel_centers

Backend = Callable[[FractalParams, Viewport, int, int], np.ndarray]


def sample_grid(viewport: Viewport, width: int, height: int, rows: slice = slice(None)) -> ComplexValue:
    """Complex samples at the pixel centers of ``rows``; row 0 sits at ``y_min``."""

    u = pixel_centers(width)[None, :]
    v = pixel_centers(height)[rows, None]
    sample = viewport.sample(u, v)
    x, y = np.broadcast_arrays(sample.re, sample.im)
    return ComplexValue(np.array(x, copy=True), np.array(y, copy=True))


def evaluate_samples(params: FractalParams, samples: ComplexValue) -> np.ndarray:
    """Outcomes for an array of samples."""

    with np.errstate(all="ignore"):
        if params.kind is FractalKind.NEWTON:
            outcomes = newton_outcome(samples, params.roots, params.iterations)
            return np.asarray(outcomes, dtype=np.int64)
        if params.kind is FractalKind.MANDELBROT:
            return escape_outcomes(samples, samples, params.iterations)
        return escape_outcomes(samples, params.julia_c(), params.iterations)


def evaluate_sample(params: FractalParams, sample: ComplexValue) -> int:
    """Outcome for a single sample, with early exit on escape."""

    with np.errstate(all="ignore"):
        if params.kind is FractalKind.NEWTON:
            return int(newton_outcome(sample, params.roots, params.iterations))
        if params.kind is FractalKind.MANDELBROT:
            return escape_outcome(sample, sample, params.iterations)
        return escape_outcome(sample, params.julia_c(), params.iterations)


def serial_backend(params: FractalParams, viewport: Viewport, width: int, height: int) -> np.ndarray:
    us = pixel_centers(width)
    vs = pixel_centers(height)
    outcomes = np.zeros((height, width), dtype=np.int64)
    for row in range(height):
        for col in range(width):
            outcomes[row, col] = evaluate_sample(params, viewport.sample(us[col], vs[row]))
    return outcomes


def vectorized_backend(params: FractalParams, viewport: Viewport, width: int, height: int) -> np.ndarray:
    return evaluate_samples(params, sample_grid(viewport, width, height))


def threaded_backend(
    params: FractalParams,
    viewport: Viewport,
    width: int,
    height: int,
    *,
    workers: Optional[int] = None,
) -> np.ndarray:
    """Split the grid into row bands and evaluate them on a thread pool."""

    workers = workers or min(32, os.cpu_count() or 1)
    outcomes = np.zeros((height, width), dtype=np.int64)
    band = max(1, -(-height // (workers * 4)))
    bands = [slice(start, min(start + band, height)) for start in range(0, height, band)]

    def run(rows: slice) -> None:
        outcomes[rows] = evaluate_samples(params, sample_grid(viewport, width, height, rows))

    with ThreadPoolExecutor(max_workers=workers) as pool:
        for future in [pool.submit(run, rows) for rows in bands]:
            future.result()
    return outcomes


def tensorflow_backend(params: FractalParams, viewport: Viewport, width: int, height: int) -> np.ndarray:
    from .offload import evaluate_offloaded

    return evaluate_offloaded(params, viewport, width, height)


BACKENDS: dict[str, Backend] = {
    "serial": serial_backend,
    "vectorized": vectorized_backend,
    "threaded": threaded_backend,
    "tensorflow": tensorflow_backend,
}


def get_backend(name: str) -> Backend:
    try:
        return BACKENDS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown backend '{name}'. Valid choices: {', '.join(sorted(BACKENDS))}.") from None
