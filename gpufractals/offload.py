"""TensorFlow kernels for offloaded fractal evaluation."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import tensorflow as tf

from .backends import sample_grid
from .complex_ops import ComplexValue, add, mul, sub
from .iteration import ESCAPE_RADIUS, FractalKind, newton_step
from .params import FractalParams
from .viewport import Viewport


def _select_device() -> str:
    # Place work on the first visible GPU when there is one, otherwise the CPU.
    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError:
        # Memory growth can only be set before the GPUs are initialized.
        pass
    return '/GPU:0'


DEVICE = _select_device()


def _magnitude(z: ComplexValue) -> tf.Tensor:
    return tf.sqrt(z.re * z.re + z.im * z.im)


@tf.function
def _escape_run(zr: tf.Tensor, zi: tf.Tensor, cr: tf.Tensor, ci: tf.Tensor, iterations: tf.Tensor) -> tf.Tensor:
    """Iterate ``z <- z**2 + c`` with a TensorFlow while loop, freezing escaped points."""

    iterations = tf.cast(iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    outcomes = tf.zeros_like(zr, dtype=tf.int64)
    active = tf.ones_like(zr, dtype=tf.bool)
    c = ComplexValue(cr, ci)

    def cond(i, zr, zi, outcomes, active):
        return tf.logical_and(tf.less(i, iterations), tf.reduce_any(active))

    def body(i, zr, zi, outcomes, active):
        z = ComplexValue(zr, zi)
        stepped = add(mul(z, z), c)
        zr = tf.where(active, stepped.re, zr)
        zi = tf.where(active, stepped.im, zi)
        horizon = tf.cast(ESCAPE_RADIUS, zr.dtype)
        escaped = tf.logical_and(active, _magnitude(stepped) > horizon)
        remaining = tf.fill(tf.shape(outcomes), tf.cast(iterations - i, tf.int64))
        outcomes = tf.where(escaped, remaining, outcomes)
        active = tf.logical_and(active, tf.logical_not(escaped))
        return i + 1, zr, zi, outcomes, active

    _, _, _, outcomes, _ = tf.while_loop(cond, body, (i, zr, zi, outcomes, active))
    return outcomes


def _newton_kernel(roots: Sequence[ComplexValue]):
    """Build a traced Newton kernel with ``roots`` baked in as constants."""

    @tf.function
    def run(zr: tf.Tensor, zi: tf.Tensor, iterations: tf.Tensor) -> tf.Tensor:
        iterations = tf.cast(iterations, tf.int32)
        i = tf.constant(0, dtype=tf.int32)

        def cond(i, zr, zi):
            return tf.less(i, iterations)

        def body(i, zr, zi):
            z = newton_step(ComplexValue(zr, zi), roots)
            return i + 1, z.re, z.im

        _, zr, zi = tf.while_loop(cond, body, (i, zr, zi))
        z = ComplexValue(zr, zi)

        best = _magnitude(sub(z, roots[0]))
        index = tf.zeros_like(zr, dtype=tf.int64)
        for k in range(1, len(roots)):
            distance = _magnitude(sub(z, roots[k]))
            closer = tf.less(distance, best)
            best = tf.where(closer, distance, best)
            index = tf.where(closer, tf.fill(tf.shape(index), tf.constant(k, dtype=tf.int64)), index)
        return index

    return run


def evaluate_offloaded(
    params: FractalParams,
    viewport: Viewport,
    width: int,
    height: int,
    *,
    device: Optional[str] = None,
) -> np.ndarray:
    """Evaluate the outcome grid with TensorFlow on ``device`` (GPU when available)."""

    samples = sample_grid(viewport, width, height)
    iterations = tf.constant(params.iterations, dtype=tf.int32)

    with tf.device(device if device is not None else DEVICE):
        zr = tf.convert_to_tensor(samples.re, dtype=tf.float64)
        zi = tf.convert_to_tensor(samples.im, dtype=tf.float64)

        if params.kind is FractalKind.NEWTON:
            outcomes = _newton_kernel(params.roots)(zr, zi, iterations)
        else:
            if params.kind is FractalKind.MANDELBROT:
                cr, ci = zr, zi
            else:
                c = params.julia_c()
                cr = tf.constant(float(c.re), dtype=tf.float64)
                ci = tf.constant(float(c.im), dtype=tf.float64)
            outcomes = _escape_run(zr, zi, cr, ci, iterations)

    return outcomes.numpy().astype(np.int64)
