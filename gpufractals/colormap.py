"""Color mapping of normalized iteration outcomes."""

from __future__ import annotations

from typing import Any

import numpy as np

PALETTE_SIZE = 8

# Eight stops sampled from inferno; the red channel never decreases.
DEFAULT_PALETTE = np.array(
    [
        [0.001462, 0.000466, 0.013866],
        [0.122312, 0.047399, 0.281624],
        [0.329415, 0.059167, 0.421246],
        [0.522206, 0.125302, 0.425252],
        [0.712286, 0.212094, 0.347915],
        [0.878001, 0.346160, 0.213467],
        [0.975860, 0.556460, 0.040000],
        [0.988362, 0.998364, 0.644924],
    ],
    dtype=np.float64,
)
DEFAULT_PALETTE.setflags(write=False)


def palette_from_matplotlib(name: str) -> np.ndarray:
    """Sample the matplotlib colormap ``name`` at eight evenly spaced stops."""

    from matplotlib import colormaps

    cmap = colormaps[name]
    stops = np.linspace(0.0, 1.0, PALETTE_SIZE)
    palette = np.array(cmap(stops), dtype=np.float64)[:, :3]
    palette.setflags(write=False)
    return palette


def normalize_outcome(outcome: Any, total_steps: int) -> Any:
    """Scale an outcome to ``[0, 1]`` by ``total_steps``.

    A zero ``total_steps`` (an iteration budget of 0) normalizes to 0.
    """

    outcome = np.asarray(outcome, dtype=np.float64)
    if total_steps == 0:
        return np.zeros_like(outcome)[()]
    return (outcome / np.float64(total_steps))[()]


def palette_color(theta: Any, palette: np.ndarray | None = None) -> np.ndarray:
    """Map ``theta`` in ``[0, 1]`` to RGBA by linear interpolation over the palette.

    Stop ``i`` sits at ``i / 8``. Reads past the last stop are clamped, so
    ``theta`` of 1 (and anything between the last stop and 1) returns the last
    color. Scalars give an array of shape ``(4,)``; arrays gain a trailing
    axis of length 4.
    """

    if palette is None:
        palette = DEFAULT_PALETTE
    theta = np.asarray(theta, dtype=np.float64)
    position = theta * PALETTE_SIZE
    left = np.floor(position)
    right = np.ceil(position)
    fraction = position - left

    last = PALETTE_SIZE - 1
    left_color = palette[np.clip(left, 0, last).astype(np.intp)]
    right_color = palette[np.clip(right, 0, last).astype(np.intp)]

    blended = (1.0 - fraction)[..., None] * left_color + fraction[..., None] * right_color
    rgb = np.where((left == right)[..., None], left_color, blended)
    alpha = np.ones(theta.shape + (1,), dtype=np.float64)
    return np.concatenate((rgb, alpha), axis=-1)


def grayscale(theta: Any) -> np.ndarray:
    """Use ``theta`` directly as the gray intensity of an opaque pixel."""

    theta = np.asarray(theta, dtype=np.float64)
    return np.stack((theta, theta, theta, np.ones_like(theta)), axis=-1)


def colormap(outcome: Any, total_steps: int, palette: np.ndarray | None = None) -> np.ndarray:
    """Color an iteration outcome ``k`` out of ``total_steps``."""

    return palette_color(normalize_outcome(outcome, total_steps), palette)
