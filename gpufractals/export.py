"""Writing rendered buffers to image files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import PIL.Image


def to_rgb8(colors: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Convert an RGBA float buffer to an 8-bit RGB image.

    Channels are scaled by 255 and truncated, and rows are flipped so that
    ``y_max`` ends up on the top row of the image. ``out``, if given, is a
    caller-owned ``(height, width, 3)`` uint8 buffer that is reused.
    """

    height, width = colors.shape[:2]
    if out is None:
        out = np.empty((height, width, 3), dtype=np.uint8)
    elif out.shape != (height, width, 3) or out.dtype != np.uint8:
        raise ValueError(f"Export buffer must be uint8 with shape {(height, width, 3)}.")
    scaled = np.clip(colors[::-1, :, :3], 0.0, 1.0) * 255.0
    np.copyto(out, scaled.astype(np.uint8))
    return out


def write_png(colors: np.ndarray, path: Path | str, buffer: Optional[np.ndarray] = None) -> Path:
    """Write ``colors`` as a PNG file at ``path``."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    image = PIL.Image.fromarray(to_rgb8(colors, buffer))
    image.save(str(path), format="PNG")
    return path


class ScreenshotSequence:
    """Numbered screenshots (``Screenshot000.png``, ``Screenshot001.png``, ...) in one directory.

    The frame counter and the conversion buffer live on the instance, so two
    sequences never interfere with each other.
    """

    def __init__(self, directory: Path | str = ".", prefix: str = "Screenshot", digits: int = 3) -> None:
        self.directory = Path(directory)
        self.prefix = prefix
        self.digits = digits
        self.next_index = 0
        self._buffer: Optional[np.ndarray] = None

    def path_for(self, index: int) -> Path:
        return self.directory / f"{self.prefix}{index:0{self.digits}d}.png"

    def save(self, colors: np.ndarray) -> Path:
        shape = colors.shape[:2] + (3,)
        if self._buffer is None or self._buffer.shape != shape:
            self._buffer = np.empty(shape, dtype=np.uint8)
        path = write_png(colors, self.path_for(self.next_index), self._buffer)
        self.next_index += 1
        return path
