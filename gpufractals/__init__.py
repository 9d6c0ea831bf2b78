"""Public API for fractal rendering utilities."""

from .complex_ops import ComplexValue
from .colormap import DEFAULT_PALETTE, colormap, grayscale, palette_color, palette_from_matplotlib
from .export import ScreenshotSequence, to_rgb8, write_png
from .iteration import FractalKind, julia_constant, julia_outcome, mandelbrot_outcome, newton_outcome
from .params import FractalParams
from .renderer import RenderResult, compute_outcomes, render, render_frame
from .roots import MAX_ROOTS, default_cubic_roots, random_roots, roots_of_unity
from .viewport import Viewport

__all__ = [
    "ComplexValue",
    "DEFAULT_PALETTE",
    "FractalKind",
    "FractalParams",
    "MAX_ROOTS",
    "RenderResult",
    "ScreenshotSequence",
    "Viewport",
    "colormap",
    "compute_outcomes",
    "default_cubic_roots",
    "grayscale",
    "julia_constant",
    "julia_outcome",
    "mandelbrot_outcome",
    "newton_outcome",
    "palette_color",
    "palette_from_matplotlib",
    "random_roots",
    "render",
    "render_frame",
    "roots_of_unity",
    "to_rgb8",
    "write_png",
]
