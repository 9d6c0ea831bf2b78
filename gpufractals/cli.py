"""Command-line front end: render one fractal frame to a PNG file."""

import math
import os
import sys
import warnings
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import numpy as np

from .backends import BACKENDS
from .colormap import palette_from_matplotlib
from .export import ScreenshotSequence, write_png
from .iteration import FractalKind
from .params import DEFAULT_ITERATIONS, DEFAULT_JULIA_ANGLE, FractalParams
from .renderer import render_frame
from .roots import MAX_ROOTS, default_cubic_roots, random_roots
from .viewport import Viewport

DEFAULT_BOUNDS = {
    FractalKind.NEWTON: (-1.0, 1.0, -1.0, 1.0),
    FractalKind.JULIA: (-1.0, 1.0, -1.0, 1.0),
    FractalKind.MANDELBROT: (-2.0, 1.0, -1.5, 1.5),
}


@dataclass
class OutputConfig:
    image_path: Path | None
    screenshot_dir: Path | None


def build_parser():
    parser = ArgumentParser(
        description="Render Newton, Mandelbrot or Julia fractals.",
        epilog="For Newton's fractal the number of roots can be given; without it the polynomial "
               "z^3 - 1 is used. For Julia's set the rotation angle can be given; pi/2 is assumed otherwise.",
    )

    parser.add_argument('fractal_type', metavar='TYPE',
                        help='type of fractal to render: Newton, Mandelbrot or Julia')

    parser.add_argument('value', nargs='?', default=None, metavar='VALUE',
                        help='number of roots (Newton) or rotation angle in radians (Julia)')

    parser.add_argument('--iterations', type=int,
                        dest='iterations', help='iteration budget per pixel',
                        metavar='ITERATIONS', default=DEFAULT_ITERATIONS)

    parser.add_argument('--size', type=int,
                        dest='size', help='width and height of the square image in pixels',
                        metavar='SIZE', default=800)

    parser.add_argument('--x-min', type=float, dest='x_min', metavar='X_MIN', default=None,
                        help='left edge of the viewport in the complex plane')
    parser.add_argument('--x-max', type=float, dest='x_max', metavar='X_MAX', default=None,
                        help='right edge of the viewport in the complex plane')
    parser.add_argument('--y-min', type=float, dest='y_min', metavar='Y_MIN', default=None,
                        help='bottom edge of the viewport in the complex plane')
    parser.add_argument('--y-max', type=float, dest='y_max', metavar='Y_MAX', default=None,
                        help='top edge of the viewport in the complex plane')

    parser.add_argument('--colormap', type=str,
                        dest='colormap', help='matplotlib colormap sampled at 8 stops instead of the built-in palette',
                        metavar='COLORMAP', default=None)

    parser.add_argument('--grayscale', action='store_true',
                        help='use the normalized outcome directly as gray intensity')

    parser.add_argument('--backend', choices=sorted(BACKENDS), default='vectorized',
                        help='execution strategy used to evaluate the pixels')

    parser.add_argument('--seed', type=int, default=0,
                        help='seed for the random Newton roots')

    parser.add_argument('--output', dest='output', type=str,
                        help='PNG file to write. Defaults to fractal.png unless --screenshot-dir is given.')

    parser.add_argument('--screenshot-dir', dest='screenshot_dir', type=str,
                        help='directory in which to write a numbered ScreenshotNNN.png')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    if opt.output and opt.screenshot_dir:
        parser.error("--output and --screenshot-dir cannot be combined.")

    if opt.screenshot_dir:
        return OutputConfig(image_path=None, screenshot_dir=Path(opt.screenshot_dir).expanduser().resolve())

    output_path = Path(opt.output or "fractal.png").expanduser()
    if output_path.suffix:
        if output_path.suffix.lower() != ".png":
            parser.error("--output must end with .png.")
    else:
        output_path = output_path.with_suffix(".png")
    return OutputConfig(image_path=output_path.resolve(), screenshot_dir=None)


def resolve_viewport(opt, kind: FractalKind, parser: ArgumentParser) -> Viewport:
    defaults = DEFAULT_BOUNDS[kind]
    bounds = [
        default if value is None else value
        for value, default in zip((opt.x_min, opt.x_max, opt.y_min, opt.y_max), defaults)
    ]
    try:
        return Viewport(*bounds)
    except ValueError as exc:
        parser.error(str(exc))


def resolve_params(opt, kind: FractalKind, viewport: Viewport, parser: ArgumentParser) -> FractalParams:
    if opt.iterations < 0:
        parser.error("--iterations cannot be negative.")

    if kind is FractalKind.NEWTON:
        if opt.value is None:
            roots = default_cubic_roots()
        else:
            try:
                count = int(opt.value)
            except ValueError:
                parser.error(f"Number of roots must be an integer, got '{opt.value}'.")
            if count < 1:
                parser.error("Number of roots must be greater than zero.")
            if count > MAX_ROOTS:
                warnings.warn(
                    f"{count} roots exceeds the recommended maximum of {MAX_ROOTS}; rendering will be slow.",
                    stacklevel=2,
                )
            roots = random_roots(count, viewport, seed=opt.seed)
        return FractalParams(kind=kind, iterations=opt.iterations, roots=roots)

    if kind is FractalKind.JULIA:
        angle = DEFAULT_JULIA_ANGLE
        if opt.value is not None:
            try:
                angle = float(opt.value)
            except ValueError:
                parser.error(f"Julia angle must be a number, got '{opt.value}'.")
            if not math.isfinite(angle):
                parser.error("Julia angle must be finite.")
        return FractalParams(kind=kind, iterations=opt.iterations, julia_angle=angle)

    if opt.value is not None:
        parser.error("Mandelbrot's set takes no options.")
    return FractalParams(kind=kind, iterations=opt.iterations)


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    try:
        kind = FractalKind.parse(opt.fractal_type)
    except ValueError as exc:
        parser.error(str(exc))

    if opt.size <= 0:
        parser.error("--size must be positive.")

    output_config = resolve_output_config(opt, parser)
    viewport = resolve_viewport(opt, kind, parser)
    params = resolve_params(opt, kind, viewport, parser)

    palette = None
    if opt.colormap is not None:
        try:
            palette = palette_from_matplotlib(opt.colormap)
        except (KeyError, ValueError):
            parser.error(f"Unknown matplotlib colormap '{opt.colormap}'.")

    log("Rendering %s (%dx%d, %d iterations) with the %s backend" % (
        kind.name.capitalize(), opt.size, opt.size, params.iterations, opt.backend))
    log("Viewport: x in [%.6g, %.6g], y in [%.6g, %.6g]" % (
        viewport.x_min, viewport.x_max, viewport.y_min, viewport.y_max))
    if params.roots is not None:
        log("Roots: %s" % ", ".join("%.5g%+.5gi" % (root.re, root.im) for root in params.roots))

    if opt.backend == "tensorflow" and _suppress_messages and not VERBOSE:
        import tensorflow as tf

        tf.get_logger().setLevel("ERROR")

    result = render_frame(
        params,
        viewport,
        opt.size,
        opt.size,
        grayscale=opt.grayscale,
        palette=palette,
        backend=opt.backend,
    )

    if output_config.screenshot_dir is not None:
        sequence = ScreenshotSequence(output_config.screenshot_dir)
        while sequence.path_for(sequence.next_index).exists():
            sequence.next_index += 1
        path = sequence.save(result.colors)
    else:
        path = write_png(result.colors, output_config.image_path)

    log("Distinct outcomes: %d" % np.unique(result.outcomes).size)
    print(f"Image saved to {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
