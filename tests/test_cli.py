import numpy as np
import PIL.Image
import pytest

from gpufractals import cli


def _run(*args):
    return cli.main([str(arg) for arg in args])


def _pixels(path):
    with PIL.Image.open(path) as image:
        return np.asarray(image)


def test_mandelbrot_image(tmp_path):
    output = tmp_path / "mandelbrot.png"
    assert _run("Mandelbrot", "--size", 16, "--iterations", 10, "--output", output) == 0
    assert _pixels(output).shape == (16, 16, 3)


def test_output_suffix_added(tmp_path):
    assert _run("julia", "0.3", "--size", 8, "--output", tmp_path / "julia") == 0
    assert (tmp_path / "julia.png").exists()


def test_newton_with_root_count_is_reproducible(tmp_path):
    first = tmp_path / "a.png"
    second = tmp_path / "b.png"
    _run("NEWTON", "5", "--size", 12, "--seed", 4, "--output", first)
    _run("NEWTON", "5", "--size", 12, "--seed", 4, "--output", second)
    np.testing.assert_array_equal(_pixels(first), _pixels(second))


def test_backend_and_colormap_options(tmp_path):
    output = tmp_path / "gray.png"
    _run("Newton", "--size", 10, "--backend", "threaded", "--grayscale", "--output", output)
    pixels = _pixels(output)
    np.testing.assert_array_equal(pixels[..., 0], pixels[..., 1])
    _run("Mandelbrot", "--size", 10, "--colormap", "viridis", "--output", tmp_path / "viridis.png")


def test_screenshot_dir_numbers_files(tmp_path):
    _run("Mandelbrot", "--size", 8, "--screenshot-dir", tmp_path)
    _run("Mandelbrot", "--size", 8, "--screenshot-dir", tmp_path)
    assert sorted(path.name for path in tmp_path.iterdir()) == ["Screenshot000.png", "Screenshot001.png"]


def test_verbose_logging(tmp_path, capsys):
    _run("Julia", "--size", 8, "-v", "--output", tmp_path / "j.png")
    out = capsys.readouterr().out
    assert "Rendering Julia" in out
    assert "Image saved to" in out


def test_too_many_roots_warns(tmp_path):
    with pytest.warns(UserWarning, match="recommended maximum"):
        _run("Newton", "101", "--size", 2, "--iterations", 1, "--output", tmp_path / "n.png")


@pytest.mark.parametrize(
    "args",
    [
        ["Sierpinski"],
        ["Newton", "0"],
        ["Newton", "three"],
        ["Julia", "nan"],
        ["Mandelbrot", "2"],
        ["Mandelbrot", "--iterations", "-1"],
        ["Mandelbrot", "--size", "0"],
        ["Mandelbrot", "--x-min", "2", "--x-max", "1"],
        ["Mandelbrot", "--output", "image.jpg"],
        ["Mandelbrot", "--output", "a.png", "--screenshot-dir", "shots"],
        ["Mandelbrot", "--colormap", "definitely-not-a-colormap"],
        ["Mandelbrot", "--backend", "quantum"],
    ],
)
def test_invalid_arguments_exit(args, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(args)
    assert excinfo.value.code == 2
