"""
test_controller.py
"""
import numpy as np
import pytest

from brot.mandelbrot.controller import compute_iterations, iterate_columns, render
from brot.ui.colouring import BROT_COLOUR, make_hsl_colouring
from brot.utils.mandelbrot_utils import make_config

EXPECTED_4X4 = [
    [1, 1, 1, 1],
    [1, 3, 10, 2],
    [1, 10, 10, 2],
    [1, 3, 10, 2],
]


def _config(**kwargs):
    values = dict(
        image_width=4,
        image_height=4,
        precision=53,
        center="(0, 0)",
        scale="1.0",
        max_iterations=10,
    )
    values.update(kwargs)
    return make_config(**values)


def _zoomed_config(**kwargs):
    values = dict(
        image_width=9,
        image_height=7,
        precision=80,
        center="(-0.235125, 0.827215)",
        scale="4.0e-3",
        max_iterations=60,
    )
    values.update(kwargs)
    return make_config(**values)


def test_end_to_end_iterations():
    grid = compute_iterations(_config(), use_multiprocessing=False, workers=2)
    assert grid.shape == (4, 4)
    assert grid.tolist() == EXPECTED_4X4


def test_every_column_produced_once():
    config = _zoomed_config()
    columns = [px for px, _ in iterate_columns(config, use_multiprocessing=False, workers=3)]
    assert sorted(columns) == list(range(config.image_width))


def test_progress_reaches_pixel_count():
    config = _zoomed_config()
    done = []
    compute_iterations(config, use_multiprocessing=False, progress=done.append)
    assert len(done) == config.image_width
    assert sum(done) == config.image_width * config.image_height


@pytest.mark.parametrize("workers", [2, 4, 8])
def test_thread_count_does_not_change_result(workers):
    config = _zoomed_config()
    serial = compute_iterations(config, use_multiprocessing=False, workers=1)
    parallel = compute_iterations(config, use_multiprocessing=False, workers=workers)
    np.testing.assert_array_equal(serial, parallel)


def test_processes_match_threads():
    config = _zoomed_config()
    threaded = render(config, use_multiprocessing=False, workers=1)
    processes = render(config, use_multiprocessing=True, workers=2)
    np.testing.assert_array_equal(threaded, processes)


def test_render_colours_and_interior():
    config = _config()
    colour_of = make_hsl_colouring(config.max_iterations)
    pixels = render(config, colour_of, use_multiprocessing=False)

    assert pixels.shape == (4, 4, 3)
    assert pixels.dtype == np.uint8
    for py, row in enumerate(EXPECTED_4X4):
        for px, count in enumerate(row):
            expected = BROT_COLOUR if count == 10 else colour_of(count)
            assert tuple(pixels[py, px]) == expected


def test_interior_is_black_whatever_the_colouring():
    config = _config()
    pixels = render(config, lambda i: (255, 255, 255), use_multiprocessing=False)
    assert tuple(pixels[2, 2]) == BROT_COLOUR
    assert tuple(pixels[0, 0]) == (255, 255, 255)


def test_native_render_matches_precise_render():
    precise = compute_iterations(_config(), use_multiprocessing=False)
    native = compute_iterations(_config(native=True))
    np.testing.assert_array_equal(precise, native)


def test_every_cell_written():
    config = _zoomed_config(max_iterations=5)
    pixels = render(config, lambda i: (1, 2, 3), use_multiprocessing=False, workers=4)
    grid = compute_iterations(config, use_multiprocessing=False, workers=4)
    interior = grid == config.max_iterations
    assert (pixels[~interior] == (1, 2, 3)).all()
    assert (pixels[interior] == BROT_COLOUR).all()
