import numpy as np
from gmpy2 import mpc, norm
from numba import njit, prange

from brot.utils.constants import BREAKOUT_R2
from brot.utils.mandelbrot_utils import MandelbrotConfig


def get_point_by_offset(config: MandelbrotConfig, x: int, y: int) -> mpc:
    """
    Map an offset from the image center to the complex plane.

    Must be called inside the config's precision context, the result is rounded to it.
    """
    return config.center + x * config.horizontal_step + y * config.vertical_step


def get_point_by_coords(config: MandelbrotConfig, px: int, py: int) -> mpc:
    # column W // 2 and row H // 2 sit on the center, offsets cover [-W // 2, W - W // 2)
    return get_point_by_offset(config, px - config.half_width, py - config.half_height)


def iterations(c: mpc, max_iterations: int) -> int:
    z = mpc(0)

    i = 0
    while i < max_iterations:
        if norm(z) >= BREAKOUT_R2:
            break

        z = z * z + c
        i += 1

    return i


def iterate_column(config: MandelbrotConfig, px: int):
    """Escape times for every row of one image column, top to bottom."""
    column = np.empty(config.image_height, dtype=np.int32)
    with config.precision_context():
        for py in range(config.image_height):
            c = get_point_by_coords(config, px, py)
            column[py] = iterations(c, config.max_iterations)
    return column


def mandelbrot(config: MandelbrotConfig):
    return _mandelbrot(
        float(config.center.real),
        float(config.center.imag),
        float(config.scale),
        config.image_height,
        config.image_width,
        config.max_iterations,
    )


@njit(parallel=True, nogil=True)
def _mandelbrot(center_r, center_i, step, height, width, max_iter):
    iterations_grid = np.zeros((height, width), dtype=np.int32)
    half_width = width // 2
    half_height = height // 2

    # each column is only ever touched by the thread that owns it
    for px in prange(width):
        c_real = center_r + (px - half_width) * step
        for py in range(height):
            c_imag = center_i + (py - half_height) * step
            z_real = z_imag = 0.0

            i = 0
            while i < max_iter and z_real * z_real + z_imag * z_imag < BREAKOUT_R2:
                temp = z_real
                z_real = z_real * z_real - z_imag * z_imag + c_real
                z_imag = 2 * temp * z_imag + c_imag
                i += 1

            iterations_grid[py, px] = i

    return iterations_grid
