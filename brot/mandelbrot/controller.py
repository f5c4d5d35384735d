import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from functools import partial
from typing import Callable, Iterator, Optional, Tuple

import numpy as np

from brot.ui.colouring import BROT_COLOUR, make_hsl_colouring
from brot.utils.mandelbrot_utils import MandelbrotConfig, my_logger
from .mandelbrot import iterate_column, mandelbrot


def _make_executor(use_multiprocessing: bool, workers: Optional[int]):
    if use_multiprocessing:
        return ProcessPoolExecutor(max_workers=workers)
    return ThreadPoolExecutor(max_workers=workers)


def iterate_columns(
    config: MandelbrotConfig,
    use_multiprocessing: bool = True,
    workers: Optional[int] = None,
) -> Iterator[Tuple[int, np.ndarray]]:
    """
    Yield (column index, escape times) once for every column of the image.

    Columns are the unit of work, so no two workers ever produce values for the same cell.
    The generator only finishes once the executor has shut down.
    """
    if config.native:
        grid = mandelbrot(config)
        for px in range(config.image_width):
            yield px, grid[:, px]
        return

    my_logger.debug(
        f"dispatching {config.image_width} columns to a "
        f"{'process' if use_multiprocessing else 'thread'} pool at {config.precision} bits"
    )
    columns = range(config.image_width)
    with _make_executor(use_multiprocessing, workers) as executor:
        yield from zip(columns, executor.map(partial(iterate_column, config), columns))


def compute_iterations(
    config: MandelbrotConfig,
    use_multiprocessing: bool = True,
    workers: Optional[int] = None,
    progress: Optional[Callable[[int], None]] = None,
) -> np.ndarray:
    start = time.time()
    iterations_grid = np.zeros((config.image_height, config.image_width), dtype=np.int32)
    for px, column in iterate_columns(config, use_multiprocessing, workers):
        iterations_grid[:, px] = column
        if progress is not None:
            progress(len(column))

    my_logger.debug(f"computing iterations took {time.time() - start:.2f} seconds")
    return iterations_grid


def render(
    config: MandelbrotConfig,
    colour_of: Optional[Callable[[int], Tuple[int, int, int]]] = None,
    use_multiprocessing: bool = True,
    workers: Optional[int] = None,
    progress: Optional[Callable[[int], None]] = None,
) -> np.ndarray:
    """
    Render the configured view into an (height, width, 3) uint8 RGB raster.

    `colour_of` maps an escape time to an RGB triple, points that never escaped are always
    BROT_COLOUR. The raster is only returned after every column has been written.
    """
    if colour_of is None:
        colour_of = make_hsl_colouring(config.max_iterations)

    start = time.time()
    pixels = np.zeros((config.image_height, config.image_width, 3), dtype=np.uint8)
    for px, column in iterate_columns(config, use_multiprocessing, workers):
        pixels[:, px] = [
            BROT_COLOUR if i == config.max_iterations else colour_of(i) for i in column
        ]
        if progress is not None:
            progress(len(column))

    my_logger.debug(f"rendering took {time.time() - start:.2f} seconds")
    return pixels
