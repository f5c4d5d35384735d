import argparse
import sys

from PIL import Image
from tqdm import tqdm

from brot.mandelbrot.controller import render
from brot.utils.constants import (
    DEFAULT_CENTER,
    DEFAULT_HEIGHT,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_OUTPUT,
    DEFAULT_PRECISION,
    DEFAULT_SCALE,
    DEFAULT_WIDTH,
)
from brot.utils.mandelbrot_utils import ConfigurationError, MandelbrotConfig, make_config, my_logger


def make_cli_args(config: MandelbrotConfig):
    args = (
        f'--center "({str(config.center.real)}, {str(config.center.imag)})" -s {str(config.scale)}'
        f" -p {config.precision} -n {config.max_iterations}"
        f" --height {config.image_height} --width {config.image_width}"
    )

    if config.native:
        args += " -f"

    return args


def make_parser():
    parser = argparse.ArgumentParser(description="Render an image of the Mandelbrot set")
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file of the image.",
        default=DEFAULT_OUTPUT,
    )
    parser.add_argument("-w", "--width", type=int, help="Width of the image.", default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, help="Height of the image.", default=DEFAULT_HEIGHT)
    parser.add_argument(
        "-p",
        "--prec",
        type=int,
        help="Precision in bits of the complex values used to calculate.",
        default=DEFAULT_PRECISION,
    )
    parser.add_argument(
        "-c",
        "--center",
        type=str,
        help="Complex number at the center of the image in '(<real>, <imag>)' format.",
        default=DEFAULT_CENTER,
    )
    parser.add_argument(
        "-s",
        "--scale",
        type=str,
        help="Distance along the real axis covered by one pixel.",
        default=DEFAULT_SCALE,
    )
    parser.add_argument(
        "-n",
        "--max-iter",
        type=int,
        help="The number of iterations done for each pixel.",
        default=DEFAULT_MAX_ITERATIONS,
    )
    parser.add_argument(
        "-nm",
        "--no-multiprocessing",
        action="store_false",
        dest="multiprocessing",
        help="Use threads instead of processes.",
    )
    parser.add_argument("-j", "--workers", type=int, help="Number of workers, defaults to the cpu count.")
    parser.add_argument(
        "-f",
        "--fast",
        action="store_true",
        help="Render with native 64 bit floats, limited to 53 bits of precision.",
    )
    parser.add_argument("-log", "--log-level", choices=["debug", "info", "warning"], default="info")
    return parser


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    my_logger.setLevel(args.log_level.upper())

    if args.workers is not None and args.workers <= 0:
        parser.error(f"workers must be a positive integer, got {args.workers}")

    try:
        config = make_config(
            image_width=args.width,
            image_height=args.height,
            precision=args.prec,
            center=args.center,
            scale=args.scale,
            max_iterations=args.max_iter,
            native=args.fast,
        )
    except ConfigurationError as e:
        parser.error(str(e))

    my_logger.debug(f"center {config.center} scale {config.scale} at {config.precision} bits")

    with tqdm(total=config.image_width * config.image_height, unit="px") as bar:
        pixels = render(
            config,
            use_multiprocessing=args.multiprocessing,
            workers=args.workers,
            progress=bar.update,
        )

    my_logger.info(f"saving image to {args.output}")
    try:
        Image.fromarray(pixels).save(args.output)
    except (OSError, ValueError) as e:
        my_logger.error(f"error writing to {args.output}: {e}")
        return 1

    my_logger.info(f"rerun with: {make_cli_args(config)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
