import logging
import sys
from dataclasses import dataclass

from gmpy2 import mpc, mpfr, context, get_max_precision, is_finite

from brot.utils.constants import (
    DEFAULT_CENTER,
    DEFAULT_HEIGHT,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_PRECISION,
    DEFAULT_SCALE,
    DEFAULT_WIDTH,
    MIN_PRECISION,
    NATIVE_PRECISION,
)

logging.basicConfig(format="%(levelname)s: %(message)s")
my_logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class MandelbrotConfig:
    image_width: int
    image_height: int
    precision: int
    center: mpc
    scale: mpfr
    max_iterations: int
    native: bool = False

    @property
    def half_width(self):
        return self.image_width // 2

    @property
    def half_height(self):
        return self.image_height // 2

    @property
    def horizontal_step(self) -> mpc:
        return mpc(self.scale, 0)

    @property
    def vertical_step(self) -> mpc:
        # the horizontal step rotated by 90 degrees
        return self.horizontal_step * mpc(0, 1)

    def precision_context(self):
        return precision_context(self.precision)


def make_config(
    image_width: int = DEFAULT_WIDTH,
    image_height: int = DEFAULT_HEIGHT,
    precision: int = DEFAULT_PRECISION,
    center=DEFAULT_CENTER,
    scale=DEFAULT_SCALE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    native: bool = False,
) -> MandelbrotConfig:
    """
    Validate the user supplied values and build an immutable render configuration.

    `center` and `scale` may be literals in string form or numbers, either way they are
    rounded to `precision` bits. Everything is checked here so that a render never starts
    from a bad configuration.
    """
    _require_positive("image width", image_width)
    _require_positive("image height", image_height)
    _require_positive("max iterations", max_iterations)
    _require_positive("precision", precision)
    if not MIN_PRECISION <= precision <= get_max_precision():
        raise ConfigurationError(
            f"precision must be between {MIN_PRECISION} and {get_max_precision()} bits, "
            f"got {precision}"
        )
    if native and precision != NATIVE_PRECISION:
        raise ConfigurationError(
            f"the native float path always computes with {NATIVE_PRECISION} bits of precision, "
            f"got {precision}"
        )

    with precision_context(precision):
        center = parse_complex(center) if isinstance(center, str) else mpc(center)
        scale = parse_real(scale) if isinstance(scale, str) else mpfr(scale)

    if not (is_finite(center.real) and is_finite(center.imag)):
        raise ConfigurationError(f"center must be finite, got {center}")
    if not is_finite(scale) or scale <= 0:
        raise ConfigurationError(f"scale must be a positive finite number, got {scale}")
    if native:
        _require_double_range(center, scale)

    return MandelbrotConfig(
        image_width=image_width,
        image_height=image_height,
        precision=precision,
        center=center,
        scale=scale,
        max_iterations=max_iterations,
        native=native,
    )


def _require_double_range(center: mpc, scale: mpfr):
    if float(scale) <= 0:
        raise ConfigurationError(f"scale {scale} underflows a 64 bit float, drop the fast path")
    if max(abs(center.real), abs(center.imag)) > sys.float_info.max:
        raise ConfigurationError(f"center {center} overflows a 64 bit float, drop the fast path")


def _require_positive(name, value):
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")


def parse_complex(text: str) -> mpc:
    """
    Accepts '(re, im)', '(re im)', 're im', a lone real and anything gmpy2's mpc understands
    such as '1.5+2j'. The result has the precision of the active context.
    """
    stripped = text.strip()
    if stripped.startswith("(") and stripped.endswith(")"):
        stripped = stripped[1:-1]
    parts = stripped.replace(",", " ").split()

    try:
        if len(parts) == 2:
            return mpc(mpfr(parts[0]), mpfr(parts[1]))
        if len(parts) == 1:
            return mpc(parts[0])
    except ValueError as e:
        raise ConfigurationError(f"center was not a valid complex number: {text!r}") from e
    raise ConfigurationError(f"center was not a valid complex number: {text!r}")


def parse_real(text: str) -> mpfr:
    try:
        return mpfr(text.strip())
    except ValueError as e:
        raise ConfigurationError(f"scale was not a valid real number: {text!r}") from e


def precision_context(precision: int):
    return context(precision=precision)
