BREAKOUT_R2 = 4

# precision of an IEEE double mantissa, the most the numba path can represent
NATIVE_PRECISION = 53
MIN_PRECISION = 1

DEFAULT_WIDTH = 1000
DEFAULT_HEIGHT = 1000
DEFAULT_PRECISION = NATIVE_PRECISION
DEFAULT_CENTER = "(-0.235125, 0.827215)"
DEFAULT_SCALE = "4.0e-5"
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_OUTPUT = "mandelbrot.png"
