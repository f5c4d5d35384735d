import numpy as np


BROT_COLOUR = (0, 0, 0)

# channel order of (chroma, second largest component, 0) for each 60 degree hue sector
_HUE_SECTOR_ORDER = np.array(
    [
        [0, 1, 2],
        [1, 0, 2],
        [2, 0, 1],
        [2, 1, 0],
        [1, 2, 0],
        [0, 2, 1],
    ]
)


def hsl_to_rgb(hue, saturation, lightness):
    hue = np.atleast_1d(np.asarray(hue, dtype=np.float64)) % 360
    chroma = (1 - abs(2 * lightness - 1)) * saturation
    sector_pos = hue / 60
    second = chroma * (1 - np.abs(sector_pos % 2 - 1))
    components = np.column_stack(
        [np.full_like(hue, chroma), second, np.zeros_like(hue)]
    )

    sectors = sector_pos.astype(np.int32) % 6
    rgb = np.take_along_axis(components, _HUE_SECTOR_ORDER[sectors], axis=1)
    rgb += lightness - chroma / 2
    return np.round(255 * rgb).astype(np.uint8)


def generate_hsl_palette(max_iterations, saturation=0.7, lightness=0.5, hue_step=1.5):
    hues = hue_step * np.arange(max_iterations + 1)
    palette = hsl_to_rgb(hues, saturation, lightness)
    palette[max_iterations] = BROT_COLOUR
    return palette


def make_hsl_colouring(max_iterations, **palette_kwargs):
    palette = generate_hsl_palette(max_iterations, **palette_kwargs)

    def colour_of(iterations):
        return tuple(int(channel) for channel in palette[iterations])

    return colour_of
