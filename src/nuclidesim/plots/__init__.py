"""NuclideSim plotting module for the half-life chart of nuclides."""

from nuclidesim.plots.palette import (
    PALETTE,
    color_for_abundance,
    color_for_half_life,
    half_life_bucket,
)

from nuclidesim.plots.halflife_map import (
    MAP_BIAS,
    MAP_MARGIN,
    HalfLifeMapBuilder,
    persist,
    plot_halflife_map,
    png_sink,
)

__all__ = [
    # Palette
    'PALETTE',
    'color_for_abundance',
    'color_for_half_life',
    'half_life_bucket',
    # Half-life map
    'MAP_BIAS',
    'MAP_MARGIN',
    'HalfLifeMapBuilder',
    'persist',
    'plot_halflife_map',
    'png_sink',
]
