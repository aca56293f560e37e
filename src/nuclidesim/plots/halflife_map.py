"""
Half-Life Heat-Map

Builds the chart-of-nuclides color grid once from a half-life source and
hands it to a persistence sink. The grid covers the table plus a margin so
the region around valid nuclides (including small negative Z and N) can be
rendered too; those off-table cells resolve to the instant-decay color.

Grid layout: ``grid[y, x]`` is the RGBA color of Z = x - bias, N = y - bias,
with row 0 at the bottom when saved (``origin='lower'``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import BoundaryNorm, ListedColormap

from nuclidesim.core.nuclide import MAXN, MAXP
from nuclidesim.plots.palette import PALETTE, Color, half_life_buckets

logger = logging.getLogger(__name__)

MAP_MARGIN = 200
MAP_BIAS = 100

HalfLifeSource = Callable[[int, int], float]
MapSink = Callable[[np.ndarray], None]


class HalfLifeMapBuilder:
    """
    One-shot builder of the quantised half-life color grid.

    Parameters
    ----------
    half_life : callable
        ``half_life(z, n) -> seconds`` with -1 stable and 0 instantaneous;
        must return 0 for out-of-table coordinates
    palette : sequence of RGBA tuples
        Ramp colors followed by the stable and instant colors
    margin : int
        Extra cells added to each axis beyond the table extents
    bias : int
        Offset subtracted from a cell index to get Z or N
    """

    def __init__(
        self,
        half_life: HalfLifeSource,
        palette: Sequence[Color] = PALETTE,
        margin: int = MAP_MARGIN,
        bias: int = MAP_BIAS,
        max_z: int = MAXP,
        max_n: int = MAXN,
    ):
        if len(palette) < 3:
            raise ValueError("Palette needs at least one ramp color plus two reserved colors")
        self._half_life = half_life
        self.palette = np.asarray(palette, dtype=float)
        self.margin = margin
        self.bias = bias
        self.width = max_z + margin
        self.height = max_n + margin
        self._grid: Optional[np.ndarray] = None
        self._buckets: Optional[np.ndarray] = None

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width) of the grid in cells."""
        return (self.height, self.width)

    def cell_to_nuclide(self, x: int, y: int) -> Tuple[int, int]:
        return (x - self.bias, y - self.bias)

    def nuclide_to_cell(self, z: int, n: int) -> Tuple[int, int]:
        return (z + self.bias, n + self.bias)

    def half_life_grid(self) -> np.ndarray:
        """Half-life of every cell, indexed ``[y, x]``."""
        lives = np.empty(self.shape)
        for y in range(self.height):
            n = y - self.bias
            for x in range(self.width):
                lives[y, x] = self._half_life(x - self.bias, n)
        return lives

    def bucket_grid(self) -> np.ndarray:
        """Palette index of every cell; computed on first use."""
        if self._buckets is None:
            buckets = half_life_buckets(self.half_life_grid(), self.palette)
            buckets.setflags(write=False)
            self._buckets = buckets
        return self._buckets

    def build_map(self) -> np.ndarray:
        """
        Return the RGBA grid, shape ``(height, width, 4)``.

        The grid is computed once; later calls return the same read-only array.
        """
        if self._grid is None:
            grid = self.palette[self.bucket_grid()]
            grid.setflags(write=False)
            self._grid = grid
            logger.info(f"Built half-life map of {self.width}x{self.height} cells")
        return self._grid

    def color_at(self, z: int, n: int) -> Color:
        """Grid color for (Z, N); coordinates off the grid get the instant color."""
        x, y = self.nuclide_to_cell(z, n)
        if not (0 <= x < self.width and 0 <= y < self.height):
            return tuple(self.palette[-1])
        return tuple(self.build_map()[y, x])

    def build_and_persist(self, sink: MapSink) -> np.ndarray:
        grid = self.build_map()
        sink(grid)
        return grid


def persist(grid: np.ndarray, path: Union[str, Path]) -> Path:
    """Write an RGBA grid to a PNG bitmap, one pixel per cell."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, np.asarray(grid), origin="lower", format="png")
    logger.info(f"Saved half-life map to {path}")
    return path


def png_sink(path: Union[str, Path]) -> MapSink:
    """Sink that persists the grid as a PNG at ``path``."""
    def _sink(grid: np.ndarray) -> None:
        persist(grid, path)
    return _sink


def plot_halflife_map(
    builder: HalfLifeMapBuilder,
    ax: Optional[plt.Axes] = None,
    title: str = "Half-life chart of nuclides",
    show_colorbar: bool = True,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Render the map as a labelled figure with Z on the x-axis and N on the y-axis.

    Returns
    -------
    fig, ax : matplotlib Figure and Axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 10))
    else:
        fig = ax.figure

    buckets = builder.bucket_grid()
    n_colors = len(builder.palette)
    cmap = ListedColormap(builder.palette)
    norm = BoundaryNorm(np.arange(n_colors + 1) - 0.5, n_colors)
    extent = (
        -builder.bias - 0.5,
        builder.width - builder.bias - 0.5,
        -builder.bias - 0.5,
        builder.height - builder.bias - 0.5,
    )
    image = ax.imshow(buckets, cmap=cmap, norm=norm, origin="lower", extent=extent, interpolation="nearest")
    ax.set_xlim(-0.5, MAXP + 0.5)
    ax.set_ylim(-0.5, MAXN + 0.5)
    ax.set_xlabel("Protons Z")
    ax.set_ylabel("Neutrons N")
    ax.set_title(title)

    if show_colorbar:
        cbar = fig.colorbar(image, ax=ax, ticks=np.arange(n_colors), shrink=0.8)
        ramp = n_colors - 2
        labels = [f"1e{i - 4}" for i in range(ramp)]
        labels[0] = "<1e-3"
        labels[-1] = f">1e{ramp - 5}"
        cbar.ax.set_yticklabels(labels + ["stable", "< 1 µs"])
        cbar.set_label("Half-life (s)")

    return fig, ax
