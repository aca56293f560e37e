"""Tests for the palette and the half-life heat-map."""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from nuclidesim.core.nuclide import MAXN, MAXP
from nuclidesim.plots.halflife_map import (
    MAP_BIAS,
    MAP_MARGIN,
    HalfLifeMapBuilder,
    persist,
    plot_halflife_map,
    png_sink,
)
from nuclidesim.plots.palette import (
    PALETTE,
    color_for_abundance,
    color_for_half_life,
    half_life_bucket,
    half_life_buckets,
)

STABLE_COLOR = PALETTE[-2]
INSTANT_COLOR = PALETTE[-1]


def _small_builder():
    lives = {(0, 0): -1.0, (1, 0): -1.0, (1, 1): 5.0, (2, 1): 5e5}
    return HalfLifeMapBuilder(
        lambda z, n: lives.get((z, n), 0.0),
        margin=4,
        bias=2,
        max_z=3,
        max_n=3,
    )


class TestPalette:
    """Tests for half-life bucketing."""

    def test_palette_layout(self):
        assert len(PALETTE) == 18
        assert STABLE_COLOR == (1.0, 1.0, 1.0, 1.0)
        assert INSTANT_COLOR == (0.5, 0.5, 0.5, 1.0)

    def test_reserved_slots(self):
        assert half_life_bucket(-1) == 16
        assert half_life_bucket(0) == 17
        assert color_for_half_life(-1) == STABLE_COLOR
        assert color_for_half_life(0) == INSTANT_COLOR

    def test_log_buckets(self):
        assert half_life_bucket(1e-9) == 0
        assert half_life_bucket(5e-4) == 0
        assert half_life_bucket(5.0) == 4
        assert half_life_bucket(50.0) == 5
        assert half_life_bucket(613.9) == 6
        assert half_life_bucket(1e20) == 15

    def test_monotone(self):
        values = np.logspace(-8, 20, 200)
        buckets = [half_life_bucket(v) for v in values]
        assert buckets == sorted(buckets)
        assert buckets[0] == 0
        assert buckets[-1] == 15

    def test_vectorised_matches_scalar(self):
        values = np.array([-1.0, 0.0, 2e-3, 3.0, 4e4, 1e18])
        assert half_life_buckets(values).tolist() == [half_life_bucket(v) for v in values]

    def test_abundance_colors(self):
        assert color_for_abundance(0.7381) == PALETTE[14]
        assert color_for_abundance(1e-20) == PALETTE[0]
        assert color_for_abundance(0.0) == INSTANT_COLOR


class TestHalfLifeMapBuilder:
    """Tests for the color grid."""

    def test_shape_small(self):
        builder = _small_builder()
        assert builder.shape == (7, 7)
        assert builder.build_map().shape == (7, 7, 4)

    def test_cell_mapping(self):
        builder = _small_builder()
        assert builder.nuclide_to_cell(1, 1) == (3, 3)
        assert builder.cell_to_nuclide(0, 0) == (-2, -2)

    def test_cells_colored(self):
        builder = _small_builder()
        grid = builder.build_map()
        # grid[y, x] with Z = x - bias, N = y - bias
        assert tuple(grid[2, 2]) == STABLE_COLOR
        assert tuple(grid[2, 3]) == STABLE_COLOR
        assert tuple(grid[3, 3]) == PALETTE[4]
        assert tuple(grid[3, 4]) == PALETTE[9]
        assert tuple(grid[0, 0]) == INSTANT_COLOR

    def test_built_once_and_read_only(self):
        calls = []

        def half_life(z, n):
            calls.append((z, n))
            return 0.0

        builder = HalfLifeMapBuilder(half_life, margin=2, bias=1, max_z=2, max_n=2)
        first = builder.build_map()
        second = builder.build_map()
        assert first is second
        assert len(calls) == 16
        with pytest.raises(ValueError):
            first[0, 0] = (0.0, 0.0, 0.0, 1.0)

    def test_color_at_off_grid(self):
        builder = _small_builder()
        assert builder.color_at(100, 100) == INSTANT_COLOR
        assert builder.color_at(1, 1) == PALETTE[4]

    def test_palette_too_short(self):
        with pytest.raises(ValueError):
            HalfLifeMapBuilder(lambda z, n: 0.0, palette=PALETTE[:2])

    def test_sink_receives_grid(self):
        received = []
        builder = _small_builder()
        grid = builder.build_and_persist(received.append)
        assert len(received) == 1
        assert received[0] is grid


class TestEngineMap:
    """Tests for the full-size map built from the packaged table."""

    def test_full_shape(self, engine):
        grid = engine.build_map()
        assert grid.shape == (MAXN + MAP_MARGIN, MAXP + MAP_MARGIN, 4)

    def test_reserved_colors_on_full_map(self, engine):
        grid = engine.build_map()
        assert tuple(grid[126 + MAP_BIAS, 82 + MAP_BIAS]) == STABLE_COLOR     # Pb-208
        assert tuple(grid[128 + MAP_BIAS, 84 + MAP_BIAS]) == INSTANT_COLOR    # Po-212
        assert tuple(grid[10 + MAP_BIAS, 50 + MAP_BIAS]) == INSTANT_COLOR     # untabulated
        assert tuple(grid[0, 0]) == INSTANT_COLOR                              # off the table
        assert tuple(grid[1 + MAP_BIAS, 0 + MAP_BIAS]) == PALETTE[6]          # free neutron


class TestPersistence:
    """Tests for PNG output and figures."""

    def test_png_orientation(self, tmp_path):
        builder = _small_builder()
        grid = builder.build_map()
        path = persist(grid, tmp_path / "maps" / "small.png")
        assert path.exists()

        image = plt.imread(path)
        assert image.shape == (7, 7, 4)
        # origin='lower' puts grid row 0 at the bottom of the image
        assert image[-1 - 2, 2] == pytest.approx(np.array(STABLE_COLOR), abs=1 / 255)
        assert image[-1 - 3, 3] == pytest.approx(np.array(PALETTE[4]), abs=1 / 255)

    def test_png_sink(self, tmp_path):
        path = tmp_path / "sink.png"
        _small_builder().build_and_persist(png_sink(path))
        assert path.exists()

    def test_plot_figure(self):
        fig, ax = plot_halflife_map(_small_builder(), show_colorbar=True)
        assert ax.get_xlabel() == "Protons Z"
        assert ax.get_ylabel() == "Neutrons N"
        plt.close(fig)
