"""
Nuclide Engine

Query API consumed by the rendering and game layers: half-lives, decay
channels, per-tick decay decisions and palette colors for any (Z, N).

Tabulated data always takes precedence; untabulated pairs fall back to the
heuristic classifier for their channels and to a half-life of 0 (instant).
Out-of-range coordinates never raise: they read as instant decay with no
channels, so nothing is ever emitted from off the chart.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from nuclidesim.core.channels import ChannelKind, DecayChannelSet, DecayProducts, apply_channel
from nuclidesim.core.config import EngineConfig
from nuclidesim.core.nuclide import INSTANT, STABLE, in_bounds
from nuclidesim.data.abundances import load_abundances
from nuclidesim.data.decay_table import BranchingDiscrepancy, DecayTable, load_decay_table
from nuclidesim.physics.classifier import DecayClassifier
from nuclidesim.physics.scheduler import DecayScheduler, SeedLike
from nuclidesim.plots.halflife_map import HalfLifeMapBuilder
from nuclidesim.plots.palette import Color, color_for_abundance, color_for_half_life
from nuclidesim.reporting.formatting import format_abundance, format_half_life

logger = logging.getLogger(__name__)


class NuclideEngine:
    """
    Read-only decay engine over a frozen ``DecayTable``.

    Parameters
    ----------
    table : DecayTable
        Fully built table; the engine never modifies it
    classifier : DecayClassifier, optional
        Fallback for untabulated nuclides
    abundances : ndarray, optional
        Elemental mass fractions indexed by Z
    seed : int or numpy.random.Generator, optional
        Seed for the engine's scheduler stream

    Examples
    --------
    >>> engine = NuclideEngine.from_config(EngineConfig(random_seed=1))
    >>> engine.get_half_life(0, 1)
    613.9
    >>> engine.get_decay_channels(0, 1)
    ((<ChannelKind.BETA_MINUS: 'B-'>, 1.0),)
    """

    def __init__(
        self,
        table: DecayTable,
        classifier: Optional[DecayClassifier] = None,
        abundances: Optional[np.ndarray] = None,
        seed: SeedLike = None,
        map_margin: Optional[int] = None,
        map_bias: Optional[int] = None,
    ):
        self.table = table
        self.classifier = classifier or DecayClassifier()
        self.abundances = abundances if abundances is not None else load_abundances()
        self.scheduler = DecayScheduler(self.get_half_life, self.get_decay_channels, seed=seed)
        self._map_options = {}
        if map_margin is not None:
            self._map_options["margin"] = map_margin
        if map_bias is not None:
            self._map_options["bias"] = map_bias
        self._map_builder: Optional[HalfLifeMapBuilder] = None

    @classmethod
    def from_config(cls, config: Optional[EngineConfig] = None) -> "NuclideEngine":
        """Load the table and abundances named by ``config`` and wrap them in an engine."""
        config = config or EngineConfig()
        table = load_decay_table(
            config.data_path,
            normalize=config.normalize_branching,
            validate=True,
            tolerance=config.branching_tolerance,
        )
        abundances = load_abundances(config.abundance_path)
        logger.debug(f"Engine built from {len(table)} nuclides, seed={config.random_seed}")
        return cls(
            table,
            abundances=abundances,
            seed=config.random_seed,
            map_margin=config.map_margin,
            map_bias=config.map_bias,
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def is_tabulated(self, z: int, n: int) -> bool:
        return self.table.lookup(z, n) is not None

    def get_half_life(self, z: int, n: int) -> float:
        """Half-life in seconds; 0 for anything without a table entry."""
        entry = self.table.lookup(z, n)
        if entry is None:
            return INSTANT
        return entry.half_life_s

    def get_decay_channels(self, z: int, n: int) -> DecayChannelSet:
        """Tabulated channels, the classifier's single channel, or () off the chart."""
        if not in_bounds(z, n):
            return ()
        entry = self.table.lookup(z, n)
        if entry is not None:
            return entry.channels
        return self.classifier.classify(z, n)

    def validate(self) -> List[BranchingDiscrepancy]:
        return self.table.validate()

    def longest_lived_isotope(self, z: int) -> Optional[int]:
        """
        Neutron count of the longest-lived tabulated isotope of element Z.

        Stable isotopes outrank any finite half-life; ties go to the lower N.
        Returns None when the element has no tabulated isotope.
        """
        best_n: Optional[int] = None
        best_life = -np.inf
        for entry in self.table:
            if entry.z != z:
                continue
            life = np.inf if entry.half_life_s == STABLE else entry.half_life_s
            if life > best_life or (life == best_life and entry.n < best_n):
                best_n, best_life = entry.n, life
        return best_n

    # ------------------------------------------------------------------
    # Decay decisions
    # ------------------------------------------------------------------

    def should_decay(self, z: int, n: int, elapsed_s: float) -> bool:
        return self.scheduler.should_decay(z, n, elapsed_s)

    def sample_channel(self, z: int, n: int) -> Optional[ChannelKind]:
        return self.scheduler.sample_channel(z, n)

    def decay(self, z: int, n: int, e: int = 0) -> Optional[DecayProducts]:
        """Sample a channel for (Z, N) and apply it; None for the vacuum entry."""
        kind = self.sample_channel(z, n)
        if kind is None:
            return None
        return apply_channel(kind, z, n, e)

    def tick(self, z: int, n: int, elapsed_s: float, e: int = 0) -> Optional[DecayProducts]:
        """Run one tick for a single particle; returns products when it decays."""
        if not self.should_decay(z, n, elapsed_s):
            return None
        return self.decay(z, n, e)

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------

    def half_life_color(self, z: int, n: int) -> Color:
        return color_for_half_life(self.get_half_life(z, n))

    def abundance(self, z: int) -> float:
        if z < 0 or z >= len(self.abundances):
            return 0.0
        return float(self.abundances[z])

    def abundance_color(self, z: int) -> Color:
        return color_for_abundance(self.abundance(z))

    def format_half_life(self, z: int, n: int) -> str:
        return format_half_life(self.get_half_life(z, n))

    def format_abundance(self, z: int) -> str:
        return format_abundance(self.abundance(z), z)

    def map_builder(self) -> HalfLifeMapBuilder:
        """Shared half-life map builder; its grid is computed at most once."""
        if self._map_builder is None:
            self._map_builder = HalfLifeMapBuilder(self.get_half_life, **self._map_options)
        return self._map_builder

    def build_map(self) -> np.ndarray:
        return self.map_builder().build_map()


_engine: Optional[NuclideEngine] = None


def get_nuclide_engine() -> NuclideEngine:
    """Get the process-wide engine, building it on first use."""
    global _engine
    if _engine is None:
        engine = NuclideEngine.from_config()
        _engine = engine
    return _engine


def get_half_life(z: int, n: int) -> float:
    """Convenience function to get a half-life from the shared engine."""
    return get_nuclide_engine().get_half_life(z, n)


def get_decay_channels(z: int, n: int) -> DecayChannelSet:
    """Convenience function to get decay channels from the shared engine."""
    return get_nuclide_engine().get_decay_channels(z, n)


def should_decay(z: int, n: int, elapsed_s: float) -> bool:
    """Convenience function for a per-tick decay decision on the shared engine."""
    return get_nuclide_engine().should_decay(z, n, elapsed_s)
