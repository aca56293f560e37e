"""
Stochastic Decay Scheduling

Decides, one simulation tick at a time, whether a nuclide instance decays.

For a half-life H the probability that a nucleus decays within an interval
dt follows from the exponential decay law:

    p(dt) = 1 - 2^(-dt / H)

A uniform draw u ~ U[0, 1) fires the decay when u <= p. Survival over k
ticks of length dt is (2^(-dt/H))^k = 2^(-k dt / H), so splitting an
interval into shorter ticks gives the same survival probability as one
long tick.

The elapsed time passed in is already simulated time: callers multiply the
wall-clock tick by their own time-acceleration factor.
"""

from __future__ import annotations

import math
from typing import Callable, Optional, Union

import numpy as np

from nuclidesim.core.channels import ChannelKind, DecayChannelSet, select_channel
from nuclidesim.core.nuclide import INSTANT, STABLE

LN2 = math.log(2.0)

HalfLifeSource = Callable[[int, int], float]
ChannelSource = Callable[[int, int], DecayChannelSet]
SeedLike = Union[None, int, np.random.Generator]


def decay_probability(half_life_s: float, elapsed_s: float) -> float:
    """
    Probability of decay within ``elapsed_s`` for a nuclide with ``half_life_s``.

    Stable nuclides (-1) never decay and instantaneous ones (0) always do.
    """
    if elapsed_s < 0:
        raise ValueError("Elapsed time must be non-negative")
    if half_life_s == STABLE:
        return 0.0
    if half_life_s == INSTANT:
        return 1.0
    if half_life_s < 0:
        raise ValueError(f"Invalid half-life {half_life_s}")
    # 1 - 2^(-dt/H), written with expm1 to keep precision for dt << H
    return -math.expm1(-LN2 * elapsed_s / half_life_s)


def survival_probability(half_life_s: float, elapsed_s: float) -> float:
    """Probability that a nuclide survives ``elapsed_s`` without decaying."""
    return 1.0 - decay_probability(half_life_s, elapsed_s)


def as_generator(seed: SeedLike) -> np.random.Generator:
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


class DecayScheduler:
    """
    Per-tick decay decisions backed by a private random stream.

    Parameters
    ----------
    half_life : callable
        ``half_life(z, n) -> seconds`` using the -1 / 0 sentinels
    channels : callable, optional
        ``channels(z, n) -> DecayChannelSet``; required for ``sample_channel``
    seed : int or numpy.random.Generator, optional
        Seed or generator for the scheduler's random stream. Each scheduler
        should own its stream; share one only between sequential callers.
    """

    def __init__(
        self,
        half_life: HalfLifeSource,
        channels: Optional[ChannelSource] = None,
        seed: SeedLike = None,
    ):
        self._half_life = half_life
        self._channels = channels
        self.rng = as_generator(seed)

    def should_decay(self, z: int, n: int, elapsed_s: float) -> bool:
        """Consume one random draw and decide whether (Z, N) decays this tick."""
        if elapsed_s < 0:
            raise ValueError("Elapsed time must be non-negative")
        half_life = self._half_life(z, n)
        if half_life == INSTANT:
            return True
        if half_life == STABLE:
            return False
        if elapsed_s == 0:
            return False
        p = decay_probability(half_life, elapsed_s)
        return bool(self.rng.random() <= p)

    def should_decay_many(self, z: np.ndarray, n: np.ndarray, elapsed_s: float) -> np.ndarray:
        """Vectorised ``should_decay`` over a population of nuclides."""
        if elapsed_s < 0:
            raise ValueError("Elapsed time must be non-negative")
        z = np.asarray(z, dtype=int)
        n = np.asarray(n, dtype=int)
        half_lives = np.array([self._half_life(int(zi), int(ni)) for zi, ni in zip(z, n)], dtype=float)

        p = np.zeros(half_lives.shape)
        unstable = half_lives > 0
        if elapsed_s > 0:
            p[unstable] = -np.expm1(-LN2 * elapsed_s / half_lives[unstable])

        draws = self.rng.random(half_lives.shape)
        fired = (draws <= p) & unstable
        return fired | (half_lives == INSTANT)

    def sample_channel(self, z: int, n: int) -> Optional[ChannelKind]:
        """Draw the decay channel for (Z, N); None when there is nothing to decay into."""
        if self._channels is None:
            raise RuntimeError("DecayScheduler was created without a channel source")
        channels = self._channels(z, n)
        if not channels:
            return None
        return select_channel(channels, float(self.rng.random()))
