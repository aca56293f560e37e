"""
Half-life color palette and bucketing.

The palette is an ordered ramp from very short-lived (dark red) to very
long-lived (black) followed by two reserved slots: one for stable nuclides
and one for instantaneous decay. A half-life maps onto the ramp through
``floor(log10(seconds)) + 4`` clamped to the ramp length, so bucket 0 holds
everything below 1e-3 s and the last ramp bucket everything from 1e11 s up.
"""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np

Color = Tuple[float, float, float, float]

PALETTE: Tuple[Color, ...] = (
    (0.40, 0.00, 0.00, 1.0),  # dark red
    (0.60, 0.00, 0.00, 1.0),
    (0.80, 0.00, 0.00, 1.0),
    (1.00, 0.00, 0.00, 1.0),  # red
    (1.00, 0.35, 0.00, 1.0),
    (1.00, 0.60, 0.00, 1.0),  # orange
    (1.00, 0.80, 0.00, 1.0),
    (1.00, 1.00, 0.00, 1.0),  # yellow
    (0.60, 1.00, 0.00, 1.0),
    (0.00, 0.80, 0.00, 1.0),  # green
    (0.00, 0.80, 0.50, 1.0),
    (0.00, 1.00, 1.00, 1.0),  # cyan
    (0.00, 0.60, 1.00, 1.0),
    (0.00, 0.00, 1.00, 1.0),  # blue
    (0.00, 0.00, 0.50, 1.0),
    (0.00, 0.00, 0.00, 1.0),  # black
    (1.00, 1.00, 1.00, 1.0),  # stable
    (0.50, 0.50, 0.50, 1.0),  # instantaneous decay
)

HALF_LIFE_BUCKET_OFFSET = 4
ABUNDANCE_BUCKET_OFFSET = 15

# Reserved slots counted from the end of the palette
STABLE_SLOT = -2
INSTANT_SLOT = -1

ArrayLike = Union[float, Sequence[float], np.ndarray]


def ramp_length(palette: Sequence[Color] = PALETTE) -> int:
    """Number of palette entries available to the log ramp."""
    return len(palette) - 2


def log_bucket(value: ArrayLike, offset: int, palette: Sequence[Color] = PALETTE) -> np.ndarray:
    """
    Ramp index ``clamp(floor(log10(value)) + offset, 0, len(palette) - 3)``.

    ``value`` must be positive.
    """
    value = np.asarray(value, dtype=float)
    raw = np.floor(np.log10(value)) + offset
    return np.clip(raw, 0, ramp_length(palette) - 1).astype(int)


def half_life_bucket(half_life_s: float, palette: Sequence[Color] = PALETTE) -> int:
    """Palette index for a half-life, including the two reserved slots."""
    if half_life_s == -1:
        return len(palette) + STABLE_SLOT
    if half_life_s <= 0:
        return len(palette) + INSTANT_SLOT
    return int(log_bucket(half_life_s, HALF_LIFE_BUCKET_OFFSET, palette))


def half_life_buckets(half_lives: np.ndarray, palette: Sequence[Color] = PALETTE) -> np.ndarray:
    """Vectorised ``half_life_bucket``."""
    half_lives = np.asarray(half_lives, dtype=float)
    indices = np.full(half_lives.shape, len(palette) + INSTANT_SLOT, dtype=int)
    indices[half_lives == -1] = len(palette) + STABLE_SLOT
    positive = half_lives > 0
    if np.any(positive):
        indices[positive] = log_bucket(half_lives[positive], HALF_LIFE_BUCKET_OFFSET, palette)
    return indices


def color_for_half_life(half_life_s: float, palette: Sequence[Color] = PALETTE) -> Color:
    return tuple(palette[half_life_bucket(half_life_s, palette)])


def color_for_abundance(fraction: float, palette: Sequence[Color] = PALETTE) -> Color:
    """Color for an elemental mass fraction; zero abundance uses the instant slot."""
    if fraction <= 0:
        return tuple(palette[INSTANT_SLOT])
    return tuple(palette[int(log_bucket(fraction, ABUNDANCE_BUCKET_OFFSET, palette))])
