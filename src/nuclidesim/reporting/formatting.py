"""Human-readable text for half-lives and elemental abundances."""

from __future__ import annotations

from typing import Optional

SECONDS_PER_YEAR = 31556952.0  # Julian year
SECONDS_PER_DAY = 86400.0
SECONDS_PER_HOUR = 3600.0

# Above 1e4 years the value is shown in scientific notation
LONG_YEARS_THRESHOLD = 1e4 * SECONDS_PER_YEAR

BELOW_DETECTION = "< 3E-09 ppb"
INSTANT_TEXT = "< 1 µs"
STABLE_TEXT = "stable"


def format_half_life(seconds: float) -> str:
    """
    Format a half-life using the largest unit that keeps the mantissa readable.

    Examples
    --------
    >>> format_half_life(-1)
    'stable'
    >>> format_half_life(31556952 * 5)
    '5.00 yr'
    >>> format_half_life(613.9)
    '613.90 s'
    """
    if seconds == -1:
        return STABLE_TEXT
    if seconds == 0:
        return INSTANT_TEXT
    if seconds > LONG_YEARS_THRESHOLD:
        return f"{seconds / SECONDS_PER_YEAR:.1E} yr"
    if seconds > SECONDS_PER_YEAR:
        return f"{seconds / SECONDS_PER_YEAR:.2f} yr"
    if seconds > SECONDS_PER_DAY:
        return f"{seconds / SECONDS_PER_DAY:.2f} d"
    if seconds > SECONDS_PER_HOUR:
        return f"{seconds / SECONDS_PER_HOUR:.2f} h"
    if seconds > 1:
        return f"{seconds:.2f} s"
    if seconds > 1e-3:
        return f"{seconds * 1e3:.2f} ms"
    return f"{seconds * 1e6:.2f} µs"


def format_abundance(fraction: float, z: Optional[int] = None) -> str:
    """
    Format a mass fraction as a percentage or parts per billion.

    A zero abundance reads ``0`` for synthetic elements (Z > 100) and the
    below-detection marker otherwise.
    """
    if fraction > 1e-2:
        return f"{fraction * 100:.2f}%"
    if fraction > 1e-8:
        return f"{fraction * 1e9:.0f} ppb"
    if fraction > 0:
        return f"{fraction * 1e9:.4f} ppb"
    if z is not None and z > 100:
        return "0"
    return BELOW_DETECTION
