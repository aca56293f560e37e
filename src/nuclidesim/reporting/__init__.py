"""Human-readable formatting of half-lives and abundances."""

from nuclidesim.reporting.formatting import format_abundance, format_half_life

__all__ = ['format_abundance', 'format_half_life']
