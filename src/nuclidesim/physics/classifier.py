"""
Fallback Decay Classification

Assigns a single decay channel to any (Z, N) pair that has no tabulated
entry, using mass-ratio heuristics. The rules form an ordered decision
tree; the first matching branch wins:

1. Z + N == 0: no decay
2. Z + N > 200: spontaneous fission (superheavy region)
3. N > 3 Z or Z < 20: neutron emission (neutron-unbound or very light)
4. N > 0.6223 Z^1.2003: beta-minus (neutron-rich side of the valley)
5. otherwise alpha when Z + N > 140, else proton emission

The thresholds are empirical curve fits and must stay exactly as written.
"""

from __future__ import annotations

from nuclidesim.core.channels import ChannelKind, DecayChannelSet

FISSION_MASS_THRESHOLD = 200
NEUTRON_EXCESS_RATIO = 3
LIGHT_ELEMENT_Z = 20
NEUTRON_RICH_COEFF = 0.6223
NEUTRON_RICH_EXPONENT = 1.2003
ALPHA_MASS_THRESHOLD = 140


def neutron_rich_boundary(z: int) -> float:
    """Neutron count above which a nuclide of charge Z is treated as neutron-rich."""
    # A negative base with a fractional exponent would go complex
    if z <= 0:
        return 0.0
    return NEUTRON_RICH_COEFF * z ** NEUTRON_RICH_EXPONENT


def classify_channel(z: int, n: int) -> ChannelKind:
    """Decision-tree channel for (Z, N); Z + N must be positive."""
    a = z + n
    if a > FISSION_MASS_THRESHOLD:
        return ChannelKind.SPONTANEOUS_FISSION
    if n > NEUTRON_EXCESS_RATIO * z or z < LIGHT_ELEMENT_Z:
        return ChannelKind.NEUTRON
    if n > neutron_rich_boundary(z):
        return ChannelKind.BETA_MINUS
    if a > ALPHA_MASS_THRESHOLD:
        return ChannelKind.ALPHA
    return ChannelKind.PROTON


class DecayClassifier:
    """Synthesises a single-channel decay distribution for untabulated nuclides."""

    def classify(self, z: int, n: int) -> DecayChannelSet:
        """
        Return a one-channel set with probability 1.0.

        The vacuum entry (Z + N == 0) has nothing to decay into and gets an
        empty set.
        """
        if z + n == 0:
            return ()
        return ((classify_channel(z, n), 1.0),)

    __call__ = classify
