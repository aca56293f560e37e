"""
Decay Channel Definitions

Closed enumeration of the radioactive decay modes the engine knows about,
together with the fixed product rule each one applies to a (Z, N, E)
particle and the cumulative-walk sampler used to pick a channel from a
branching distribution.

Particle triples are (Z, N, E) where E is the number of bound electrons;
free leptons are (0, 0, +1) for an electron and (0, 0, -1) for a positron.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple

Particle = Tuple[int, int, int]
DecayChannelSet = Tuple[Tuple["ChannelKind", float], ...]

ELECTRON: Particle = (0, 0, 1)
POSITRON: Particle = (0, 0, -1)
NEUTRON: Particle = (0, 1, 0)
PROTON: Particle = (1, 0, 0)
ALPHA: Particle = (2, 2, 0)
TRITON: Particle = (1, 2, 0)

# Fission splits off 34Si above this mass number, 14C otherwise
HEAVY_FISSION_MASS = 236
HEAVY_FRAGMENT: Particle = (14, 20, 0)
LIGHT_FRAGMENT: Particle = (6, 8, 0)


class ChannelKind(Enum):
    """Radioactive decay modes."""

    BETA_MINUS = "B-"
    BETA_PLUS = "B+"
    NEUTRON = "n"
    PROTON = "p"
    TWO_NEUTRON = "2n"
    TWO_PROTON = "2p"
    THREE_NEUTRON = "3n"
    THREE_PROTON = "3p"
    ALPHA = "A"
    BETA_MINUS_ALPHA = "B-A"
    BETA_PLUS_ALPHA = "B+A"
    BETA_MINUS_NEUTRON = "B-n"
    BETA_MINUS_TWO_NEUTRON = "B-2n"
    BETA_MINUS_THREE_NEUTRON = "B-3n"
    BETA_MINUS_PROTON = "B-p"
    BETA_PLUS_PROTON = "B+p"
    BETA_PLUS_TWO_PROTON = "B+2p"
    BETA_MINUS_TRITON = "B-t"
    ELECTRON_CAPTURE = "EC"
    SPONTANEOUS_FISSION = "SF"
    BETA_MINUS_FISSION = "B-SF"
    BETA_PLUS_FISSION = "B+SF"
    ELECTRON_EMISSION = "e"
    BOUND_BETA_MINUS = "B-bound"

    @classmethod
    def from_symbol(cls, symbol: str) -> "ChannelKind":
        """Look up a channel by its data-file symbol."""
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Unknown decay channel symbol '{symbol}'") from None

    @property
    def is_fission(self) -> bool:
        return self in _FISSION_KINDS

    @property
    def label(self) -> str:
        return CHANNEL_LABELS[self]


_FISSION_KINDS = frozenset({
    ChannelKind.SPONTANEOUS_FISSION,
    ChannelKind.BETA_MINUS_FISSION,
    ChannelKind.BETA_PLUS_FISSION,
})

CHANNEL_LABELS: Dict[ChannelKind, str] = {
    ChannelKind.BETA_MINUS: "β-",
    ChannelKind.BETA_PLUS: "β+",
    ChannelKind.NEUTRON: "n",
    ChannelKind.PROTON: "p",
    ChannelKind.TWO_NEUTRON: "2n",
    ChannelKind.TWO_PROTON: "2p",
    ChannelKind.THREE_NEUTRON: "3n",
    ChannelKind.THREE_PROTON: "3p",
    ChannelKind.ALPHA: "α",
    ChannelKind.BETA_MINUS_ALPHA: "β-α",
    ChannelKind.BETA_PLUS_ALPHA: "β+α",
    ChannelKind.BETA_MINUS_NEUTRON: "β-n",
    ChannelKind.BETA_MINUS_TWO_NEUTRON: "β-2n",
    ChannelKind.BETA_MINUS_THREE_NEUTRON: "β-3n",
    ChannelKind.BETA_MINUS_PROTON: "β-p",
    ChannelKind.BETA_PLUS_PROTON: "β+p",
    ChannelKind.BETA_PLUS_TWO_PROTON: "β+2p",
    ChannelKind.BETA_MINUS_TRITON: "β-t",
    ChannelKind.ELECTRON_CAPTURE: "EC",
    ChannelKind.SPONTANEOUS_FISSION: "SF",
    ChannelKind.BETA_MINUS_FISSION: "β-SF",
    ChannelKind.BETA_PLUS_FISSION: "β+SF",
    ChannelKind.ELECTRON_EMISSION: "e-",
    ChannelKind.BOUND_BETA_MINUS: "bound β-",
}

# (dZ, dN, dE) of the daughter and the particles emitted alongside it.
# Fission kinds and electron capture are resolved in apply_channel.
_FIXED_RULES: Dict[ChannelKind, Tuple[Tuple[int, int, int], Tuple[Particle, ...]]] = {
    ChannelKind.BETA_MINUS: ((1, -1, 0), (ELECTRON,)),
    ChannelKind.BETA_PLUS: ((-1, 1, 0), (POSITRON,)),
    ChannelKind.NEUTRON: ((0, -1, 0), (NEUTRON,)),
    ChannelKind.PROTON: ((-1, 0, 0), (PROTON,)),
    ChannelKind.TWO_NEUTRON: ((0, -2, 0), (NEUTRON, NEUTRON)),
    ChannelKind.TWO_PROTON: ((-2, 0, 0), (PROTON, PROTON)),
    ChannelKind.THREE_NEUTRON: ((0, -3, 0), (NEUTRON, NEUTRON, NEUTRON)),
    ChannelKind.THREE_PROTON: ((-3, 0, 0), (PROTON, PROTON, PROTON)),
    ChannelKind.ALPHA: ((-2, -2, 0), (ALPHA,)),
    ChannelKind.BETA_MINUS_ALPHA: ((-1, -3, 0), (ELECTRON, ALPHA)),
    ChannelKind.BETA_PLUS_ALPHA: ((-3, -1, 0), (POSITRON, ALPHA)),
    ChannelKind.BETA_MINUS_NEUTRON: ((1, -2, 0), (ELECTRON, NEUTRON)),
    ChannelKind.BETA_MINUS_TWO_NEUTRON: ((1, -3, 0), (ELECTRON, NEUTRON, NEUTRON)),
    ChannelKind.BETA_MINUS_THREE_NEUTRON: ((1, -4, 0), (ELECTRON, NEUTRON, NEUTRON, NEUTRON)),
    ChannelKind.BETA_MINUS_PROTON: ((0, -1, 0), (ELECTRON, PROTON)),
    ChannelKind.BETA_PLUS_PROTON: ((-2, 1, 0), (POSITRON, PROTON)),
    ChannelKind.BETA_PLUS_TWO_PROTON: ((-3, 1, 0), (POSITRON, PROTON, PROTON)),
    ChannelKind.BETA_MINUS_TRITON: ((0, -3, 0), (ELECTRON, TRITON)),
    ChannelKind.ELECTRON_EMISSION: ((0, 0, -1), (ELECTRON,)),
    ChannelKind.BOUND_BETA_MINUS: ((1, -1, 1), ()),
}

# Extra lepton accompanying each fission variant
_FISSION_LEPTON: Dict[ChannelKind, Tuple[Particle, ...]] = {
    ChannelKind.SPONTANEOUS_FISSION: (),
    ChannelKind.BETA_MINUS_FISSION: (ELECTRON,),
    ChannelKind.BETA_PLUS_FISSION: (POSITRON,),
}


@dataclass
class DecayProducts:
    """
    Outcome of applying a decay channel to a particle.

    Attributes
    ----------
    daughter : tuple
        (Z, N, E) of the remaining nucleus
    emitted : list
        (Z, N, E) of every particle released by the decay
    """
    daughter: Particle
    emitted: List[Particle] = field(default_factory=list)


def apply_channel(kind: ChannelKind, z: int, n: int, e: int = 0) -> DecayProducts:
    """
    Apply a decay channel's product rule to the particle (Z, N, E).

    Electron capture consumes a bound electron and leaves the particle
    untouched when there is none. Fission emits a 34Si fragment for
    A > 236 and a 14C fragment otherwise; the beta-delayed variants add
    the lepton and shift the daughter's charge accordingly.
    """
    if kind is ChannelKind.ELECTRON_CAPTURE:
        if e > 0:
            return DecayProducts(daughter=(z - 1, n + 1, e - 1))
        return DecayProducts(daughter=(z, n, e))

    if kind.is_fission:
        fragment = HEAVY_FRAGMENT if z + n > HEAVY_FISSION_MASS else LIGHT_FRAGMENT
        leptons = _FISSION_LEPTON[kind]
        dz = -fragment[0]
        dn = -fragment[1]
        if kind is ChannelKind.BETA_MINUS_FISSION:
            dz, dn = dz + 1, dn - 1
        elif kind is ChannelKind.BETA_PLUS_FISSION:
            dz, dn = dz - 1, dn + 1
        return DecayProducts(
            daughter=(z + dz, n + dn, e),
            emitted=[fragment, *leptons],
        )

    (dz, dn, de), emitted = _FIXED_RULES[kind]
    return DecayProducts(daughter=(z + dz, n + dn, e + de), emitted=list(emitted))


def channel_probability_sum(channels: Sequence[Tuple[ChannelKind, float]]) -> float:
    """Total branching probability of a channel set."""
    return float(sum(p for _, p in channels))


def select_channel(channels: Sequence[Tuple[ChannelKind, float]], u: float) -> ChannelKind:
    """
    Pick a channel by walking the cumulative distribution with draw ``u``.

    The walk stops at the first channel whose cumulative probability reaches
    ``u``; when the set sums to less than ``u`` the last channel is used, and
    ``u == 0`` selects the first channel.
    """
    if not channels:
        raise ValueError("Cannot select from an empty channel set")
    cumulative = 0.0
    index = 0
    while cumulative < u and index < len(channels):
        cumulative += channels[index][1]
        index += 1
    if index == 0:
        index = 1
    return channels[index - 1][0]
