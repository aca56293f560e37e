"""
Nuclide Identification Module

Value type identifying a nuclear species by proton and neutron count,
plus the table extents every lookup is bounds-checked against.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


# Table extents (inclusive)
MAXP = 118
MAXN = 230

# Half-life sentinels
STABLE = -1.0
INSTANT = 0.0

ELEMENTS = [
    'n', 'H', 'He', 'Li', 'Be', 'B', 'C', 'N', 'O', 'F', 'Ne',
    'Na', 'Mg', 'Al', 'Si', 'P', 'S', 'Cl', 'Ar', 'K', 'Ca',
    'Sc', 'Ti', 'V', 'Cr', 'Mn', 'Fe', 'Co', 'Ni', 'Cu', 'Zn',
    'Ga', 'Ge', 'As', 'Se', 'Br', 'Kr', 'Rb', 'Sr', 'Y', 'Zr',
    'Nb', 'Mo', 'Tc', 'Ru', 'Rh', 'Pd', 'Ag', 'Cd', 'In', 'Sn',
    'Sb', 'Te', 'I', 'Xe', 'Cs', 'Ba', 'La', 'Ce', 'Pr', 'Nd',
    'Pm', 'Sm', 'Eu', 'Gd', 'Tb', 'Dy', 'Ho', 'Er', 'Tm', 'Yb',
    'Lu', 'Hf', 'Ta', 'W', 'Re', 'Os', 'Ir', 'Pt', 'Au', 'Hg',
    'Tl', 'Pb', 'Bi', 'Po', 'At', 'Rn', 'Fr', 'Ra', 'Ac', 'Th',
    'Pa', 'U', 'Np', 'Pu', 'Am', 'Cm', 'Bk', 'Cf', 'Es', 'Fm',
    'Md', 'No', 'Lr', 'Rf', 'Db', 'Sg', 'Bh', 'Hs', 'Mt', 'Ds',
    'Rg', 'Cn', 'Nh', 'Fl', 'Mc', 'Lv', 'Ts', 'Og',
]


def in_bounds(z: int, n: int) -> bool:
    """Check whether (Z, N) lies inside the declared table extents."""
    return 0 <= z <= MAXP and 0 <= n <= MAXN


def element_symbol(z: int) -> str:
    """Chemical symbol for Z, or ``Z<num>`` outside the known elements."""
    if z < 0 or z >= len(ELEMENTS):
        return f"Z{z}"
    return ELEMENTS[z]


def format_nuclide_name(z: int, n: int, charge: int = 0) -> str:
    """
    Format a human-readable nuclide name such as ``He-4``.

    The free neutron is ``n``; the vacuum entry is an empty string unless a
    lepton charge is given, in which case ``e-`` or ``e+`` is returned.
    """
    if z + n == 0:
        if charge > 0:
            return "e-"
        if charge < 0:
            return "e+"
        return ""
    if z == 0 and n == 1:
        return "n"
    return f"{element_symbol(z)}-{z + n}"


@dataclass(frozen=True, order=True)
class NuclideKey:
    """
    Identifier of a nuclear species.

    Attributes
    ----------
    z : int
        Proton count
    n : int
        Neutron count
    """
    z: int
    n: int

    @property
    def mass_number(self) -> int:
        return self.z + self.n

    @property
    def in_bounds(self) -> bool:
        return in_bounds(self.z, self.n)

    @property
    def is_vacuum(self) -> bool:
        return self.z == 0 and self.n == 0

    @property
    def name(self) -> str:
        return format_nuclide_name(self.z, self.n)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.z, self.n)

    def shifted(self, dz: int, dn: int) -> "NuclideKey":
        """Return the key displaced by (dZ, dN)."""
        return NuclideKey(self.z + dz, self.n + dn)

    @classmethod
    def checked(cls, z: int, n: int) -> Optional["NuclideKey"]:
        """Build a key only when (Z, N) is inside the table extents."""
        if not in_bounds(z, n):
            return None
        return cls(z, n)

    def __str__(self) -> str:
        return self.name or "vacuum"
