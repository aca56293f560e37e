"""Solar-system elemental abundances (mass fractions) indexed by Z."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np

from nuclidesim.core.nuclide import MAXP

DEFAULT_ABUNDANCE_PATH = Path(__file__).with_name("abundances.dat")


def load_abundances(path: Optional[Union[str, Path]] = None) -> np.ndarray:
    """
    Read per-element mass fractions into an array of length ``MAXP + 1``.

    Elements missing from the file get an abundance of 0.
    """
    path = Path(path) if path is not None else DEFAULT_ABUNDANCE_PATH
    abundances = np.zeros(MAXP + 1)
    with open(path, "r", encoding="utf-8") as f:
        for line_no, raw in enumerate(f, start=1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            fields = line.split()
            if len(fields) != 2:
                raise ValueError(f"{path.name}:{line_no}: expected 'Z fraction'")
            z = int(fields[0])
            if not 0 <= z <= MAXP:
                raise ValueError(f"{path.name}:{line_no}: Z={z} outside 0..{MAXP}")
            abundances[z] = float(fields[1])
    abundances.setflags(write=False)
    return abundances


_abundances: Optional[np.ndarray] = None


def get_abundance(z: int) -> float:
    """Mass fraction of element Z in the solar system (0 when unknown)."""
    global _abundances
    if _abundances is None:
        _abundances = load_abundances()
    if z < 0 or z >= len(_abundances):
        return 0.0
    return float(_abundances[z])
