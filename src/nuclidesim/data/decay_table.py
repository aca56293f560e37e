"""
Decay Table Module

Sparse store of tabulated nuclides: half-life in seconds plus the ordered
set of decay channels with branching probabilities, keyed by (Z, N).

The table is assembled by ``DecayTableBuilder`` from a line-oriented data
file organised in an ``[observed]`` block followed by a ``[predicted]``
block. Rows are inserted in file order so a later row for the same key
replaces the earlier one. ``build()`` freezes the result into a read-only
``DecayTable``; nothing mutates it afterwards.

Data file format::

    [observed]
    # Z N half_life_s [channel:probability ...]
    0 1 613.9 B-:1.0
    1 1 -1

Half-life sentinels: ``-1`` stable, ``0`` shorter than one microsecond.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from nuclidesim.core.channels import ChannelKind, DecayChannelSet, channel_probability_sum
from nuclidesim.core.nuclide import INSTANT, MAXN, MAXP, STABLE, NuclideKey, format_nuclide_name, in_bounds

logger = logging.getLogger(__name__)

BRANCHING_TOLERANCE = 1e-6

DEFAULT_DATA_PATH = Path(__file__).with_name("nuclides.dat")

# Rows whose published branching ratios do not add up to one; kept verbatim
KNOWN_BRANCHING_EXCEPTIONS: FrozenSet[Tuple[int, int]] = frozenset({
    (93, 143),  # Np-236
})

BLOCK_ORDER = ("observed", "predicted")


class DecayDataError(ValueError):
    """Raised when the literal decay data cannot be parsed."""


@dataclass(frozen=True)
class NuclideEntry:
    """
    Tabulated decay data for one nuclide.

    Attributes
    ----------
    z, n : int
        Proton and neutron count
    half_life_s : float
        Half-life in seconds (-1 stable, 0 instantaneous)
    channels : tuple
        Ordered ((ChannelKind, probability), ...) pairs
    """
    z: int
    n: int
    half_life_s: float
    channels: DecayChannelSet = ()

    @property
    def key(self) -> NuclideKey:
        return NuclideKey(self.z, self.n)

    @property
    def is_stable(self) -> bool:
        return self.half_life_s == STABLE

    @property
    def is_instant(self) -> bool:
        return self.half_life_s == INSTANT

    @property
    def probability_sum(self) -> float:
        return channel_probability_sum(self.channels)

    def normalized(self) -> "NuclideEntry":
        """Copy with branching probabilities rescaled to sum to one."""
        total = self.probability_sum
        if self.is_stable or total <= 0:
            return self
        return NuclideEntry(
            z=self.z,
            n=self.n,
            half_life_s=self.half_life_s,
            channels=tuple((kind, p / total) for kind, p in self.channels),
        )


@dataclass(frozen=True)
class BranchingDiscrepancy:
    """A tabulated row whose branching probabilities do not sum to one."""
    z: int
    n: int
    total: float
    whitelisted: bool = False

    @property
    def deviation(self) -> float:
        return self.total - 1.0


class DecayTable:
    """
    Read-only sparse table of nuclide decay data.

    Examples
    --------
    >>> table = load_decay_table()
    >>> entry = table.lookup(0, 1)
    >>> entry.half_life_s
    613.9
    """

    def __init__(self, entries: Mapping[Tuple[int, int], NuclideEntry]):
        self._entries: Mapping[Tuple[int, int], NuclideEntry] = MappingProxyType(dict(entries))

    def __contains__(self, key: Tuple[int, int]) -> bool:
        return tuple(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[NuclideEntry]:
        return iter(self._entries.values())

    def keys(self) -> List[Tuple[int, int]]:
        return list(self._entries.keys())

    def lookup(self, z: int, n: int) -> Optional[NuclideEntry]:
        """Entry for (Z, N), or None when out of bounds or untabulated."""
        if not in_bounds(z, n):
            return None
        return self._entries.get((z, n))

    def half_life(self, z: int, n: int) -> Optional[float]:
        entry = self.lookup(z, n)
        return entry.half_life_s if entry else None

    def channels(self, z: int, n: int) -> Optional[DecayChannelSet]:
        entry = self.lookup(z, n)
        return entry.channels if entry else None

    def validate(
        self,
        tolerance: float = BRANCHING_TOLERANCE,
        exceptions: Iterable[Tuple[int, int]] = KNOWN_BRANCHING_EXCEPTIONS,
    ) -> List[BranchingDiscrepancy]:
        """
        Check that branching probabilities sum to one for every unstable row.

        Offending rows are logged and returned; none of them is removed or
        rejected. Rows listed in ``exceptions`` are reported at debug level.
        """
        known = set(exceptions)
        discrepancies: List[BranchingDiscrepancy] = []
        for (z, n), entry in sorted(self._entries.items()):
            if entry.is_stable:
                continue
            total = entry.probability_sum
            if abs(total - 1.0) <= tolerance:
                continue
            whitelisted = (z, n) in known
            discrepancies.append(BranchingDiscrepancy(z=z, n=n, total=total, whitelisted=whitelisted))
            if whitelisted:
                logger.debug(f"Known branching mismatch for {format_nuclide_name(z, n)}: sum={total:.6f}")
            else:
                logger.warning(
                    f"Branching ratios for {format_nuclide_name(z, n)} (Z={z}, N={n}) "
                    f"sum to {total:.6f}, expected 1"
                )
        return discrepancies


class DecayTableBuilder:
    """
    Mutable staging area for a ``DecayTable``.

    Later inserts for the same key overwrite earlier ones.
    """

    def __init__(self):
        self._entries: Dict[Tuple[int, int], NuclideEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def add(
        self,
        z: int,
        n: int,
        half_life_s: float,
        channels: Sequence[Tuple[ChannelKind, float]] = (),
    ) -> None:
        """Insert or replace the entry for (Z, N)."""
        if not in_bounds(z, n):
            raise DecayDataError(
                f"Nuclide (Z={z}, N={n}) outside table bounds (0..{MAXP}, 0..{MAXN})"
            )
        if half_life_s < 0 and half_life_s != STABLE:
            raise DecayDataError(f"Invalid half-life {half_life_s} for (Z={z}, N={n})")
        if (z, n) in self._entries:
            logger.debug(f"Replacing entry for {format_nuclide_name(z, n)}")
        self._entries[(z, n)] = NuclideEntry(
            z=z,
            n=n,
            half_life_s=float(half_life_s),
            channels=tuple((kind, float(p)) for kind, p in channels),
        )

    def add_entry(self, entry: NuclideEntry) -> None:
        self.add(entry.z, entry.n, entry.half_life_s, entry.channels)

    def add_block(self, entries: Iterable[NuclideEntry]) -> int:
        """Insert a batch of entries in order; returns how many were inserted."""
        count = 0
        for entry in entries:
            self.add_entry(entry)
            count += 1
        return count

    def build(
        self,
        normalize: bool = False,
        tolerance: float = BRANCHING_TOLERANCE,
    ) -> DecayTable:
        """
        Freeze the staged entries into a read-only table.

        With ``normalize`` set, rows whose probabilities deviate from one by
        more than ``tolerance`` are rescaled; otherwise rows are kept verbatim.
        """
        entries = dict(self._entries)
        if normalize:
            for key, entry in entries.items():
                if not entry.is_stable and abs(entry.probability_sum - 1.0) > tolerance:
                    entries[key] = entry.normalized()
        return DecayTable(entries)


def _parse_channel(token: str, line_no: int, source: str) -> Tuple[ChannelKind, float]:
    symbol, sep, value = token.rpartition(":")
    if not sep or not symbol:
        raise DecayDataError(f"{source}:{line_no}: malformed channel '{token}'")
    try:
        kind = ChannelKind.from_symbol(symbol)
        probability = float(value)
    except ValueError as exc:
        raise DecayDataError(f"{source}:{line_no}: {exc}") from exc
    return kind, probability


def parse_decay_data(
    lines: Iterable[str],
    source: str = "<data>",
) -> List[Tuple[str, List[NuclideEntry]]]:
    """
    Parse decay data text into ordered ``(block_name, entries)`` pairs.

    Rows appearing before any ``[block]`` header belong to the
    ``observed`` block.
    """
    blocks: List[Tuple[str, List[NuclideEntry]]] = []
    current: Optional[List[NuclideEntry]] = None

    for line_no, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        if line.startswith("[") and line.endswith("]"):
            name = line[1:-1].strip().lower()
            if name not in BLOCK_ORDER:
                raise DecayDataError(f"{source}:{line_no}: unknown block '{name}'")
            current = []
            blocks.append((name, current))
            continue

        fields = line.split()
        if len(fields) < 3:
            raise DecayDataError(f"{source}:{line_no}: expected 'Z N half_life' but got '{line}'")
        try:
            z = int(fields[0])
            n = int(fields[1])
            half_life = float(fields[2])
        except ValueError as exc:
            raise DecayDataError(f"{source}:{line_no}: {exc}") from exc
        channels = tuple(_parse_channel(tok, line_no, source) for tok in fields[3:])

        if current is None:
            current = []
            blocks.append(("observed", current))
        current.append(NuclideEntry(z=z, n=n, half_life_s=half_life, channels=channels))

    names = [name for name, _ in blocks]
    if names != sorted(names, key=BLOCK_ORDER.index):
        raise DecayDataError(f"{source}: blocks must appear in order {', '.join(BLOCK_ORDER)}")
    return blocks


def build_decay_table(
    blocks: Sequence[Tuple[str, Iterable[NuclideEntry]]],
    normalize: bool = False,
) -> DecayTable:
    """Insert parsed blocks in order into one builder and freeze the result."""
    builder = DecayTableBuilder()
    for name, entries in blocks:
        count = builder.add_block(entries)
        logger.debug(f"Inserted {count} {name} entries")
    return builder.build(normalize=normalize)


def load_decay_table(
    path: Optional[Union[str, Path]] = None,
    normalize: bool = False,
    validate: bool = True,
    tolerance: float = BRANCHING_TOLERANCE,
) -> DecayTable:
    """
    Load, build and (optionally) validate the decay table from a data file.

    Parameters
    ----------
    path : str or Path, optional
        Data file; defaults to the packaged ``nuclides.dat``
    normalize : bool
        Rescale rows whose branching ratios do not sum to one
    validate : bool
        Run the branching-ratio check once the table is built
    tolerance : float
        Allowed deviation of a branching sum from one
    """
    path = Path(path) if path is not None else DEFAULT_DATA_PATH
    with open(path, "r", encoding="utf-8") as f:
        blocks = parse_decay_data(f, source=path.name)

    table = build_decay_table(blocks, normalize=normalize)
    logger.info(f"Loaded {len(table)} nuclides from {path.name}")
    if validate:
        issues = table.validate(tolerance=tolerance)
        unexpected = [d for d in issues if not d.whitelisted]
        if unexpected:
            logger.warning(f"{len(unexpected)} nuclides have inconsistent branching ratios")
    return table
