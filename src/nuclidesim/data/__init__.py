"""Packaged nuclear data: decay table and elemental abundances."""

from nuclidesim.data.decay_table import (
    BRANCHING_TOLERANCE,
    KNOWN_BRANCHING_EXCEPTIONS,
    BranchingDiscrepancy,
    DecayDataError,
    DecayTable,
    DecayTableBuilder,
    NuclideEntry,
    build_decay_table,
    load_decay_table,
    parse_decay_data,
)

from nuclidesim.data.abundances import get_abundance, load_abundances

__all__ = [
    'BRANCHING_TOLERANCE',
    'KNOWN_BRANCHING_EXCEPTIONS',
    'BranchingDiscrepancy',
    'DecayDataError',
    'DecayTable',
    'DecayTableBuilder',
    'NuclideEntry',
    'build_decay_table',
    'load_decay_table',
    'parse_decay_data',
    'get_abundance',
    'load_abundances',
]
