"""Core value types: nuclide keys, decay channels and engine configuration."""

from nuclidesim.core.nuclide import (
    MAXP,
    MAXN,
    STABLE,
    INSTANT,
    NuclideKey,
    element_symbol,
    format_nuclide_name,
    in_bounds,
)

from nuclidesim.core.channels import (
    ChannelKind,
    DecayChannelSet,
    DecayProducts,
    apply_channel,
    channel_probability_sum,
    select_channel,
)

from nuclidesim.core.config import EngineConfig, load_config

__all__ = [
    # Nuclides
    'MAXP',
    'MAXN',
    'STABLE',
    'INSTANT',
    'NuclideKey',
    'element_symbol',
    'format_nuclide_name',
    'in_bounds',
    # Channels
    'ChannelKind',
    'DecayChannelSet',
    'DecayProducts',
    'apply_channel',
    'channel_probability_sum',
    'select_channel',
    # Configuration
    'EngineConfig',
    'load_config',
]
