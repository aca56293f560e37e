"""Decay physics: classification, scheduling, the engine and nucleosynthesis."""

from nuclidesim.physics.classifier import DecayClassifier, classify_channel

from nuclidesim.physics.scheduler import (
    DecayScheduler,
    decay_probability,
    survival_probability,
)

from nuclidesim.physics.engine import (
    NuclideEngine,
    get_decay_channels,
    get_half_life,
    get_nuclide_engine,
    should_decay,
)

from nuclidesim.physics.synthesis import (
    NucleosynthesisSimulation,
    StepReport,
    SynthesisProcess,
)

__all__ = [
    # Classification
    'DecayClassifier',
    'classify_channel',
    # Scheduling
    'DecayScheduler',
    'decay_probability',
    'survival_probability',
    # Engine
    'NuclideEngine',
    'get_decay_channels',
    'get_half_life',
    'get_nuclide_engine',
    'should_decay',
    # Nucleosynthesis
    'NucleosynthesisSimulation',
    'StepReport',
    'SynthesisProcess',
]
