"""
Nucleosynthesis Map Simulation

Population of (Z, N, E) particles drifting across the chart of nuclides
under a rotating set of stellar capture processes. Each step every particle
is either removed, decays through the engine's tabulated or classified
channels, or captures nucleons according to the active process:

- PP/CNO: hydrogen burns to helium (rarely to lithium-6 via Z+1, N+2)
- alpha: capture of He-4 with probability 4 / A^2, chained at 0.002 / A^2
- s-process: slow neutron capture, one neutron with probability 0.14
- r-process: rapid neutron capture of 0-9 neutrons per step

The active process advances whenever its timer runs out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

import numpy as np

from nuclidesim.core.channels import ChannelKind, Particle, apply_channel
from nuclidesim.core.nuclide import format_nuclide_name, in_bounds
from nuclidesim.physics.scheduler import DecayScheduler, SeedLike, as_generator

if TYPE_CHECKING:
    from nuclidesim.physics.engine import NuclideEngine

logger = logging.getLogger(__name__)

DEFAULT_MAX_PARTICLES = 1500
DEFAULT_DECAY_ELAPSED = 1e6
PROCESS_TIMER = 20.0

REMOVAL_PROBABILITY = 1e-4
SPAWN_PROBABILITY = 0.3
HELIUM_SEED_FRACTION = 0.3

PP_FUSION_PROBABILITY = 0.6
PP_LITHIUM_PROBABILITY = 0.0002
ALPHA_CAPTURE_COEFF = 4.0
ALPHA_CHAIN_COEFF = 0.002
S_CAPTURE_PROBABILITY = 0.14
R_MAX_NEUTRONS = 10


class SynthesisProcess(Enum):
    """Stellar capture processes, in rotation order."""

    PP_CNO = "PP / CNO"
    ALPHA = "Alpha process"
    S_PROCESS = "S process"
    R_PROCESS = "R process"

    def next(self) -> "SynthesisProcess":
        members = list(SynthesisProcess)
        return members[(members.index(self) + 1) % len(members)]


# Timer drain per simulated second for each process
PROCESS_RATES: Dict[SynthesisProcess, float] = {
    SynthesisProcess.PP_CNO: 1.0,
    SynthesisProcess.ALPHA: 1.0,
    SynthesisProcess.S_PROCESS: 3.0,
    SynthesisProcess.R_PROCESS: 5.0,
}

# Only these channels release a nucleus heavy enough to track
_SPAWNING_KINDS = frozenset({
    ChannelKind.BETA_MINUS_TRITON,
    ChannelKind.SPONTANEOUS_FISSION,
    ChannelKind.BETA_MINUS_FISSION,
    ChannelKind.BETA_PLUS_FISSION,
})


@dataclass
class StepReport:
    """Counters for one simulation step."""
    process: SynthesisProcess
    removed: int = 0
    decayed: int = 0
    captured: int = 0
    spawned: int = 0
    decay_channels: Dict[ChannelKind, int] = field(default_factory=dict)


class NucleosynthesisSimulation:
    """
    Stochastic population model of stellar nucleosynthesis.

    Parameters
    ----------
    engine : NuclideEngine
        Source of half-lives and decay channels
    max_particles : int
        Population capacity; the initial population fills it
    seed : int or numpy.random.Generator, optional
        Seed for the simulation's random stream
    decay_elapsed : float
        Simulated seconds each particle ages per step when deciding decay
    timer : float
        Timer value each process starts with
    """

    def __init__(
        self,
        engine: "NuclideEngine",
        max_particles: int = DEFAULT_MAX_PARTICLES,
        seed: SeedLike = None,
        decay_elapsed: float = DEFAULT_DECAY_ELAPSED,
        timer: float = PROCESS_TIMER,
    ):
        if max_particles <= 0:
            raise ValueError("max_particles must be positive")
        if decay_elapsed < 0:
            raise ValueError("decay_elapsed must be non-negative")
        self.engine = engine
        self.max_particles = max_particles
        self.decay_elapsed = decay_elapsed
        self.timer_start = timer
        self.rng = as_generator(seed)
        self.scheduler = DecayScheduler(
            engine.get_half_life, engine.get_decay_channels, seed=self.rng
        )

        self.process = SynthesisProcess.PP_CNO
        self.timer = timer
        self.steps = 0
        self.particles: List[Particle] = [self._random_seed_particle() for _ in range(max_particles)]

    def __len__(self) -> int:
        return len(self.particles)

    def _random_seed_particle(self) -> Particle:
        if self.rng.random() < HELIUM_SEED_FRACTION:
            return (2, 2, 0)
        return (1, 0, 0)

    def advance_timer(self, dt: float) -> bool:
        """Drain the process timer; returns True when the process rotated."""
        self.timer -= dt * PROCESS_RATES[self.process]
        if self.timer >= 0:
            return False
        previous = self.process
        self.process = self.process.next()
        self.timer = self.timer_start
        logger.debug(f"Synthesis process {previous.value} -> {self.process.value}")
        return True

    def capture(self, z: int, n: int) -> Optional[Tuple[int, int]]:
        """
        Apply the active process's capture rule to (Z, N).

        Returns the new (Z, N), or None when nothing was captured.
        """
        u = self.rng.random()
        if self.process is SynthesisProcess.PP_CNO:
            if z != 1:
                return None
            if u < PP_FUSION_PROBABILITY:
                return z + 1, n
            if u < PP_FUSION_PROBABILITY + PP_LITHIUM_PROBABILITY:
                return z + 1, n + 2
            return None

        if self.process is SynthesisProcess.ALPHA:
            a = z + n
            if u >= ALPHA_CAPTURE_COEFF / (a * a):
                return None
            z, n = z + 2, n + 2
            a = z + n
            if u < ALPHA_CHAIN_COEFF / (a * a):
                z, n = z + 2, n + 2
            return z, n

        if self.process is SynthesisProcess.S_PROCESS:
            if u < S_CAPTURE_PROBABILITY:
                return z, n + 1
            return None

        gained = int(np.floor(u * R_MAX_NEUTRONS))
        if gained == 0:
            return None
        return z, n + gained

    def step(self, dt: float = 1.0) -> StepReport:
        """Advance the population by one tick of ``dt`` seconds."""
        if dt < 0:
            raise ValueError("dt must be non-negative")
        self.advance_timer(dt)
        report = StepReport(process=self.process)

        count = len(self.particles)
        overflow = (count - self.max_particles) / self.max_particles
        kept: List[Particle] = []
        spawned: List[Particle] = []

        for z, n, e in self.particles:
            if self.rng.random() < REMOVAL_PROBABILITY or self.rng.random() < overflow:
                report.removed += 1
                continue

            if self.scheduler.should_decay(z, n, self.decay_elapsed):
                kind = self.scheduler.sample_channel(z, n)
                if kind is not None:
                    products = apply_channel(kind, z, n, e)
                    z, n, e = products.daughter
                    report.decayed += 1
                    report.decay_channels[kind] = report.decay_channels.get(kind, 0) + 1
                    if kind in _SPAWNING_KINDS:
                        spawned.extend(p for p in products.emitted if p[0] + p[1] > 0)
            else:
                captured = self.capture(z, n)
                if captured is not None:
                    z, n = captured
                    report.captured += 1

            if not in_bounds(z, n) or z + n == 0:
                report.removed += 1
                continue
            kept.append((z, n, e))

        kept.extend(spawned)
        report.spawned = len(spawned)
        if len(kept) < self.max_particles and self.rng.random() < SPAWN_PROBABILITY:
            kept.append(self._random_seed_particle())
            report.spawned += 1

        self.particles = kept
        self.steps += 1
        return report

    def run(self, steps: int, dt: float = 1.0) -> List[StepReport]:
        return [self.step(dt) for _ in range(steps)]

    def population(self) -> Dict[Tuple[int, int], int]:
        """Particle count per (Z, N)."""
        counts: Dict[Tuple[int, int], int] = {}
        for z, n, _ in self.particles:
            counts[(z, n)] = counts.get((z, n), 0) + 1
        return counts

    def population_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Population as ``(z, n, e)`` integer arrays."""
        if not self.particles:
            empty = np.zeros(0, dtype=int)
            return empty, empty.copy(), empty.copy()
        data = np.asarray(self.particles, dtype=int)
        return data[:, 0], data[:, 1], data[:, 2]

    def heaviest(self) -> Optional[Particle]:
        if not self.particles:
            return None
        return max(self.particles, key=lambda p: (p[0], p[1]))

    def summary(self, top: int = 10) -> List[str]:
        """Most populated nuclides as ``name: count`` lines."""
        ranked = sorted(self.population().items(), key=lambda kv: (-kv[1], kv[0]))
        return [f"{format_nuclide_name(z, n)}: {count}" for (z, n), count in ranked[:top]]
